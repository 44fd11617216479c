from __future__ import annotations
import re
from typing import List

from nltk.tokenize import RegexpTokenizer, wordpunct_tokenize

from catalog_nlp.core.tokenization.base import Tokenizer
from catalog_nlp.core.tokenization.config import TokenizationConfig
from catalog_nlp.messages import pipeline_messages as msg
from catalog_nlp.utils.exceptions import ConfigError

METHODS = ("regex", "wordpunct")


class DefaultTokenizer(Tokenizer):
    """Adapter: NLTK regexp/wordpunct tokenization plus token filters."""

    def __init__(self, config: TokenizationConfig | None = None):
        self.cfg = config or TokenizationConfig()
        if self.cfg.method not in METHODS:
            raise ConfigError(
                code="UNKNOWN_TOKENIZATION_METHOD",
                message=msg.TOKENIZER_UNKNOWN_METHOD.format(method=self.cfg.method),
            )
        self._regexp = RegexpTokenizer(self.cfg.regex_pattern)

    def _tokenize_raw(self, text: str) -> List[str]:
        s = text or ""
        if self.cfg.lowercase:
            s = s.lower()
        if self.cfg.method == "wordpunct":
            return wordpunct_tokenize(s)
        return self._regexp.tokenize(s)

    def tokenize(self, text: str) -> List[str]:
        out: List[str] = []
        for t in self._tokenize_raw(text):
            if not t and self.cfg.drop_empty_tokens:
                continue
            if self.cfg.keep_alnum_only and re.search(r"[^a-z0-9]", t, re.I):
                continue
            if self.cfg.remove_numbers_only and t.isdigit():
                continue
            if len(t) < self.cfg.min_token_len:
                continue
            out.append(t)
        return out
