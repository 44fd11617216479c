from __future__ import annotations
import logging
from typing import List, Set, Tuple

from nltk.corpus import stopwords as nltk_stopwords
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from catalog_nlp.core.stopword_removal.base import StopwordRemover
from catalog_nlp.core.stopword_removal.config import StopwordConfig

logger = logging.getLogger(__name__)


class DefaultStopwordRemover(StopwordRemover):
    def __init__(self, config: StopwordConfig | None = None):
        self.cfg = config or StopwordConfig()
        self._stopset = self._build_stopset()

    @property
    def stopwords(self) -> Set[str]:
        return self._stopset

    def _build_stopset(self) -> Set[str]:
        base: Set[str] = set(ENGLISH_STOP_WORDS)
        if self.cfg.use_nltk:
            try:
                base |= set(nltk_stopwords.words(self.cfg.language))
            except LookupError:
                # corpus not downloaded; sklearn's list still applies
                logger.warning(
                    "NLTK stopwords corpus unavailable, using scikit-learn list only"
                )

        base |= set(self.cfg.custom_stopwords)

        if self.cfg.lowercase:
            base = {w.lower() for w in base}
            base -= {w.lower() for w in self.cfg.exclude_stopwords}
        else:
            base -= set(self.cfg.exclude_stopwords)
        return base

    def remove(self, tokens: List[str]) -> Tuple[List[str], List[str]]:
        cleaned: List[str] = []
        removed: List[str] = []
        for t in tokens:
            norm = t.lower() if self.cfg.lowercase else t
            if norm in self._stopset:
                removed.append(t)
                continue
            cleaned.append(t)
        return cleaned, removed
