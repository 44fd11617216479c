from __future__ import annotations
from dataclasses import dataclass

# letters/digits, allowing inner "." or "'" so "v5.2.0" and "don't" stay whole
DEFAULT_WORD_PATTERN = r"[^\W_]+(?:[.'][^\W_]+)*"


@dataclass(frozen=True)
class TokenizationConfig:
    method: str = "regex"  # "regex" | "wordpunct"
    regex_pattern: str = DEFAULT_WORD_PATTERN
    lowercase: bool = True
    min_token_len: int = 1  # drop tokens shorter than this
    keep_alnum_only: bool = False  # drop tokens with non-alnum chars
    remove_numbers_only: bool = False  # drop tokens that are purely digits
    drop_empty_tokens: bool = True
