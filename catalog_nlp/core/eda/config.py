from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class EDAConfig:
    document_column: str = "id"
    word_column: str = "word"
    top_words: int = 20
