from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TfIdfConfig:
    term_column: str = "word"
    document_column: str = "id"
    count_column: str = "n"
