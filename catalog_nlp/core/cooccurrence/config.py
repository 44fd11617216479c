from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class PairwiseConfig:
    upper: bool = True  # emit both (a, b) and (b, a)
    sort: bool = True  # strongest pairs first
    min_item_count: int = 1  # items seen in fewer features are skipped by pairwise_cor


@dataclass(frozen=True)
class CooccurrenceThresholds:
    title_min_n: int = 250
    description_min_n: int = 5000
    keyword_min_n: int = 700
    keyword_min_count: int = 50  # keywords used fewer times are left out of correlations
    keyword_min_correlation: float = 0.6
