from __future__ import annotations
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class TopicLabelConfig:
    strategy: Literal["keywords", "default"] = "keywords"
    num_keywords: int = 2  # for default heuristic
    min_gamma: float = 0.9  # documents "strongly" in a topic
