from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional, Tuple


@dataclass(frozen=True)
class TopicModelConfig:
    backend: Literal["gensim", "sklearn"] = "sklearn"
    random_state: int = 1234
    max_iter: int = 20  # sklearn EM iterations
    passes: int = 10  # gensim only
    iterations: int = 100  # gensim only
    topn_words: int = 10  # words per topic (summary)
    # safety / performance:
    sample_docs_for_estimation: Optional[int] = 5000  # None = use all


@dataclass(frozen=True)
class TopicEstimationConfig:
    candidates: Tuple[int, ...] = (8, 16, 24, 32, 64)
