from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd
from scipy import sparse


@dataclass(frozen=True)
class DocumentTermMatrix:
    matrix: sparse.csr_matrix  # shape: (n_docs, n_terms), raw counts
    documents: pd.Index
    terms: pd.Index

    @property
    def shape(self):
        return self.matrix.shape


@dataclass(frozen=True)
class TopicModelResult:
    beta: pd.DataFrame  # ['topic', 'term', 'beta'], sums to 1 per topic
    gamma: pd.DataFrame  # ['document', 'topic', 'gamma'], sums to 1 per document
    num_topics: int
    perplexity: Optional[float] = None


class TopicEstimator(ABC):
    @abstractmethod
    def estimate_k(self, dtm: DocumentTermMatrix, candidates: Sequence[int]) -> int: ...


class TopicModeler(ABC):
    @abstractmethod
    def fit(self, dtm: DocumentTermMatrix, num_topics: int) -> TopicModelResult:
        """
        Fit LDA with a fixed number of topics and return the tidy
        term-topic (beta) and document-topic (gamma) tables.
        Topics are numbered from 1.
        """
        ...
