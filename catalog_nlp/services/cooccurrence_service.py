from __future__ import annotations
import logging
from typing import Optional

import pandas as pd

from catalog_nlp.core.cooccurrence.base import PairwiseCounter
from catalog_nlp.core.cooccurrence.config import CooccurrenceThresholds

logger = logging.getLogger(__name__)


class CooccurrenceService:
    """Word and keyword pairs that appear together in the same dataset."""

    def __init__(
        self,
        counter: PairwiseCounter,
        thresholds: CooccurrenceThresholds | None = None,
    ):
        self.counter = counter
        self.thresholds = thresholds or CooccurrenceThresholds()

    def _pairs(self, df: pd.DataFrame, item: str, min_n: int) -> pd.DataFrame:
        pairs = self.counter.pairwise_count(df, item=item, feature="id", upper=False)
        out = pairs.loc[pairs["n"] >= min_n].reset_index(drop=True)
        logger.info(f"{item} pairs with n >= {min_n}: {len(out)}")
        return out

    def title_pairs(
        self, title_tokens: pd.DataFrame, min_n: Optional[int] = None
    ) -> pd.DataFrame:
        if min_n is None:
            min_n = self.thresholds.title_min_n
        return self._pairs(title_tokens, "word", min_n)

    def description_pairs(
        self, desc_tokens: pd.DataFrame, min_n: Optional[int] = None
    ) -> pd.DataFrame:
        if min_n is None:
            min_n = self.thresholds.description_min_n
        return self._pairs(desc_tokens, "word", min_n)

    def keyword_pairs(
        self, keywords: pd.DataFrame, min_n: Optional[int] = None
    ) -> pd.DataFrame:
        if min_n is None:
            min_n = self.thresholds.keyword_min_n
        return self._pairs(keywords, "keyword", min_n)

    def keyword_correlations(
        self,
        keywords: pd.DataFrame,
        min_count: Optional[int] = None,
        min_correlation: Optional[float] = None,
    ) -> pd.DataFrame:
        if min_count is None:
            min_count = self.thresholds.keyword_min_count
        if min_correlation is None:
            min_correlation = self.thresholds.keyword_min_correlation

        # rare keywords give unstable correlations
        usage = keywords.groupby("keyword")["id"].transform("nunique")
        frequent = keywords.loc[usage >= min_count]
        cors = self.counter.pairwise_cor(
            frequent, item="keyword", feature="id", upper=False
        )
        out = cors.loc[cors["correlation"] > min_correlation].reset_index(drop=True)
        logger.info(
            f"keyword correlations > {min_correlation} "
            f"(keywords used >= {min_count}): {len(out)}"
        )
        return out
