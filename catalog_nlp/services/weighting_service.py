from __future__ import annotations
import logging
from typing import Sequence

import pandas as pd

from catalog_nlp.core.weighting.base import TermWeighter
from catalog_nlp.core.weighting.tfidf import count_terms

logger = logging.getLogger(__name__)


class WeightingService:
    def __init__(self, weighter: TermWeighter):
        self.weighter = weighter

    def description_tf_idf(self, desc_tokens: pd.DataFrame) -> pd.DataFrame:
        """['id', 'word', 'n', 'tf', 'idf', 'tf_idf'], highest tf_idf first."""
        counts = count_terms(desc_tokens)
        out = self.weighter.weight(counts)
        logger.info(f"tf-idf computed for {out['id'].nunique()} descriptions")
        return out

    @staticmethod
    def tf_idf_by_keyword(
        tfidf: pd.DataFrame,
        keywords: pd.DataFrame,
        selected: Sequence[str],
        top_n: int = 15,
    ) -> pd.DataFrame:
        """
        Top tf-idf terms of the descriptions tagged with each selected keyword:
        ['keyword', 'id', 'word', ..., 'tf_idf'].
        """
        wanted = {k.upper() for k in selected}
        tagged = keywords.loc[keywords["keyword"].isin(wanted)]
        joined = tfidf.merge(tagged, on="id", how="inner")
        joined = joined.sort_values(
            ["keyword", "tf_idf", "word"], ascending=[True, False, True]
        )
        return joined.groupby("keyword", sort=True).head(top_n).reset_index(drop=True)
