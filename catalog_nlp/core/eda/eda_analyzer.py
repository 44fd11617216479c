from __future__ import annotations
from typing import Dict, Any

import pandas as pd

from catalog_nlp.core.eda.base import EDAAnalyzer
from catalog_nlp.core.eda.config import EDAConfig
from catalog_nlp.utils.exceptions import BadInputError


def count_words(df: pd.DataFrame, column: str = "word") -> pd.DataFrame:
    """Occurrences per value, most common first: ['<column>', 'n']."""
    if column not in df.columns:
        raise BadInputError(
            code="COLUMN_MISSING", message=f"Column '{column}' not found."
        )
    counts = df[column].value_counts()
    out = counts.rename_axis(column).reset_index(name="n")
    return out.sort_values(["n", column], ascending=[False, True], ignore_index=True)


def count_keywords(keywords: pd.DataFrame) -> pd.DataFrame:
    return count_words(keywords, column="keyword")


class DefaultEDAAnalyzer(EDAAnalyzer):
    """Adapter: word frequencies and document lengths for one text field."""

    def __init__(self, config: EDAConfig | None = None):
        self.cfg = config or EDAConfig()

    def analyze(self, df: pd.DataFrame) -> Dict[str, Any]:
        for col in (self.cfg.document_column, self.cfg.word_column):
            if col not in df.columns:
                raise BadInputError(
                    code="COLUMN_MISSING", message=f"Column '{col}' not found."
                )

        top = count_words(df, self.cfg.word_column).head(self.cfg.top_words)
        top_words = [
            {"text": r[self.cfg.word_column], "value": int(r["n"])}
            for _, r in top.iterrows()
        ]

        # Length distribution: token count per doc
        lengths = df.groupby(self.cfg.document_column).size()
        length_distribution = (
            lengths.value_counts().sort_index().rename_axis("length").reset_index(
                name="count"
            )
        )
        length_distribution_data = [
            {"length": int(r["length"]), "count": int(r["count"])}
            for _, r in length_distribution.iterrows()
        ]

        return {
            "top_words": top_words,
            "length_distribution": length_distribution_data,
            "num_documents": int(lengths.size),
            "num_tokens": int(len(df)),
        }
