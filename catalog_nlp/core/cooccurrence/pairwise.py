from __future__ import annotations
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from scipy import sparse

from catalog_nlp.core.cooccurrence.base import PairwiseCounter
from catalog_nlp.core.cooccurrence.config import PairwiseConfig
from catalog_nlp.utils.exceptions import BadInputError


def incidence_matrix(
    df: pd.DataFrame, item: str, feature: str
) -> Tuple[sparse.csr_matrix, pd.Index]:
    """Binary features x items CSR matrix plus the (sorted) item labels."""
    for col in (item, feature):
        if col not in df.columns:
            raise BadInputError(
                code="COLUMN_MISSING", message=f"Column '{col}' not found."
            )
    pairs = df[[feature, item]].dropna().drop_duplicates()
    features = pd.Categorical(pairs[feature])
    items = pd.Categorical(pairs[item])
    matrix = sparse.csr_matrix(
        (np.ones(len(pairs), dtype=np.int64), (features.codes, items.codes)),
        shape=(len(features.categories), len(items.categories)),
    )
    return matrix, pd.Index(items.categories)


class SparsePairwiseCounter(PairwiseCounter):
    """Adapter: pair statistics from a sparse incidence matrix."""

    def __init__(self, config: PairwiseConfig | None = None):
        self.cfg = config or PairwiseConfig()

    def _to_frame(
        self,
        rows: np.ndarray,
        cols: np.ndarray,
        values: np.ndarray,
        labels: pd.Index,
        name: str,
        upper: Optional[bool],
    ) -> pd.DataFrame:
        upper = self.cfg.upper if upper is None else upper
        mask = rows != cols
        if not upper:
            # labels are sorted, so index order is label order
            mask &= rows < cols
        names = np.asarray(labels, dtype=object)
        out = pd.DataFrame(
            {
                "item1": names[rows[mask]],
                "item2": names[cols[mask]],
                name: values[mask],
            }
        )
        if self.cfg.sort:
            out = out.sort_values(
                [name, "item1", "item2"], ascending=[False, True, True]
            )
        return out.reset_index(drop=True)

    def pairwise_count(
        self,
        df: pd.DataFrame,
        item: str,
        feature: str,
        upper: Optional[bool] = None,
    ) -> pd.DataFrame:
        matrix, labels = incidence_matrix(df, item, feature)
        co = (matrix.T @ matrix).tocoo()
        keep = co.data > 0
        return self._to_frame(
            co.row[keep],
            co.col[keep],
            co.data[keep].astype(np.int64),
            labels,
            "n",
            upper,
        )

    def pairwise_cor(
        self,
        df: pd.DataFrame,
        item: str,
        feature: str,
        upper: Optional[bool] = None,
    ) -> pd.DataFrame:
        matrix, labels = incidence_matrix(df, item, feature)
        n_features = matrix.shape[0]
        counts = np.asarray(matrix.sum(axis=0)).ravel()

        # constant columns have no defined correlation
        keep = (counts >= self.cfg.min_item_count) & (counts < n_features)
        matrix = matrix[:, np.flatnonzero(keep)]
        labels = labels[keep]
        counts = counts[keep].astype(np.float64)
        if len(labels) < 2:
            return pd.DataFrame(columns=["item1", "item2", "correlation"])

        # phi = (N*n11 - n1*n2) / sqrt(n1*(N-n1)*n2*(N-n2))
        co = (matrix.T @ matrix).toarray().astype(np.float64)
        spread = counts * (n_features - counts)
        phi = (n_features * co - np.outer(counts, counts)) / np.sqrt(
            np.outer(spread, spread)
        )

        rows, cols = np.indices(phi.shape)
        return self._to_frame(
            rows.ravel(), cols.ravel(), phi.ravel(), labels, "correlation", upper
        )
