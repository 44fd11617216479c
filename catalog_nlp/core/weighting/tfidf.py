from __future__ import annotations

import numpy as np
import pandas as pd

from catalog_nlp.core.weighting.base import TermWeighter
from catalog_nlp.core.weighting.config import TfIdfConfig
from catalog_nlp.utils.exceptions import BadInputError


def _require(df: pd.DataFrame, *columns: str) -> None:
    for col in columns:
        if col not in df.columns:
            raise BadInputError(
                code="COLUMN_MISSING", message=f"Column '{col}' not found."
            )


def count_terms(
    tokens: pd.DataFrame, document: str = "id", term: str = "word"
) -> pd.DataFrame:
    """Tidy tokens -> [document, term, n], most frequent first."""
    _require(tokens, document, term)
    counts = tokens.groupby([document, term], sort=False).size().reset_index(name="n")
    return counts.sort_values(
        ["n", document, term], ascending=[False, True, True], ignore_index=True
    )


def bind_tf_idf(
    counts: pd.DataFrame, term: str = "word", document: str = "id", n: str = "n"
) -> pd.DataFrame:
    """
    Adds tf, idf and tf_idf columns to a [document, term, n] table.

      tf     = n / total terms in the document
      idf    = ln(documents in table / documents containing the term)
      tf_idf = tf * idf

    A document with a single distinct term gets tf == 1, so its tf_idf is
    just the term's idf; short descriptions rank high for that reason.
    """
    _require(counts, term, document, n)
    out = counts.copy()
    totals = out.groupby(document)[n].transform("sum")
    out["tf"] = out[n] / totals
    n_docs = out[document].nunique()
    doc_freq = out.groupby(term)[document].transform("nunique")
    out["idf"] = np.log(n_docs / doc_freq)
    out["tf_idf"] = out["tf"] * out["idf"]
    return out


class TfIdfWeighter(TermWeighter):
    def __init__(self, config: TfIdfConfig | None = None):
        self.cfg = config or TfIdfConfig()

    def weight(self, counts: pd.DataFrame) -> pd.DataFrame:
        out = bind_tf_idf(
            counts,
            term=self.cfg.term_column,
            document=self.cfg.document_column,
            n=self.cfg.count_column,
        )
        return out.sort_values("tf_idf", ascending=False, ignore_index=True)
