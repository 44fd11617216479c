from __future__ import annotations
from typing import Sequence

import numpy as np
import pandas as pd
from scipy import sparse

from catalog_nlp.core.topic_modeling.base import DocumentTermMatrix
from catalog_nlp.messages import topic_messages as msg
from catalog_nlp.utils.exceptions import BadInputError, ConfigError, EmptyCorpusError


def build_dtm(
    counts: pd.DataFrame, document: str = "id", term: str = "word", n: str = "n"
) -> DocumentTermMatrix:
    """Cast a tidy [document, term, n] table into a sparse count matrix."""
    for col in (document, term, n):
        if col not in counts.columns:
            raise BadInputError(
                code="COLUMN_MISSING", message=f"Column '{col}' not found."
            )
    if counts.empty:
        raise EmptyCorpusError(code="EMPTY_CORPUS", message=msg.LDA_EMPTY_CORPUS)
    docs = pd.Categorical(counts[document])
    terms = pd.Categorical(counts[term])
    # duplicate (doc, term) rows are summed by the coo -> csr conversion
    matrix = sparse.coo_matrix(
        (counts[n].to_numpy(dtype=np.float64), (docs.codes, terms.codes)),
        shape=(len(docs.categories), len(terms.categories)),
    ).tocsr()
    return DocumentTermMatrix(
        matrix=matrix,
        documents=pd.Index(docs.categories),
        terms=pd.Index(terms.categories),
    )


def sample_dtm(dtm: DocumentTermMatrix, n_docs: int, seed: int) -> DocumentTermMatrix:
    if n_docs >= dtm.shape[0]:
        return dtm
    rng = np.random.default_rng(seed)
    rows = np.sort(rng.choice(dtm.shape[0], size=n_docs, replace=False))
    matrix = dtm.matrix[rows]
    # drop terms that no longer occur
    used = np.flatnonzero(np.asarray(matrix.sum(axis=0)).ravel() > 0)
    return DocumentTermMatrix(
        matrix=matrix[:, used].tocsr(),
        documents=dtm.documents[rows],
        terms=dtm.terms[used],
    )


def validate_inputs(dtm: DocumentTermMatrix, num_topics: int) -> None:
    if num_topics < 2:
        raise ConfigError(code="INVALID_NUM_TOPICS", message=msg.LDA_INVALID_TOPICS)
    if dtm.shape[0] == 0 or dtm.shape[1] == 0 or dtm.matrix.sum() <= 0:
        raise EmptyCorpusError(code="EMPTY_CORPUS", message=msg.LDA_EMPTY_CORPUS)


def _normalize_rows(arr: np.ndarray) -> np.ndarray:
    totals = arr.sum(axis=1, keepdims=True)
    totals[totals == 0] = 1.0
    return arr / totals


def beta_table(topic_term: np.ndarray, terms: Sequence[str]) -> pd.DataFrame:
    topic_term = _normalize_rows(np.asarray(topic_term, dtype=np.float64))
    k, v = topic_term.shape
    return pd.DataFrame(
        {
            "topic": np.repeat(np.arange(1, k + 1), v),
            "term": np.tile(np.asarray(terms), k),
            "beta": topic_term.ravel(),
        }
    )


def gamma_table(doc_topic: np.ndarray, documents: Sequence[str]) -> pd.DataFrame:
    doc_topic = _normalize_rows(np.asarray(doc_topic, dtype=np.float64))
    d, k = doc_topic.shape
    return pd.DataFrame(
        {
            "document": np.repeat(np.asarray(documents), k),
            "topic": np.tile(np.arange(1, k + 1), d),
            "gamma": doc_topic.ravel(),
        }
    )


def top_terms(beta: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """Highest-weight terms per topic, ordered by topic then weight."""
    ordered = beta.sort_values(
        ["topic", "beta", "term"], ascending=[True, False, True]
    )
    return ordered.groupby("topic", sort=True).head(n).reset_index(drop=True)


def dominant_topics(gamma: pd.DataFrame) -> pd.DataFrame:
    """One row per document: the topic with the highest gamma."""
    idx = gamma.groupby("document", sort=True)["gamma"].idxmax()
    return gamma.loc[idx].reset_index(drop=True)


def validate_candidates(candidates: Sequence[int]) -> None:
    if not candidates:
        raise ConfigError(code="NO_TOPIC_CANDIDATES", message=msg.LDA_NO_CANDIDATES)
