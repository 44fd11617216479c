import numpy as np
import pandas as pd
import pytest
from pandas.testing import assert_frame_equal

from catalog_nlp.core.topic_modeling.config import TopicModelConfig
from catalog_nlp.core.topic_modeling.factory import get_modeler
from catalog_nlp.core.topic_modeling.gensim_lda import GensimLDAModeler
from catalog_nlp.core.topic_modeling.sklearn_lda import SklearnLDAModeler
from catalog_nlp.core.topic_modeling.utils import (
    build_dtm,
    dominant_topics,
    sample_dtm,
    top_terms,
)
from catalog_nlp.services.topic_modeling_service import TopicModelingService
from catalog_nlp.utils.exceptions import ConfigError, EmptyCorpusError

OCEAN = ["ocean", "sea", "salinity", "temperature", "tide"]
FIRE = ["fire", "smoke", "forest", "burned", "vegetation"]


@pytest.fixture
def counts():
    rows = []
    for d in range(6):
        vocab = OCEAN if d % 2 == 0 else FIRE
        for i, w in enumerate(vocab):
            rows.append((f"doc{d}", w, 1 + (i + d) % 3))
    return pd.DataFrame(rows, columns=["id", "word", "n"])


@pytest.fixture
def dtm(counts):
    return build_dtm(counts)


def _check_distributions(result, k, n_docs):
    assert result.num_topics == k
    assert sorted(result.beta["topic"].unique()) == list(range(1, k + 1))
    assert np.allclose(result.beta.groupby("topic")["beta"].sum(), 1.0)
    assert np.allclose(result.gamma.groupby("document")["gamma"].sum(), 1.0)
    assert result.gamma["document"].nunique() == n_docs
    assert (result.beta["beta"] >= 0).all()


def test_build_dtm_shape_and_sums_duplicates():
    counts = pd.DataFrame(
        {"id": ["b", "a", "a", "a"], "word": ["x", "y", "x", "y"], "n": [1, 2, 3, 4]}
    )
    dtm = build_dtm(counts)
    assert dtm.shape == (2, 2)
    assert dtm.documents.tolist() == ["a", "b"]
    assert dtm.terms.tolist() == ["x", "y"]
    assert dtm.matrix.toarray().tolist() == [[3.0, 6.0], [1.0, 0.0]]


def test_build_dtm_rejects_empty_counts():
    with pytest.raises(EmptyCorpusError):
        build_dtm(pd.DataFrame(columns=["id", "word", "n"]))


def test_sample_dtm_keeps_only_used_terms(dtm):
    sample = sample_dtm(dtm, 2, seed=1)
    assert sample.shape[0] == 2
    assert (np.asarray(sample.matrix.sum(axis=0)).ravel() > 0).all()
    assert sample_dtm(dtm, 100, seed=1) is dtm


def test_sklearn_fit_produces_normalized_tables(dtm):
    result = SklearnLDAModeler(TopicModelConfig(random_state=1234)).fit(dtm, 2)
    _check_distributions(result, 2, 6)
    assert result.perplexity is not None and result.perplexity > 0


def test_sklearn_fit_is_reproducible_with_seed(dtm):
    modeler = SklearnLDAModeler(TopicModelConfig(random_state=7))
    first, second = modeler.fit(dtm, 3), modeler.fit(dtm, 3)
    assert_frame_equal(first.beta, second.beta)
    assert_frame_equal(first.gamma, second.gamma)


def test_gensim_fit_produces_normalized_tables(dtm):
    cfg = TopicModelConfig(backend="gensim", passes=2, iterations=20)
    result = GensimLDAModeler(cfg).fit(dtm, 2)
    _check_distributions(result, 2, 6)


def test_gensim_fit_is_reproducible_with_seed(dtm):
    cfg = TopicModelConfig(backend="gensim", passes=2, iterations=20, random_state=3)
    first = GensimLDAModeler(cfg).fit(dtm, 2)
    second = GensimLDAModeler(cfg).fit(dtm, 2)
    assert_frame_equal(first.beta, second.beta)
    assert_frame_equal(first.gamma, second.gamma)


def test_fit_rejects_bad_topic_count(dtm):
    with pytest.raises(ConfigError):
        SklearnLDAModeler().fit(dtm, 1)


def test_fit_rejects_all_zero_matrix():
    dtm = build_dtm(pd.DataFrame({"id": ["a"], "word": ["x"], "n": [0]}))
    with pytest.raises(EmptyCorpusError):
        SklearnLDAModeler().fit(dtm, 2)


def test_estimate_k_picks_a_candidate(dtm):
    modeler = SklearnLDAModeler(TopicModelConfig(max_iter=5))
    assert modeler.estimate_k(dtm, [2, 3]) in (2, 3)


def test_gensim_estimate_k_picks_a_candidate(dtm):
    modeler = GensimLDAModeler(
        TopicModelConfig(backend="gensim", passes=2, iterations=20)
    )
    assert modeler.estimate_k(dtm, [2, 3]) in (2, 3)


@pytest.mark.parametrize("modeler_cls", [SklearnLDAModeler, GensimLDAModeler])
def test_estimate_k_rejects_empty_candidates(dtm, modeler_cls):
    with pytest.raises(ConfigError) as exc:
        modeler_cls().estimate_k(dtm, [])
    assert exc.value.code == "NO_TOPIC_CANDIDATES"


def test_get_modeler_dispatches_on_backend():
    assert isinstance(get_modeler(TopicModelConfig(backend="sklearn")), SklearnLDAModeler)
    assert isinstance(get_modeler(TopicModelConfig(backend="gensim")), GensimLDAModeler)
    with pytest.raises(ConfigError):
        get_modeler(TopicModelConfig(backend="mallet"))


def test_top_terms_and_dominant_topics():
    beta = pd.DataFrame(
        {
            "topic": [1, 1, 1, 2, 2, 2],
            "term": ["a", "b", "c", "a", "b", "c"],
            "beta": [0.5, 0.3, 0.2, 0.1, 0.1, 0.8],
        }
    )
    top = top_terms(beta, 2)
    assert top[["topic", "term"]].values.tolist() == [
        [1, "a"],
        [1, "b"],
        [2, "c"],
        [2, "a"],
    ]

    gamma = pd.DataFrame(
        {
            "document": ["d1", "d1", "d2", "d2"],
            "topic": [1, 2, 1, 2],
            "gamma": [0.9, 0.1, 0.3, 0.7],
        }
    )
    dom = dominant_topics(gamma)
    assert dom[["document", "topic"]].values.tolist() == [["d1", 1], ["d2", 2]]


def test_service_fits_from_tidy_tokens():
    tokens = pd.DataFrame(
        {
            "id": ["a"] * 4 + ["b"] * 4 + ["c"] * 4,
            "word": OCEAN[:4] + FIRE[:4] + OCEAN[1:5],
        }
    )
    service = TopicModelingService(SklearnLDAModeler(), topn_words=3)
    result = service.ensure_topics(tokens, force_k=2)

    assert result.num_topics == 2
    assert result.dtm.shape == (3, 9)
    assert result.top_terms.groupby("topic").size().tolist() == [3, 3]
    assert result.dominant["document"].tolist() == ["a", "b", "c"]


def test_service_requires_k_or_estimator():
    tokens = pd.DataFrame({"id": ["a", "b"], "word": ["sea", "fire"]})
    with pytest.raises(ConfigError) as exc:
        TopicModelingService(SklearnLDAModeler()).ensure_topics(tokens)
    assert exc.value.code == "TOPIC_COUNT_REQUIRED"
