import pandas as pd
import pytest

from catalog_nlp.core.topic_labeling.config import TopicLabelConfig
from catalog_nlp.core.topic_labeling.labelers import (
    DefaultHeuristicLabeler,
    KeywordLabeler,
    get_labeler,
    keyword_counts,
)
from catalog_nlp.utils.exceptions import ConfigError


@pytest.fixture
def top_terms():
    return pd.DataFrame(
        {
            "topic": [1, 1, 2, 2],
            "term": ["ocean", "sea", "fire", "smoke"],
            "beta": [0.4, 0.3, 0.5, 0.2],
        }
    )


@pytest.fixture
def gamma():
    return pd.DataFrame(
        {
            "document": ["a", "a", "b", "b", "c", "c"],
            "topic": [1, 2, 1, 2, 1, 2],
            "gamma": [0.95, 0.05, 0.97, 0.03, 0.5, 0.5],
        }
    )


@pytest.fixture
def keywords():
    return pd.DataFrame(
        {
            "id": ["a", "a", "b", "c"],
            "keyword": ["OCEANS", "EARTH SCIENCE", "OCEANS", "FIRE"],
        }
    )


def test_keyword_counts_only_uses_confident_documents(gamma, keywords):
    out = keyword_counts(gamma, keywords, min_gamma=0.9)
    assert out.values.tolist() == [[1, "OCEANS", 2], [1, "EARTH SCIENCE", 1]]


def test_heuristic_labeler_joins_top_terms(top_terms):
    labels = DefaultHeuristicLabeler(TopicLabelConfig(num_keywords=2)).label(top_terms)
    assert labels == {1: "ocean & sea", 2: "fire & smoke"}


def test_keyword_labeler_falls_back_without_confident_documents(
    top_terms, gamma, keywords
):
    labels = KeywordLabeler(TopicLabelConfig()).label(
        top_terms, gamma=gamma, keywords=keywords
    )
    assert labels == {1: "OCEANS", 2: "fire & smoke"}


def test_keyword_labeler_requires_inputs(top_terms):
    with pytest.raises(ValueError):
        KeywordLabeler(TopicLabelConfig()).label(top_terms)


def test_get_labeler_by_strategy():
    assert isinstance(get_labeler(TopicLabelConfig(strategy="keywords")), KeywordLabeler)
    assert isinstance(
        get_labeler(TopicLabelConfig(strategy="default")), DefaultHeuristicLabeler
    )


def test_get_labeler_rejects_unknown_strategy():
    with pytest.raises(ConfigError) as exc:
        get_labeler(TopicLabelConfig(strategy="keyword"))
    assert exc.value.code == "UNKNOWN_LABEL_STRATEGY"
