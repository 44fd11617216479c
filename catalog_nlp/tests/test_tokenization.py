import pandas as pd
import pytest

from catalog_nlp.core.stopword_removal.config import (
    CATALOG_NOISE_WORDS,
    MARKUP_NOISE_WORDS,
    StopwordConfig,
)
from catalog_nlp.core.stopword_removal.removal import DefaultStopwordRemover
from catalog_nlp.core.tokenization.config import TokenizationConfig
from catalog_nlp.core.tokenization.tokenizer import DefaultTokenizer
from catalog_nlp.services.stopword_service import StopwordService
from catalog_nlp.services.tokenization_service import TokenizationService
from catalog_nlp.utils.exceptions import ConfigError


def test_default_tokenizer_lowercases_and_keeps_version_codes():
    tokens = DefaultTokenizer().tokenize("Global Land Data v5.2.0, L2 product!")
    assert tokens == ["global", "land", "data", "v5.2.0", "l2", "product"]


def test_tokenizer_filters():
    cfg = TokenizationConfig(remove_numbers_only=True, min_token_len=3)
    tokens = DefaultTokenizer(cfg).tokenize("MODIS 2016 sea ice at 250 m")
    assert tokens == ["modis", "sea", "ice"]


def test_wordpunct_method_splits_punctuation():
    cfg = TokenizationConfig(method="wordpunct")
    assert DefaultTokenizer(cfg).tokenize("Sea-Ice") == ["sea", "-", "ice"]


def test_keep_alnum_only_drops_punctuation_tokens():
    cfg = TokenizationConfig(method="wordpunct", keep_alnum_only=True)
    assert DefaultTokenizer(cfg).tokenize("Sea-Ice (L2)") == ["sea", "ice", "l2"]


def test_unknown_tokenization_method_is_a_config_error():
    with pytest.raises(ConfigError) as exc:
        DefaultTokenizer(TokenizationConfig(method="whitespace"))
    assert exc.value.code == "UNKNOWN_TOKENIZATION_METHOD"


def test_tokenizer_handles_empty_text():
    assert DefaultTokenizer().tokenize("") == []
    assert DefaultTokenizer().tokenize(None) == []


def test_unnest_produces_tidy_rows_and_drops_empty_documents():
    df = pd.DataFrame({"id": ["a", "b", "c"], "title": ["Sea Ice", "", "Ice"]})
    out = TokenizationService(DefaultTokenizer()).unnest(df, "title")

    assert list(out.columns) == ["id", "word"]
    assert out.to_dict("records") == [
        {"id": "a", "word": "sea"},
        {"id": "a", "word": "ice"},
        {"id": "c", "word": "ice"},
    ]


def test_stopword_remover_with_catalog_noise():
    remover = DefaultStopwordRemover(
        StopwordConfig(use_nltk=False, custom_stopwords=CATALOG_NOISE_WORDS)
    )
    kept, removed = remover.remove(["the", "v1", "ozone", "3", "of", "Aerosol"])
    assert kept == ["ozone", "Aerosol"]
    assert removed == ["the", "v1", "3", "of"]


def test_stopword_exclusions_are_kept():
    remover = DefaultStopwordRemover(
        StopwordConfig(use_nltk=False, exclude_stopwords=frozenset({"Not"}))
    )
    kept, _ = remover.remove(["not", "and"])
    assert kept == ["not"]


def test_markup_noise_words_cover_html_residue():
    assert {"nbsp", "amp", "br", "12"} <= MARKUP_NOISE_WORDS
    assert "13" not in MARKUP_NOISE_WORDS


def test_stopword_service_anti_join_counts_removed():
    tokens = pd.DataFrame(
        {"id": ["a", "a", "a", "b"], "word": ["the", "ocean", "v03", "data"]}
    )
    service = StopwordService(
        DefaultStopwordRemover(
            StopwordConfig(use_nltk=False, custom_stopwords=CATALOG_NOISE_WORDS)
        )
    )
    result = service.anti_join(tokens)
    assert result.df["word"].tolist() == ["ocean", "data"]
    assert result.removed == 2
