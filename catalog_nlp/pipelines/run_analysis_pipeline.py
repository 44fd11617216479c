from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pandas as pd
import yaml

from catalog_nlp.core.config import Settings, settings as default_settings
from catalog_nlp.core.cooccurrence.config import CooccurrenceThresholds
from catalog_nlp.core.cooccurrence.pairwise import SparsePairwiseCounter
from catalog_nlp.core.eda.config import EDAConfig
from catalog_nlp.core.eda.eda_analyzer import (
    DefaultEDAAnalyzer,
    count_keywords,
    count_words,
)
from catalog_nlp.core.ingestion.base import CatalogTables
from catalog_nlp.core.ingestion.json_loader import JsonMetadataLoader
from catalog_nlp.core.stopword_removal.config import (
    CATALOG_NOISE_WORDS,
    MARKUP_NOISE_WORDS,
    StopwordConfig,
)
from catalog_nlp.core.stopword_removal.removal import DefaultStopwordRemover
from catalog_nlp.core.tokenization.tokenizer import DefaultTokenizer
from catalog_nlp.core.topic_labeling.config import TopicLabelConfig
from catalog_nlp.core.topic_labeling.labelers import get_labeler
from catalog_nlp.core.topic_modeling.config import (
    TopicEstimationConfig,
    TopicModelConfig,
)
from catalog_nlp.core.topic_modeling.factory import get_modeler
from catalog_nlp.core.weighting.tfidf import TfIdfWeighter
from catalog_nlp.messages import pipeline_messages as msg
from catalog_nlp.reporting.charts import histogram, save_figure, top_n_bar
from catalog_nlp.reporting.networks import build_graph, network_figure
from catalog_nlp.services.cooccurrence_service import CooccurrenceService
from catalog_nlp.services.stopword_service import StopwordService
from catalog_nlp.services.tokenization_service import TokenizationService
from catalog_nlp.services.topic_labeling_service import (
    TopicLabelingResult,
    TopicLabelingService,
)
from catalog_nlp.services.topic_modeling_service import (
    TopicModelingResult,
    TopicModelingService,
)
from catalog_nlp.services.weighting_service import WeightingService
from catalog_nlp.utils.exceptions import ConfigError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent / "configs" / "analysis_config.yaml"


@dataclass
class AnalysisResult:
    tables: Optional[CatalogTables] = None
    title_tokens: Optional[pd.DataFrame] = None  # ['id', 'word']
    description_tokens: Optional[pd.DataFrame] = None  # ['id', 'word']
    word_counts: Dict[str, pd.DataFrame] = field(default_factory=dict)
    eda: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    pairs: Dict[str, pd.DataFrame] = field(default_factory=dict)
    tf_idf: Optional[pd.DataFrame] = None
    tf_idf_by_keyword: Optional[pd.DataFrame] = None
    topics: Optional[TopicModelingResult] = None
    labels: Optional[TopicLabelingResult] = None
    reports: Dict[str, Path] = field(default_factory=dict)


def load_steps(config_path: str | Path | None = None) -> list[dict]:
    path = Path(config_path or DEFAULT_CONFIG)
    try:
        with open(path, "r") as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError as e:
        raise NotFoundError(
            code="CONFIG_FILE_NOT_FOUND", message=f"{msg.CONFIG_FILE_NOT_FOUND} ({path})"
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            code="CONFIG_INVALID_YAML", message=f"{msg.CONFIG_INVALID_YAML} {e}"
        ) from e
    try:
        return list(config["steps"]["actions"])
    except (KeyError, TypeError) as e:
        raise ConfigError(
            code="INVALID_PIPELINE_CONFIG",
            message=f"Expected steps.actions in {path}",
        ) from e


class AnalysisPipeline:
    """Runs the catalog text-mining steps top to bottom, in memory."""

    def __init__(self, cfg: Settings | None = None, export: bool = True):
        self.settings = cfg or default_settings
        self.export = export
        self.report_dir = Path(self.settings.REPORT_DIR)

        self.loader = JsonMetadataLoader()
        self.tokenization = TokenizationService(DefaultTokenizer())
        self.stopwords = StopwordService(
            DefaultStopwordRemover(StopwordConfig(custom_stopwords=CATALOG_NOISE_WORDS))
        )
        self.markup_stopwords = StopwordService(
            DefaultStopwordRemover(StopwordConfig(custom_stopwords=MARKUP_NOISE_WORDS))
        )
        self.weighting = WeightingService(TfIdfWeighter())

        self._steps: Dict[str, Callable[[AnalysisResult, dict], None]] = {
            "ingestion": self.ingest,
            "tokenization": self.tokenize,
            "word_counts": self.count_words,
            "cooccurrence": self.cooccurrence,
            "tf_idf": self.tf_idf,
            "topic_modeling": self.topic_modeling,
            "topic_labeling": self.topic_labeling,
            "report": self.report,
        }

    # --- steps ---

    @staticmethod
    def _require(result: AnalysisResult, attr: str, step: str):
        value = getattr(result, attr)
        if value is None:
            raise ConfigError(
                code="STEP_DEPENDENCY_MISSING",
                message=msg.STEP_DEPENDENCY_MISSING.format(step=step, needs=attr),
            )
        return value

    def ingest(self, result: AnalysisResult, action: dict) -> None:
        source = action.get("file_input") or self.settings.DATA_PATH
        result.tables = self.loader.load(source)

    def tokenize(self, result: AnalysisResult, action: dict) -> None:
        tables = self._require(result, "tables", "tokenization")
        titles = self.tokenization.unnest(tables.titles, "title")
        descriptions = self.tokenization.unnest(tables.descriptions, "description")
        result.title_tokens = self.stopwords.anti_join(titles).df
        result.description_tokens = self.stopwords.anti_join(descriptions).df

    def count_words(self, result: AnalysisResult, action: dict) -> None:
        tables = self._require(result, "tables", "word_counts")
        analyzer = DefaultEDAAnalyzer(EDAConfig(top_words=action.get("top_words", 20)))
        for name in ("title_tokens", "description_tokens"):
            tokens = self._require(result, name, "word_counts")
            result.word_counts[name] = count_words(tokens)
            result.eda[name] = analyzer.analyze(tokens)
        result.word_counts["keywords"] = count_keywords(tables.keywords)

    def cooccurrence(self, result: AnalysisResult, action: dict) -> None:
        tables = self._require(result, "tables", "cooccurrence")
        defaults = CooccurrenceThresholds()
        thresholds = CooccurrenceThresholds(
            title_min_n=action.get("title_min_n", defaults.title_min_n),
            description_min_n=action.get(
                "description_min_n", defaults.description_min_n
            ),
            keyword_min_n=action.get("keyword_min_n", defaults.keyword_min_n),
            keyword_min_count=action.get(
                "keyword_min_count", defaults.keyword_min_count
            ),
            keyword_min_correlation=action.get(
                "keyword_min_correlation", defaults.keyword_min_correlation
            ),
        )
        service = CooccurrenceService(SparsePairwiseCounter(), thresholds)
        result.pairs["title"] = service.title_pairs(
            self._require(result, "title_tokens", "cooccurrence")
        )
        result.pairs["description"] = service.description_pairs(
            self._require(result, "description_tokens", "cooccurrence")
        )
        result.pairs["keyword"] = service.keyword_pairs(tables.keywords)
        result.pairs["keyword_correlation"] = service.keyword_correlations(
            tables.keywords
        )

    def tf_idf(self, result: AnalysisResult, action: dict) -> None:
        tables = self._require(result, "tables", "tf_idf")
        tokens = self._require(result, "description_tokens", "tf_idf")
        result.tf_idf = self.weighting.description_tf_idf(tokens)
        keywords = action.get("keywords") or []
        if keywords:
            result.tf_idf_by_keyword = self.weighting.tf_idf_by_keyword(
                result.tf_idf,
                tables.keywords,
                keywords,
                top_n=action.get("top_n", 15),
            )

    def topic_modeling(self, result: AnalysisResult, action: dict) -> None:
        tokens = self._require(result, "description_tokens", "topic_modeling")
        # descriptions carry markup residue that swamps topics
        tokens = self.markup_stopwords.anti_join(tokens).df

        cfg = TopicModelConfig(
            backend=action.get("backend", self.settings.TOPIC_BACKEND),
            random_state=action.get("random_state", self.settings.RANDOM_STATE),
            topn_words=action.get("topn_words", 10),
        )
        modeler = get_modeler(cfg)
        service = TopicModelingService(
            modeler, estimator=modeler, topn_words=cfg.topn_words
        )
        if action.get("estimate", False):
            est = TopicEstimationConfig(
                candidates=tuple(
                    action.get("candidates", TopicEstimationConfig().candidates)
                )
            )
            result.topics = service.ensure_topics(tokens, est=est)
        else:
            result.topics = service.ensure_topics(
                tokens, force_k=action.get("num_topics", self.settings.NUM_TOPICS)
            )

    def topic_labeling(self, result: AnalysisResult, action: dict) -> None:
        tables = self._require(result, "tables", "topic_labeling")
        topics = self._require(result, "topics", "topic_labeling")
        cfg = TopicLabelConfig(
            strategy=action.get("strategy", "keywords"),
            min_gamma=action.get("min_gamma", 0.9),
        )
        service = TopicLabelingService(get_labeler(cfg), min_gamma=cfg.min_gamma)
        result.labels = service.label(topics, tables.keywords)

    def report(self, result: AnalysisResult, action: dict) -> None:
        if not self.export:
            logger.info(msg.STEP_SKIPPED.format(step="report (export disabled)"))
            return
        out = self.report_dir

        for name, pairs in result.pairs.items():
            weight = "correlation" if name == "keyword_correlation" else "n"
            fig = network_figure(
                build_graph(pairs, weight=weight),
                title=f"{name.replace('_', ' ').title()} network",
            )
            result.reports[f"{name}_network"] = save_figure(
                fig, out / f"{name}_network.html"
            )

        if result.tf_idf_by_keyword is not None and len(result.tf_idf_by_keyword):
            fig = top_n_bar(
                result.tf_idf_by_keyword,
                group="keyword",
                label="word",
                value="tf_idf",
                n=action.get("top_n", 15),
                title="Highest tf-idf words in description fields",
            )
            result.reports["tf_idf_by_keyword"] = save_figure(
                fig, out / "tf_idf_by_keyword.html"
            )

        if result.topics is not None:
            fig = top_n_bar(
                result.topics.top_terms,
                group="topic",
                label="term",
                value="beta",
                n=result.topics.top_terms.groupby("topic").size().max(),
                title="Top terms per LDA topic",
                cols=4,
            )
            result.reports["topic_terms"] = save_figure(fig, out / "topic_terms.html")
            fig = histogram(
                result.topics.model.gamma,
                "gamma",
                title="Distribution of document-topic probabilities",
                log_y=True,
            )
            result.reports["gamma"] = save_figure(fig, out / "gamma_distribution.html")

        if result.labels is not None and len(result.labels.keyword_counts):
            fig = top_n_bar(
                result.labels.keyword_counts,
                group="topic",
                label="keyword",
                value="n",
                n=5,
                title="Top keywords for each LDA topic",
                cols=4,
            )
            result.reports["topic_keywords"] = save_figure(
                fig, out / "topic_keywords.html"
            )

        if action.get("export_tables", False):
            self._export_tables(result)

    def _export_tables(self, result: AnalysisResult) -> None:
        tables: Dict[str, pd.DataFrame] = {
            f"pairs_{name}": df for name, df in result.pairs.items()
        }
        tables.update({f"counts_{k}": v for k, v in result.word_counts.items()})
        if result.tf_idf is not None:
            tables["tf_idf"] = result.tf_idf
        if result.topics is not None:
            tables["lda_beta"] = result.topics.model.beta
            tables["lda_gamma"] = result.topics.model.gamma
        if result.labels is not None:
            tables["topic_keywords"] = result.labels.keyword_counts
            tables["topic_labels"] = pd.DataFrame(
                sorted(result.labels.label_map.items()), columns=["topic", "label"]
            )
        self.report_dir.mkdir(parents=True, exist_ok=True)
        for name, df in tables.items():
            path = self.report_dir / f"{name}.csv"
            df.to_csv(path, index=False)
            result.reports[name] = path

    # --- driver ---

    def run_steps(self, actions: list[dict]) -> AnalysisResult:
        result = AnalysisResult()
        for action in actions:
            step_type = action.get("type", "")
            if not action.get("is_execute", False):
                logger.info(msg.STEP_SKIPPED.format(step=step_type))
                continue
            step = self._steps.get(step_type)
            if step is None:
                logger.warning(msg.STEP_UNKNOWN.format(step=step_type))
                continue
            logger.info(f"Running step: {step_type}...")
            start_time = time.time()
            step(result, action)
            elapsed_time = time.time() - start_time
            logger.info(msg.STEP_COMPLETED.format(step=step_type, elapsed=elapsed_time))

        logger.info(msg.PIPELINE_COMPLETED)
        return result


def run(
    config_path: str | Path | None = None,
    cfg: Settings | None = None,
    export: bool = True,
) -> AnalysisResult:
    cfg = cfg or default_settings
    actions = load_steps(config_path or cfg.PIPELINE_CONFIG)
    return AnalysisPipeline(cfg, export=export).run_steps(actions)


if __name__ == "__main__":
    from catalog_nlp.utils.logging import setup_logging

    setup_logging()
    run()
