from __future__ import annotations
import logging
from typing import Sequence

from sklearn.decomposition import LatentDirichletAllocation

from catalog_nlp.core.topic_modeling.base import (
    DocumentTermMatrix,
    TopicEstimator,
    TopicModeler,
    TopicModelResult,
)
from catalog_nlp.core.topic_modeling.config import TopicModelConfig
from catalog_nlp.core.topic_modeling.utils import (
    beta_table,
    gamma_table,
    sample_dtm,
    validate_candidates,
    validate_inputs,
)
from catalog_nlp.messages import topic_messages as msg
from catalog_nlp.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)


class SklearnLDAModeler(TopicModeler, TopicEstimator):
    def __init__(self, cfg: TopicModelConfig | None = None):
        self.cfg = cfg or TopicModelConfig(backend="sklearn")

    def _model(self, num_topics: int) -> LatentDirichletAllocation:
        return LatentDirichletAllocation(
            n_components=num_topics,
            learning_method="batch",
            max_iter=self.cfg.max_iter,
            random_state=self.cfg.random_state,
        )

    def estimate_k(self, dtm: DocumentTermMatrix, candidates: Sequence[int]) -> int:
        validate_candidates(candidates)
        sample = (
            sample_dtm(dtm, self.cfg.sample_docs_for_estimation, self.cfg.random_state)
            if self.cfg.sample_docs_for_estimation
            else dtm
        )
        best_k, best_score = None, float("inf")
        for k in candidates:
            validate_inputs(sample, k)
            lda = self._model(k).fit(sample.matrix)
            score = lda.perplexity(sample.matrix)
            logger.info(f"k={k} perplexity={score:.2f}")
            if score < best_score:
                best_score, best_k = score, k
        if best_k is None:
            raise ConfigError(
                code="NO_TOPIC_CANDIDATES", message=msg.LDA_NO_CANDIDATES
            )
        logger.info(msg.LDA_ESTIMATED_K.format(k=best_k, score=best_score))
        return best_k

    def fit(self, dtm: DocumentTermMatrix, num_topics: int) -> TopicModelResult:
        validate_inputs(dtm, num_topics)
        lda = self._model(num_topics)
        doc_topic = lda.fit_transform(dtm.matrix)  # shape: (n_docs, num_topics)
        result = TopicModelResult(
            beta=beta_table(lda.components_, dtm.terms),
            gamma=gamma_table(doc_topic, dtm.documents),
            num_topics=num_topics,
            perplexity=float(lda.perplexity(dtm.matrix)),
        )
        logger.info(msg.LDA_COMPLETED.format(k=num_topics, backend="sklearn"))
        return result
