from __future__ import annotations
import logging
from typing import Dict, Sequence

import numpy as np
from gensim import matutils, models

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


class GensimLDAModeler(TopicModeler, TopicEstimator):
    def __init__(self, cfg: TopicModelConfig | None = None):
        self.cfg = cfg or TopicModelConfig(backend="gensim")

    def _prepare(self, dtm: DocumentTermMatrix):
        corpus = list(matutils.Sparse2Corpus(dtm.matrix, documents_columns=False))
        id2word: Dict[int, str] = {i: str(t) for i, t in enumerate(dtm.terms)}
        return corpus, id2word

    def _train(self, corpus, id2word, num_topics: int) -> models.LdaModel:
        return models.LdaModel(
            corpus=corpus,
            id2word=id2word,
            num_topics=num_topics,
            passes=self.cfg.passes,
            iterations=self.cfg.iterations,
            random_state=self.cfg.random_state,
        )

    @staticmethod
    def _perplexity(lda: models.LdaModel, corpus) -> float:
        # log_perplexity returns the per-word likelihood bound in log2
        return float(np.exp2(-lda.log_perplexity(corpus)))

    def estimate_k(self, dtm: DocumentTermMatrix, candidates: Sequence[int]) -> int:
        validate_candidates(candidates)
        sample = (
            sample_dtm(dtm, self.cfg.sample_docs_for_estimation, self.cfg.random_state)
            if self.cfg.sample_docs_for_estimation
            else dtm
        )
        corpus, id2word = self._prepare(sample)
        best_k, best_score = None, float("inf")
        for k in candidates:
            validate_inputs(sample, k)
            lda = self._train(corpus, id2word, k)
            score = self._perplexity(lda, corpus)
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
        corpus, id2word = self._prepare(dtm)
        lda = self._train(corpus, id2word, num_topics)

        # full variational posterior per doc; get_document_topics drops tiny values
        doc_topic, _ = lda.inference(corpus)
        result = TopicModelResult(
            beta=beta_table(lda.get_topics(), dtm.terms),
            gamma=gamma_table(doc_topic, dtm.documents),
            num_topics=num_topics,
            perplexity=self._perplexity(lda, corpus),
        )
        logger.info(msg.LDA_COMPLETED.format(k=num_topics, backend="gensim"))
        return result
