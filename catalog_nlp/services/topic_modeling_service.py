from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from catalog_nlp.core.topic_modeling.base import (
    DocumentTermMatrix,
    TopicEstimator,
    TopicModeler,
    TopicModelResult,
)
from catalog_nlp.core.topic_modeling.config import TopicEstimationConfig
from catalog_nlp.core.topic_modeling.utils import build_dtm, dominant_topics, top_terms
from catalog_nlp.core.weighting.tfidf import count_terms
from catalog_nlp.messages import topic_messages as msg
from catalog_nlp.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopicModelingResult:
    dtm: DocumentTermMatrix
    model: TopicModelResult
    top_terms: pd.DataFrame  # ['topic', 'term', 'beta']
    dominant: pd.DataFrame  # ['document', 'topic', 'gamma'], one row per doc
    num_topics: int


class TopicModelingService:
    """
    - Counts description words per dataset and casts them into a DTM
    - Estimates K over the candidates when no K is forced
    - Fits LDA and summarizes the beta/gamma tables
    """

    def __init__(
        self,
        modeler: TopicModeler,
        estimator: Optional[TopicEstimator] = None,
        topn_words: int = 10,
    ):
        self.modeler = modeler
        self.estimator = estimator
        self.topn_words = topn_words

    def ensure_topics(
        self,
        desc_tokens: pd.DataFrame,
        *,
        est: TopicEstimationConfig | None = None,
        force_k: Optional[int] = None,
    ) -> TopicModelingResult:
        dtm = build_dtm(count_terms(desc_tokens))
        logger.info(f"Document-term matrix: {dtm.shape[0]} docs x {dtm.shape[1]} terms")

        if force_k is None:
            if self.estimator is None:
                raise ConfigError(code="TOPIC_COUNT_REQUIRED", message=msg.LDA_K_REQUIRED)
            est = est or TopicEstimationConfig()
            k = self.estimator.estimate_k(dtm, est.candidates)
        else:
            k = force_k

        model = self.modeler.fit(dtm, num_topics=k)
        return TopicModelingResult(
            dtm=dtm,
            model=model,
            top_terms=top_terms(model.beta, self.topn_words),
            dominant=dominant_topics(model.gamma),
            num_topics=k,
        )
