from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict

import pandas as pd

from catalog_nlp.core.topic_labeling.base import TopicLabeler
from catalog_nlp.core.topic_labeling.labelers import keyword_counts
from catalog_nlp.messages import topic_messages as msg
from catalog_nlp.services.topic_modeling_service import TopicModelingResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopicLabelingResult:
    label_map: Dict[int, str]
    keyword_counts: pd.DataFrame  # ['topic', 'keyword', 'n']


class TopicLabelingService:
    def __init__(self, labeler: TopicLabeler, min_gamma: float = 0.9):
        self.labeler = labeler
        self.min_gamma = min_gamma

    def label(
        self, topics: TopicModelingResult, keywords: pd.DataFrame
    ) -> TopicLabelingResult:
        label_map = self.labeler.label(
            topics.top_terms, gamma=topics.model.gamma, keywords=keywords
        )
        counts = keyword_counts(topics.model.gamma, keywords, self.min_gamma)
        logger.info(msg.TOPIC_LABELING_COMPLETED.format(n=len(label_map)))
        return TopicLabelingResult(label_map=label_map, keyword_counts=counts)
