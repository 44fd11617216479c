from __future__ import annotations

from catalog_nlp.core.topic_modeling.base import TopicModeler
from catalog_nlp.core.topic_modeling.config import TopicModelConfig
from catalog_nlp.core.topic_modeling.gensim_lda import GensimLDAModeler
from catalog_nlp.core.topic_modeling.sklearn_lda import SklearnLDAModeler
from catalog_nlp.messages import topic_messages as msg
from catalog_nlp.utils.exceptions import ConfigError


def get_modeler(cfg: TopicModelConfig) -> TopicModeler:
    if cfg.backend == "sklearn":
        return SklearnLDAModeler(cfg)
    if cfg.backend == "gensim":
        return GensimLDAModeler(cfg)
    raise ConfigError(
        code="UNKNOWN_BACKEND",
        message=msg.LDA_UNKNOWN_BACKEND.format(backend=cfg.backend),
    )
