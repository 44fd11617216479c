from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from catalog_nlp.core.topic_labeling.base import TopicLabeler
from catalog_nlp.core.topic_labeling.config import TopicLabelConfig
from catalog_nlp.messages import topic_messages as msg
from catalog_nlp.utils.exceptions import ConfigError


def keyword_counts(
    gamma: pd.DataFrame, keywords: pd.DataFrame, min_gamma: float = 0.9
) -> pd.DataFrame:
    """
    Join confidently assigned documents back to their human keywords and
    count keywords per topic: ['topic', 'keyword', 'n'].
    """
    strong = gamma.loc[gamma["gamma"] > min_gamma, ["document", "topic"]]
    joined = strong.merge(keywords, left_on="document", right_on="id", how="inner")
    out = joined.groupby(["topic", "keyword"]).size().reset_index(name="n")
    return out.sort_values(
        ["topic", "n", "keyword"], ascending=[True, False, True], ignore_index=True
    )


# --- helper used by default heuristic ---
def _generate_default_labels(top_terms: pd.DataFrame, k: int) -> Dict[int, str]:
    out: Dict[int, str] = {}
    for tid, grp in top_terms.groupby("topic", sort=True):
        words = grp.sort_values("beta", ascending=False)["term"].astype(str).tolist()
        out[int(tid)] = " & ".join(words[:k]) if words else f"Topic {tid}"
    return out


# --- Default heuristic (top-k terms) ---
@dataclass
class DefaultHeuristicLabeler(TopicLabeler):
    cfg: TopicLabelConfig

    def label(
        self,
        top_terms: pd.DataFrame,
        *,
        gamma: Optional[pd.DataFrame] = None,
        keywords: Optional[pd.DataFrame] = None,
    ) -> Dict[int, str]:
        return _generate_default_labels(top_terms, self.cfg.num_keywords)


# --- Most frequent human keyword among strongly assigned documents ---
@dataclass
class KeywordLabeler(TopicLabeler):
    cfg: TopicLabelConfig

    def label(
        self,
        top_terms: pd.DataFrame,
        *,
        gamma: Optional[pd.DataFrame] = None,
        keywords: Optional[pd.DataFrame] = None,
    ) -> Dict[int, str]:
        if gamma is None or keywords is None:
            raise ValueError("KeywordLabeler requires `gamma` and `keywords`.")
        labels = _generate_default_labels(top_terms, self.cfg.num_keywords)
        counts = keyword_counts(gamma, keywords, self.cfg.min_gamma)
        # counts is sorted by n desc within topic, so first row wins
        for tid, grp in counts.groupby("topic", sort=True):
            labels[int(tid)] = str(grp.iloc[0]["keyword"])
        return labels


def get_labeler(cfg: TopicLabelConfig) -> TopicLabeler:
    if cfg.strategy == "keywords":
        return KeywordLabeler(cfg)
    if cfg.strategy == "default":
        return DefaultHeuristicLabeler(cfg)
    raise ConfigError(
        code="UNKNOWN_LABEL_STRATEGY",
        message=msg.LABEL_UNKNOWN_STRATEGY.format(strategy=cfg.strategy),
    )
