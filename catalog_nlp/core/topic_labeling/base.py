from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Optional

import pandas as pd


class TopicLabeler(ABC):
    """
    Given the top terms of each topic and (optionally) the document-topic
    table with the human-assigned keywords, produce {topic -> label}.
    """

    @abstractmethod
    def label(
        self,
        top_terms: pd.DataFrame,
        *,
        gamma: Optional[pd.DataFrame] = None,
        keywords: Optional[pd.DataFrame] = None,
    ) -> Dict[int, str]: ...
