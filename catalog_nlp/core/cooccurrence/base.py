from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

import pandas as pd


class PairwiseCounter(ABC):
    """
    Port: statistics over pairs of items that share a feature.
    `item` is the column being paired (word, keyword), `feature` the grouping
    column (dataset id).
    """

    @abstractmethod
    def pairwise_count(
        self,
        df: pd.DataFrame,
        item: str,
        feature: str,
        upper: Optional[bool] = None,
    ) -> pd.DataFrame:
        """Returns ['item1', 'item2', 'n']."""
        ...

    @abstractmethod
    def pairwise_cor(
        self,
        df: pd.DataFrame,
        item: str,
        feature: str,
        upper: Optional[bool] = None,
    ) -> pd.DataFrame:
        """Returns ['item1', 'item2', 'correlation']."""
        ...
