from __future__ import annotations
from abc import ABC, abstractmethod

import pandas as pd


class TermWeighter(ABC):
    """Port: add per-(document, term) weights to a count table."""

    @abstractmethod
    def weight(self, counts: pd.DataFrame) -> pd.DataFrame: ...
