from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import pandas as pd


@dataclass(frozen=True)
class CatalogTables:
    titles: pd.DataFrame  # ['id', 'title']
    descriptions: pd.DataFrame  # ['id', 'description']
    keywords: pd.DataFrame  # ['id', 'keyword']

    @property
    def num_datasets(self) -> int:
        return len(self.titles)


class MetadataLoader(ABC):
    """Port: turn a catalog metadata dump into flat per-field tables."""

    @abstractmethod
    def load(self, source: Any) -> CatalogTables: ...
