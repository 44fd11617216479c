from __future__ import annotations
import logging
from dataclasses import dataclass

import pandas as pd

from catalog_nlp.core.stopword_removal.base import StopwordRemover
from catalog_nlp.utils.exceptions import BadInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StopwordResult:
    df: pd.DataFrame  # tidy tokens without stopwords
    removed: int  # token occurrences dropped


class StopwordService:
    """Filters tidy token tables against a remover's stop set."""

    def __init__(self, remover: StopwordRemover):
        self.remover = remover

    def anti_join(self, tokens: pd.DataFrame, column: str = "word") -> StopwordResult:
        if column not in tokens.columns:
            raise BadInputError(
                code="COLUMN_MISSING", message=f"Column '{column}' not found."
            )
        mask = ~tokens[column].astype(str).str.lower().isin(self.remover.stopwords)
        out = tokens.loc[mask].reset_index(drop=True)
        removed = int((~mask).sum())
        logger.info(f"Removed {removed} stopword tokens from '{column}'")
        return StopwordResult(df=out, removed=removed)
