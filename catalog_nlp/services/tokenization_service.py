from __future__ import annotations
import logging

import pandas as pd

from catalog_nlp.core.tokenization.base import Tokenizer
from catalog_nlp.utils.exceptions import BadInputError

logger = logging.getLogger(__name__)


class TokenizationService:
    """
    Turns a [id, <text column>] table into tidy tokens: one row per token
    occurrence, columns ['id', 'word'].
    """

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer

    def unnest(
        self, df: pd.DataFrame, column: str, id_column: str = "id"
    ) -> pd.DataFrame:
        for col in (id_column, column):
            if col not in df.columns:
                raise BadInputError(
                    code="COLUMN_MISSING", message=f"Column '{col}' not found."
                )

        tokens = df[column].fillna("").astype(str).map(self.tokenizer.tokenize)
        out = (
            pd.DataFrame({"id": df[id_column].to_numpy(), "word": tokens.to_numpy()})
            .explode("word")
            .dropna(subset=["word"])
            .reset_index(drop=True)
        )
        logger.info(f"Tokenized '{column}': {len(df)} rows -> {len(out)} tokens")
        return out
