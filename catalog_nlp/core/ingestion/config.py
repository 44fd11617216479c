from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class IngestionConfig:
    datasets_key: str = "dataset"
    id_field: str = "_id"
    fallback_id_field: str = "identifier"
    title_field: str = "title"
    description_field: str = "description"
    keyword_field: str = "keyword"
    uppercase_keywords: bool = True
    encoding: str = "utf-8"
