from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from catalog_nlp.core.ingestion.base import CatalogTables, MetadataLoader
from catalog_nlp.core.ingestion.config import IngestionConfig
from catalog_nlp.messages import pipeline_messages as msg
from catalog_nlp.utils.exceptions import BadInputError, NotFoundError

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    # some catalog fields arrive as arrays of strings
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(str(v) for v in value if v is not None)
    return str(value)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None and str(v).strip()]
    s = str(value)
    return [s] if s.strip() else []


class JsonMetadataLoader(MetadataLoader):
    """
    Adapter: reads a `{"dataset": [...]}` JSON document.
    Accepts a file path, a raw JSON str/bytes payload, or a parsed dict.
    """

    def __init__(self, config: IngestionConfig | None = None):
        self.cfg = config or IngestionConfig()

    def _read(self, source: Any) -> Dict[str, Any]:
        if isinstance(source, dict):
            return source
        if isinstance(source, bytes):
            source = source.decode(self.cfg.encoding)
        if isinstance(source, str) and source.lstrip().startswith(("{", "[")):
            raw = source
        else:
            path = Path(source)
            if not path.exists():
                raise NotFoundError(
                    code="DATA_FILE_NOT_FOUND",
                    message=f"{msg.DATA_FILE_NOT_FOUND} ({path})",
                )
            raw = path.read_text(encoding=self.cfg.encoding)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise BadInputError(
                code="DATA_INVALID_JSON", message=f"{msg.DATA_INVALID_JSON} {e}"
            ) from e

    def _dataset_id(self, entry: Dict[str, Any], position: int) -> str:
        raw = entry.get(self.cfg.id_field)
        if isinstance(raw, dict):
            raw = raw.get("$oid")
        if raw is None:
            raw = entry.get(self.cfg.fallback_id_field)
        # "#" keeps positional ids apart from real numeric ids
        return str(raw) if raw is not None else f"#{position}"

    def load(self, source: Any) -> CatalogTables:
        payload = self._read(source)
        datasets = (
            payload.get(self.cfg.datasets_key) if isinstance(payload, dict) else None
        )
        if not isinstance(datasets, list):
            raise BadInputError(
                code="DATA_MISSING_DATASETS", message=msg.DATA_MISSING_DATASETS
            )

        titles: List[Dict[str, str]] = []
        descriptions: List[Dict[str, str]] = []
        keywords: List[Dict[str, str]] = []
        seen = set()

        for position, entry in enumerate(datasets):
            if not isinstance(entry, dict):
                continue
            ds_id = self._dataset_id(entry, position)
            if ds_id in seen:
                logger.warning(msg.DUPLICATE_DATASET_ID.format(id=ds_id))
                continue
            seen.add(ds_id)

            titles.append(
                {"id": ds_id, "title": _as_text(entry.get(self.cfg.title_field))}
            )
            descriptions.append(
                {
                    "id": ds_id,
                    "description": _as_text(entry.get(self.cfg.description_field)),
                }
            )
            kws = _as_list(entry.get(self.cfg.keyword_field))
            if self.cfg.uppercase_keywords:
                kws = [k.upper() for k in kws]
            # dict keeps first-seen order while dropping repeats
            for kw in dict.fromkeys(kws):
                keywords.append({"id": ds_id, "keyword": kw})

        tables = CatalogTables(
            titles=pd.DataFrame(titles, columns=["id", "title"]),
            descriptions=pd.DataFrame(descriptions, columns=["id", "description"]),
            keywords=pd.DataFrame(keywords, columns=["id", "keyword"]),
        )
        logger.info(
            msg.INGESTION_COMPLETED.format(
                datasets=tables.num_datasets, keywords=len(tables.keywords)
            )
        )
        return tables
