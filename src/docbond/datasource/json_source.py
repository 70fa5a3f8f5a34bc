"""JSON-shaped data sources.

``JsonDataSource`` keeps every collection in one in-memory dict of the
form ``{collection: {id: record}}`` and is the usual test double.
``FileDataSource`` persists the same structure to a JSON or YAML file
after every change.
"""
from __future__ import annotations

import asyncio
import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from docbond.datasource.base import DataSource, RawRecord

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


class JsonDataSource(DataSource):
    """In-memory data source over a plain ``{collection: {id: record}}`` dict.

    Records are copied on every read and write so callers never share
    mutable state with the stored data.

    Parameters
    ----------
    raw_data:
        Initial collections. The dict is used as-is, not copied.
    """

    def __init__(self, raw_data: Optional[dict[str, dict[str, RawRecord]]] = None) -> None:
        self._data: dict[str, dict[str, RawRecord]] = raw_data if raw_data is not None else {}
        self.lock = asyncio.Lock()

    @property
    def raw_data(self) -> dict[str, dict[str, RawRecord]]:
        """The live collections dict."""
        return self._data

    def collections(self) -> list[str]:
        return list(self._data)

    async def read(self, collection: str, document_id: str) -> Optional[RawRecord]:
        async with self.lock:
            record = self._data.get(collection, {}).get(document_id)
            return copy.deepcopy(record) if record is not None else None

    async def read_all(self, collection: str) -> dict[str, RawRecord]:
        async with self.lock:
            return copy.deepcopy(self._data.get(collection, {}))

    async def write(self, collection: str, document_id: str, record: RawRecord) -> None:
        async with self.lock:
            self._data.setdefault(collection, {})[document_id] = copy.deepcopy(record)
            self._changed()
        logger.debug("Wrote %s/%s", collection, document_id)

    async def remove(self, collection: str, document_id: str) -> None:
        async with self.lock:
            if self._data.get(collection, {}).pop(document_id, None) is not None:
                self._changed()
                logger.debug("Removed %s/%s", collection, document_id)

    def _changed(self) -> None:
        """Hook run under the lock after every mutation."""


class FileDataSource(JsonDataSource):
    """A ``JsonDataSource`` mirrored to a file on disk.

    The format follows the file suffix: ``.yaml``/``.yml`` use YAML,
    anything else JSON. The whole file is rewritten after each change.

    Parameters
    ----------
    path:
        Location of the data file. It is created on the first write if
        it does not exist.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in _YAML_SUFFIXES

    def _load(self) -> dict[str, dict[str, RawRecord]]:
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8")
        data: Any = yaml.safe_load(text) if self.is_yaml else json.loads(text or "{}")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a mapping of collections at top level")
        return data

    def _changed(self) -> None:
        if self.is_yaml:
            text = yaml.safe_dump(self._data, default_flow_style=False, allow_unicode=True)
        else:
            text = json.dumps(self._data, indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
