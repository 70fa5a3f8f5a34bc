"""The data source boundary.

A data source stores raw records grouped in named collections and keyed
by document id. It is the only place where docbond performs I/O; the
store never assumes indexing beyond a full collection scan.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

RawRecord = dict[str, Any]


class DataSource(ABC):
    @abstractmethod
    async def read(self, collection: str, document_id: str) -> Optional[RawRecord]:
        """Return the record stored under ``document_id``, or ``None``."""

    @abstractmethod
    async def read_all(self, collection: str) -> dict[str, RawRecord]:
        """Return every record of ``collection`` keyed by id, in storage order."""

    @abstractmethod
    async def write(self, collection: str, document_id: str, record: RawRecord) -> None:
        """Insert or fully replace the record stored under ``document_id``."""

    @abstractmethod
    async def remove(self, collection: str, document_id: str) -> None:
        """Delete a record; removing an absent id is a no-op."""
