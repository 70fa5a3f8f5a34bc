"""Store module.

Exports the ``Store`` context, the per-collection ``Model`` and the
``DocumentSerializer`` that moves documents in and out of raw records.
"""
from __future__ import annotations

from docbond.store.model import Model
from docbond.store.serializer import CLASS_NAME_KEY, DocumentSerializer
from docbond.store.store import Store, default_store

__all__ = [
    "Store",
    "default_store",
    "Model",
    "DocumentSerializer",
    "CLASS_NAME_KEY",
]
