"""Document declaration module.

Exports the ``Document`` base class and the field helpers that declare
how each field is persisted.
"""
from __future__ import annotations

from docbond.document.document import Document, new_id
from docbond.document.fields import (
    FieldDescriptor,
    FieldKind,
    describe,
    embedded,
    reference,
    reference_list,
)

__all__ = [
    "Document",
    "new_id",
    "FieldDescriptor",
    "FieldKind",
    "describe",
    "embedded",
    "reference",
    "reference_list",
]
