"""The ``Document`` base class.

A document is a dataclass instance identified by a string ``id``. Every
subclass must be decorated with ``@dataclass`` and give all of its fields
a default, because the base ``id`` field has one.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TypeVar

D = TypeVar("D", bound="Document")


def new_id() -> str:
    """Return a fresh, collision-resistant document id."""
    return uuid.uuid4().hex


@dataclass
class Document:
    """Base class of every persisted entity.

    Parameters
    ----------
    id:
        Stable identifier, unique within the document's base collection.
        Generated when not supplied.
    """

    id: str = field(default_factory=new_id)

    @property
    def was_loaded(self) -> bool:
        """False while this instance is an unpopulated reference placeholder."""
        return self.__dict__.get("_was_loaded", True)

    def _mark_loaded(self, loaded: bool = True) -> None:
        self.__dict__["_was_loaded"] = loaded

    @classmethod
    def placeholder(cls: type[D], document_id: str) -> D:
        """Build a reference placeholder holding only ``document_id``.

        Every other field keeps its default until the placeholder is
        populated through ``Store.populate``.
        """
        instance = cls(id=document_id)
        instance._mark_loaded(False)
        return instance
