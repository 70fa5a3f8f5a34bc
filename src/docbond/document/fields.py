"""Field descriptors for persisted document classes.

Every dataclass field of a ``Document`` subclass is described by a
``FieldDescriptor`` carrying its kind. The kind decides how the serializer
treats the value: ``SCALAR`` and ``OBJECT`` values are copied, while
``REFERENCE`` and ``REFERENCE_LIST`` values are reduced to bare ids.

Kinds are declared with the helpers below, used as dataclass defaults::

    @dataclass
    class User(Document):
        age: int | None = None
        name: dict = embedded()
        team: Team | None = reference("Team")
        projects: list[Project] = reference_list(Project)
"""
from __future__ import annotations

import dataclasses
import functools
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

_KIND_KEY = "docbond.kind"
_TARGET_KEY = "docbond.target"


class FieldKind(Enum):
    """How a field is stored in a raw record."""

    SCALAR = auto()
    OBJECT = auto()
    REFERENCE = auto()
    REFERENCE_LIST = auto()


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Static description of one persisted field.

    Parameters
    ----------
    name:
        Attribute name, also the record key.
    kind:
        Storage kind of the field.
    target:
        For references, the referenced document class or its registered
        name. ``None`` for other kinds.
    """

    name: str
    kind: FieldKind
    target: type | str | None = None

    @property
    def is_reference(self) -> bool:
        return self.kind in (FieldKind.REFERENCE, FieldKind.REFERENCE_LIST)


def embedded(*, default_factory: Callable[[], Any] = dict) -> Any:
    """Declare an object-valued field (a nested mapping by default)."""
    return dataclasses.field(
        default_factory=default_factory,
        metadata={_KIND_KEY: FieldKind.OBJECT},
    )


def reference(target: type | str) -> Any:
    """Declare a single reference to another document, ``None`` when unset."""
    return dataclasses.field(
        default=None,
        metadata={_KIND_KEY: FieldKind.REFERENCE, _TARGET_KEY: target},
    )


def reference_list(target: type | str) -> Any:
    """Declare an ordered list of references, empty by default."""
    return dataclasses.field(
        default_factory=list,
        metadata={_KIND_KEY: FieldKind.REFERENCE_LIST, _TARGET_KEY: target},
    )


@functools.lru_cache(maxsize=None)
def describe(cls: type) -> tuple[FieldDescriptor, ...]:
    """Return the descriptor table of a document dataclass.

    Only fields accepted by the generated ``__init__`` are persisted.

    Raises
    ------
    TypeError
        If ``cls`` is not a dataclass.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass; decorate it with @dataclass.")
    return tuple(
        FieldDescriptor(
            name=f.name,
            kind=f.metadata.get(_KIND_KEY, FieldKind.SCALAR),
            target=f.metadata.get(_TARGET_KEY),
        )
        for f in dataclasses.fields(cls)
        if f.init
    )
