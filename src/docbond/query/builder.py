"""Fluent query builder bound to a ``Model``.

Builders are immutable: every chained call returns a new builder, so a
partially built query can be reused as the base of several others
without aliasing::

    adults = users.find().where("age", ">=", 18)
    admins = await adults.where("admin", "==", True).get()
    oldest = await adults.order_by("age", "desc").limit(3).get()
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

from docbond.document.document import Document
from docbond.query.engine import Predicate, evaluate, order_records

if TYPE_CHECKING:
    from docbond.store.model import Model

T = TypeVar("T", bound=Document)

Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class QueryBuilder(Generic[T]):
    """Deferred query over one model's collection.

    Parameters
    ----------
    model:
        The model whose collection is scanned.
    predicates:
        Conditions accumulated by ``where``; all must hold.
    sort:
        Sort key set by ``order_by``.
    max_results:
        Cap set by ``limit``.
    """

    model: "Model[T]"
    predicates: tuple[Predicate, ...] = ()
    sort: SortKey | None = None
    max_results: int | None = None

    def where(self, field: str, operator: str, value: Any) -> "QueryBuilder[T]":
        """Add a condition. Conditions on the same field are AND-ed."""
        return replace(self, predicates=self.predicates + (Predicate(field, operator, value),))

    def order_by(self, field: str, direction: Direction = "asc") -> "QueryBuilder[T]":
        """Sort by ``field``; a later call replaces an earlier one.

        Raises
        ------
        ValueError
            If ``direction`` is neither ``"asc"`` nor ``"desc"``.
        """
        if direction not in ("asc", "desc"):
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got {direction!r}")
        return replace(self, sort=SortKey(field, direction == "desc"))

    def limit(self, count: int) -> "QueryBuilder[T]":
        """Return at most ``count`` documents.

        Raises
        ------
        ValueError
            If ``count`` is negative.
        """
        if count < 0:
            raise ValueError(f"Limit must be non-negative, got {count}")
        return replace(self, max_results=count)

    async def get(self) -> list[T]:
        """Run the query: filter, sort, limit, then hydrate."""
        records = evaluate(await self.model.records(), self.predicates)
        if self.sort is not None:
            records = order_records(records, self.sort.field, self.sort.descending)
        if self.max_results is not None:
            records = records[: self.max_results]
        return [self.model.hydrate(record) for record in records]

    def __repr__(self) -> str:
        parts = [f"collection={self.model.collection_name!r}"]
        if self.predicates:
            parts.append("where=[" + ", ".join(str(p) for p in self.predicates) + "]")
        if self.sort is not None:
            parts.append(f"order_by={self.sort.field!r} {'desc' if self.sort.descending else 'asc'}")
        if self.max_results is not None:
            parts.append(f"limit={self.max_results}")
        return f"QueryBuilder({', '.join(parts)})"
