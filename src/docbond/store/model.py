"""Per-collection CRUD facade.

A ``Model`` is bound to one registered base class. Documents of that
class and of every registered subclass share its collection and are told
apart by their ``__className`` tag.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from docbond.datasource.base import DataSource, RawRecord
from docbond.document.document import Document, new_id
from docbond.document.fields import FieldKind, describe
from docbond.errors import UnknownClassError
from docbond.query.builder import QueryBuilder

if TYPE_CHECKING:
    from docbond.store.store import Store

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Document)


class Model(Generic[T]):
    """CRUD entry points for one base collection.

    Parameters
    ----------
    store:
        The owning store; supplies the data source, the serializer and the
        models of referenced classes.
    document_class:
        The registered base class owning the collection.
    """

    def __init__(self, store: "Store", document_class: type[T]) -> None:
        self._store = store
        self._document_class = document_class
        self._data_source = store.data_source

    @property
    def collection_name(self) -> str:
        return self._document_class.__name__

    @property
    def document_class(self) -> type[T]:
        return self._document_class

    @property
    def data_source(self) -> DataSource:
        return self._data_source

    def __repr__(self) -> str:
        return f"Model(collection={self.collection_name!r})"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def hydrate(self, record: Mapping[str, Any]) -> T:
        """Turn a raw record of this collection into a document."""
        return self._store.serializer.from_record(record, self._document_class)

    async def records(self) -> list[RawRecord]:
        """Return every raw record of the collection in storage order."""
        return list((await self._data_source.read_all(self.collection_name)).values())

    async def find_by_id(self, document_id: str) -> Optional[T]:
        """Return the document stored under ``document_id``, or ``None``."""
        record = await self._data_source.read(self.collection_name, document_id)
        if record is None:
            return None
        return self.hydrate(record)

    def find(self) -> QueryBuilder[T]:
        """Start a new query with no conditions."""
        return QueryBuilder(self)

    async def query(self, query_object: Mapping[str, Any]) -> list[T]:
        """Run a declarative query.

        ``query_object`` has the form::

            {"operations": {"age": {"operator": "<", "value": 50}}}

        and is equivalent to chaining one ``where`` call per field.
        """
        builder = self.find()
        for field, operation in (query_object.get("operations") or {}).items():
            builder = builder.where(field, operation.get("operator", ""), operation.get("value"))
        return await builder.get()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def save(self, instance: T) -> None:
        """Insert or replace ``instance``, cascading unsaved references first.

        Raises
        ------
        TypeError
            If ``instance`` is not an instance of this model's class.
        UnknownClassError
            If ``type(instance)`` is a subclass that was never registered.
        """
        await self._save(instance, set())

    async def _save(self, instance: T, visiting: set[tuple[str, str]]) -> None:
        if not isinstance(instance, self._document_class):
            raise TypeError(
                f"Cannot save {type(instance).__name__} in collection "
                f"{self.collection_name!r}"
            )
        if not self._store.classes.holds(type(instance)):
            raise UnknownClassError(type(instance).__name__, self.collection_name)
        if not instance.id:
            instance.id = new_id()
        visiting.add((self.collection_name, instance.id))

        for ref in self._references(instance):
            await self._cascade(ref, visiting)

        record = self._store.serializer.to_record(instance)
        await self._data_source.write(self.collection_name, instance.id, record)
        logger.debug("Saved %s %s in %r", type(instance).__name__, instance.id, self.collection_name)

    async def _cascade(self, ref: Document, visiting: set[tuple[str, str]]) -> None:
        """Insert a referenced document unless it is already stored.

        Placeholders are never written and stored documents are never
        overwritten; saving them is the caller's decision.
        """
        if not ref.was_loaded:
            return
        model = self._store.get_model(ref)
        if ref.id and (model.collection_name, ref.id) in visiting:
            return
        if ref.id and await model.data_source.read(model.collection_name, ref.id) is not None:
            return
        await model._save(ref, visiting)

    @staticmethod
    def _references(instance: Document) -> list[Document]:
        refs: list[Document] = []
        for descriptor in describe(type(instance)):
            value = getattr(instance, descriptor.name)
            if descriptor.kind is FieldKind.REFERENCE and value is not None:
                refs.append(value)
            elif descriptor.kind is FieldKind.REFERENCE_LIST:
                refs.extend(ref for ref in value or () if ref is not None)
        return refs

    async def delete(self, document_id: str) -> None:
        """Remove the document stored under ``document_id`` if there is one."""
        await self._data_source.remove(self.collection_name, document_id)
