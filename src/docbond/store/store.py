"""The store: class registry, active data source and model cache.

A ``Store`` is an explicit context object. Applications usually share the
module-level ``default_store``; test suites build their own instances so
they never leak state into each other.

Example
-------
::

    from docbond import JsonDataSource, Store

    store = Store(JsonDataSource(), classes=[User, Admin, Team])
    users = store.get_model(User)
    await users.save(User(name={"first": "Ada"}))
    admins = await users.find().where("admin", "==", True).get()
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import Optional, TypeVar, Union, overload

from docbond.datasource.base import DataSource
from docbond.document.document import Document
from docbond.document.fields import describe
from docbond.errors import (
    NotRegisteredError,
    PopulateErrorCollection,
    ReferenceNotFoundError,
    UnknownClassError,
)
from docbond.plugins.registry import PluginRegistry
from docbond.store.model import Model
from docbond.store.serializer import DocumentSerializer

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Document)
D = TypeVar("D", bound=type[Document])


class Store:
    """Registry of document classes bound to one active data source.

    Parameters
    ----------
    data_source:
        Optional data source to install immediately.
    classes:
        Document classes to register immediately.
    """

    def __init__(
        self,
        data_source: Optional[DataSource] = None,
        classes: Iterable[type[Document]] = (),
    ) -> None:
        self.classes: PluginRegistry[Document] = PluginRegistry(Document, "documents")
        self.serializer = DocumentSerializer(self.classes)
        self._data_source: Optional[DataSource] = None
        self._models: dict[type[Document], Model] = {}
        self.register(*classes)
        if data_source is not None:
            self.use_data_source(data_source)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def use_data_source(self, data_source: DataSource) -> None:
        """Install ``data_source``; models built for a previous one are dropped."""
        if data_source is self._data_source:
            return
        self._data_source = data_source
        self._models.clear()
        logger.debug("Store now uses data source %s", type(data_source).__name__)

    init = use_data_source

    @property
    def data_source(self) -> DataSource:
        """The active data source.

        Raises
        ------
        NotRegisteredError
            If ``use_data_source`` was never called.
        """
        if self._data_source is None:
            raise NotRegisteredError(
                "data source", "Call Store.use_data_source() before using models."
            )
        return self._data_source

    def register(self, *classes: type[Document]) -> None:
        """Register document classes; registering a class twice is a no-op."""
        for cls in classes:
            self.register_class(cls)

    def register_class(self, cls: D) -> D:
        """Register one document class and return it, usable as a decorator.

        Raises
        ------
        TypeError
            If ``cls`` is not a dataclass subclass of ``Document``.
        PluginAlreadyRegisteredError
            If a different class with the same name is already registered.
        """
        if self.classes.holds(cls):
            return cls
        describe(cls)
        self.classes.register_class(cls.__name__, cls)
        return cls

    def reset(self) -> None:
        """Forget the data source, the cached models and every registered class."""
        self._data_source = None
        self._models.clear()
        self.classes.clear()

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    def base_class(self, cls: type[T]) -> type[T]:
        """Return the registered class owning ``cls``'s collection.

        That is the outermost registered ancestor of ``cls`` (possibly
        ``cls`` itself).

        Raises
        ------
        UnknownClassError
            If ``cls`` is not registered.
        """
        if not self.classes.holds(cls):
            raise UnknownClassError(cls.__name__)
        for ancestor in reversed(cls.__mro__):
            if ancestor is not Document and self.classes.holds(ancestor):
                return ancestor
        return cls

    @overload
    def get_model(self, target: type[T]) -> Model[T]: ...

    @overload
    def get_model(self, target: T) -> Model[T]: ...

    @overload
    def get_model(self, target: str) -> Model[Document]: ...

    def get_model(self, target: Union[type[T], T, str]) -> Model:
        """Return the model of the collection ``target`` belongs to.

        ``target`` may be a document class, a document instance or a
        registered class name. Models are created on first use and cached
        until the data source changes.

        Raises
        ------
        NotRegisteredError
            If no data source is installed.
        UnknownClassError
            If the class is not registered.
        """
        if isinstance(target, str):
            if target not in self.classes:
                raise UnknownClassError(target)
            cls = self.classes.get(target)
        elif isinstance(target, Document):
            cls = type(target)
        else:
            cls = target
        base = self.base_class(cls)
        model = self._models.get(base)
        if model is None:
            model = Model(self, base)
            self._models[base] = model
        return model

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    async def populate(
        self, references: Union[Document, Sequence[Optional[Document]], None]
    ) -> None:
        """Load reference placeholders in place.

        A list is populated element by element, concurrently; every element
        is attempted before failures are raised together.

        A placeholder keeps its declared class. When the stored record is of
        a derived class, only the fields the placeholder's class declares are
        filled in; load the document through ``Model.find_by_id`` to get the
        derived instance.

        Raises
        ------
        ReferenceNotFoundError
            If a single reference points at a missing document.
        PopulateErrorCollection
            If any element of a list failed to load.
        """
        if references is None:
            return
        if isinstance(references, Document):
            await self._populate_one(references)
            return
        results = await asyncio.gather(
            *(self._populate_one(ref) for ref in references if ref is not None),
            return_exceptions=True,
        )
        failures = PopulateErrorCollection()
        for result in results:
            if isinstance(result, Exception):
                failures.add(result)
            elif isinstance(result, BaseException):
                raise result
        if failures.has_errors:
            raise failures

    async def _populate_one(self, reference: Document) -> None:
        model = self.get_model(reference)
        record = await model.data_source.read(model.collection_name, reference.id)
        if record is None:
            raise ReferenceNotFoundError(model.collection_name, reference.id)
        loaded = model.hydrate(record)
        for descriptor in describe(type(reference)):
            setattr(reference, descriptor.name, getattr(loaded, descriptor.name))
        reference._mark_loaded(True)
        logger.debug("Populated %s %s", type(reference).__name__, reference.id)


default_store = Store()
