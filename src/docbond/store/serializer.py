"""Document serialization and hydration.

Converts between ``Document`` instances and raw records, the plain
dict structure a data source stores. Every record carries a
``"__className"`` discriminator naming the concrete class, so that
derived classes sharing a parent's collection hydrate back to the right
type.

Usage
-----
::

    from docbond.store.serializer import DocumentSerializer

    serializer = DocumentSerializer(store.classes)
    record = serializer.to_record(user)
    same_user = serializer.from_record(record, User)
"""
from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from docbond.document.document import Document
from docbond.document.fields import FieldDescriptor, FieldKind, describe
from docbond.errors import UnknownClassError
from docbond.plugins.registry import PluginNotFoundError, PluginRegistry

logger = logging.getLogger(__name__)

CLASS_NAME_KEY = "__className"

T = TypeVar("T", bound=Document)


class DocumentSerializer:
    """Converts between ``Document`` objects and raw records.

    Reference fields are flattened to bare ids on the way out and come
    back as unloaded placeholders. Nothing here touches a data source.

    Parameters
    ----------
    classes:
        Registry mapping class-name tags to document classes.
    """

    def __init__(self, classes: PluginRegistry[Document]) -> None:
        self._classes = classes

    # ------------------------------------------------------------------
    # Serialization (instance → record)
    # ------------------------------------------------------------------

    def to_record(self, instance: Document) -> dict[str, Any]:
        """Serialize ``instance`` to a JSON-compatible record."""
        record: dict[str, Any] = {}
        for descriptor in describe(type(instance)):
            value = getattr(instance, descriptor.name)
            if descriptor.kind is FieldKind.REFERENCE:
                record[descriptor.name] = None if value is None else value.id
            elif descriptor.kind is FieldKind.REFERENCE_LIST:
                record[descriptor.name] = [ref.id for ref in value or () if ref is not None]
            else:
                record[descriptor.name] = copy.deepcopy(value)
        record[CLASS_NAME_KEY] = type(instance).__name__
        return record

    def to_json(self, instance: Document, indent: int | None = None) -> str:
        """Serialize ``instance`` to a JSON string."""
        return json.dumps(self.to_record(instance), indent=indent)

    # ------------------------------------------------------------------
    # Hydration (record → instance)
    # ------------------------------------------------------------------

    def resolve_class(self, class_name: str | None, base_class: type[T]) -> type[T]:
        """Return the registered class tagged ``class_name``.

        Raises
        ------
        UnknownClassError
            If the tag is missing, unregistered, or names a class outside
            ``base_class``'s hierarchy.
        """
        if not class_name:
            raise UnknownClassError(None, base_class.__name__)
        try:
            cls = self._classes.get(class_name)
        except PluginNotFoundError:
            raise UnknownClassError(class_name, base_class.__name__) from None
        if not issubclass(cls, base_class):
            raise UnknownClassError(class_name, base_class.__name__)
        return cls

    def from_record(self, record: Mapping[str, Any], base_class: type[T]) -> T:
        """Hydrate ``record`` into an instance of ``base_class`` or a subclass.

        Raises
        ------
        UnknownClassError
            If the record's class tag cannot be resolved.
        """
        cls = self.resolve_class(record.get(CLASS_NAME_KEY), base_class)
        descriptors = describe(cls)
        known = {d.name for d in descriptors}
        extra = [key for key in record if key not in known and key != CLASS_NAME_KEY]
        if extra:
            logger.debug("Ignoring undeclared fields %s on %s", extra, cls.__name__)

        values: dict[str, Any] = {}
        for descriptor in descriptors:
            if descriptor.name not in record:
                continue
            raw = record[descriptor.name]
            if descriptor.kind is FieldKind.REFERENCE:
                values[descriptor.name] = self._placeholder(descriptor, raw)
            elif descriptor.kind is FieldKind.REFERENCE_LIST:
                values[descriptor.name] = [
                    self._placeholder(descriptor, ref_id) for ref_id in raw or ()
                ]
            else:
                values[descriptor.name] = copy.deepcopy(raw)
        return cls(**values)

    def from_json(self, text: str, base_class: type[T]) -> T:
        """Hydrate a document from a JSON string."""
        return self.from_record(json.loads(text), base_class)

    def _placeholder(self, descriptor: FieldDescriptor, ref_id: Any) -> Document | None:
        if ref_id is None:
            return None
        target = descriptor.target
        if isinstance(target, str):
            try:
                target = self._classes.get(target)
            except PluginNotFoundError:
                raise UnknownClassError(target) from None
        return target.placeholder(ref_id)
