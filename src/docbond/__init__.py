"""docbond — object-document mapping over pluggable schemaless data sources.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    from dataclasses import dataclass

    from docbond import Document, JsonDataSource, Store, embedded, reference

    @dataclass
    class Team(Document):
        title: str | None = None

    @dataclass
    class User(Document):
        name: dict = embedded()
        age: int | None = None
        team: Team | None = reference(Team)

    store = Store(JsonDataSource(), classes=[User, Team])
    users = store.get_model(User)

    await users.save(User(name={"first": "Ada"}, age=36, team=Team(title="core")))
    adults = await users.find().where("age", ">=", 18).order_by("age").get()

    await store.populate(adults[0].team)
    adults[0].team.title
    'core'
"""
from __future__ import annotations

from docbond.datasource import DataSource, FileDataSource, JsonDataSource
from docbond.document import (
    Document,
    FieldDescriptor,
    FieldKind,
    describe,
    embedded,
    reference,
    reference_list,
)
from docbond.errors import (
    DocbondError,
    NotRegisteredError,
    PopulateErrorCollection,
    ReferenceNotFoundError,
    UnknownClassError,
)
from docbond.query import Predicate, QueryBuilder
from docbond.store import CLASS_NAME_KEY, DocumentSerializer, Model, Store, default_store

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Documents
    "Document",
    "FieldDescriptor",
    "FieldKind",
    "describe",
    "embedded",
    "reference",
    "reference_list",
    # Store
    "Store",
    "default_store",
    "Model",
    "DocumentSerializer",
    "CLASS_NAME_KEY",
    # Queries
    "QueryBuilder",
    "Predicate",
    # Data sources
    "DataSource",
    "JsonDataSource",
    "FileDataSource",
    # Errors
    "DocbondError",
    "NotRegisteredError",
    "UnknownClassError",
    "ReferenceNotFoundError",
    "PopulateErrorCollection",
]
