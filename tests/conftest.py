"""Shared test fixtures for docbond.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Every test gets its own ``Store`` and data
source, so no state leaks between tests.
"""
from __future__ import annotations

import pytest

from docbond import JsonDataSource, Model, Store
from sample_documents import ALL_CLASSES, Person, sample_records


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "docbond"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def raw_data() -> dict[str, dict[str, dict]]:
    return sample_records()


@pytest.fixture()
def data_source(raw_data: dict[str, dict[str, dict]]) -> JsonDataSource:
    return JsonDataSource(raw_data)


@pytest.fixture()
def store(data_source: JsonDataSource) -> Store:
    return Store(data_source, classes=ALL_CLASSES)


@pytest.fixture()
def people(store: Store) -> Model[Person]:
    return store.get_model(Person)
