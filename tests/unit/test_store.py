"""Unit tests for docbond.store.store — registration, data source
lifecycle, model resolution and reference population.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from docbond import (
    Document,
    JsonDataSource,
    NotRegisteredError,
    PopulateErrorCollection,
    ReferenceNotFoundError,
    Store,
    UnknownClassError,
)
from docbond.plugins.registry import PluginAlreadyRegisteredError
from sample_documents import ALL_CLASSES, Asset, Employee, Person, Unrelated


# ===========================================================================
# Registration
# ===========================================================================


class TestRegistration:
    def test_classes_registered_by_name(self, store: Store) -> None:
        assert store.classes.list_plugins() == ["Asset", "Employee", "Person"]

    def test_registering_twice_is_noop(self, store: Store) -> None:
        store.register(Person)
        assert len(store.classes) == 3

    def test_register_class_works_as_decorator(self) -> None:
        store = Store()

        @store.register_class
        @dataclass
        class Gadget(Document):
            weight: int = 0

        assert store.classes.get("Gadget") is Gadget

    def test_register_non_dataclass_raises_type_error(self) -> None:
        store = Store()
        with pytest.raises(TypeError):
            store.register_class(int)  # type: ignore[arg-type]

    def test_same_name_different_class_raises(self, store: Store) -> None:
        @dataclass
        class Person(Document):  # noqa: F811
            pass

        with pytest.raises(PluginAlreadyRegisteredError):
            store.register(Person)

    def test_base_class_of_derived_is_parent(self, store: Store) -> None:
        assert store.base_class(Employee) is Person

    def test_base_class_of_unregistered_raises(self, store: Store) -> None:
        with pytest.raises(UnknownClassError):
            store.base_class(Unrelated)

    def test_registration_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        store = Store()
        with caplog.at_level(logging.DEBUG, logger="docbond.plugins.registry"):
            store.register(Asset)
        assert "Asset" in caplog.text


# ===========================================================================
# Data source lifecycle
# ===========================================================================


class TestDataSource:
    def test_model_before_data_source_raises_not_registered(self) -> None:
        store = Store(classes=ALL_CLASSES)
        with pytest.raises(NotRegisteredError):
            store.get_model(Person)

    def test_data_source_property_raises_not_registered(self) -> None:
        with pytest.raises(NotRegisteredError) as excinfo:
            Store().data_source
        assert excinfo.value.service == "data source"

    def test_not_registered_is_runtime_error(self) -> None:
        with pytest.raises(RuntimeError):
            Store().data_source

    def test_replacing_data_source_recreates_models(self, store: Store) -> None:
        first = store.get_model(Person)
        replacement = JsonDataSource()
        store.use_data_source(replacement)

        second = store.get_model(Person)
        assert second is not first
        assert second.data_source is replacement

    def test_same_data_source_keeps_models(self, store: Store, data_source: JsonDataSource) -> None:
        first = store.get_model(Person)
        store.use_data_source(data_source)
        assert store.get_model(Person) is first

    def test_init_alias_installs_data_source(self) -> None:
        store = Store(classes=ALL_CLASSES)
        source = JsonDataSource()
        store.init(source)
        assert store.data_source is source

    def test_reset_forgets_everything(self, store: Store) -> None:
        store.reset()
        assert len(store.classes) == 0
        with pytest.raises(NotRegisteredError):
            store.data_source

    def test_independent_stores_do_not_share_state(self) -> None:
        first = Store(JsonDataSource(), classes=[Person])
        second = Store(JsonDataSource(), classes=[Asset])
        assert "Asset" not in first.classes
        assert "Person" not in second.classes


# ===========================================================================
# get_model
# ===========================================================================


class TestGetModel:
    def test_unknown_name_raises_unknown_class(self, store: Store) -> None:
        with pytest.raises(UnknownClassError):
            store.get_model("Ghost")

    def test_unregistered_instance_raises_unknown_class(self, store: Store) -> None:
        with pytest.raises(UnknownClassError):
            store.get_model(Unrelated())

    def test_instance_of_derived_class_resolves_parent(self, store: Store) -> None:
        assert store.get_model(Employee()).collection_name == "Person"

    def test_referenced_class_has_own_collection(self, store: Store) -> None:
        assert store.get_model(Asset).collection_name == "Asset"


# ===========================================================================
# populate
# ===========================================================================


@pytest.fixture()
async def stored_assets(store: Store) -> list[Asset]:
    assets = [Asset(year=2001, label="a"), Asset(year=2002, label="b")]
    model = store.get_model(Asset)
    for asset in assets:
        await model.save(asset)
    return assets


class TestPopulate:
    async def test_populate_fills_placeholder(
        self, store: Store, stored_assets: list[Asset]
    ) -> None:
        ref = Asset.placeholder(stored_assets[0].id)
        assert ref.was_loaded is False

        await store.populate(ref)
        assert ref.was_loaded is True
        assert ref.year == 2001
        assert ref.label == "a"

    async def test_populate_is_idempotent(self, store: Store, stored_assets: list[Asset]) -> None:
        ref = Asset.placeholder(stored_assets[1].id)
        await store.populate(ref)
        await store.populate(ref)
        assert ref.year == 2002
        assert ref.was_loaded is True

    async def test_populate_refreshes_with_current_data(
        self, store: Store, stored_assets: list[Asset]
    ) -> None:
        ref = Asset.placeholder(stored_assets[0].id)
        await store.populate(ref)

        stored_assets[0].year = 2010
        await store.get_model(Asset).save(stored_assets[0])
        await store.populate(ref)
        assert ref.year == 2010

    async def test_populate_missing_reference_raises(self, store: Store) -> None:
        with pytest.raises(ReferenceNotFoundError) as excinfo:
            await store.populate(Asset.placeholder("ghost"))
        assert excinfo.value.document_id == "ghost"
        assert excinfo.value.collection == "Asset"

    async def test_populate_list_loads_all(self, store: Store, stored_assets: list[Asset]) -> None:
        refs = [Asset.placeholder(a.id) for a in stored_assets]
        await store.populate(refs)
        assert [r.year for r in refs] == [2001, 2002]

    async def test_populate_list_partial_failure_loads_the_rest(
        self, store: Store, stored_assets: list[Asset]
    ) -> None:
        refs = [
            Asset.placeholder(stored_assets[0].id),
            Asset.placeholder("ghost"),
            Asset.placeholder(stored_assets[1].id),
        ]
        with pytest.raises(PopulateErrorCollection) as excinfo:
            await store.populate(refs)

        assert len(excinfo.value.errors) == 1
        assert isinstance(excinfo.value.errors[0], ReferenceNotFoundError)
        assert refs[0].year == 2001
        assert refs[2].year == 2002
        assert refs[1].was_loaded is False

    async def test_populate_none_and_empty_list_are_noops(self, store: Store) -> None:
        await store.populate(None)
        await store.populate([])

    async def test_populate_derived_document(self, store: Store) -> None:
        ref = Person.placeholder("user4")
        await store.populate(ref)
        assert ref.age == 45
        assert type(ref) is Person
        assert not hasattr(ref, "salary")

    async def test_populate_before_data_source_raises(self) -> None:
        store = Store(classes=ALL_CLASSES)
        with pytest.raises(NotRegisteredError):
            await store.populate(Asset.placeholder("x"))
