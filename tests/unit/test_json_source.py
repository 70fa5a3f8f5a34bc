"""Unit tests for docbond.datasource — in-memory and file-backed sources."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from docbond import FileDataSource, JsonDataSource, Store
from docbond.datasource import ENTRY_POINT_GROUP, DataSource, data_sources
from sample_documents import ALL_CLASSES, Asset, Person


class TestJsonDataSource:
    async def test_read_returns_copy(self) -> None:
        source = JsonDataSource({"C": {"1": {"id": "1", "v": [1]}}})
        record = await source.read("C", "1")
        assert record is not None
        record["v"].append(2)
        assert source.raw_data["C"]["1"]["v"] == [1]

    async def test_read_missing_returns_none(self) -> None:
        source = JsonDataSource()
        assert await source.read("C", "1") is None

    async def test_read_all_missing_collection_is_empty(self) -> None:
        assert await JsonDataSource().read_all("C") == {}

    async def test_write_creates_collection(self) -> None:
        source = JsonDataSource()
        await source.write("C", "1", {"id": "1"})
        assert source.raw_data == {"C": {"1": {"id": "1"}}}

    async def test_read_all_keeps_insertion_order(self) -> None:
        source = JsonDataSource()
        for key in ("b", "a", "c"):
            await source.write("C", key, {"id": key})
        assert list(await source.read_all("C")) == ["b", "a", "c"]

    async def test_remove_missing_is_noop(self) -> None:
        source = JsonDataSource({"C": {}})
        await source.remove("C", "ghost")
        await source.remove("Other", "ghost")
        assert source.raw_data == {"C": {}}

    def test_collections_lists_names(self) -> None:
        assert JsonDataSource({"A": {}, "B": {}}).collections() == ["A", "B"]


class TestFileDataSource:
    async def test_json_file_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        store = Store(FileDataSource(path), classes=ALL_CLASSES)
        person = Person(age=30, asset=Asset(year=1990))
        await store.get_model(Person).save(person)

        on_disk = json.loads(path.read_text(encoding="utf-8"))
        assert on_disk["Person"][person.id]["asset"] == person.asset.id
        assert on_disk["Asset"][person.asset.id]["year"] == 1990

        reopened = Store(FileDataSource(path), classes=ALL_CLASSES)
        loaded = await reopened.get_model(Person).find_by_id(person.id)
        assert loaded is not None
        assert loaded.age == 30

    async def test_yaml_file_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "data.yaml"
        source = FileDataSource(path)
        await source.write("C", "1", {"id": "1", "tags": ["x"]})

        assert yaml.safe_load(path.read_text(encoding="utf-8")) == {
            "C": {"1": {"id": "1", "tags": ["x"]}}
        }
        assert await FileDataSource(path).read("C", "1") == {"id": "1", "tags": ["x"]}

    async def test_remove_rewrites_file(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"C": {"1": {"id": "1"}}}), encoding="utf-8")
        source = FileDataSource(path)
        await source.remove("C", "1")
        assert json.loads(path.read_text(encoding="utf-8")) == {"C": {}}

    def test_missing_file_starts_empty(self, tmp_path: Path) -> None:
        source = FileDataSource(tmp_path / "nothing.json")
        assert source.raw_data == {}
        assert not (tmp_path / "nothing.json").exists()

    def test_non_mapping_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            FileDataSource(path)


class TestDataSourceRegistry:
    def test_builtins_registered(self) -> None:
        assert data_sources.get("memory") is JsonDataSource
        assert data_sources.get("file") is FileDataSource

    def test_entry_point_group_name(self) -> None:
        assert ENTRY_POINT_GROUP == "docbond.datasources"

    def test_abstract_interface_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            DataSource()  # type: ignore[abstract]
