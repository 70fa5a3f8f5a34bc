"""Integration test: documents saved through a file-backed store are
visible to the CLI, and edits made on disk are visible to a fresh store.
"""
from __future__ import annotations

import asyncio
import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from docbond import FileDataSource, Store
from docbond.cli.main import cli
from sample_documents import ALL_CLASSES, Asset, Employee, Person


def test_saved_documents_are_queryable_from_cli(tmp_path: Path) -> None:
    path = tmp_path / "people.yaml"
    store = Store(FileDataSource(path), classes=ALL_CLASSES)
    people = store.get_model(Person)
    car = Asset(year=2019, label="car")

    async def save_people() -> None:
        await people.save(Person(id="p1", age=30, asset=car))
        await people.save(Employee(id="e1", age=41, admin=True, salary=100, assets=[car]))

    # The CLI starts its own event loop.
    asyncio.run(save_people())

    result = CliRunner().invoke(
        cli,
        ["query", str(path), "Person", "--where", "admin", "==", "true", "--format", "json"],
    )
    assert result.exit_code == 0, result.output
    records = json.loads(result.output)
    assert [r["id"] for r in records] == ["e1"]
    assert records[0]["__className"] == "Employee"
    assert records[0]["assets"] == [car.id]

    on_disk = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert list(on_disk["Asset"]) == [car.id]


async def test_fresh_store_reads_file_written_elsewhere(tmp_path: Path) -> None:
    path = tmp_path / "people.json"
    path.write_text(
        json.dumps(
            {
                "Person": {"p1": {"id": "p1", "__className": "Person", "asset": "a1"}},
                "Asset": {"a1": {"id": "a1", "__className": "Asset", "year": 1999}},
            }
        ),
        encoding="utf-8",
    )

    store = Store(FileDataSource(path), classes=ALL_CLASSES)
    person = await store.get_model(Person).find_by_id("p1")
    assert person is not None
    assert person.asset is not None and not person.asset.was_loaded

    await store.populate(person.asset)
    assert person.asset.year == 1999
