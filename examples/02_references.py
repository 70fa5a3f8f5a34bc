#!/usr/bin/env python3
"""Example: References, inheritance and file storage

Demonstrates reference lists, a derived class sharing its parent's
collection, populating several references at once and persisting to a
YAML file that the ``docbond`` CLI can inspect.

Usage:
    python examples/02_references.py
    docbond query people.yaml Person --where admin == true

Requirements:
    pip install docbond
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from docbond import (
    Document,
    FileDataSource,
    PopulateErrorCollection,
    Store,
    embedded,
    reference_list,
)


@dataclass
class Project(Document):
    code: Optional[str] = None


@dataclass
class Person(Document):
    name: dict = embedded()
    admin: bool = False
    skills: list[str] = field(default_factory=list)
    projects: list[Project] = reference_list(Project)


@dataclass
class Engineer(Person):
    level: int = 1


async def main() -> None:
    store = Store(FileDataSource("people.yaml"), classes=[Person, Engineer, Project])
    people = store.get_model(Person)
    print(f"Engineers are stored in: {store.get_model(Engineer).collection_name}")

    # Step 1: Saving cascades to the referenced projects
    apollo, gemini = Project(code="APL"), Project(code="GMN")
    await people.save(Person(name={"first": "Grace"}, admin=True, projects=[apollo]))
    await people.save(Engineer(name={"first": "Margaret"}, level=3, projects=[apollo, gemini]))

    # Step 2: Queries over the base collection return the stored subclass
    for person in await people.find().order_by("name.first").get():
        print(f"  {type(person).__name__:<9} {person.name['first']}")

    # Step 3: Populate a whole reference list; failures are collected
    engineer = (await people.find().where("level", ">", 1).get())[0]
    try:
        await store.populate(engineer.projects)
    except PopulateErrorCollection as errors:
        print(errors)
    print(f"Projects: {[p.code for p in engineer.projects]}")


if __name__ == "__main__":
    asyncio.run(main())
