#!/usr/bin/env python3
"""Example: Quickstart — docbond

Minimal working example: declare two document classes, save a document
with a reference, query the collection and populate the reference.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install docbond
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import docbond
from docbond import Document, JsonDataSource, Store, embedded, reference


@dataclass
class Team(Document):
    title: Optional[str] = None


@dataclass
class User(Document):
    name: dict = embedded()
    age: Optional[int] = None
    team: Optional[Team] = reference(Team)


async def main() -> None:
    print(f"docbond version: {docbond.__version__}")

    # Step 1: Bind a store to an in-memory data source
    source = JsonDataSource()
    store = Store(source, classes=[User, Team])
    users = store.get_model(User)

    # Step 2: Save documents; the referenced team is stored in its own collection
    core = Team(title="core")
    await users.save(User(name={"first": "Ada"}, age=36, team=core))
    await users.save(User(name={"first": "Linus"}, age=54, team=core))
    await users.save(User(name={"first": "Kid"}, age=9))
    print(f"Collections: {source.collections()}")

    # Step 3: Query with filters, ordering and a limit
    adults = await users.find().where("age", ">=", 18).order_by("age", "desc").limit(5).get()
    for user in adults:
        print(f"  {user.name['first']:<8} age={user.age}")

    # Step 4: References come back as placeholders until populated
    team = adults[0].team
    print(f"Loaded before populate: {team.was_loaded}")
    await store.populate(team)
    print(f"Loaded after populate:  {team.was_loaded} (title={team.title!r})")


if __name__ == "__main__":
    asyncio.run(main())
