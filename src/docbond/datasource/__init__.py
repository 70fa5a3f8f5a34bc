"""Data source implementations and their registry.

``data_sources`` maps short names to ``DataSource`` classes. The builtins
are registered here; installed packages add more through the
"docbond.datasources" entry-point group, loaded on demand with
``data_sources.load_entrypoints(ENTRY_POINT_GROUP)``.
"""
from __future__ import annotations

from docbond.datasource.base import DataSource, RawRecord
from docbond.datasource.json_source import FileDataSource, JsonDataSource
from docbond.plugins.registry import PluginRegistry

ENTRY_POINT_GROUP = "docbond.datasources"

data_sources: PluginRegistry[DataSource] = PluginRegistry(DataSource, "data sources")
data_sources.register_class("memory", JsonDataSource)
data_sources.register_class("file", FileDataSource)

__all__ = [
    "DataSource",
    "RawRecord",
    "JsonDataSource",
    "FileDataSource",
    "data_sources",
    "ENTRY_POINT_GROUP",
]
