"""Registry subsystem for docbond.

``PluginRegistry`` backs both the document class registry owned by each
``Store`` and the data source registry. Third-party data sources register
through ``importlib.metadata`` entry-points under the
"docbond.datasources" group.

Example
-------
Declare a data source in pyproject.toml:

.. code-block:: toml

    [project.entry-points."docbond.datasources"]
    firestore = "my_package.sources:FirestoreDataSource"
"""
from __future__ import annotations

from docbond.plugins.registry import (
    PluginAlreadyRegisteredError,
    PluginNotFoundError,
    PluginRegistry,
)

__all__ = ["PluginRegistry", "PluginNotFoundError", "PluginAlreadyRegisteredError"]
