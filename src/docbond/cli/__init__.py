"""Command-line inspection of docbond data files.

``docbond.cli.main`` defines the ``docbond`` Click group. The commands
read raw records through ``FileDataSource`` and filter them with the
query engine, so no document classes have to be importable.
"""
from __future__ import annotations
