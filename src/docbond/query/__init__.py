"""Query module.

``engine`` evaluates predicates and sorts raw records; ``builder`` wraps
it in the fluent ``QueryBuilder`` returned by ``Model.find``.
"""
from __future__ import annotations

from docbond.query.builder import QueryBuilder, SortKey
from docbond.query.engine import OPERATORS, Predicate, evaluate, order_records

__all__ = [
    "QueryBuilder",
    "SortKey",
    "Predicate",
    "OPERATORS",
    "evaluate",
    "order_records",
]
