"""Client-side predicate evaluation over raw records.

Data sources only offer full collection scans, so every filter and sort
runs here over plain record dicts. Evaluation never raises for data
shape problems: an absent field, an unknown operator or an incomparable
pair of values is simply a non-match.
"""
from __future__ import annotations

import logging
import numbers
import operator
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]

_MISSING = object()


@dataclass(frozen=True)
class Predicate:
    """One ``field operator value`` condition.

    Parameters
    ----------
    field:
        Record key, or a dotted path into nested mappings.
    operator:
        One of ``==``, ``!=``, ``<``, ``<=``, ``>``, ``>=``.
    value:
        The operand compared against the record's value.
    """

    field: str
    operator: str
    value: Any

    def __str__(self) -> str:
        return f"{self.field} {self.operator} {self.value!r}"


Predicates = Union[Sequence[Predicate], Mapping[str, Mapping[str, Any]]]


# ---------------------------------------------------------------------------
# Comparison primitives
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _matches_equal(actual: Any, expected: Any) -> bool:
    """Structural equality; a mapping operand matches any superset mapping.

    Booleans never equal numbers, so ``True`` does not match ``1``.
    """
    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping):
            return False
        return all(
            key in actual and _matches_equal(actual[key], value)
            for key, value in expected.items()
        )
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _not_equal(actual: Any, expected: Any) -> bool:
    return not _matches_equal(actual, expected)


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": _matches_equal,
    "!=": _not_equal,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

OPERATORS: frozenset[str] = frozenset(_OPERATORS)


def field_value(record: Record, path: str) -> Any:
    """Return the value at ``path`` in ``record``, or a private sentinel.

    An exact key wins over a dotted path, so keys containing dots stay
    addressable.
    """
    if path in record:
        return record[path]
    if "." not in path:
        return _MISSING
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def matches(record: Record, predicate: Predicate) -> bool:
    """Return True if ``record`` satisfies ``predicate``."""
    compare = _OPERATORS.get(predicate.operator)
    if compare is None:
        logger.debug("Unknown operator %r in predicate %s", predicate.operator, predicate)
        return False
    actual = field_value(record, predicate.field)
    if actual is _MISSING:
        return False
    try:
        return bool(compare(actual, predicate.value))
    except TypeError:
        return False


def normalize(predicates: Predicates) -> list[Predicate]:
    """Accept predicate objects or the declarative ``{field: {operator, value}}`` form."""
    if isinstance(predicates, Mapping):
        return [
            Predicate(field, operation.get("operator", ""), operation.get("value"))
            for field, operation in predicates.items()
        ]
    return list(predicates)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def evaluate(records: Iterable[Record], predicates: Predicates) -> list[Record]:
    """Return the records satisfying every predicate, in source order.

    An empty predicate set matches every record.
    """
    conditions = normalize(predicates)
    return [r for r in records if all(matches(r, p) for p in conditions)]


def _sort_key(record: Record, field: str) -> tuple[int, str, Any]:
    value = field_value(record, field)
    if value is _MISSING or value is None:
        return (0, "", 0)
    if _is_number(value):
        return (1, "number", value)
    return (1, type(value).__name__, value)


def order_records(
    records: Sequence[Record], field: str, descending: bool = False
) -> list[Record]:
    """Stable sort of ``records`` by ``field``.

    Missing and ``None`` values sort lowest. Numbers (ints and floats, not
    booleans) compare by value; other values of different types are
    grouped by type name. If two values of the same type cannot be
    compared, the input order is kept.
    """
    try:
        return sorted(records, key=lambda r: _sort_key(r, field), reverse=descending)
    except TypeError:
        logger.debug("Values of %r are not orderable; keeping source order", field)
        return list(records)
