"""Error types raised by the docbond store.

Absence is not an error: ``Model.find_by_id`` returns ``None`` and queries
return empty lists. The types below cover misconfiguration, unresolvable
class tags and broken references. Failures raised by a data source
propagate unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass, field


class DocbondError(Exception):
    """Base class for every error raised by docbond itself."""


class NotRegisteredError(DocbondError, RuntimeError):
    """Raised when an operation needs a service that was never installed.

    Parameters
    ----------
    service:
        Human-readable name of the missing service, e.g. ``"data source"``.
    """

    def __init__(self, service: str, hint: str = "") -> None:
        self.service = service
        message = f"No {service} registered."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class UnknownClassError(DocbondError, LookupError):
    """Raised when a class name does not resolve to a registered document class.

    Parameters
    ----------
    class_name:
        The offending class name (a stored ``__className`` tag or a name
        passed to ``Store.get_model``).
    base_class_name:
        The collection owner the class was expected to belong to, if any.
    """

    def __init__(self, class_name: str | None, base_class_name: str | None = None) -> None:
        self.class_name = class_name
        self.base_class_name = base_class_name
        if class_name is None:
            message = "Record carries no class name tag."
        elif base_class_name is None:
            message = f"Class {class_name!r} is not registered."
        else:
            message = (
                f"Class {class_name!r} is not registered under "
                f"collection {base_class_name!r}."
            )
        super().__init__(message)


class ReferenceNotFoundError(DocbondError, LookupError):
    """Raised when populating a reference whose target document is gone."""

    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(
            f"Referenced document {document_id!r} does not exist "
            f"in collection {collection!r}."
        )


@dataclass
class PopulateErrorCollection(DocbondError):
    """Aggregates the failures of one ``Store.populate`` call over a list.

    Every element is attempted; the collection is raised once all of them
    have settled, so successfully loaded elements stay loaded.

    Parameters
    ----------
    errors:
        Failures in list order.
    """

    errors: list[Exception] = field(default_factory=list)

    def add(self, error: Exception) -> None:
        """Append a new error to the collection."""
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        """Return True if any errors were recorded."""
        return bool(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return "PopulateErrorCollection (no errors)"
        lines = [f"PopulateErrorCollection ({len(self.errors)} error(s)):"]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)
