"""Name -> class registry used across docbond.

Two registries are built on it: the per-store document class registry,
which maps a stored ``__className`` tag to its constructor, and the
module-level data source registry. Third-party data sources register by
declaring entry-points in their own ``pyproject.toml`` under the
"docbond.datasources" group.

Example
-------
Create a registry bound to a base class::

    from docbond.plugins.registry import PluginRegistry
    from docbond.datasource.base import DataSource

    sources: PluginRegistry[DataSource] = PluginRegistry(DataSource, "data sources")

Register an implementation with the decorator::

    @sources.register("sqlite")
    class SqliteDataSource(DataSource):
        ...

Load installed implementations via entry-points::

    sources.load_entrypoints("docbond.datasources")

Retrieve a class by name::

    cls = sources.get("sqlite")
"""
from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PluginNotFoundError(KeyError):
    """Raised when a requested name is not in the registry."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.plugin_name = name
        self.registry_name = registry_name
        super().__init__(
            f"{name!r} is not registered in the {registry_name!r} registry. "
            "Register the class first or check that the package declaring "
            "it is installed."
        )


class PluginAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name that already exists."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.plugin_name = name
        self.registry_name = registry_name
        super().__init__(
            f"{name!r} is already registered in the {registry_name!r} registry. "
            "Use a unique name or explicitly deregister the existing entry first."
        )


class PluginRegistry(Generic[T]):
    """Type-safe registry of classes keyed by name.

    Entries are registered either via the ``@register`` decorator at
    import time, directly with ``register_class``, or lazily via
    ``load_entrypoints`` for installed packages.

    Parameters
    ----------
    base_class:
        The class every entry must subclass (or be).
    name:
        A human-readable name for this registry (used in error messages).
    """

    def __init__(self, base_class: type[T], name: str) -> None:
        self._base_class = base_class
        self._name = name
        self._plugins: dict[str, type[T]] = {}

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str) -> Callable[[type[T]], type[T]]:
        """Return a class decorator that registers the decorated class.

        Parameters
        ----------
        name:
            The unique string key for this entry.

        Returns
        -------
        Callable[[type[T]], type[T]]
            A decorator that registers the class and returns it unchanged.

        Raises
        ------
        PluginAlreadyRegisteredError
            If ``name`` is already in use in this registry.
        TypeError
            If the decorated class does not subclass ``base_class``.
        """

        def decorator(cls: type[T]) -> type[T]:
            self.register_class(name, cls)
            return cls

        return decorator

    def register_class(self, name: str, cls: type[T]) -> None:
        """Register a class directly without using the decorator syntax.

        Raises
        ------
        PluginAlreadyRegisteredError
            If ``name`` is already registered.
        TypeError
            If ``cls`` is not a subclass of ``base_class``.
        """
        if name in self._plugins:
            raise PluginAlreadyRegisteredError(name, self._name)
        if not (isinstance(cls, type) and issubclass(cls, self._base_class)):
            raise TypeError(
                f"Cannot register {cls!r} under {name!r}: "
                f"it must be a subclass of {self._base_class.__name__}."
            )
        self._plugins[name] = cls
        logger.debug(
            "Registered %r -> %s in registry %r",
            name,
            cls.__qualname__,
            self._name,
        )

    def deregister(self, name: str) -> None:
        """Remove an entry from the registry.

        Raises
        ------
        PluginNotFoundError
            If ``name`` is not currently registered.
        """
        if name not in self._plugins:
            raise PluginNotFoundError(name, self._name)
        del self._plugins[name]
        logger.debug("Deregistered %r from registry %r", name, self._name)

    def clear(self) -> None:
        """Remove every entry."""
        self._plugins.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> type[T]:
        """Return the class registered under ``name``.

        Raises
        ------
        PluginNotFoundError
            If nothing is registered under ``name``.
        """
        try:
            return self._plugins[name]
        except KeyError:
            raise PluginNotFoundError(name, self._name) from None

    def holds(self, cls: type) -> bool:
        """Return True if ``cls`` itself is registered under its own name."""
        return self._plugins.get(cls.__name__) is cls

    def list_plugins(self) -> list[str]:
        """Return a sorted list of all registered names."""
        return sorted(self._plugins)

    def __contains__(self, name: object) -> bool:
        """Support ``"name" in registry`` membership test."""
        return name in self._plugins

    def __iter__(self) -> Iterator[type[T]]:
        return iter(list(self._plugins.values()))

    def __len__(self) -> int:
        """Return the number of registered entries."""
        return len(self._plugins)

    def __repr__(self) -> str:
        return (
            f"PluginRegistry(name={self._name!r}, "
            f"base_class={self._base_class.__name__}, "
            f"plugins={self.list_plugins()})"
        )

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str) -> None:
        """Discover and register classes declared as package entry-points.

        Entries that are already registered are skipped with a debug-level
        log entry, so repeated calls are idempotent. An entry-point that
        fails to import or to register is logged and skipped.

        Parameters
        ----------
        group:
            The entry-point group name, e.g. "docbond.datasources".
        """
        entry_points = importlib.metadata.entry_points(group=group)
        for ep in entry_points:
            if ep.name in self._plugins:
                logger.debug(
                    "Entry-point %r already registered in %r; skipping.",
                    ep.name,
                    self._name,
                )
                continue
            try:
                cls = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register_class(ep.name, cls)
            except (PluginAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered "
                    "in registry %r; skipping.",
                    ep.name,
                    self._name,
                )
