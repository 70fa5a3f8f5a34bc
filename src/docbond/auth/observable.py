"""Minimal subscribe/notify helper."""
from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Callback = Callable[[T], None]


class Observable(Generic[T]):
    """Fan a value out to every subscribed callback, in subscription order."""

    def __init__(self) -> None:
        self._subscribers: list[Callback[T]] = []

    def subscribe(self, callback: Callback[T]) -> Callable[[], None]:
        """Add ``callback`` and return a function that removes it again."""
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Callback[T]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def notify(self, value: T) -> None:
        for callback in list(self._subscribers):
            callback(value)

    def __len__(self) -> int:
        return len(self._subscribers)
