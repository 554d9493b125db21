"""Insertion-ordered mapping used for the emote indexes."""

import random as _random
from collections.abc import Callable
from typing import Any


class Collection(dict):
    """A dict with a few helpers for picking and searching values.

    Keys keep insertion order; setting an existing key replaces its value in
    place without moving it.
    """

    def first(self, count: int | None = None) -> Any:
        """Return the first value, or a list of the first ``count`` values."""
        if count is None:
            return next(iter(self.values()), None)
        values = list(self.values())
        return values[: max(count, 0)]

    def last(self, count: int | None = None) -> Any:
        """Return the last value, or a list of the last ``count`` values."""
        values = list(self.values())
        if count is None:
            return values[-1] if values else None
        if count <= 0:
            return []
        return values[-count:]

    def random(self) -> Any:
        """Return a random value, or None when empty."""
        if not self:
            return None
        return _random.choice(list(self.values()))

    def find(self, predicate: Callable[[Any], bool]) -> Any:
        """Return the first value matching ``predicate``."""
        for value in self.values():
            if predicate(value):
                return value
        return None

    def filter(self, predicate: Callable[[Any], bool]) -> "Collection":
        """Return a new collection with the entries whose value matches."""
        return Collection((k, v) for k, v in self.items() if predicate(v))

    def map(self, fn: Callable[[Any], Any]) -> list[Any]:
        return [fn(value) for value in self.values()]

    def __repr__(self) -> str:
        return f"Collection({dict.__repr__(self)})"
