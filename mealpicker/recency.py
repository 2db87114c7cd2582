"""
Bounded record of recently shown recipe ids.

Insertion-ordered with FIFO eviction. Re-adding an id that is already
present does not move it, so eviction order depends only on first insertion.
"""

from collections import OrderedDict
from typing import Iterator, Optional


class RecencyCache:
    """Fixed-capacity set of recently selected identifiers."""

    def __init__(self, capacity: int = 10):
        if capacity < 0:
            raise ValueError(f"Recency cache capacity must be >= 0, got {capacity}")
        self._capacity = capacity
        self._entries: "OrderedDict[str, None]" = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def enabled(self) -> bool:
        """False when capacity is 0 (anti-repetition disabled)."""
        return self._capacity > 0

    def add(self, identifier: str) -> Optional[str]:
        """
        Remember an identifier, evicting the oldest entry if full.

        Returns:
            The evicted identifier, or None if nothing was evicted
        """
        if not self.enabled or identifier in self._entries:
            return None

        evicted = None
        if len(self._entries) >= self._capacity:
            evicted, _ = self._entries.popitem(last=False)
        self._entries[identifier] = None
        return evicted

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"RecencyCache(capacity={self._capacity}, entries={list(self._entries)!r})"
