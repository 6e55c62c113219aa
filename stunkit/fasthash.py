"""A fixed-capacity chained hash table with stable positional access."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterator
from typing import Any

_SIZE_MASK = 0xFFFFFFFFFFFFFFFF


def find_prime(value: int) -> int:
    """Return the smallest prime that is greater than or equal to ``value``.

    Values of 2 or less give 2.
    """
    if value <= 2:
        return 2
    if value == 3:
        return 3
    result = value if value % 2 else value + 1
    while any(result % x == 0 for x in range(3, math.isqrt(result) + 2)):
        result += 2
    return result


def get_hash_table_width(max_items: int) -> int:
    """Suggest a table width (a prime) for a table holding ``max_items``."""
    return find_prime(max_items)


def _hash(key: Hashable) -> int:
    if isinstance(key, int):
        return key & _SIZE_MASK
    return hash(key) & _SIZE_MASK


class FastHash:
    """A hash table that holds at most ``capacity`` items.

    Duplicate keys are allowed: a new insertion shadows the earlier one until
    it is removed. Items can also be reached by position with ``item_at``;
    positions follow insertion order until an item is removed from the middle,
    after which they follow the table's bucket order.
    """

    def __init__(self, capacity: int = 100, table_width: int = 0) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if table_width < 0:
            raise ValueError("table width must not be negative")
        self.capacity = capacity
        self.table_width = table_width or get_hash_table_width(capacity)
        self.reset()

    def reset(self) -> None:
        """Remove every item."""
        self._keys: list[Any] = [None] * self.capacity
        self._values: list[Any] = [None] * self.capacity
        self._buckets: list[list[int]] = [[] for _ in range(self.table_width)]
        # Free slots as a stack: the next slot to use is at the end.
        self._free: list[int] = list(reversed(range(self.capacity)))
        self._index: list[int] = [0] * self.capacity
        self._index_valid = True
        self._index_start = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: Hashable) -> bool:
        return self._find(key) is not None

    def _bucket(self, key: Hashable) -> list[int]:
        return self._buckets[_hash(key) % self.table_width]

    def _find(self, key: Hashable) -> tuple[list[int], int] | None:
        chain = self._bucket(key)
        for pos, slot in enumerate(chain):
            if self._keys[slot] == key:
                return chain, pos
        return None

    def insert(self, key: Hashable, value: Any) -> None:
        """Add ``key`` with ``value``; raises OverflowError when the table is full."""
        if not self._free:
            raise OverflowError("hash table is full")
        slot = self._free.pop()
        self._keys[slot] = key
        self._values[slot] = value
        self._bucket(key).insert(0, slot)
        if self._index_valid and self._size < self.capacity:
            self._index[(self._size + self._index_start) % self.capacity] = slot
        self._size += 1

    def remove(self, key: Hashable) -> None:
        """Remove the newest item stored under ``key``; raises KeyError if absent."""
        found = self._find(key)
        if found is None:
            raise KeyError(key)
        chain, pos = found
        slot = chain.pop(pos)
        self._update_index_with_remove(slot)
        self._keys[slot] = None
        self._values[slot] = None
        self._free.append(slot)
        self._size -= 1

    def _update_index_with_remove(self, slot: int) -> None:
        if self._size == 0 or (self._size > 1 and not self._index_valid):
            return
        if self._size == 1:
            self._index_valid = True
            self._index_start = 0
            return
        if slot == self._index[self._index_start]:
            self._index_start = (self._index_start + 1) % self.capacity
            return
        last = (self._index_start + self._size - 1) % self.capacity
        if slot == self._index[last]:
            return
        self._index_valid = False

    def _reindex(self) -> None:
        slots = [slot for chain in self._buckets for slot in chain]
        self._index[: len(slots)] = slots
        self._index_valid = True
        self._index_start = 0

    def lookup(self, key: Hashable) -> Any:
        """Return the value stored under ``key``, or None if it is absent."""
        found = self._find(key)
        if found is None:
            return None
        chain, pos = found
        return self._values[chain[pos]]

    def item_at(self, index: int) -> tuple[Any, Any]:
        """Return the ``(key, value)`` pair at ``index``; raises IndexError if out of range."""
        if index < 0 or index >= self._size:
            raise IndexError("hash table index out of range")
        if not self._index_valid:
            self._reindex()
        slot = self._index[(self._index_start + index) % self.capacity]
        return self._keys[slot], self._values[slot]

    def value_at(self, index: int) -> Any:
        """Return the value at ``index``; raises IndexError if out of range."""
        return self.item_at(index)[1]

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield every ``(key, value)`` pair in positional order."""
        for index in range(self._size):
            yield self.item_at(index)