"""LRU replacement for a single cache set.

Each set keeps its resident tags in recency order: the first entry is the
most recently used tag and the last entry the least recently used one.
Every touch moves a tag to the front, so the victim at the back is always
unique.

API (methods):
- access(key): touch `key`; returns (hit, evicted_key or None)
- evict(): remove and return the LRU key, or None if empty
- peek(): resident keys, MRU first (for tests/debug output)
- reset(): clear the set
"""

from collections import OrderedDict
from typing import Any, List, Optional, Tuple


class LRUReplacement:
    """Least-Recently-Used set bounded by `capacity` (the associativity).

    OrderedDict keeps insertion order; an accessed key is moved to the
    front so the least recently used key sits at the end.
    """

    def __init__(self, capacity: int):
        self.capacity = int(capacity)
        if self.capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._od = OrderedDict()

    def __contains__(self, key: Any) -> bool:
        return key in self._od

    def __len__(self) -> int:
        return len(self._od)

    @property
    def full(self) -> bool:
        return len(self._od) >= self.capacity

    def access(self, key: Any) -> Tuple[bool, Optional[Any]]:
        """Register an access to `key`.

        Returns ``(True, None)`` on a hit. On a miss the key is inserted as
        MRU and the result is ``(False, victim)`` where victim is the key
        evicted to make room, or None if the set still had a free way.
        """
        if key in self._od:
            self._od.move_to_end(key, last=False)
            return True, None
        victim = self.evict() if self.full else None
        self._od[key] = True
        self._od.move_to_end(key, last=False)
        return False, victim

    def evict(self) -> Optional[Any]:
        """Evict the LRU key and return it, or None if empty."""
        if not self._od:
            return None
        key, _ = self._od.popitem(last=True)
        return key

    def peek(self) -> List[Any]:
        """Return keys from MRU->LRU as list."""
        return list(self._od.keys())

    def reset(self) -> None:
        self._od.clear()


__all__ = ["LRUReplacement"]
