"""Core cache implementation

A set-associative cache with LRU replacement, keyed by set index.
Behavior:
- sets are created lazily the first time an index is referenced, so an
  unused part of the 2^s set space costs nothing
- each set holds at most `associativity` tags, most recently used first
- access(tag, set_index) returns an AccessResult(hit, evicted)
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from csim.core.replacement_policies import LRUReplacement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessResult:
    """Outcome of one cache probe.

    Fields:
    - hit: whether the tag was resident
    - evicted: tag removed to make room, None when nothing was evicted
    """

    hit: bool
    evicted: Optional[int] = None

    @property
    def eviction(self) -> bool:
        return self.evicted is not None


class Cache:
    """Set-associative LRU cache model."""

    def __init__(self, associativity: int = 1):
        if associativity <= 0:
            raise ValueError("associativity must be >= 1")
        self.associativity = associativity
        self.sets: Dict[int, LRUReplacement] = {}

    def access(self, tag: int, set_index: int) -> AccessResult:
        """Probe the cache for `tag` in set `set_index`, updating LRU order."""
        cache_set = self.sets.get(set_index)
        if cache_set is None:
            cache_set = self.sets[set_index] = LRUReplacement(self.associativity)
        hit, evicted = cache_set.access(tag)
        if evicted is not None:
            logger.debug("set %#x: evicted tag %#x for tag %#x", set_index, evicted, tag)
        return AccessResult(hit=hit, evicted=evicted)

    def resident(self, set_index: int) -> List[int]:
        """Tags resident in `set_index`, MRU first (empty if never used)."""
        cache_set = self.sets.get(set_index)
        return cache_set.peek() if cache_set is not None else []

    def contents(self) -> Dict[int, List[int]]:
        return {index: s.peek() for index, s in self.sets.items()}

    def reset(self):
        """Drop every set."""
        self.sets.clear()
