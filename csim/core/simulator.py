"""CacheSimulator coordinates cache accesses and statistics.
Feeds decoded trace lines into the core Cache and updates the counters.
"""
import logging
from typing import Callable, Iterable, List, Optional

from .cache import AccessResult, Cache
from .decoder import DecodedAccess, decode_line
from .errors import MalformedLine
from ..data.stats_export import Statistics

logger = logging.getLogger(__name__)

# a modify is a load immediately followed by a store to the same address
PROBES = {'L': 1, 'S': 1, 'M': 2}


class CacheSimulator:
    def __init__(self, cache: Cache, s: int, b: int, stats: Optional[Statistics] = None):
        self.cache = cache
        self.s = s
        self.b = b
        self.stats = stats or Statistics()
        self.lines_read = 0

    def reset(self):
        # clear stats and cache contents
        self.stats.reset()
        self.cache.reset()
        self.lines_read = 0

    def process(self, access: DecodedAccess) -> List[AccessResult]:
        """Apply one decoded access to the cache and record every probe."""
        results = []
        for _ in range(PROBES[access.code]):
            res = self.cache.access(access.tag, access.set_index)
            self.stats.record_access(res.hit, res.eviction)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s %s,%d set=%s tag=%s -> %s%s", access.code, access.address, access.size,
                             access.set_bits, access.tag_bits, 'hit' if res.hit else 'miss',
                             ' eviction' if res.eviction else '')
            results.append(res)
        return results

    def step(self, line: str) -> Optional[dict]:
        """Decode and apply one trace line. Returns None for skipped lines."""
        self.lines_read += 1
        try:
            access = decode_line(line, self.s, self.b)
        except MalformedLine:
            raise MalformedLine(line, self.lines_read) from None
        if access is None:
            return None
        results = self.process(access)
        return {
            'line': line,
            'line_number': self.lines_read,
            'access': access,
            'results': results,
            'stats': self.stats.as_dict(),
        }

    def run_all(self, lines: Iterable[str], callback: Optional[Callable[[dict], None]] = None) -> Statistics:
        for line in lines:
            info = self.step(line)
            if info is not None and callback:
                callback(info)
        return self.stats


def describe(info: dict) -> str:
    """Format one processed line the way verbose mode prints it,
    e.g. ``M 20,1 miss eviction hit``.
    """
    access = info['access']
    words = [f"{access.code} {access.address},{access.size}"]
    for res in info['results']:
        words.append('hit' if res.hit else 'miss')
        if res.eviction:
            words.append('eviction')
    return ' '.join(words)
