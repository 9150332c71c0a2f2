"""Statistics and exporter.
"""
import csv
import json
from typing import Dict, List, Optional


class Statistics:
    def __init__(self, track_history: bool = False):
        self.track_history = track_history
        self.reset()

    def reset(self):
        # counters start from zero
        self.accesses = 0
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.hit_rate_history: List[float] = []

    def record_access(self, hit: bool, evicted: bool = False):
        # simple counter update: call this for every cache probe
        self.accesses += 1
        if hit:
            self.hits += 1
        else:
            self.misses += 1
        if evicted:
            self.evictions += 1
        if self.track_history:
            self.hit_rate_history.append(self.hit_rate)

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def summary(self) -> str:
        """The one-line result printed at the end of a run."""
        return f"hits:{self.hits} misses:{self.misses} evictions:{self.evictions}"

    def as_dict(self) -> Dict[str, float]:
        return {
            'accesses': self.accesses,
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': self.hit_rate,
            'miss_rate': self.miss_rate,
        }


def export_chart_json(hit_rate_history: List[float], stats: Dict[str, float], fpath: str) -> str:
    """Export hit-rate history and stats to a JSON file. Returns saved path.
    """
    data = {
        'hit_rate_history': list(hit_rate_history),
        'stats': stats
    }
    with open(fpath, 'w', encoding='utf-8') as fh:
        json.dump(data, fh, indent=2)
    return fpath


def export_hit_rate_chart(hit_rate_history: List[float], fpath: str, title: Optional[str] = None) -> str:
    """Render the running hit rate to an image/PDF using matplotlib and save it.

    The output format follows the file extension (.pdf, .png, .svg ...).
    Returns the saved file path.
    """
    # Use matplotlib without a display
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
    ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
    ax.set_ylim(0, 1)
    ax.set_xlabel('Access')
    ax.set_ylabel('Hit rate')
    if title:
        ax.set_title(title)
    ax.grid(False)
    fig.tight_layout()
    fig.savefig(fpath, dpi=150)
    plt.close(fig)
    return fpath


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics):
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['accesses', 'hits', 'misses', 'evictions', 'hit_rate', 'miss_rate'])
            writer.writerow([
                stats.accesses, stats.hits, stats.misses, stats.evictions,
                stats.hit_rate, stats.miss_rate
            ])
