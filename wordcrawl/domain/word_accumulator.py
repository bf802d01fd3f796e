import threading
from collections import Counter
from typing import Dict, Mapping


class WordAccumulator:
    """Thread-safe word -> count totals, merged by summation.

    Sums commute, so the final totals do not depend on the order in which
    crawl tasks report their pages.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._counts: Counter = Counter()

    def merge(self, word: str, count: int) -> None:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count} for {word!r}")
        with self._lock:
            self._counts[word] += count

    def merge_all(self, counts: Mapping[str, int]) -> None:
        """Merge every pair of `counts` under a single lock acquisition."""
        for word, count in counts.items():
            if count < 0:
                raise ValueError(f"count must be non-negative, got {count} for {word!r}")
        with self._lock:
            self._counts.update(counts)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)
