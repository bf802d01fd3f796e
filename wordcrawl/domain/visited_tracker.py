import threading
from typing import Set


class VisitedTracker:
    """
    Tracks which URLs have been claimed during a single crawl.

    Claiming is the only way in: the test and the insert happen under one lock,
    so when several workers race on the same URL exactly one of them wins and
    goes on to fetch it. A claimed URL stays claimed even if its fetch fails.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: Set[str] = set()

    def claim(self, url: str) -> bool:
        """Mark `url` visited. Returns False if it was already claimed."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
