import logging
from datetime import datetime

from wordcrawl.domain.ignore_filter import IgnoreFilter
from wordcrawl.utils.clock import Clock

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates the checks a crawl task makes before claiming a URL:
    deadline, remaining depth and ignored-URL patterns.

    Separates policy decisions from traversal so the parallel and sequential
    crawlers stop for exactly the same reasons.
    """

    def __init__(self, clock: Clock, ignored_urls: IgnoreFilter):
        self.clock = clock
        self.ignored_urls = ignored_urls

    def should_skip_due_to_deadline(self, url: str, deadline: datetime) -> bool:
        if self.clock.now() >= deadline:
            logger.debug("Skipping (deadline passed) %s", url)
            return True
        return False

    def should_skip_due_to_depth(self, url: str, depth: int) -> bool:
        if depth <= 0:
            logger.debug("Skipping (max depth reached) %s", url)
            return True
        return False

    def should_skip_due_to_ignore(self, url: str) -> bool:
        # Ignored URLs are never claimed; each new path to them is re-checked here.
        if self.ignored_urls.matches(url):
            logger.debug("Skipping (ignored) %s", url)
            return True
        return False

    def should_skip(self, url: str, depth: int, deadline: datetime) -> bool:
        return (
            self.should_skip_due_to_deadline(url, deadline)
            or self.should_skip_due_to_depth(url, depth)
            or self.should_skip_due_to_ignore(url)
        )
