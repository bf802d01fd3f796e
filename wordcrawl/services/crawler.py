import logging
import os
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Iterable, Optional

from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.domain.ignore_filter import IgnoreFilter
from wordcrawl.domain.visited_tracker import VisitedTracker
from wordcrawl.domain.word_accumulator import WordAccumulator
from wordcrawl.exceptions import CrawlConfigError, PageParseError
from wordcrawl.services.crawl_policy import CrawlPolicy
from wordcrawl.services.page_parser import PageParserFactory
from wordcrawl.services.word_counts import sort_word_counts
from wordcrawl.utils.clock import Clock

logger = logging.getLogger(__name__)


class Crawler(ABC):
    """Shared setup for crawler implementations.

    Holds the limits every implementation obeys, validates them up front, and
    turns the per-crawl shared state into the final `CrawlResult`.
    Subclasses implement `crawl()` and mark it `@profiled`.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        timeout: timedelta,
        popular_word_count: int,
        max_depth: int,
        parser_factory: PageParserFactory,
        ignored_urls: Optional[IgnoreFilter] = None,
    ):
        if timeout < timedelta(0):
            raise CrawlConfigError("timeout", f"must not be negative, got {timeout}")
        if max_depth < 0:
            raise CrawlConfigError("max_depth", f"must be >= 0, got {max_depth}")
        if popular_word_count < 0:
            raise CrawlConfigError(
                "popular_word_count", f"must be >= 0, got {popular_word_count}"
            )
        self.clock = clock
        self.timeout = timeout
        self.popular_word_count = popular_word_count
        self.max_depth = max_depth
        self.parser_factory = parser_factory
        self.crawl_policy = CrawlPolicy(clock, ignored_urls if ignored_urls is not None else IgnoreFilter())

    @abstractmethod
    def crawl(self, start_pages: Iterable[str]) -> CrawlResult: ...

    def max_parallelism(self) -> int:
        return os.cpu_count() or 1

    def _build_result(self, word_counts: WordAccumulator, visited: VisitedTracker) -> CrawlResult:
        result = CrawlResult(
            word_counts=sort_word_counts(word_counts.snapshot(), self.popular_word_count),
            urls_visited=len(visited),
        )
        logger.info(
            "Crawl finished: %s urls visited, %s distinct words",
            result.urls_visited,
            len(word_counts),
        )
        return result

    def _visit(self, url: str, visited: VisitedTracker, word_counts: WordAccumulator) -> list[str]:
        """Claim, fetch and merge one page. Returns the page's outbound links.

        A page that fails to parse stays claimed and contributes nothing.
        """
        if not visited.claim(url):
            logger.debug("Skipping (visited) %s", url)
            return []

        try:
            result = self.parser_factory.get(url).parse()
        except PageParseError as e:
            logger.warning("Parse failed for %s: %s", url, e)
            return []
        except Exception as e:
            logger.error("Unexpected error parsing %s: %s", url, e, exc_info=True)
            return []

        word_counts.merge_all(result.word_counts)
        logger.debug("Visited %s: %s words, %s links", url, len(result.word_counts), len(result.links))
        return list(result.links)
