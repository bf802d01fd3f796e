import logging
from datetime import datetime
from typing import Iterable, List, Tuple

from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.domain.visited_tracker import VisitedTracker
from wordcrawl.domain.word_accumulator import WordAccumulator
from wordcrawl.services.crawler import Crawler
from wordcrawl.services.profiler import profiled

logger = logging.getLogger(__name__)


class SequentialCrawler(Crawler):
    """Single-threaded depth-first crawler with the same stop rules as `ParallelCrawler`.

    Useful as a reference when checking that parallel results are order independent.
    """

    @profiled
    def crawl(self, start_pages: Iterable[str]) -> CrawlResult:
        start_pages = list(start_pages)
        deadline = self.clock.now() + self.timeout
        visited = VisitedTracker()
        word_counts = WordAccumulator()

        logger.info(
            "Starting sequential crawl of %s start pages (max_depth=%s)",
            len(start_pages),
            self.max_depth,
        )
        for url in start_pages:
            self._crawl_from(url, deadline, visited, word_counts)

        return self._build_result(word_counts, visited)

    def max_parallelism(self) -> int:
        return 1

    def _crawl_from(
        self,
        start_url: str,
        deadline: datetime,
        visited: VisitedTracker,
        word_counts: WordAccumulator,
    ) -> None:
        # Children are pushed in reverse so links are explored in page order, depth first.
        stack: List[Tuple[str, int]] = [(start_url, self.max_depth)]
        while stack:
            url, depth = stack.pop()
            try:
                if self.crawl_policy.should_skip(url, depth, deadline):
                    continue
                links = self._visit(url, visited, word_counts)
            except Exception:
                logger.exception("Crawl of %s failed", url)
                continue
            stack.extend((link, depth - 1) for link in reversed(links))
