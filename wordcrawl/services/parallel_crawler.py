import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Iterable, Optional

from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.domain.ignore_filter import IgnoreFilter
from wordcrawl.domain.visited_tracker import VisitedTracker
from wordcrawl.domain.word_accumulator import WordAccumulator
from wordcrawl.exceptions import CrawlConfigError
from wordcrawl.services.crawler import Crawler
from wordcrawl.services.page_parser import PageParserFactory
from wordcrawl.services.profiler import profiled
from wordcrawl.utils.clock import Clock

logger = logging.getLogger(__name__)


class _PendingTasks:
    """Counts crawl tasks that have been scheduled but not finished.

    A parent adds its children before it finishes itself, so the count only
    reaches zero once the whole task tree has drained.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._count = 0
        self._drained = threading.Event()
        self._drained.set()

    def add(self) -> None:
        with self._lock:
            self._count += 1
            self._drained.clear()

    def finish(self) -> None:
        with self._lock:
            self._count -= 1
            if self._count <= 0:
                self._count = 0
                self._drained.set()

    def wait(self) -> None:
        self._drained.wait()


@dataclass(frozen=True)
class _CrawlTask:
    """Explore `url` with `depth` hops remaining, before `deadline`."""

    url: str
    depth: int
    deadline: datetime
    visited: VisitedTracker
    word_counts: WordAccumulator

    def child(self, link: str) -> "_CrawlTask":
        return replace(self, url=link, depth=self.depth - 1)


class ParallelCrawler(Crawler):
    """Crawls pages concurrently on a bounded thread pool.

    Every task re-checks the deadline before doing any work, so once it passes
    the remaining frontier drains without fetching. Fetches already in flight
    are left to finish.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        timeout: timedelta,
        popular_word_count: int,
        max_depth: int,
        parallelism: int,
        parser_factory: PageParserFactory,
        ignored_urls: Optional[IgnoreFilter] = None,
    ):
        if parallelism < 1:
            raise CrawlConfigError("parallelism", f"must be >= 1, got {parallelism}")
        super().__init__(
            clock=clock,
            timeout=timeout,
            popular_word_count=popular_word_count,
            max_depth=max_depth,
            parser_factory=parser_factory,
            ignored_urls=ignored_urls,
        )
        self.parallelism = parallelism

    @profiled
    def crawl(self, start_pages: Iterable[str]) -> CrawlResult:
        start_pages = list(start_pages)
        deadline = self.clock.now() + self.timeout
        visited = VisitedTracker()
        word_counts = WordAccumulator()
        pending = _PendingTasks()

        logger.info(
            "Starting parallel crawl of %s start pages (max_depth=%s, workers=%s, deadline=%s)",
            len(start_pages),
            self.max_depth,
            self.parallelism,
            deadline.isoformat(),
        )

        with ThreadPoolExecutor(max_workers=self.parallelism, thread_name_prefix="crawl") as pool:
            for url in start_pages:
                self._schedule(pool, pending, _CrawlTask(url, self.max_depth, deadline, visited, word_counts))
            pending.wait()

        return self._build_result(word_counts, visited)

    def _schedule(self, pool: ThreadPoolExecutor, pending: _PendingTasks, task: _CrawlTask) -> None:
        pending.add()
        try:
            pool.submit(self._run, pool, pending, task)
        except RuntimeError:
            pending.finish()
            logger.exception("Could not schedule crawl of %s", task.url)

    def _run(self, pool: ThreadPoolExecutor, pending: _PendingTasks, task: _CrawlTask) -> None:
        try:
            if self.crawl_policy.should_skip(task.url, task.depth, task.deadline):
                return
            for link in self._visit(task.url, task.visited, task.word_counts):
                self._schedule(pool, pending, task.child(link))
        except Exception:
            logger.exception("Crawl task failed for %s", task.url)
        finally:
            pending.finish()
