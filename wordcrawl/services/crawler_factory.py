from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from wordcrawl.domain.crawl_config import CrawlerConfig
from wordcrawl.exceptions import CrawlConfigError
from wordcrawl.services.crawler import Crawler
from wordcrawl.services.page_parser import PageParserFactory
from wordcrawl.services.parallel_crawler import ParallelCrawler
from wordcrawl.services.sequential_crawler import SequentialCrawler
from wordcrawl.utils.clock import Clock

logger = logging.getLogger(__name__)


def available_parallelism() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class CrawlerFactory:
    clock: Clock
    parser_factory: PageParserFactory

    def worker_count(self, config: CrawlerConfig) -> int:
        """Requested parallelism, capped at the CPUs available. 0 means all of them."""
        limit = available_parallelism()
        if config.parallelism <= 0:
            return limit
        return min(config.parallelism, limit)

    def get(self, config: CrawlerConfig) -> Crawler:
        mode = (config.implementation_override or "parallel").strip().lower()
        common = dict(
            clock=self.clock,
            timeout=config.timeout,
            popular_word_count=config.popular_word_count,
            max_depth=config.max_depth,
            parser_factory=self.parser_factory,
            ignored_urls=config.ignored_urls,
        )
        if mode == "parallel":
            workers = self.worker_count(config)
            logger.debug("Using ParallelCrawler with %s workers", workers)
            return ParallelCrawler(parallelism=workers, **common)
        if mode == "sequential":
            logger.debug("Using SequentialCrawler")
            return SequentialCrawler(**common)
        raise CrawlConfigError("implementation_override", f"unknown implementation {mode!r}")
