"""Domain objects for wordcrawl - explicit re-exports to satisfy linters."""
from .crawl_config import CrawlerConfig as CrawlerConfig
from .crawl_result import CrawlResult as CrawlResult
from .http_response import HttpResponse as HttpResponse
from .ignore_filter import IgnoreFilter as IgnoreFilter
from .visited_tracker import VisitedTracker as VisitedTracker
from .word_accumulator import WordAccumulator as WordAccumulator

__all__ = [
    "CrawlerConfig",
    "CrawlResult",
    "HttpResponse",
    "IgnoreFilter",
    "VisitedTracker",
    "WordAccumulator",
]
