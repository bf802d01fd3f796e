"""Crawl result data model."""
from typing import Dict, NamedTuple


class CrawlResult(NamedTuple):
    """Final snapshot of a crawl.

    Produced once, after the task tree has drained or the deadline has passed.
    """
    word_counts: Dict[str, int]
    """Most popular words, already trimmed and ordered by the popularity policy"""

    urls_visited: int
    """Number of distinct URLs claimed, including pages whose fetch failed"""
