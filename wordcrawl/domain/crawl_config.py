from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from wordcrawl.domain.ignore_filter import IgnoreFilter
from wordcrawl.exceptions import CrawlConfigError

IMPLEMENTATIONS = ("", "parallel", "sequential")


@dataclass(frozen=True)
class CrawlerConfig:
    """Settings for one crawler, read once and immutable for its lifetime.

    `parallelism` of 0 means "use every available CPU". An empty
    `result_path` or `profile_output_path` means "write to stdout".
    """

    start_pages: list[str] = field(default_factory=list)
    ignored_urls: IgnoreFilter = field(default_factory=IgnoreFilter)
    ignored_words: IgnoreFilter = field(default_factory=IgnoreFilter)
    parallelism: int = 0
    implementation_override: str = ""
    max_depth: int = 0
    timeout: timedelta = timedelta(seconds=1)
    popular_word_count: int = 0
    result_path: Optional[str] = None
    profile_output_path: Optional[str] = None

    def __post_init__(self):
        if self.max_depth < 0:
            raise CrawlConfigError("max_depth", f"must be >= 0, got {self.max_depth}")
        if self.popular_word_count < 0:
            raise CrawlConfigError(
                "popular_word_count", f"must be >= 0, got {self.popular_word_count}"
            )
        if self.parallelism < 0:
            raise CrawlConfigError("parallelism", f"must be >= 0, got {self.parallelism}")
        if self.timeout < timedelta(0):
            raise CrawlConfigError("timeout", f"must not be negative, got {self.timeout}")
        if self.implementation_override not in IMPLEMENTATIONS:
            raise CrawlConfigError(
                "implementation_override",
                f"unknown implementation {self.implementation_override!r}",
            )

    def __repr__(self):
        return (
            f"<CrawlerConfig start_pages={len(self.start_pages)} max_depth={self.max_depth} "
            f"timeout={self.timeout} parallelism={self.parallelism}>"
        )
