import json
import logging
from pathlib import Path
from typing import TextIO

from wordcrawl.domain.crawl_result import CrawlResult

logger = logging.getLogger(__name__)


class CrawlResultWriter:
    """Writes a `CrawlResult` as JSON: `{"wordCounts": {...}, "urlsVisited": n}`."""

    def __init__(self, result: CrawlResult):
        if result is None:
            raise ValueError("result is required")
        self.result = result

    def to_dict(self) -> dict:
        return {
            "wordCounts": dict(self.result.word_counts),
            "urlsVisited": self.result.urls_visited,
        }

    def write_path(self, path: str) -> None:
        """Append the result to `path`, creating the file if it does not exist."""
        target = Path(path)
        if target.parent and not target.parent.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as fh:
            self.write(fh)
        logger.info("Wrote crawl result to %s", target)

    def write(self, stream: TextIO) -> None:
        """Write to an already open stream. The stream is flushed, never closed."""
        json.dump(self.to_dict(), stream)
        stream.write("\n")
        stream.flush()
