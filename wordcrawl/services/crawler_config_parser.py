import logging
import re
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from wordcrawl.domain.crawl_config import CrawlerConfig
from wordcrawl.domain.ignore_filter import IgnoreFilter
from wordcrawl.exceptions import CrawlConfigError

logger = logging.getLogger(__name__)


class CrawlerConfigParser:
    """Parse a YAML crawl config into a `CrawlerConfig`.

    Example::

        start_pages:
          - https://example.com/
        ignored_urls: ["https://example\\.com/private/.*"]
        ignored_words: ["^.{1,3}$"]
        parallelism: 4
        implementation_override: parallel
        max_depth: 3
        timeout_seconds: 10
        popular_word_count: 5
        result_path: out/result.json
        profile_output_path: out/profile.txt
    """

    def load(self, path: str) -> CrawlerConfig:
        config_path = Path(path)
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise CrawlConfigError("path", f"config file not found: {config_path}") from e
        except yaml.YAMLError as e:
            raise CrawlConfigError("path", f"invalid YAML in {config_path}: {e}") from e
        logger.info("Loaded crawl config from %s", config_path)
        return self.parse(data or {})

    def parse(self, data: dict) -> CrawlerConfig:
        if not isinstance(data, dict):
            raise CrawlConfigError("<root>", "config must be a mapping")

        start_pages = data.get("start_pages", [])
        if isinstance(start_pages, str):
            start_pages = [start_pages]

        return CrawlerConfig(
            start_pages=[str(u) for u in (start_pages or [])],
            ignored_urls=self._patterns("ignored_urls", data.get("ignored_urls")),
            ignored_words=self._patterns("ignored_words", data.get("ignored_words")),
            parallelism=self._int("parallelism", data.get("parallelism"), 0),
            implementation_override=str(data.get("implementation_override") or "").strip().lower(),
            max_depth=self._int("max_depth", data.get("max_depth"), 0),
            timeout=timedelta(seconds=self._float("timeout_seconds", data.get("timeout_seconds"), 1.0)),
            popular_word_count=self._int("popular_word_count", data.get("popular_word_count"), 0),
            result_path=data.get("result_path") or None,
            profile_output_path=data.get("profile_output_path") or None,
        )

    def _patterns(self, field: str, raw: Any) -> IgnoreFilter:
        if raw is None:
            return IgnoreFilter()
        if isinstance(raw, str):
            raw = [raw]
        try:
            return IgnoreFilter(str(p) for p in raw)
        except re.error as e:
            raise CrawlConfigError(field, f"invalid pattern: {e}") from e

    def _int(self, field: str, raw: Any, default: int) -> int:
        if raw is None:
            return default
        if isinstance(raw, bool):
            raise CrawlConfigError(field, f"expected an integer, got {raw!r}")
        try:
            return int(raw)
        except (TypeError, ValueError) as e:
            raise CrawlConfigError(field, f"expected an integer, got {raw!r}") from e

    def _float(self, field: str, raw: Any, default: float) -> float:
        if raw is None:
            return default
        try:
            return float(raw)
        except (TypeError, ValueError) as e:
            raise CrawlConfigError(field, f"expected a number, got {raw!r}") from e
