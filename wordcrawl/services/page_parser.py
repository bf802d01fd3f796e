import logging
from collections import Counter
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional, Protocol
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname

from bs4 import BeautifulSoup

from wordcrawl.domain.ignore_filter import IgnoreFilter
from wordcrawl.exceptions import HttpFetchError, PageParseError
from wordcrawl.services.http_service import HttpService
from wordcrawl.services.profiler import Profiler, profiled

logger = logging.getLogger(__name__)

_LINK_SCHEMES = ("http", "https", "file")
_HIDDEN_TAGS = ("script", "style", "noscript", "template")


class ParseResult(NamedTuple):
    """Words and outbound links found on a single page."""
    word_counts: Dict[str, int]
    links: List[str]


class PageParser(Protocol):
    def parse(self) -> ParseResult: ...


class HtmlPageParser:
    """Fetches one URL and turns its HTML into word counts and absolute links.

    `http`/`https` URLs go through `HttpService`; `file:` URLs are read from
    disk. Any failure is raised as `PageParseError`.
    """

    def __init__(
        self,
        url: str,
        http_service: HttpService,
        ignored_words: Optional[IgnoreFilter] = None,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self.url = url
        self.http_service = http_service
        self.ignored_words = ignored_words if ignored_words is not None else IgnoreFilter()
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    @profiled
    def parse(self) -> ParseResult:
        base_url, html = self._load()
        try:
            soup = self._soup_factory(html)
        except Exception as e:
            raise PageParseError(self.url, f"invalid HTML: {e}") from e
        links = self._extract_links(base_url, soup)
        for tag in _HIDDEN_TAGS:
            for element in soup.find_all(tag):
                element.decompose()
        words = self._count_words(soup.get_text(separator=" "))
        return ParseResult(word_counts=words, links=links)

    def _load(self) -> tuple[str, str]:
        parsed = urlparse(self.url)
        if parsed.scheme == "file":
            path = Path(url2pathname(parsed.path))
            try:
                return self.url, path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise PageParseError(self.url, str(e)) from e

        try:
            response = self.http_service.fetch(self.url)
        except HttpFetchError as e:
            raise PageParseError(self.url, str(e.original)) from e
        if not response.ok:
            raise PageParseError(self.url, f"HTTP status {response.status_code}")
        return response.url, response.text or ""

    def _extract_links(self, base_url: str, soup: BeautifulSoup) -> List[str]:
        links = []
        for a in soup.find_all("a", href=True):
            href = a.get("href", "").strip()
            if not href:
                continue
            abs_url = urljoin(base_url, href)
            if urlparse(abs_url).scheme not in _LINK_SCHEMES:
                logger.debug("Skipping link with unsupported scheme: %s", abs_url)
                continue
            links.append(abs_url)
        return links

    def _count_words(self, text: str) -> Dict[str, int]:
        counts: Counter = Counter()
        for token in text.split():
            word = "".join(ch for ch in token if ch.isalpha()).lower()
            if not word or self.ignored_words.matches(word):
                continue
            counts[word] += 1
        return dict(counts)


class PageParserFactory:
    """Builds a parser per URL; every parser is wrapped so `parse` is profiled."""

    def __init__(
        self,
        http_service: HttpService,
        profiler: Profiler,
        ignored_words: Optional[IgnoreFilter] = None,
    ):
        self.http_service = http_service
        self.profiler = profiler
        self.ignored_words = ignored_words if ignored_words is not None else IgnoreFilter()

    def get(self, url: str) -> PageParser:
        return self.profiler.wrap(HtmlPageParser(url, self.http_service, self.ignored_words))
