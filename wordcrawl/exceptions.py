"""Custom exceptions for wordcrawl."""


class CrawlConfigError(ValueError):
    """Raised when a crawl configuration is invalid. Surfaces before any crawl starts."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid crawl config '{field}': {reason}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class PageParseError(Exception):
    """Raised when a page cannot be fetched or parsed into words and links."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not parse {url}: {reason}")
