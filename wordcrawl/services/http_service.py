from typing import Callable

import requests

from wordcrawl.domain.http_response import HttpResponse
from wordcrawl.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Takes the http_client callable (normally `requests.get`) as a dependency so
    tests can stub network I/O without patching.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """Fetch URL and return response with final URL, status code, body text and Content-Type."""
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        ct = None
        if hasattr(resp, "headers"):
            ct = resp.headers.get("Content-Type")

        final_url = getattr(resp, "url", None)
        if not isinstance(final_url, str) or not final_url:
            final_url = url

        return HttpResponse(final_url, resp.status_code, resp.text, ct)
