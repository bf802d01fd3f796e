from typing import NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from an HTTP fetch."""
    url: str
    status_code: int
    text: str
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400
