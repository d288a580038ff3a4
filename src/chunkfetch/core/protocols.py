"""Protocol definitions for fetcher components."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


def is_redirection(status: int) -> bool:
    """True for any status in the 3xx class."""
    return 300 <= status < 400


@dataclass
class Response:
    """HTTP response container.

    ``url`` is the URL the final response came from, after any redirects.
    ``content`` holds the body exactly as it came off the wire.
    """

    url: str
    status: int
    content: bytes
    headers: dict[str, str]


class Fetcher(Protocol):
    """Protocol for origin fetchers."""

    async def fetch(self, method: str, url: str, headers: Mapping[str, str]) -> Response:
        """Fetch a URL and return the final response."""
        ...
