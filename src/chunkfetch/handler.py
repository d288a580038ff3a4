"""Invocation entry points: one payload in, one reply out."""

from dataclasses import replace
from typing import Any

from .cache import ChunkCache
from .config import FetcherSettings, settings
from .core import RedirectingFetcher
from .pagination import PaginationEngine
from .request import FetchRequest


def create_engine(
    config: FetcherSettings = settings,
    cache: ChunkCache | None = None,
) -> PaginationEngine:
    """Wire a fetcher and a cache into an engine using ``config``."""
    fetcher = RedirectingFetcher(
        timeout=config.timeout,
        user_agent=config.user_agent,
        verify_tls=config.verify_tls,
        max_redirects=config.max_redirects,
        max_connections=config.max_connections,
        max_keepalive_connections=config.max_keepalive_connections,
    )
    return PaginationEngine(
        fetcher=fetcher,
        cache=cache if cache is not None else ChunkCache(),
        page_size=config.page_size,
    )


async def handle_event(engine: PaginationEngine, payload: Any) -> dict:
    """Parse ``payload``, run one invocation and return the reply mapping.

    RequestError and FetchError propagate; no partial reply is produced.
    """
    request = FetchRequest.from_payload(payload)
    reply = await engine.handle(request)
    return reply.to_dict()


async def read_all(engine: PaginationEngine, request: FetchRequest) -> tuple[str, int]:
    """Page through a whole body, returning the encoded text and page count."""
    parts = []
    pages = 0
    while True:
        reply = await engine.handle(request)
        parts.append(reply.data)
        pages += 1
        if reply.is_last:
            return "".join(parts), pages
        request = replace(request, offset=reply.next)
