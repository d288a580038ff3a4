"""Pagination engine: serve an encoded body one bounded page at a time."""

from .cache import ChunkCache
from .config import MAX_RESPONSE_LEN
from .core import Fetcher, encode
from .logging import get_logger
from .request import FetchReply, FetchRequest

logger = get_logger(__name__)


def paginate(body: str, offset: int, page_size: int = MAX_RESPONSE_LEN) -> FetchReply:
    """Slice one page of ``body`` starting at ``offset``.

    Offsets count characters of the encoded text. An offset at or past the
    end yields an empty final page.
    """
    end = offset + page_size
    if end < len(body):
        return FetchReply(data=body[offset:end], next=end)
    return FetchReply(data=body[offset:], next=None)


class PaginationEngine:
    """Fetches, encodes and pages through origin bodies.

    When a page is not the last one, the whole encoded body is stored in the
    cache under the originally requested URI, so the continuation call can be
    answered without going back to the origin. Entries are consumed on read;
    a continuation whose entry is gone triggers a fresh fetch and the offset
    is applied to the new body.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        cache: ChunkCache,
        page_size: int = MAX_RESPONSE_LEN,
    ):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.fetcher = fetcher
        self.cache = cache
        self.page_size = page_size

    async def handle(self, request: FetchRequest) -> FetchReply:
        body = None
        if request.offset is not None:
            body = self.cache.take(request.uri)
            if body is None:
                logger.info("cache_miss", uri=request.uri, offset=request.offset)
            else:
                logger.debug("cache_hit", uri=request.uri, offset=request.offset)

        if body is None:
            response = await self.fetcher.fetch(request.method, request.uri, request.headers)
            body = encode(response.content)

        offset = request.offset or 0
        reply = paginate(body, offset, self.page_size)
        if reply.next is not None:
            self.cache.put(request.uri, body)
            logger.debug(
                "page_cached",
                uri=request.uri,
                offset=offset,
                next=reply.next,
                total=len(body),
            )
        return reply
