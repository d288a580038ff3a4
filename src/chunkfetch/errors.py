"""Exception hierarchy."""


class ChunkFetchError(Exception):
    """Base class for all errors raised by chunkfetch."""


class RequestError(ChunkFetchError):
    """The inbound payload could not be turned into a FetchRequest."""


class FetchError(ChunkFetchError):
    """The origin could not be fetched."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class RedirectError(FetchError):
    """A redirect carried a Location header that is not a valid URL."""

    def __init__(self, message: str, url: str, location: str):
        super().__init__(message, url)
        self.location = location
