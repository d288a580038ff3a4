"""Core fetcher components."""

from .fetcher import MAX_REDIRECTS, RedirectingFetcher
from .protocols import Fetcher, Response, is_redirection
from .transcoder import encode

__all__ = [
    "Fetcher",
    "MAX_REDIRECTS",
    "RedirectingFetcher",
    "Response",
    "encode",
    "is_redirection",
]
