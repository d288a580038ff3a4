"""Inbound request and outbound reply models."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import httpx

from .errors import RequestError

HTTP_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"}
)

# RFC 7230 token
_HEADER_NAME = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# Visible ASCII, space and horizontal tab.
_HEADER_VALUE = re.compile(r"^[\t\x20-\x7e]*$")


def parse_method(value: Any) -> str:
    if not isinstance(value, str) or value not in HTTP_METHODS:
        raise RequestError(f"Invalid HTTP method: {value!r}")
    return value


def parse_uri(value: Any) -> str:
    """Validate a URI and return its normalized string form."""
    if not isinstance(value, str) or not value:
        raise RequestError(f"Invalid URI: {value!r}")
    try:
        return str(httpx.URL(value))
    except httpx.InvalidURL as e:
        raise RequestError(f"Invalid URI {value!r}: {e}") from e


def parse_headers(value: Any) -> dict[str, str]:
    """Validate a header mapping.

    Names are lower-cased, so a later duplicate differing only in case
    replaces the earlier one.
    """
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise RequestError(f"Headers must be a mapping, got {type(value).__name__}")

    headers: dict[str, str] = {}
    for name, val in value.items():
        if not isinstance(name, str) or not _HEADER_NAME.match(name):
            raise RequestError(f"Invalid header name: {name!r}")
        if not isinstance(val, str) or not _HEADER_VALUE.match(val):
            raise RequestError(f"Invalid value for header {name!r}: {val!r}")
        headers[name.lower()] = val
    return headers


def parse_offset(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RequestError(f"Offset must be a non-negative integer, got {value!r}")
    return value


@dataclass(frozen=True)
class FetchRequest:
    """A single invocation: what to fetch and where to resume."""

    method: str
    uri: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    offset: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "FetchRequest":
        """Build a request from a decoded JSON payload.

        Raises:
            RequestError: the payload is not a mapping or a field is malformed.
        """
        if not isinstance(payload, Mapping):
            raise RequestError(f"Payload must be a mapping, got {type(payload).__name__}")
        if "method" not in payload:
            raise RequestError("Missing field: method")
        if "uri" not in payload:
            raise RequestError("Missing field: uri")

        return cls(
            method=parse_method(payload["method"]),
            uri=parse_uri(payload["uri"]),
            headers=MappingProxyType(parse_headers(payload.get("headers"))),
            offset=parse_offset(payload.get("offset")),
        )


@dataclass(frozen=True)
class FetchReply:
    """One page of encoded body; ``next`` is None once the body is exhausted."""

    data: str
    next: int | None = None

    @property
    def is_last(self) -> bool:
        return self.next is None

    def to_dict(self) -> dict:
        return {"data": self.data, "next": self.next}
