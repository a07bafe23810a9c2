"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from modern_networking.constants import HTTP_VERB
from modern_networking.domain.errors import RequestErrorKind

# A URL string, or an Enum member whose value is one.
Endpoint = Union[str, Enum]


def resolve_endpoint(endpoint: Endpoint) -> str:
    value = endpoint.value if isinstance(endpoint, Enum) else endpoint
    if not isinstance(value, str):
        raise TypeError(f"endpoint must resolve to a str, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Get:
    """GET with optional ordered query items."""

    query_items: Sequence[tuple[str, Any]] | None = None

    def __post_init__(self) -> None:
        if self.query_items is not None:
            object.__setattr__(
                self, "query_items", tuple((str(k), v) for k, v in self.query_items)
            )

    @property
    def verb(self) -> str:
        return HTTP_VERB.GET


@dataclass(frozen=True)
class Post:
    """POST with an optional form body (string keys, string-convertible values)."""

    body: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.body is not None:
            object.__setattr__(self, "body", dict(self.body))

    @property
    def verb(self) -> str:
        return HTTP_VERB.POST


HTTPMethod = Union[Get, Post]


@dataclass(frozen=True)
class OutboundRequest:
    """Fully formed request handed to the transport. Built fresh per call."""

    url: str
    method: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


class StatusClass(Enum):
    INFO = "info"
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: Any) -> "StatusClass":
        # bool is an int subclass but never a status code
        if not isinstance(code, int) or isinstance(code, bool):
            return cls.UNKNOWN
        if 100 <= code <= 199:
            return cls.INFO
        if 200 <= code <= 299:
            return cls.SUCCESS
        if 300 <= code <= 399:
            return cls.REDIRECT
        if 400 <= code <= 499:
            return cls.CLIENT_ERROR
        if 500 <= code <= 599:
            return cls.SERVER_ERROR
        return cls.UNKNOWN

    @property
    def failure_kind(self) -> RequestErrorKind | None:
        """Kind raised when a FAIL action is configured for this class."""
        return _FAILURE_KINDS[self]


_FAILURE_KINDS: dict[StatusClass, RequestErrorKind | None] = {
    StatusClass.INFO: RequestErrorKind.UNKNOWN,
    StatusClass.SUCCESS: None,
    StatusClass.REDIRECT: RequestErrorKind.UNKNOWN,
    StatusClass.CLIENT_ERROR: RequestErrorKind.DECODING_ERROR,
    StatusClass.SERVER_ERROR: RequestErrorKind.SERVER_ERROR,
    StatusClass.UNKNOWN: RequestErrorKind.UNKNOWN,
}


class StatusAction(str, Enum):
    """What to do with a response of a given status class."""

    FAIL = "fail"
    DECODE = "decode"


StatusActionTable = Mapping[StatusClass, StatusAction]
