"""Request failure taxonomy.

RequestError is a closed set of four kinds. Each kind owns its user-facing
message; callers never build messages themselves.
"""
from __future__ import annotations

from enum import Enum


class RequestErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    SERVER_ERROR = "server_error"
    DECODING_ERROR = "decoding_error"
    UNKNOWN = "unknown"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: dict[RequestErrorKind, str] = {
    RequestErrorKind.BAD_REQUEST: (
        "Something is wrong with your request. Please check everything is correct and try again."
    ),
    RequestErrorKind.SERVER_ERROR: "There was a server error when making the request.",
    RequestErrorKind.DECODING_ERROR: "Error decoding JSON",
    RequestErrorKind.UNKNOWN: "An unknown error occurred when making your request",
}


class RequestError(Exception):
    """Base for classified request failures. Subclasses pin the kind."""

    kind: RequestErrorKind = RequestErrorKind.UNKNOWN

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        text = self.kind.message if not detail else f"{self.kind.message}: {detail}"
        super().__init__(text)

    @property
    def message(self) -> str:
        return self.kind.message

    @staticmethod
    def from_kind(kind: RequestErrorKind, detail: str | None = None) -> "RequestError":
        return _ERROR_TYPES[kind](detail)


class BadRequestError(RequestError):
    kind = RequestErrorKind.BAD_REQUEST


class ServerError(RequestError):
    kind = RequestErrorKind.SERVER_ERROR


class DecodingError(RequestError):
    kind = RequestErrorKind.DECODING_ERROR


class UnknownRequestError(RequestError):
    kind = RequestErrorKind.UNKNOWN


_ERROR_TYPES: dict[RequestErrorKind, type[RequestError]] = {
    RequestErrorKind.BAD_REQUEST: BadRequestError,
    RequestErrorKind.SERVER_ERROR: ServerError,
    RequestErrorKind.DECODING_ERROR: DecodingError,
    RequestErrorKind.UNKNOWN: UnknownRequestError,
}
