"""Response dispatcher: decide per status class whether to decode a body or fail.

One table-driven rule covers every status class:

- UNKNOWN always fails with RequestErrorKind.UNKNOWN.
- With no configured action, SUCCESS decodes; CLIENT_ERROR fails BAD_REQUEST,
  SERVER_ERROR fails SERVER_ERROR, anything else fails UNKNOWN.
- StatusAction.FAIL raises the class's failure kind (UNKNOWN when it has none).
- StatusAction.DECODE decodes, whatever the class.

Any decoder exception surfaces as DecodingError. The caller supplies the
default decoder; a per-call custom decoder takes precedence over it.
"""
from __future__ import annotations

from typing import Any, TypeVar

from loguru import logger

from modern_networking.core import SERVICE_NAME
from modern_networking.domain.errors import DecodingError, RequestError, RequestErrorKind
from modern_networking.domain.models import StatusAction, StatusActionTable, StatusClass
from modern_networking.ports.decoder import ResponseDecoder

T = TypeVar("T")

_UNCONFIGURED_FAILURES: dict[StatusClass, RequestErrorKind] = {
    StatusClass.CLIENT_ERROR: RequestErrorKind.BAD_REQUEST,
    StatusClass.SERVER_ERROR: RequestErrorKind.SERVER_ERROR,
}


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).debug("")


def _fail(status_class: StatusClass, kind: RequestErrorKind, status_code: Any) -> RequestError:
    _log("response_failed", status_class=status_class.value, status_code=status_code, kind=kind.value)
    return RequestError.from_kind(kind)


def decode_body(shape: type[T] | Any, data: bytes, decoder: ResponseDecoder) -> T:
    try:
        return decoder.decode(shape, data)
    except Exception as exc:
        raise DecodingError(str(exc)) from exc


def resolve_action(
    status_class: StatusClass,
    status_actions: StatusActionTable | None,
) -> StatusAction | RequestErrorKind:
    """Return the action to take, or the error kind to raise, for `status_class`."""
    if status_class is StatusClass.UNKNOWN:
        return RequestErrorKind.UNKNOWN

    action = (status_actions or {}).get(status_class)
    if action is None:
        if status_class is StatusClass.SUCCESS:
            return StatusAction.DECODE
        return _UNCONFIGURED_FAILURES.get(status_class, RequestErrorKind.UNKNOWN)

    if action == StatusAction.DECODE:
        return StatusAction.DECODE
    return status_class.failure_kind or RequestErrorKind.UNKNOWN


def handle_response(
    shape: type[T] | Any,
    data: bytes,
    status_code: int | StatusClass,
    custom_decoder: ResponseDecoder | None = None,
    status_actions: StatusActionTable | None = None,
    *,
    default_decoder: ResponseDecoder,
) -> T:
    """Decode `data` as `shape` or raise the RequestError the status calls for."""
    status_class = (
        status_code if isinstance(status_code, StatusClass) else StatusClass.from_code(status_code)
    )
    outcome = resolve_action(status_class, status_actions)
    if isinstance(outcome, RequestErrorKind):
        raise _fail(status_class, outcome, status_code)

    decoder = custom_decoder if custom_decoder is not None else default_decoder
    value = decode_body(shape, data, decoder)
    _log("response_decoded", status_class=status_class.value, status_code=status_code)
    return value
