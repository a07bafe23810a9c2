"""ResponseDecoder implementation using pydantic TypeAdapter."""
from __future__ import annotations

import json
import re
from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from modern_networking.ports.decoder import ResponseDecodeError

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class KeyDecodingStrategy(str, Enum):
    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_FROM_CAMEL_CASE = "convert_from_camel_case"


def camel_to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _convert_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            camel_to_snake(k) if isinstance(k, str) else k: _convert_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [_convert_keys(v) for v in value]
    return value


@lru_cache(maxsize=256)
def _cached_adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def type_adapter_for(shape: Any) -> TypeAdapter:
    try:
        return _cached_adapter(shape)
    except TypeError:
        # unhashable shape descriptors skip the cache
        return TypeAdapter(shape)


class PydanticResponseDecoder:
    """Decodes JSON bodies into any shape pydantic can validate.

    Holds only immutable configuration, so a single instance is safe to share
    between concurrent requests.
    """

    def __init__(
        self,
        *,
        strict: bool = False,
        key_strategy: KeyDecodingStrategy = KeyDecodingStrategy.USE_DEFAULT_KEYS,
    ) -> None:
        self._strict = strict
        self._key_strategy = key_strategy

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def key_strategy(self) -> KeyDecodingStrategy:
        return self._key_strategy

    def decode(self, shape: Any, data: bytes) -> Any:
        if not data:
            raise ResponseDecodeError("empty response body")
        adapter = type_adapter_for(shape)
        try:
            if self._key_strategy is KeyDecodingStrategy.USE_DEFAULT_KEYS:
                return adapter.validate_json(data, strict=self._strict)
            payload = _convert_keys(json.loads(data))
            return adapter.validate_python(payload, strict=self._strict)
        except (ValidationError, ValueError) as exc:
            raise ResponseDecodeError(str(exc)) from exc


DEFAULT_DECODER = PydanticResponseDecoder()
