"""
Decoders turning raw response bodies into typed values.

The default JSONDecoder parses JSON and validates the result against the
requested type with a pydantic TypeAdapter, so `as_type` can be a pydantic
model, a dataclass, a TypedDict, or a plain container type.

Key strategies rewrite object keys before validation:
- "use_default_keys": keys are used as sent by the server
- "convert_from_snake_case": `decodable_value` becomes `decodableValue`
- any callable `str -> str`
"""

import json
from typing import Any
from typing import Callable
from typing import Protocol
from typing import TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError

from url_routing.exceptions import DecodingError

T = TypeVar("T")

USE_DEFAULT_KEYS = "use_default_keys"
CONVERT_FROM_SNAKE_CASE = "convert_from_snake_case"


class Decoder(Protocol):
    def decode(self, body: bytes, as_type: type[T]) -> T:
        """
        Decode `body` into an instance of `as_type`.

        Raises:
            DecodingError: If the body does not match the type
        """


def convert_from_snake_case(key: str) -> str:
    """
    Convert a snake_case key to camelCase.

    Leading and trailing underscores are kept, so `_private_key_` becomes
    `_privateKey_`. Keys without inner underscores are returned unchanged.
    """
    stripped = key.strip("_")
    if "_" not in stripped:
        return key
    leading = key[: len(key) - len(key.lstrip("_"))]
    trailing = key[len(key.rstrip("_")) :]
    first, *rest = [part for part in stripped.split("_") if part]
    return leading + first + "".join(part.capitalize() for part in rest) + trailing


def _convert_keys(value: Any, convert: Callable[[str], str]) -> Any:
    if isinstance(value, dict):
        return {
            convert(key) if isinstance(key, str) else key: _convert_keys(item, convert)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_convert_keys(item, convert) for item in value]
    return value


class JSONDecoder:
    """
    Decoder for JSON bodies.

    Args:
        key_strategy: "use_default_keys", "convert_from_snake_case" or a
            callable applied to every object key

    Example:
        decoder = JSONDecoder(key_strategy="convert_from_snake_case")
        user = decoder.decode(b'{"first_name": "Blob"}', User)
    """

    def __init__(self, key_strategy: str | Callable[[str], str] = USE_DEFAULT_KEYS):
        if callable(key_strategy):
            self._convert_key = key_strategy
        elif key_strategy == USE_DEFAULT_KEYS:
            self._convert_key = None
        elif key_strategy == CONVERT_FROM_SNAKE_CASE:
            self._convert_key = convert_from_snake_case
        else:
            raise ValueError(
                f"Unknown key strategy: {key_strategy}. "
                f"Available: {USE_DEFAULT_KEYS}, {CONVERT_FROM_SNAKE_CASE}"
            )
        self.key_strategy = key_strategy
        self._adapters: dict[Any, TypeAdapter] = {}

    def _adapter(self, as_type: Any) -> TypeAdapter:
        try:
            return self._adapters[as_type]
        except (KeyError, TypeError):
            adapter = TypeAdapter(as_type)
        try:
            self._adapters[as_type] = adapter
        except TypeError:
            pass  # unhashable type expression
        return adapter

    def decode(self, body: bytes, as_type: type[T]) -> T:
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as err:
            raise DecodingError(f"Response body is not valid JSON: {err}") from err

        if self._convert_key is not None:
            data = _convert_keys(data, self._convert_key)

        try:
            return self._adapter(as_type).validate_python(data)
        except ValidationError as err:
            raise DecodingError(
                f"Response body does not match {getattr(as_type, '__name__', as_type)}",
                details=err.errors(),
            ) from err
