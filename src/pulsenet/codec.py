"""JSON body codec built on Pydantic.

Request bodies are serialised with :func:`pydantic_core.to_json`, which
understands Pydantic models, dataclasses, and plain containers alike.
Response bodies are validated against the caller's expected type with a
:class:`pydantic.TypeAdapter`, so ``decode_body(data, User)``,
``decode_body(data, list[User])`` and ``decode_body(data, dict[str, int])``
all work the same way.  ``Any`` yields the parsed JSON unchanged.

An empty body (a HEAD response, a 204) decodes as JSON ``null``: it
succeeds for ``Any`` and ``Optional[...]`` types and fails for anything
that does not accept ``None``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from pulsenet.exceptions import DecodingError, EncodingError


def encode_body(value: Any) -> bytes:
    """Serialise *value* to JSON bytes.

    Raises:
        EncodingError: If *value* contains something JSON cannot represent.
    """
    try:
        return to_json(value)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodingError(str(exc)) from exc


def decode_body(content: bytes, response_type: Any = Any) -> Any:
    """Parse *content* as JSON and validate it as *response_type*.

    Empty *content* is validated as ``None``.

    Raises:
        DecodingError: On malformed JSON or a schema mismatch.
    """
    adapter = _adapter(response_type)
    try:
        if not content:
            return adapter.validate_python(None)
        return adapter.validate_json(content)
    except ValidationError as exc:
        raise DecodingError(str(exc)) from exc


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)
