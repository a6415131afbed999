"""JSON envelope codec.

Every payload crossing the wire is wrapped as ``{"data": <payload>}``.
Semantic failures come back as ``{"error_message": "<text>"}``.

Decoding is two-pass: the body is parsed into an untyped document first,
then the ``data`` member is re-encoded and validated into the caller's
target type with a pydantic ``TypeAdapter``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ledger_client.errors import DecodeError, EncodeError

T = TypeVar("T")

DATA_KEY = "data"
ERROR_KEY = "error_message"


@lru_cache(maxsize=64)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _dumps(document: Any) -> bytes:
    return json.dumps(document, separators=(",", ":"), allow_nan=False).encode("utf-8")


def wrap(payload: Any) -> bytes:
    """Serialize ``{"data": payload}`` to compact JSON bytes.

    Raises
    ------
    EncodeError
        If the payload cannot be represented as JSON.
    """
    try:
        jsonable = to_jsonable_python(payload)
        return _dumps({DATA_KEY: jsonable})
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodeError(f"Unable to serialize request payload: {exc}") from exc


def unwrap(raw: bytes, target: type[T]) -> T:
    """Extract the ``data`` member of an envelope and validate it into *target*.

    Raises
    ------
    DecodeError
        If the body is not a JSON object with a ``data`` member, or the member
        does not conform to *target*.
    """
    try:
        document = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc

    if not isinstance(document, dict) or DATA_KEY not in document:
        raise DecodeError("Response body is not a data envelope")

    encoded = _dumps(document[DATA_KEY])
    try:
        return _adapter(target).validate_json(encoded)
    except ValidationError as exc:
        raise DecodeError(
            f"Response data does not match {getattr(target, '__name__', target)}: {exc}"
        ) from exc


def detect_error(raw: bytes) -> str | None:
    """Return the remote ``error_message`` if the body carries a non-empty one.

    Bodies that are empty, not JSON or not error-shaped yield ``None``.
    """
    try:
        document = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return None

    if not isinstance(document, dict):
        return None

    message = document.get(ERROR_KEY)
    if isinstance(message, str) and message:
        return message
    return None
