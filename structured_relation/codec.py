"""
Binary-safe codec for related records stored in search index fields.

A record is serialized as a JSON object (never an array, so an empty or
single-field record cannot be confused with a list) and then base64 encoded,
so the stored value is always a printable, storage-safe string.

Multi-valued fields hold a container: a JSON array of encoded values, which
the indexing engine splits back into one index value per related record.
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Iterable, List, Mapping
from uuid import UUID

from structured_relation.domain.models import Record
from structured_relation.exceptions import DecodeError


def _json_default(value: Any) -> Any:
    """Column types psycopg returns that json cannot write natively."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(record: Mapping[str, Any]) -> str:
    """
    Encode one projected record.

    Decimal and UUID columns are written as strings. Temporal columns use
    ISO 8601 and binary columns base64.
    """
    payload = json.dumps(
        dict(record), ensure_ascii=False, separators=(",", ":"), default=_json_default
    )
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode(value: str) -> Record:
    """
    Decode a value produced by :func:`encode`.

    Raises
    ------
    DecodeError
        If the value is not strict base64, not UTF-8 JSON, or not a JSON object.
    """
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, TypeError, ValueError) as exc:
        raise DecodeError(
            "Value must be a valid base64 string encoded from a "
            "SOLR_STRUCTURED_RELATION field during indexing."
        ) from exc

    try:
        decoded = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"Encoded value does not hold a JSON document: {exc}") from exc

    if not isinstance(decoded, dict):
        raise DecodeError(f"Encoded value holds a {type(decoded).__name__}, expected an object")
    return decoded


def wrap(values: Iterable[str]) -> str:
    """Serialize encoded values into a multi-value container, keeping order."""
    return json.dumps(list(values))


def unwrap(container: str) -> List[str]:
    """Split a container produced by :func:`wrap` back into encoded values."""
    try:
        values = json.loads(container)
    except (TypeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"Invalid multi-value container: {exc}") from exc

    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise DecodeError("Multi-value container must be a list of strings")
    return values


__all__ = ["encode", "decode", "wrap", "unwrap"]
