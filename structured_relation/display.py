"""
Display helper turning indexed values back into records.

A multi-valued index field comes back from the search engine as a list of
encoded values; a single value field as one encoded string. Templates call
`parse` to get plain mappings.
"""

from __future__ import annotations

from typing import Any, List, Union

from structured_relation import codec
from structured_relation.domain.models import Record


def parse(value: Any, multi_value: bool = True) -> Union[Record, List[Record], str]:
    """
    Decode an indexed value.

    Parameters
    ----------
    value : str | list[str] | None
        The stored value. For multi-value fields either the list returned by
        the search engine or the container string rendered at indexing time.
    multi_value : bool
        Whether the value comes from a multi-valued field.

    Returns
    -------
    list[dict] | dict | str
        Decoded records; ``[]`` or ``""`` when the value is empty.

    Raises
    ------
    DecodeError
        If any value was not produced by the codec.
    """
    if not value:
        return [] if multi_value else ""

    if multi_value:
        values = codec.unwrap(value) if isinstance(value, str) else list(value)
        return [codec.decode(item) for item in values]
    return codec.decode(value)


__all__ = ["parse"]
