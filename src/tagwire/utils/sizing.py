"""Message size calculation utilities.

This module provides functions to calculate the encoded size of messages
without actually encoding them.
"""

from __future__ import annotations

from pydantic import BaseModel

from ..codec.schema import UNKNOWN_FIELDS, MessageSchema
from ..codec.sizer import SizeCache, field_size, message_size


def encoded_size(message: BaseModel) -> int:
    """Calculate the encoded size of a message in bytes.

    The result always equals ``len(encode(message))``: it applies the same
    inclusion rules as the encoder (zero-valued scalars omitted, present
    messages always included) and counts the unknown tail.

    Args:
        message: Message instance to calculate size for

    Returns:
        Size in bytes

    Raises:
        EncodeError: If a field value is invalid or out of range

    Example:
        >>> class Flags(BaseMessage):
        ...     flag_a: bool = BoolField(1)
        ...     items: list[str] = RepeatedField(2)
        >>> encoded_size(Flags(flag_a=True, items=["x", "yy"]))
        9
        >>> encoded_size(Flags())
        0
    """
    return message_size(message)


def field_sizes(message: BaseModel) -> dict[str, int]:
    """Get the encoded size in bytes of each field in a message.

    Omitted fields report 0. The unknown tail, if any, is reported under
    ``unknown_fields``.

    Args:
        message: Message instance to analyze

    Returns:
        Dictionary mapping field names to their size in bytes, tags included

    Example:
        >>> field_sizes(Flags(flag_a=True, items=["x", "yy"]))
        {'flag_a': 2, 'items': 7}
    """
    schema = MessageSchema.from_model(type(message))
    cache: SizeCache = {}

    sizes = {
        field.name: field_size(field, getattr(message, field.name), cache) for field in schema.fields
    }
    unknown = getattr(message, UNKNOWN_FIELDS, b"")
    if unknown:
        sizes[UNKNOWN_FIELDS] = len(unknown)
    return sizes
