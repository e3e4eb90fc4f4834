"""Encoded size calculation.

The size calculator mirrors the encoder's field-inclusion rules exactly. The
encoder allocates its buffer from this result, so any divergence surfaces as
an EncodeError rather than a silently wrong buffer.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError
from .scalars import pack_fixed, to_varint
from .schema import UNKNOWN_FIELDS, FieldKind, FieldSchema, MessageSchema
from .wire import WireType, varint_size

# Sizes of nested messages computed during one encode call, keyed by id()
SizeCache = Dict[int, int]


def message_size(
    message: BaseModel,
    cache: Optional[SizeCache] = None,
    config: CodecConfig = DEFAULT_CONFIG,
    depth: int = 0,
) -> int:
    """Calculate the encoded size of a message in bytes.

    Args:
        message: Message instance
        cache: Optional dict receiving the size of every nested message
        config: Codec configuration (for the nesting limit)
        depth: Current nesting depth

    Returns:
        Encoded size in bytes

    Raises:
        EncodeError: If a value is invalid or nesting is too deep
    """
    if depth > config.max_depth:
        raise EncodeError(f"Message nesting exceeds max_depth={config.max_depth}")

    if cache is None:
        cache = {}

    schema = MessageSchema.from_model(type(message))
    size = 0
    for field_schema in schema.fields:
        size += field_size(field_schema, getattr(message, field_schema.name), cache, config, depth)

    size += len(getattr(message, UNKNOWN_FIELDS, b""))
    cache[id(message)] = size
    return size


def field_size(
    field_schema: FieldSchema,
    value: Any,
    cache: SizeCache,
    config: CodecConfig = DEFAULT_CONFIG,
    depth: int = 0,
) -> int:
    """Calculate the bytes one field contributes, tag(s) included."""
    if field_schema.repeated:
        if not value:
            return 0
        if field_schema.packed:
            payload = sum(_value_size(field_schema, item, cache, config, depth) for item in value)
            return _tag_size(field_schema, WireType.LENGTH_DELIMITED) + varint_size(payload) + payload
        tag_size = _tag_size(field_schema)
        return sum(
            tag_size + _framed_size(field_schema, item, cache, config, depth) for item in value
        )

    if field_schema.kind is FieldKind.MESSAGE:
        # Present messages are always written, even when empty
        if value is None:
            return 0
    elif field_schema.is_default(value):
        return 0

    return _tag_size(field_schema) + _framed_size(field_schema, value, cache, config, depth)


def _tag_size(field_schema: FieldSchema, wire_type: Optional[int] = None) -> int:
    return varint_size(field_schema.tag(wire_type))


def _framed_size(
    field_schema: FieldSchema, value: Any, cache: SizeCache, config: CodecConfig, depth: int
) -> int:
    """Size of one value with its length prefix, if it has one."""
    size = _value_size(field_schema, value, cache, config, depth)
    if field_schema.wire_type == WireType.LENGTH_DELIMITED:
        return varint_size(size) + size
    return size


def _value_size(
    field_schema: FieldSchema, value: Any, cache: SizeCache, config: CodecConfig, depth: int
) -> int:
    """Size of one value's payload, without tag or length prefix."""
    kind = field_schema.kind
    wire_type = field_schema.wire_type

    if kind is FieldKind.MESSAGE:
        if not isinstance(value, BaseModel):
            raise EncodeError(
                f"Field {field_schema.name}: expected message, got {type(value).__name__}"
            )
        return message_size(value, cache, config, depth + 1)
    if kind is FieldKind.STRING:
        if not isinstance(value, str):
            raise EncodeError(
                f"Field {field_schema.name}: expected str, got {type(value).__name__}"
            )
        return len(value.encode("utf-8"))
    if kind is FieldKind.BYTES:
        if not isinstance(value, (bytes, bytearray)):
            raise EncodeError(
                f"Field {field_schema.name}: expected bytes, got {type(value).__name__}"
            )
        return len(value)
    if wire_type == WireType.VARINT:
        return varint_size(to_varint(field_schema, value))
    return len(pack_fixed(field_schema, value))
