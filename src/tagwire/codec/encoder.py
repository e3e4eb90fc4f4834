"""Binary encoder for Pydantic messages.

This module provides the encode() function that converts a message instance
to the tag-based wire format.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError
from ..log import get_logger
from .scalars import pack_fixed, to_varint
from .schema import UNKNOWN_FIELDS, FieldKind, FieldSchema, MessageSchema
from .sizer import SizeCache, message_size
from .wire import WireType, WireWriter, encode_varint

logger = get_logger(__name__)


def encode(message: BaseModel, *, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a Pydantic message to the tag-based wire format.

    The total size is computed first and a buffer of exactly that size is
    allocated once. Fields are then written in ascending field-number order,
    each preceded by its tag. Scalar fields holding their zero value are
    omitted; message fields are written whenever they are not None. Raw
    bytes of fields that were not recognized when the message was decoded
    are appended verbatim after the known fields.

    Encoding never modifies the message.

    Args:
        message: Pydantic message instance to encode
        config: Codec configuration (defaults to CodecConfig())

    Returns:
        Encoded bytes

    Raises:
        SchemaError: If message schema is invalid
        EncodeError: If a field value is invalid or out of range

    Examples:
        ```python
        from tagwire import BaseMessage, BoolField, RepeatedField, encode

        class Flags(BaseMessage):
            flag_a: bool = BoolField(1)
            items: list[str] = RepeatedField(2)

        data = encode(Flags(flag_a=True, items=["x", "yy"]))
        assert data == bytes.fromhex("08 01 12 01 78 12 02 79 79")
        ```
    """
    if config is None:
        config = DEFAULT_CONFIG

    sizes: SizeCache = {}
    size = message_size(message, sizes, config)

    writer = WireWriter(size)
    _write_message(writer, message, sizes)
    encoded = writer.to_bytes()

    max_bytes = getattr(type(message), "tagwire_max_bytes", None)
    if max_bytes is not None and len(encoded) > max_bytes:
        raise EncodeError(
            f"Encoded message size ({len(encoded)} bytes) exceeds tagwire_max_bytes={max_bytes}"
        )

    logger.debug("message encoded", message=type(message).__name__, size=len(encoded))
    return encoded


def _write_message(writer: WireWriter, message: BaseModel, sizes: SizeCache) -> None:
    """Write the fields of a message (sizes must already be cached)."""
    schema = MessageSchema.from_model(type(message))

    for field_schema in schema.fields:
        _write_field(writer, field_schema, getattr(message, field_schema.name), sizes)

    unknown = getattr(message, UNKNOWN_FIELDS, b"")
    if unknown:
        writer.write_bytes(unknown)


def _write_field(writer: WireWriter, field_schema: FieldSchema, value: Any, sizes: SizeCache) -> None:
    """Write a single field, or nothing when it is omitted.

    The inclusion rules here must match sizer.field_size.
    """
    if field_schema.repeated:
        if not value:
            return
        if field_schema.packed:
            payload = b"".join(_scalar_payload(field_schema, item) for item in value)
            writer.write_tag(field_schema.number, WireType.LENGTH_DELIMITED)
            writer.write_length_delimited(payload)
            return
        for item in value:
            writer.write_tag(field_schema.number, field_schema.wire_type)
            _write_value(writer, field_schema, item, sizes)
        return

    if field_schema.kind is FieldKind.MESSAGE:
        if value is None:
            return
    elif field_schema.is_default(value):
        return

    writer.write_tag(field_schema.number, field_schema.wire_type)
    _write_value(writer, field_schema, value, sizes)


def _write_value(writer: WireWriter, field_schema: FieldSchema, value: Any, sizes: SizeCache) -> None:
    """Write one value's payload (with length prefix where the wire type has one)."""
    kind = field_schema.kind

    if kind is FieldKind.MESSAGE:
        writer.write_varint(sizes[id(value)])
        _write_message(writer, value, sizes)
    elif kind is FieldKind.STRING:
        writer.write_length_delimited(value.encode("utf-8"))
    elif kind is FieldKind.BYTES:
        writer.write_length_delimited(bytes(value))
    elif field_schema.wire_type == WireType.VARINT:
        writer.write_varint(to_varint(field_schema, value))
    else:
        writer.write_bytes(pack_fixed(field_schema, value))


def _scalar_payload(field_schema: FieldSchema, value: Any) -> bytes:
    """Return the payload of one numeric value as bytes (used for packed fields)."""
    if field_schema.wire_type == WireType.VARINT:
        return encode_varint(to_varint(field_schema, value))
    return pack_fixed(field_schema, value)
