"""Binary decoder for Pydantic messages.

This module provides the decode() function that converts tag-based wire data
back to a Pydantic message instance.

The decoder makes a single forward pass:

- ReadingTag: read a tag varint (end-group here is an error)
- DispatchingField: the field number is in the schema; check the wire type
  and decode the value
- SkippingUnknown: the field number is not in the schema; consume the field
  and keep its bytes in the unknown tail
- Done: the cursor reached the end of the buffer exactly

Any error aborts the whole decode. No partially built message is returned.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import (
    DecodeError,
    IllegalTag,
    UnexpectedEndGroup,
    UnknownWireType,
    WireTypeMismatch,
)
from ..log import get_logger
from .scalars import from_varint, unpack_fixed
from .schema import UNKNOWN_FIELDS, FieldKind, FieldSchema, MessageSchema
from .skip import skip_field
from .wire import MAX_FIELD_NUMBER, WireReader, WireType, split_tag

T = TypeVar("T", bound=BaseModel)

logger = get_logger(__name__)


def decode(
    message_class: type[T], data: bytes | bytearray | memoryview, *, config: Optional[CodecConfig] = None
) -> T:
    """Decode wire data to a Pydantic message.

    Fields may appear in any order. A singular scalar that appears more than
    once takes the last value; a singular message that appears more than once
    is merged; repeated fields accumulate. Repeated numeric fields accept both
    packed and unpacked encodings.

    Args:
        message_class: Pydantic message class to decode to
        data: Binary data to decode
        config: Codec configuration (defaults to CodecConfig())

    Returns:
        Decoded message instance

    Raises:
        SchemaError: If message schema is invalid
        DecodeError: If data is truncated, malformed, or doesn't match schema

    Examples:
        ```python
        from tagwire import decode

        router = decode(Router, data)
        print(router.start_child_span, router.strict_check_headers)
        ```
    """
    if config is None:
        config = DEFAULT_CONFIG

    schema = MessageSchema.from_model(message_class)
    values = _decode_fields(schema, memoryview(data), config, depth=0)
    return _build(schema, values)


def _decode_fields(
    schema: MessageSchema,
    data: memoryview,
    config: CodecConfig,
    depth: int,
    values: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Decode the fields of one message into a dict of raw values.

    Nested messages are kept as dicts until _build, so that repeated
    occurrences of a message field can be merged.
    """
    if depth > config.max_depth:
        raise DecodeError(f"Message nesting exceeds max_depth={config.max_depth}")

    if values is None:
        values = {}
    unknown = bytearray(values.get(UNKNOWN_FIELDS, b""))
    log = logger.new(message=schema.model_class.__name__)

    reader = WireReader(data)
    while not reader.at_end():
        start = reader.position
        field_number, wire_type = split_tag(reader.read_varint())
        if wire_type == WireType.END_GROUP:
            raise UnexpectedEndGroup(
                f"wire type end group for non-group in {schema.model_class.__name__}"
            )
        if field_number <= 0 or field_number > MAX_FIELD_NUMBER:
            raise IllegalTag(field_number, wire_type)
        if wire_type > WireType.FIXED32:
            raise UnknownWireType(wire_type)

        field_schema = schema.by_number.get(field_number)
        if field_schema is None:
            end = start + skip_field(data, start)
            if config.preserve_unknown:
                unknown += data[start:end]
                log.debug("preserving unknown field", field_number=field_number, wire_type=wire_type)
            else:
                log.debug("dropping unknown field", field_number=field_number, wire_type=wire_type)
            reader.position = end
            continue

        _decode_field(field_schema, wire_type, reader, values, config, depth)

    if unknown:
        values[UNKNOWN_FIELDS] = bytes(unknown)
    return values


def _decode_field(
    field_schema: FieldSchema,
    wire_type: int,
    reader: WireReader,
    values: Dict[str, Any],
    config: CodecConfig,
    depth: int,
) -> None:
    """Decode one occurrence of a recognized field into ``values``."""
    name = field_schema.name

    if field_schema.repeated and field_schema.packable and wire_type == WireType.LENGTH_DELIMITED:
        items = values.setdefault(name, [])
        packed = WireReader(reader.read_length_delimited())
        while not packed.at_end():
            items.append(_read_scalar(field_schema, packed))
        return

    if wire_type != field_schema.wire_type:
        raise WireTypeMismatch(name, wire_type)

    if field_schema.kind is FieldKind.MESSAGE:
        assert field_schema.message_type is not None
        sub_schema = MessageSchema.from_model(field_schema.message_type)
        span = reader.read_length_delimited()
        if field_schema.repeated:
            values.setdefault(name, []).append(_decode_fields(sub_schema, span, config, depth + 1))
        else:
            values[name] = _decode_fields(sub_schema, span, config, depth + 1, values.get(name))
        return

    value = _read_scalar(field_schema, reader)
    if field_schema.repeated:
        values.setdefault(name, []).append(value)
    else:
        values[name] = value


def _read_scalar(field_schema: FieldSchema, reader: WireReader) -> Any:
    """Read one non-message value."""
    kind = field_schema.kind

    if kind is FieldKind.STRING:
        raw = reader.read_length_delimited()
        try:
            return str(raw, "utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Field {field_schema.name}: invalid UTF-8 encoding: {e}") from e
    if kind is FieldKind.BYTES:
        return bytes(reader.read_length_delimited())
    if field_schema.wire_type == WireType.VARINT:
        return from_varint(field_schema, reader.read_varint())
    if field_schema.wire_type == WireType.FIXED64:
        return unpack_fixed(field_schema, reader.read_fixed64())
    return unpack_fixed(field_schema, reader.read_fixed32())


def _build(schema: MessageSchema, values: Dict[str, Any]) -> Any:
    """Turn decoded raw values into a message instance, nested messages first."""
    for field_schema in schema.fields:
        if field_schema.kind is not FieldKind.MESSAGE or field_schema.name not in values:
            continue
        assert field_schema.message_type is not None
        sub_schema = MessageSchema.from_model(field_schema.message_type)
        raw = values[field_schema.name]
        if field_schema.repeated:
            values[field_schema.name] = [_build(sub_schema, item) for item in raw]
        else:
            values[field_schema.name] = _build(sub_schema, raw)

    try:
        return schema.model_class(**values)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {schema.model_class.__name__}: {e}") from e
