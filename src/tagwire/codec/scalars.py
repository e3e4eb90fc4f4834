"""Conversion of scalar field values to and from their wire representation.

Varint kinds travel as unsigned 64-bit integers; fixed kinds travel as 4 or
8 little-endian bytes. Both the size calculator and the encoder go through
:func:`to_varint` and :func:`pack_fixed`, so range errors surface during the
size pass, before any buffer is allocated.
"""

from __future__ import annotations

import enum
import struct
from typing import Any

from ..exceptions import DecodeError, EncodeError
from .schema import FieldKind, FieldSchema
from .wire import MASK32, MASK64, zigzag_decode, zigzag_encode

_INT_RANGES = {
    FieldKind.INT32: (-(1 << 31), (1 << 31) - 1),
    FieldKind.INT64: (-(1 << 63), (1 << 63) - 1),
    FieldKind.UINT32: (0, MASK32),
    FieldKind.UINT64: (0, MASK64),
    FieldKind.SINT32: (-(1 << 31), (1 << 31) - 1),
    FieldKind.SINT64: (-(1 << 63), (1 << 63) - 1),
    FieldKind.ENUM: (-(1 << 31), (1 << 31) - 1),
    FieldKind.FIXED32: (0, MASK32),
    FieldKind.FIXED64: (0, MASK64),
    FieldKind.SFIXED32: (-(1 << 31), (1 << 31) - 1),
    FieldKind.SFIXED64: (-(1 << 63), (1 << 63) - 1),
}

_FIXED_FORMATS = {
    FieldKind.FIXED32: "<I",
    FieldKind.SFIXED32: "<i",
    FieldKind.FLOAT: "<f",
    FieldKind.FIXED64: "<Q",
    FieldKind.SFIXED64: "<q",
    FieldKind.DOUBLE: "<d",
}


def _check_int(field_schema: FieldSchema, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(
            f"Field {field_schema.name}: expected int, got {type(value).__name__}"
        )
    low, high = _INT_RANGES[field_schema.kind]
    if value < low or value > high:
        raise EncodeError(
            f"Field {field_schema.name}: value {value} out of bounds for "
            f"{field_schema.kind.value} [{low}, {high}]"
        )
    return value


def to_varint(field_schema: FieldSchema, value: Any) -> int:
    """Convert a varint-kind value to the unsigned integer written on the wire.

    Raises:
        EncodeError: If the value has the wrong type or is out of range
    """
    kind = field_schema.kind

    if kind is FieldKind.BOOL:
        if not isinstance(value, bool):
            raise EncodeError(
                f"Field {field_schema.name}: expected bool, got {type(value).__name__}"
            )
        return 1 if value else 0

    if kind is FieldKind.ENUM:
        if isinstance(value, enum.Enum):
            value = value.value
        return _check_int(field_schema, value) & MASK64

    value = _check_int(field_schema, value)
    if kind in (FieldKind.SINT32, FieldKind.SINT64):
        return zigzag_encode(value)
    # int32/int64 negatives are sign-extended to 64 bits
    return value & MASK64


def from_varint(field_schema: FieldSchema, raw: int) -> Any:
    """Convert an unsigned wire integer back to a field value.

    Raises:
        DecodeError: If a closed enum field holds a value with no matching member
    """
    kind = field_schema.kind

    if kind is FieldKind.BOOL:
        return raw != 0
    if kind is FieldKind.UINT64:
        return raw
    if kind is FieldKind.UINT32:
        return raw & MASK32
    if kind is FieldKind.SINT64:
        return zigzag_decode(raw)
    if kind is FieldKind.SINT32:
        return zigzag_decode(raw & MASK32)
    if kind is FieldKind.INT64:
        return _signed(raw, 64)

    # int32 and enum keep the low 32 bits
    value = _signed(raw & MASK32, 32)
    if kind is FieldKind.ENUM:
        assert field_schema.enum_type is not None
        try:
            return field_schema.enum_type(value)
        except ValueError as err:
            if field_schema.open_enum:
                return value
            raise DecodeError(
                f"Field {field_schema.name}: invalid enum value {value} "
                f"for {field_schema.enum_type.__name__}"
            ) from err
    return value


def _signed(value: int, bits: int) -> int:
    if value >> (bits - 1):
        return value - (1 << bits)
    return value


def pack_fixed(field_schema: FieldSchema, value: Any) -> bytes:
    """Pack a fixed-width value as little-endian bytes.

    Raises:
        EncodeError: If the value has the wrong type or is out of range
    """
    kind = field_schema.kind
    if kind in (FieldKind.FLOAT, FieldKind.DOUBLE):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError(
                f"Field {field_schema.name}: expected float, got {type(value).__name__}"
            )
        try:
            return struct.pack(_FIXED_FORMATS[kind], value)
        except (OverflowError, struct.error) as err:
            raise EncodeError(
                f"Field {field_schema.name}: value {value} does not fit a {kind.value}"
            ) from err
    return struct.pack(_FIXED_FORMATS[kind], _check_int(field_schema, value))


def unpack_fixed(field_schema: FieldSchema, raw: bytes) -> Any:
    """Unpack little-endian bytes read from the wire."""
    (value,) = struct.unpack(_FIXED_FORMATS[field_schema.kind], raw)
    return value
