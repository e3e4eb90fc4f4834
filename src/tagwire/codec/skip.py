"""Skipping of fields the schema does not recognize.

The decoder hands unrecognized fields to :func:`skip_field`, which consumes
exactly the bytes belonging to one field without interpreting them. The
consumed span is what ends up in a message's unknown tail.
"""

from __future__ import annotations

from ..exceptions import (
    NegativeOrInvalidLength,
    UnexpectedEndGroup,
    UnexpectedEndOfInput,
    UnknownWireType,
)
from .wire import MAX_LENGTH, WireReader, WireType, split_tag


def skip_field(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Consume one field starting at the tag located at ``offset``.

    Group-encoded fields are tracked with a depth counter: a start-group tag
    opens a group and the matching end-group tag closes it. Fields inside a
    group are consumed along with it.

    Args:
        data: Buffer holding the field
        offset: Offset of the field's tag

    Returns:
        Number of bytes the field occupies, tag included

    Raises:
        MalformedVarint: If a tag, value or length varint overflows 64 bits
        UnexpectedEndOfInput: If the field runs past the end of ``data``
        NegativeOrInvalidLength: If a length prefix is out of range
        UnexpectedEndGroup: If an end-group tag closes a group never opened
        UnknownWireType: If a tag carries wire type 6 or 7

    Example:
        >>> skip_field(bytes.fromhex("1a03616263 08 01"))
        5
    """
    reader = WireReader(data, offset)
    depth = 0
    while not reader.at_end():
        _field_number, wire_type = split_tag(reader.read_varint())

        if wire_type == WireType.VARINT:
            reader.read_varint()
        elif wire_type == WireType.FIXED64:
            reader.read_fixed64()
        elif wire_type == WireType.LENGTH_DELIMITED:
            length = reader.read_varint()
            if reader.position + length > MAX_LENGTH:
                raise NegativeOrInvalidLength()
            if length > reader.remaining():
                raise UnexpectedEndOfInput()
            reader.position += length
        elif wire_type == WireType.START_GROUP:
            depth += 1
        elif wire_type == WireType.END_GROUP:
            if depth == 0:
                raise UnexpectedEndGroup()
            depth -= 1
        elif wire_type == WireType.FIXED32:
            reader.read_fixed32()
        else:
            raise UnknownWireType(wire_type)

        if depth == 0:
            return reader.position - offset

    # Ran out of data inside an open group (or with nothing to skip)
    raise UnexpectedEndOfInput()
