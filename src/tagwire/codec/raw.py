"""Schema-less inspection of wire data.

decode_raw() lists the top-level fields of a buffer without knowing its
schema, which is handy when reverse-engineering a payload or checking what
ended up in a message's unknown tail.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from ..exceptions import UnexpectedEndGroup
from .skip import skip_field
from .wire import WireReader, WireType


@dataclass(frozen=True)
class RawField:
    """One field found on the wire.

    Attributes:
        number: Field number
        wire_type: Wire type of the field
        value: Integer for varint and fixed fields, raw bytes for
            length-delimited payloads, and the complete encoded field
            (tags included) for groups
    """

    number: int
    wire_type: WireType
    value: Union[int, bytes]


def decode_raw(data: bytes | bytearray | memoryview) -> List[RawField]:
    """Decode the top-level fields of a buffer without a schema.

    Args:
        data: Wire data

    Returns:
        Fields in the order they appear

    Raises:
        DecodeError: If the data is malformed or truncated

    Example:
        >>> decode_raw(bytes.fromhex("0801 120178"))
        [RawField(number=1, wire_type=<WireType.VARINT: 0>, value=1), RawField(number=2, wire_type=<WireType.LENGTH_DELIMITED: 2>, value=b'x')]
    """
    reader = WireReader(data)
    fields: List[RawField] = []

    while not reader.at_end():
        start = reader.position
        number, wire_type = reader.read_tag()

        if wire_type == WireType.VARINT:
            value: Union[int, bytes] = reader.read_varint()
        elif wire_type == WireType.FIXED64:
            value = int.from_bytes(reader.read_fixed64(), "little")
        elif wire_type == WireType.FIXED32:
            value = int.from_bytes(reader.read_fixed32(), "little")
        elif wire_type == WireType.LENGTH_DELIMITED:
            value = bytes(reader.read_length_delimited())
        elif wire_type == WireType.START_GROUP:
            end = start + skip_field(reader.data, start)
            value = bytes(reader.data[start:end])
            reader.position = end
        else:
            raise UnexpectedEndGroup()

        fields.append(RawField(number=number, wire_type=WireType(wire_type), value=value))

    return fields
