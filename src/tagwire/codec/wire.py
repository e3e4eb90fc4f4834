"""Wire-level primitives: tags, varints and bounded buffers.

This module provides the low-level framing used by every field on the wire:

- Each field is preceded by a tag varint ``(field_number << 3) | wire_type``.
- Varints are little-endian base-128, 7 payload bits per byte, with the
  continuation bit in the high bit.
- Length-delimited payloads are ``varint(length) || length bytes``.
- Fixed-width payloads are 4 or 8 little-endian bytes.
"""

from __future__ import annotations

import enum

from ..exceptions import (
    EncodeError,
    IllegalTag,
    MalformedVarint,
    NegativeOrInvalidLength,
    UnexpectedEndOfInput,
    UnknownWireType,
)

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1

# Largest payload end offset a decoder accepts (signed 64-bit)
MAX_LENGTH = (1 << 63) - 1

MAX_FIELD_NUMBER = (1 << 29) - 1


class WireType(enum.IntEnum):
    """3-bit code selecting how a field's payload is framed."""

    VARINT = 0
    FIXED64 = 1
    LENGTH_DELIMITED = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


def make_tag(field_number: int, wire_type: int) -> int:
    """Combine a field number and wire type into a tag value."""
    return (field_number << 3) | wire_type


def split_tag(tag: int) -> tuple[int, int]:
    """Split a tag value into ``(field_number, wire_type)``."""
    return tag >> 3, tag & 0x7


def varint_size(value: int) -> int:
    """Return the number of bytes in the minimal varint encoding of ``value``.

    Negative values are measured as their 64-bit two's complement, so they
    always take 10 bytes. The ``| 1`` makes 0 cost one byte.

    Example:
        >>> [varint_size(v) for v in (0, 127, 128, 16384)]
        [1, 1, 2, 3]
    """
    return (((value & MASK64) | 1).bit_length() + 6) // 7


def zigzag_encode(value: int) -> int:
    """Map a signed 64-bit integer onto an unsigned one (0, -1, 1, -2 -> 0, 1, 2, 3)."""
    return ((value << 1) ^ (value >> 63)) & MASK64


def zigzag_decode(value: int) -> int:
    """Inverse of :func:`zigzag_encode`."""
    return (value >> 1) ^ -(value & 1)


def zigzag_varint_size(value: int) -> int:
    """Return the varint size of a zigzag-encoded signed integer."""
    return varint_size(zigzag_encode(value))


def encode_varint(value: int) -> bytes:
    """Encode an integer as a varint.

    Negative values are encoded as their 64-bit two's complement.
    """
    value &= MASK64
    result = bytearray()
    while value >= 0x80:
        result.append((value & 0x7F) | 0x80)
        value >>= 7
    result.append(value)
    return bytes(result)


class WireWriter:
    """Writes wire primitives into a buffer allocated once at an exact size.

    The buffer size comes from the size calculator. Writing past the end, or
    finishing before the end, means the size calculation and the encoder
    disagree and is reported as an EncodeError.

    Example:
        >>> writer = WireWriter(4)
        >>> writer.write_tag(1, WireType.VARINT)
        >>> writer.write_varint(300)
        >>> writer.write_bytes(b"x")
        >>> writer.to_bytes().hex()
        '08ac0278'
    """

    def __init__(self, size: int) -> None:
        self._buffer = bytearray(size)
        self._position = 0

    def _reserve(self, count: int) -> int:
        start = self._position
        end = start + count
        if end > len(self._buffer):
            raise EncodeError(
                f"Buffer overflow: writing {count} bytes at offset {start} "
                f"exceeds computed size {len(self._buffer)}"
            )
        self._position = end
        return start

    def write_varint(self, value: int) -> None:
        """Write an unsigned (or 64-bit two's complement) varint."""
        value &= MASK64
        start = self._reserve(varint_size(value))
        buffer = self._buffer
        while value >= 0x80:
            buffer[start] = (value & 0x7F) | 0x80
            value >>= 7
            start += 1
        buffer[start] = value

    def write_tag(self, field_number: int, wire_type: int) -> None:
        """Write a field tag."""
        self.write_varint(make_tag(field_number, wire_type))

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes with no framing."""
        start = self._reserve(len(data))
        self._buffer[start : start + len(data)] = data

    def write_length_delimited(self, data: bytes) -> None:
        """Write ``varint(len(data)) || data``."""
        self.write_varint(len(data))
        self.write_bytes(data)

    def position(self) -> int:
        """Return the current write offset."""
        return self._position

    def to_bytes(self) -> bytes:
        """Return the filled buffer.

        Raises:
            EncodeError: If fewer bytes were written than were allocated
        """
        if self._position != len(self._buffer):
            raise EncodeError(
                f"Size mismatch: wrote {self._position} bytes, "
                f"computed size was {len(self._buffer)}"
            )
        return bytes(self._buffer)


class WireReader:
    """Bounded forward cursor over a byte buffer.

    The reader never copies the underlying buffer: nested messages are read
    from sub-views returned by :meth:`read_length_delimited`.

    Example:
        >>> reader = WireReader(bytes.fromhex("08ac02"))
        >>> reader.read_tag()
        (1, 0)
        >>> reader.read_varint()
        300
        >>> reader.at_end()
        True
    """

    def __init__(self, data: bytes | bytearray | memoryview, position: int = 0) -> None:
        self._data = data if isinstance(data, memoryview) else memoryview(data)
        self._end = len(self._data)
        self.position = position

    @property
    def data(self) -> memoryview:
        """The buffer being read."""
        return self._data

    def at_end(self) -> bool:
        """Return True once every byte has been consumed."""
        return self.position >= self._end

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return self._end - self.position

    def read_varint(self) -> int:
        """Read a varint limited to 64 bits.

        Raises:
            MalformedVarint: If the varint does not terminate within 64 bits
            UnexpectedEndOfInput: If the buffer ends mid-varint
        """
        data = self._data
        result = 0
        shift = 0
        while True:
            if shift >= 64:
                raise MalformedVarint()
            if self.position >= self._end:
                raise UnexpectedEndOfInput()
            byte = data[self.position]
            self.position += 1
            result |= (byte & 0x7F) << shift
            if byte < 0x80:
                return result & MASK64
            shift += 7

    def read_tag(self) -> tuple[int, int]:
        """Read a tag and return ``(field_number, wire_type)``.

        Raises:
            UnknownWireType: If the wire type is 6 or 7
            IllegalTag: If the field number is 0 or above the maximum
        """
        field_number, wire_type = split_tag(self.read_varint())
        if wire_type > WireType.FIXED32:
            raise UnknownWireType(wire_type)
        if field_number <= 0 or field_number > MAX_FIELD_NUMBER:
            raise IllegalTag(field_number, wire_type)
        return field_number, wire_type

    def read_length(self) -> int:
        """Read a length prefix and check it fits in the remaining buffer.

        Raises:
            NegativeOrInvalidLength: If the payload end does not fit a signed 64-bit offset
            UnexpectedEndOfInput: If the payload would run past the buffer end
        """
        length = self.read_varint()
        if self.position + length > MAX_LENGTH:
            raise NegativeOrInvalidLength()
        if self.position + length > self._end:
            raise UnexpectedEndOfInput(
                f"truncated data: length {length} exceeds the {self.remaining()} "
                f"bytes remaining"
            )
        return length

    def read_length_delimited(self) -> memoryview:
        """Read ``varint(length) || bytes`` and return a view of the payload."""
        length = self.read_length()
        start = self.position
        self.position += length
        return self._data[start : self.position]

    def read_fixed(self, size: int) -> bytes:
        """Read exactly ``size`` bytes."""
        if self.position + size > self._end:
            raise UnexpectedEndOfInput(
                f"truncated data: need {size} bytes, have {self.remaining()}"
            )
        start = self.position
        self.position += size
        return bytes(self._data[start : self.position])

    def read_fixed32(self) -> bytes:
        """Read a 4-byte fixed payload."""
        return self.read_fixed(4)

    def read_fixed64(self) -> bytes:
        """Read an 8-byte fixed payload."""
        return self.read_fixed(8)
