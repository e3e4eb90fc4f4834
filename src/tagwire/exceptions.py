"""Exception hierarchy for tagwire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from TagwireError for easy catching of any tagwire-specific error.
"""

from __future__ import annotations


class TagwireError(Exception):
    """Base exception for all tagwire errors."""

    pass


class SchemaError(TagwireError):
    """Raised when a message schema is invalid.

    Examples:
        - Duplicate field numbers
        - Field number outside 1..2**29-1 or inside the reserved 19000-19999 range
        - Field declared without a wire number
        - Unsupported annotation for the declared kind
    """

    pass


class EncodeError(TagwireError):
    """Raised when encoding a message fails.

    Examples:
        - Value out of range for its kind (e.g. 2**32 in a uint32 field)
        - Field type mismatch
        - Message nesting deeper than the configured limit
        - Message exceeds tagwire_max_bytes constraint
    """

    pass


class DecodeError(TagwireError):
    """Raised when decoding binary data fails.

    Every subclass is fatal to the decode call: no partially built message
    is ever returned.
    """

    pass


class MalformedVarint(DecodeError):
    """A varint did not terminate within 64 bits."""

    def __init__(self, message: str = "malformed varint: integer overflow") -> None:
        super().__init__(message)


class UnexpectedEndOfInput(DecodeError):
    """The buffer ended before a declared length or value was complete."""

    def __init__(self, message: str = "truncated data: unexpected end of input") -> None:
        super().__init__(message)


class NegativeOrInvalidLength(DecodeError):
    """A decoded length is negative or would overflow the buffer offset."""

    def __init__(self, message: str = "negative or invalid length found while decoding") -> None:
        super().__init__(message)


class WireTypeMismatch(DecodeError):
    """The wire type on the wire disagrees with the field's schema."""

    def __init__(self, field_name: str, wire_type: int) -> None:
        self.field_name = field_name
        self.wire_type = wire_type
        super().__init__(f"wrong wire type {wire_type} for field {field_name}")


class UnexpectedEndGroup(DecodeError):
    """An end-group tag appeared with no matching start-group."""

    def __init__(self, message: str = "unexpected end of group") -> None:
        super().__init__(message)


class UnknownWireType(DecodeError):
    """A tag carries a wire type outside {0, 1, 2, 3, 4, 5}."""

    def __init__(self, wire_type: int) -> None:
        self.wire_type = wire_type
        super().__init__(f"illegal wire type {wire_type}")


class IllegalTag(DecodeError):
    """A tag encodes a field number of zero or one above 2**29 - 1."""

    def __init__(self, field_number: int, wire_type: int) -> None:
        self.field_number = field_number
        self.wire_type = wire_type
        super().__init__(f"illegal tag {field_number} (wire type {wire_type})")
