"""Tag-based binary codec for tagwire.

This module provides encoding, decoding and size calculation for messages
in the length-prefixed, tag-based wire format.
"""

from __future__ import annotations

from .decoder import decode
from .encoder import encode
from .raw import RawField, decode_raw
from .schema import FieldKind, FieldSchema, MessageSchema
from .skip import skip_field
from .wire import WireType, varint_size, zigzag_varint_size

__all__ = [
    "encode",
    "decode",
    "decode_raw",
    "skip_field",
    "RawField",
    "MessageSchema",
    "FieldSchema",
    "FieldKind",
    "WireType",
    "varint_size",
    "zigzag_varint_size",
]
