"""tagwire: Tag-Based Binary Record Codec

A Python library for schema-driven binary serialization in the
length-prefixed, tag-based wire format used by Protocol Buffers. Records are
modeled as Pydantic classes; field numbers and wire types come from the
field declarations.

Key Features:
- Pydantic-based message modeling
- Bit-exact wire format (interoperable with protoc-generated code)
- Exact size calculation, single buffer allocation per encode
- Unknown fields preserved verbatim across decode/encode round trips
- Nested messages, repeated and packed fields

Quick Start:
    >>> from typing import Optional
    >>> from tagwire import BaseMessage, BoolField, MessageField, RepeatedField, decode, encode
    >>> from tagwire.wellknown import BoolValue
    >>>
    >>> class Router(BaseMessage):
    ...     dynamic_stats: Optional[BoolValue] = MessageField(1)
    ...     start_child_span: bool = BoolField(2)
    ...     strict_check_headers: list[str] = RepeatedField(5)
    >>>
    >>> msg = Router(start_child_span=True, strict_check_headers=["x-envoy-max-retries"])
    >>> data = encode(msg)
    >>> decoded = decode(Router, data)
"""

from __future__ import annotations

from .codec import RawField, WireType, decode, decode_raw, encode, skip_field
from .config import CodecConfig
from .exceptions import (
    DecodeError,
    EncodeError,
    IllegalTag,
    MalformedVarint,
    NegativeOrInvalidLength,
    SchemaError,
    TagwireError,
    UnexpectedEndGroup,
    UnexpectedEndOfInput,
    UnknownWireType,
    WireTypeMismatch,
)
from .models import (
    BaseMessage,
    BoolField,
    BytesField,
    EnumField,
    FloatField,
    IntField,
    MessageField,
    RepeatedField,
    StrField,
)
from .protobuf import to_proto_schema
from .utils import encoded_size, field_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "BaseMessage",
    "encode",
    "decode",
    "decode_raw",
    "skip_field",
    "RawField",
    "WireType",
    "CodecConfig",
    # Field helpers
    "BoolField",
    "BytesField",
    "EnumField",
    "FloatField",
    "IntField",
    "MessageField",
    "RepeatedField",
    "StrField",
    # Exceptions
    "TagwireError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "MalformedVarint",
    "UnexpectedEndOfInput",
    "NegativeOrInvalidLength",
    "WireTypeMismatch",
    "UnexpectedEndGroup",
    "UnknownWireType",
    "IllegalTag",
    # Sizing
    "encoded_size",
    "field_sizes",
    # Protobuf
    "to_proto_schema",
    # Version
    "__version__",
]
