"""Well-known wrapper messages.

Single-field messages carrying one scalar at field 1. They give a scalar
explicit presence: a ``None`` wrapper is absent from the wire, while a
wrapper holding the zero value is still written (as tag + length 0).
"""

from __future__ import annotations

from .models import BaseMessage, BoolField, BytesField, FloatField, IntField, StrField


class BoolValue(BaseMessage):
    """Wrapper for ``bool``."""

    value: bool = BoolField(1)


class Int32Value(BaseMessage):
    """Wrapper for ``int32``."""

    value: int = IntField(1, kind="int32")


class Int64Value(BaseMessage):
    """Wrapper for ``int64``."""

    value: int = IntField(1, kind="int64")


class UInt32Value(BaseMessage):
    """Wrapper for ``uint32``."""

    value: int = IntField(1, kind="uint32")


class UInt64Value(BaseMessage):
    """Wrapper for ``uint64``."""

    value: int = IntField(1, kind="uint64")


class FloatValue(BaseMessage):
    """Wrapper for ``float``."""

    value: float = FloatField(1, kind="float")


class DoubleValue(BaseMessage):
    """Wrapper for ``double``."""

    value: float = FloatField(1, kind="double")


class StringValue(BaseMessage):
    """Wrapper for ``string``."""

    value: str = StrField(1)


class BytesValue(BaseMessage):
    """Wrapper for ``bytes``."""

    value: bytes = BytesField(1)
