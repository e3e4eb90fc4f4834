"""Field declaration helpers.

Each helper wraps Pydantic's Field(): it records the wire field number (and
kind, where the annotation alone is ambiguous) as tagwire metadata, and
supplies the proto3 zero value as the field's default.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec.schema import KIND_KEY, NUMBER_KEY, PACKED_KEY, FieldKind

_INT_KINDS = frozenset(
    {
        FieldKind.INT32,
        FieldKind.INT64,
        FieldKind.UINT32,
        FieldKind.UINT64,
        FieldKind.SINT32,
        FieldKind.SINT64,
        FieldKind.FIXED32,
        FieldKind.FIXED64,
        FieldKind.SFIXED32,
        FieldKind.SFIXED64,
    }
)
_FLOAT_KINDS = frozenset({FieldKind.FLOAT, FieldKind.DOUBLE})


def _wire_field(number: int, kind: Optional[FieldKind], extra: Optional[dict] = None, **kwargs: Any) -> FieldInfo:
    metadata: dict[str, Any] = {NUMBER_KEY: number}
    if kind is not None:
        metadata[KIND_KEY] = kind.value
    if extra:
        metadata.update(extra)
    return cast(FieldInfo, Field(json_schema_extra=metadata, **kwargs))


def BoolField(number: int, **kwargs: Any) -> FieldInfo:
    """Create a boolean field (varint 0/1 on the wire, default False).

    Example:
        >>> class Router(BaseMessage):
        ...     start_child_span: bool = BoolField(2)
    """
    return _wire_field(number, FieldKind.BOOL, default=False, **kwargs)


def IntField(number: int, kind: str | FieldKind = FieldKind.INT64, **kwargs: Any) -> FieldInfo:
    """Create an integer field (default 0).

    Args:
        number: Field number
        kind: One of int32, int64, uint32, uint64, sint32, sint64 (varint),
            fixed32, sfixed32 (4 bytes), fixed64, sfixed64 (8 bytes).
            Use sint* for fields that are often negative: they are zigzag
            encoded, whereas a negative int32/int64 always takes 10 bytes.
        **kwargs: Additional Field() arguments

    Example:
        >>> class Retry(BaseMessage):
        ...     max_retries: int = IntField(1, kind="uint32")
        ...     offset: int = IntField(2, kind="sint64")
    """
    kind = FieldKind(kind)
    if kind not in _INT_KINDS:
        raise ValueError(f"IntField kind must be an integer kind, got {kind.value}")
    return _wire_field(number, kind, default=0, **kwargs)


def FloatField(number: int, kind: str | FieldKind = FieldKind.DOUBLE, **kwargs: Any) -> FieldInfo:
    """Create a floating point field: ``double`` (8 bytes) or ``float`` (4 bytes), default 0.0."""
    kind = FieldKind(kind)
    if kind not in _FLOAT_KINDS:
        raise ValueError(f"FloatField kind must be float or double, got {kind.value}")
    return _wire_field(number, kind, default=0.0, **kwargs)


def StrField(number: int, **kwargs: Any) -> FieldInfo:
    """Create a UTF-8 string field (default "")."""
    return _wire_field(number, FieldKind.STRING, default="", **kwargs)


def BytesField(number: int, **kwargs: Any) -> FieldInfo:
    """Create a bytes field (default b"")."""
    return _wire_field(number, FieldKind.BYTES, default=b"", **kwargs)


def EnumField(number: int, default: enum.Enum, **kwargs: Any) -> FieldInfo:
    """Create an enum field.

    The enum's members must have integer values; the member with value 0 is
    the proto3 default and is omitted on the wire.

    A field annotated with the enum alone is closed: decoding a value with no
    matching member raises DecodeError. Annotate it as ``Level | int`` to
    keep such values as plain integers instead, as protoc-generated code
    does; they are re-encoded unchanged.

    Example:
        >>> class Level(enum.IntEnum):
        ...     OFF = 0
        ...     ON = 1
        >>> class Settings(BaseMessage):
        ...     level: Level = EnumField(1, default=Level.OFF)
        ...     fallback: Level | int = EnumField(2, default=Level.OFF)
    """
    return _wire_field(number, FieldKind.ENUM, default=default, **kwargs)


def MessageField(number: int, **kwargs: Any) -> FieldInfo:
    """Create a nested message field (default None, i.e. absent).

    A present message is always written, even if all its own fields are at
    their defaults.

    Example:
        >>> class Router(BaseMessage):
        ...     dynamic_stats: Optional[BoolValue] = MessageField(1)
    """
    return _wire_field(number, FieldKind.MESSAGE, default=None, **kwargs)


def RepeatedField(
    number: int, kind: str | FieldKind | None = None, *, packed: bool = True, **kwargs: Any
) -> FieldInfo:
    """Create a repeated field (default empty list).

    The element kind is inferred from the list's element annotation (str,
    bytes, bool, int -> int64, float -> double, Enum, BaseMessage) unless
    given explicitly.

    Args:
        number: Field number
        kind: Element kind, when the annotation is not enough (e.g. "uint32")
        packed: Write numeric elements as one packed length-delimited entry
            (the proto3 default). Decoding accepts both forms either way.
        **kwargs: Additional Field() arguments

    Example:
        >>> class Router(BaseMessage):
        ...     upstream_log: list[AccessLog] = RepeatedField(3)
        ...     strict_check_headers: list[str] = RepeatedField(5)
        ...     ports: list[int] = RepeatedField(7, kind="uint32")
    """
    return _wire_field(
        number,
        FieldKind(kind) if kind is not None else None,
        extra={PACKED_KEY: packed},
        default_factory=list,
        **kwargs,
    )
