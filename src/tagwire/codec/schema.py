"""Schema introspection for Pydantic models.

This module analyzes BaseMessage subclasses and extracts the wire layout of
each field: field number, kind, wire type, and nesting structure.
"""

from __future__ import annotations

import enum
import functools
import types
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from .wire import MAX_FIELD_NUMBER, WireType

# Name of the field holding raw bytes of unrecognized fields
UNKNOWN_FIELDS = "unknown_fields"

# Metadata keys written by the field helpers
NUMBER_KEY = "wire_number"
KIND_KEY = "wire_kind"
PACKED_KEY = "wire_packed"

_RESERVED_NUMBERS = range(19000, 20000)


class FieldKind(str, enum.Enum):
    """Value kind of a field; determines its wire type and scalar encoding."""

    BOOL = "bool"
    ENUM = "enum"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    SINT32 = "sint32"
    SINT64 = "sint64"
    FIXED32 = "fixed32"
    FIXED64 = "fixed64"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"
    MESSAGE = "message"


WIRE_TYPES: Dict[FieldKind, WireType] = {
    FieldKind.BOOL: WireType.VARINT,
    FieldKind.ENUM: WireType.VARINT,
    FieldKind.INT32: WireType.VARINT,
    FieldKind.INT64: WireType.VARINT,
    FieldKind.UINT32: WireType.VARINT,
    FieldKind.UINT64: WireType.VARINT,
    FieldKind.SINT32: WireType.VARINT,
    FieldKind.SINT64: WireType.VARINT,
    FieldKind.FIXED64: WireType.FIXED64,
    FieldKind.SFIXED64: WireType.FIXED64,
    FieldKind.DOUBLE: WireType.FIXED64,
    FieldKind.STRING: WireType.LENGTH_DELIMITED,
    FieldKind.BYTES: WireType.LENGTH_DELIMITED,
    FieldKind.MESSAGE: WireType.LENGTH_DELIMITED,
    FieldKind.FIXED32: WireType.FIXED32,
    FieldKind.SFIXED32: WireType.FIXED32,
    FieldKind.FLOAT: WireType.FIXED32,
}

_ZERO_VALUES: Dict[FieldKind, Any] = {
    FieldKind.BOOL: False,
    FieldKind.STRING: "",
    FieldKind.BYTES: b"",
    FieldKind.FLOAT: 0.0,
    FieldKind.DOUBLE: 0.0,
}


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Field name
        number: Field number on the wire
        kind: Value kind
        wire_type: Wire type of a single (unpacked) value
        repeated: Whether the field holds a list
        packed: Whether a repeated numeric field is written packed
        message_type: Nested message class for MESSAGE fields
        enum_type: Enum class for ENUM fields
        open_enum: Whether an ENUM field also accepts integers with no matching member
    """

    name: str
    number: int
    kind: FieldKind
    wire_type: WireType
    repeated: bool = False
    packed: bool = False
    message_type: Optional[Type[BaseModel]] = None
    enum_type: Optional[Type[enum.Enum]] = None
    open_enum: bool = False

    @property
    def zero_value(self) -> Any:
        """proto3 default for a singular field of this kind."""
        return _ZERO_VALUES.get(self.kind, 0)

    @property
    def packable(self) -> bool:
        """True for numeric kinds, which may be packed when repeated."""
        return self.wire_type != WireType.LENGTH_DELIMITED

    def tag(self, wire_type: Optional[int] = None) -> int:
        """Return the tag value for this field."""
        return (self.number << 3) | (self.wire_type if wire_type is None else wire_type)

    def is_default(self, value: Any) -> bool:
        """Return True when a singular scalar value is omitted on the wire."""
        if self.kind is FieldKind.ENUM:
            return int(value.value if isinstance(value, enum.Enum) else value) == 0
        return bool(value == self.zero_value)


class MessageSchema:
    """Schema information for an entire message.

    Fields are kept in ascending field-number order, which is also the order
    they are written in.

    Example:
        >>> schema = MessageSchema.from_model(Router)
        >>> for field in schema.fields:
        ...     print(field.number, field.name, field.kind.value)
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self.by_number: Dict[int, FieldSchema] = {}
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> MessageSchema:
        """Return the (cached) schema of a Pydantic model.

        Args:
            model_class: Pydantic model class

        Returns:
            MessageSchema instance
        """
        return _schema_for(model_class)

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        for field_name, field_info in self.model_class.model_fields.items():
            if field_name == UNKNOWN_FIELDS:
                continue
            field_schema = self._extract_field_schema(field_name, field_info)
            existing = self.by_number.get(field_schema.number)
            if existing is not None:
                raise SchemaError(
                    f"{self.model_class.__name__}: field number {field_schema.number} "
                    f"used by both {existing.name} and {field_name}"
                )
            self.by_number[field_schema.number] = field_schema

        self.fields = sorted(self.by_number.values(), key=lambda f: f.number)

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract schema information from a Pydantic FieldInfo.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object

        Returns:
            FieldSchema with extracted information
        """
        extra = field_info.json_schema_extra
        if not isinstance(extra, dict) or NUMBER_KEY not in extra:
            raise SchemaError(
                f"Field {name}: no wire number. Declare it with one of the "
                f"tagwire field helpers (BoolField, IntField, ...)."
            )

        number = extra[NUMBER_KEY]
        if not isinstance(number, int) or not 1 <= number <= MAX_FIELD_NUMBER:
            raise SchemaError(f"Field {name}: field number must be 1-{MAX_FIELD_NUMBER}, got {number}")
        if number in _RESERVED_NUMBERS:
            raise SchemaError(f"Field {name}: field numbers 19000-19999 are reserved, got {number}")

        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        # Unwrap Optional[T]
        args = get_args(annotation)
        if args and type(None) in args:
            non_none_args = [arg for arg in args if arg is not type(None)]
            annotation = non_none_args[0] if len(non_none_args) == 1 else Union[tuple(non_none_args)]

        repeated = False
        if get_origin(annotation) is list:
            repeated = True
            list_args = get_args(annotation)
            if not list_args:
                raise SchemaError(f"Field {name}: list fields need an element type")
            annotation = list_args[0]

        annotation, open_enum = _unwrap_open_enum(name, annotation)

        kind_name = extra.get(KIND_KEY)
        kind = FieldKind(kind_name) if kind_name is not None else _infer_kind(name, annotation)

        message_type = None
        enum_type = None
        if kind is FieldKind.MESSAGE:
            if not (isinstance(annotation, type) and issubclass(annotation, BaseModel)):
                raise SchemaError(f"Field {name}: message fields must be annotated with a model class")
            message_type = annotation
        elif kind is FieldKind.ENUM:
            if not (isinstance(annotation, type) and issubclass(annotation, enum.Enum)):
                raise SchemaError(f"Field {name}: enum fields must be annotated with an Enum class")
            enum_type = annotation

        wire_type = WIRE_TYPES[kind]
        packed = bool(extra.get(PACKED_KEY, True)) and repeated and wire_type != WireType.LENGTH_DELIMITED

        return FieldSchema(
            name=name,
            number=number,
            kind=kind,
            wire_type=wire_type,
            repeated=repeated,
            packed=packed,
            message_type=message_type,
            enum_type=enum_type,
            open_enum=open_enum,
        )

    def field(self, name: str) -> FieldSchema:
        """Return the schema of the field called ``name``."""
        for field_schema in self.fields:
            if field_schema.name == name:
                return field_schema
        raise KeyError(name)


def _infer_kind(name: str, annotation: Any) -> FieldKind:
    """Pick a kind from a Python annotation when none was declared."""
    if annotation is bool:
        return FieldKind.BOOL
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return FieldKind.ENUM
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return FieldKind.MESSAGE
    if annotation is int:
        return FieldKind.INT64
    if annotation is float:
        return FieldKind.DOUBLE
    if annotation is str:
        return FieldKind.STRING
    if annotation is bytes:
        return FieldKind.BYTES
    raise SchemaError(
        f"Field {name}: unsupported type {annotation}. "
        f"Supported: bool, int, float, str, bytes, Enum, BaseMessage and lists of those."
    )


@functools.lru_cache(maxsize=None)
def _schema_for(model_class: Type[BaseModel]) -> MessageSchema:
    return MessageSchema(model_class)


def _unwrap_open_enum(name: str, annotation: Any) -> tuple[Any, bool]:
    """Reduce ``SomeEnum | int`` to ``(SomeEnum, True)``; other annotations pass through."""
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation, False

    args = get_args(annotation)
    enums = [arg for arg in args if isinstance(arg, type) and issubclass(arg, enum.Enum)]
    if len(enums) == 1 and len(args) == 2 and int in args:
        return enums[0], True
    raise SchemaError(f"Field {name}: complex Union types not supported")
