"""Protobuf schema generation.

This module renders .proto schema text for tagwire message classes, so the
same layout can be compiled with protoc for other languages.
"""

from __future__ import annotations

import enum
from typing import List

from pydantic import BaseModel

from ..codec.schema import FieldKind, FieldSchema, MessageSchema
from ..exceptions import SchemaError


def to_proto_schema(message_class: type[BaseModel], *, package: str = "") -> str:
    """Generate a proto3 .proto schema from a tagwire message class.

    Nested message and enum types referenced by the class are emitted as
    top-level definitions, dependencies first. Encoding a message with
    tagwire and with protoc-generated code for this schema produces the same
    bytes.

    Args:
        message_class: Message class to convert
        package: Optional Protobuf package name

    Returns:
        .proto schema as a string

    Raises:
        SchemaError: If an enum has no member with value 0

    Example:
        >>> proto = to_proto_schema(Router, package="router.v3")
        >>> print(proto)
        syntax = "proto3";
        package router.v3;
        ...
    """
    messages: List[type[BaseModel]] = []
    enums: List[type[enum.Enum]] = []
    _collect(message_class, messages, enums)

    lines = ['syntax = "proto3";']
    if package:
        lines.append(f"package {package};")
    lines.append("")

    for enum_type in enums:
        lines.extend(_enum_to_proto(enum_type))
        lines.append("")

    for model in messages:
        lines.extend(_message_to_proto(model))
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def _collect(
    model: type[BaseModel], messages: List[type[BaseModel]], enums: List[type[enum.Enum]]
) -> None:
    """Depth-first walk adding each referenced type after its dependencies."""
    if model in messages:
        return
    # Placeholder guards against recursive message types
    messages.append(model)
    schema = MessageSchema.from_model(model)
    for field in schema.fields:
        if field.enum_type is not None and field.enum_type not in enums:
            enums.append(field.enum_type)
        if field.message_type is not None:
            _collect(field.message_type, messages, enums)
    messages.remove(model)
    messages.append(model)


def _message_to_proto(model: type[BaseModel]) -> List[str]:
    schema = MessageSchema.from_model(model)
    lines = [f"message {model.__name__} {{"]
    for field in schema.fields:
        label = "repeated " if field.repeated else ""
        options = " [packed = false]" if field.repeated and field.packable and not field.packed else ""
        lines.append(f"  {label}{_proto_type(field)} {field.name} = {field.number}{options};")
    lines.append("}")
    return lines


def _proto_type(field: FieldSchema) -> str:
    """Return the Protobuf type name of a field."""
    if field.kind is FieldKind.MESSAGE:
        assert field.message_type is not None
        return field.message_type.__name__
    if field.kind is FieldKind.ENUM:
        assert field.enum_type is not None
        return field.enum_type.__name__
    return field.kind.value


def _enum_to_proto(enum_type: type[enum.Enum]) -> List[str]:
    """Convert a Python enum to a Protobuf enum definition.

    Args:
        enum_type: Enum class to convert

    Returns:
        List of lines for the enum definition
    """
    values = [member.value for member in enum_type]
    if 0 not in values:
        raise SchemaError(f"Enum {enum_type.__name__}: proto3 enums need a member with value 0")

    lines = [f"enum {enum_type.__name__} {{"]
    for member in enum_type:
        lines.append(f"  {member.name} = {member.value};")
    lines.append("}")
    return lines
