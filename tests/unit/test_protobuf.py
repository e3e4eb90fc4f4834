"""Unit tests for Protobuf schema generation."""

from __future__ import annotations

import enum
from typing import Optional

import pytest

from tagwire import (
    BaseMessage,
    BoolField,
    BytesField,
    EnumField,
    FloatField,
    IntField,
    MessageField,
    RepeatedField,
    SchemaError,
    StrField,
)
from tagwire.protobuf import to_proto_schema


class Status(enum.Enum):
    """Test enum for protobuf generation."""

    UNKNOWN = 0
    ACTIVE = 1
    ERROR = 2


class NoZero(enum.Enum):
    """Enum without a zero member."""

    ONE = 1


class Header(BaseMessage):
    """Nested message for proto generation."""

    key: str = StrField(1)
    value: bytes = BytesField(2)


class Request(BaseMessage):
    """Message exercising every label and kind family."""

    id: int = IntField(1, kind="uint64")
    offset: int = IntField(2, kind="sint32")
    ratio: float = FloatField(3, kind="float")
    enabled: bool = BoolField(4)
    status: Status = EnumField(5, default=Status.UNKNOWN)
    header: Optional[Header] = MessageField(6)
    extra_headers: list[Header] = RepeatedField(7)
    ports: list[int] = RepeatedField(8, kind="uint32", packed=False)
    weights: list[float] = RepeatedField(9)


class BadEnumMessage(BaseMessage):
    """Message referencing an enum without a zero member."""

    value: NoZero = EnumField(1, default=NoZero.ONE)


class TestProtoSchemaGeneration:
    """Test .proto generation."""

    def test_header(self) -> None:
        """Test syntax and package lines."""
        proto = to_proto_schema(Header, package="router.v3")
        assert proto.startswith('syntax = "proto3";\npackage router.v3;\n')

    def test_no_package(self) -> None:
        """Test the package line is optional."""
        proto = to_proto_schema(Header)
        assert "package" not in proto

    def test_scalar_fields(self) -> None:
        """Test scalar field declarations."""
        proto = to_proto_schema(Request)
        assert "  uint64 id = 1;" in proto
        assert "  sint32 offset = 2;" in proto
        assert "  float ratio = 3;" in proto
        assert "  bool enabled = 4;" in proto
        assert "  Status status = 5;" in proto

    def test_nested_and_repeated(self) -> None:
        """Test message references and repeated labels."""
        proto = to_proto_schema(Request)
        assert "  Header header = 6;" in proto
        assert "  repeated Header extra_headers = 7;" in proto
        assert "  repeated uint32 ports = 8 [packed = false];" in proto
        assert "  repeated double weights = 9;" in proto

    def test_dependencies_first(self) -> None:
        """Test referenced types are defined before they are used."""
        proto = to_proto_schema(Request)
        assert proto.index("enum Status {") < proto.index("message Request {")
        assert proto.index("message Header {") < proto.index("message Request {")
        assert proto.count("message Header {") == 1

    def test_enum_definition(self) -> None:
        """Test enum members are listed with their values."""
        proto = to_proto_schema(Request)
        assert "  UNKNOWN = 0;" in proto
        assert "  ERROR = 2;" in proto

    def test_enum_without_zero(self) -> None:
        """Test proto3 enums need a zero member."""
        with pytest.raises(SchemaError, match="value 0"):
            to_proto_schema(BadEnumMessage)
