"""End-to-end integration tests."""

from __future__ import annotations

import enum
from typing import Optional

import pytest

from tagwire import (
    BaseMessage,
    BoolField,
    BytesField,
    CodecConfig,
    DecodeError,
    EnumField,
    IntField,
    MessageField,
    RepeatedField,
    StrField,
    decode,
    decode_raw,
    encode,
    encoded_size,
    field_sizes,
    to_proto_schema,
)
from tagwire.wellknown import BoolValue, UInt32Value


class Codec(enum.Enum):
    """Upstream codec selection."""

    AUTO = 0
    HTTP1 = 1
    HTTP2 = 2


class TypedConfig(BaseMessage):
    """Opaque extension configuration."""

    type_url: str = StrField(1)
    value: bytes = BytesField(2)


class AccessLog(BaseMessage):
    """Upstream access log sink."""

    name: str = StrField(1)
    typed_config: Optional[TypedConfig] = MessageField(4)


class Router(BaseMessage):
    """HTTP router filter settings, first revision."""

    dynamic_stats: Optional[BoolValue] = MessageField(1)
    start_child_span: bool = BoolField(2)
    upstream_log: list[AccessLog] = RepeatedField(3)
    suppress_envoy_headers: bool = BoolField(4)
    strict_check_headers: list[str] = RepeatedField(5)


class RouterV2(BaseMessage):
    """HTTP router filter settings, later revision with more fields."""

    dynamic_stats: Optional[BoolValue] = MessageField(1)
    start_child_span: bool = BoolField(2)
    upstream_log: list[AccessLog] = RepeatedField(3)
    suppress_envoy_headers: bool = BoolField(4)
    strict_check_headers: list[str] = RepeatedField(5)
    respect_expected_rq_timeout: bool = BoolField(6)
    codec: Codec = EnumField(7, default=Codec.AUTO)
    max_retries: Optional[UInt32Value] = MessageField(8)
    retry_ports: list[int] = RepeatedField(9, kind="uint32")
    priority_offset: int = IntField(10, kind="sint32")


def _full_router_v2() -> RouterV2:
    return RouterV2(
        dynamic_stats=BoolValue(value=False),
        start_child_span=True,
        upstream_log=[
            AccessLog(
                name="envoy.access_loggers.file",
                typed_config=TypedConfig(type_url="type.googleapis.com/FileAccessLog", value=b"\x0a\x01/"),
            ),
            AccessLog(name="envoy.access_loggers.stdout"),
        ],
        strict_check_headers=["x-envoy-max-retries", "x-envoy-retry-on"],
        respect_expected_rq_timeout=True,
        codec=Codec.HTTP2,
        max_retries=UInt32Value(value=3),
        retry_ports=[80, 443, 8080],
        priority_offset=-3,
    )


class TestEndToEnd:
    """End-to-end workflows."""

    def test_roundtrip(self) -> None:
        """Test a full configuration survives encode/decode."""
        msg = _full_router_v2()
        data = encode(msg)
        assert len(data) == encoded_size(msg)
        assert decode(RouterV2, data) == msg

    def test_old_reader_preserves_new_fields(self) -> None:
        """Test an older schema keeps newer fields and re-emits them byte for byte."""
        data = encode(_full_router_v2())

        old = decode(Router, data)
        assert old.start_child_span is True
        assert old.dynamic_stats == BoolValue(value=False)
        assert [log.name for log in old.upstream_log] == [
            "envoy.access_loggers.file",
            "envoy.access_loggers.stdout",
        ]
        assert old.unknown_fields

        # Known fields come first in both schemas, so the bytes are identical
        assert encode(old) == data
        assert decode(RouterV2, encode(old)) == _full_router_v2()

    def test_old_reader_modifies_and_forwards(self) -> None:
        """Test editing a known field keeps the unknown tail intact."""
        old = decode(Router, encode(_full_router_v2()))
        old.suppress_envoy_headers = True

        forwarded = decode(RouterV2, encode(old))
        assert forwarded.suppress_envoy_headers is True
        assert forwarded.codec is Codec.HTTP2
        assert forwarded.retry_ports == [80, 443, 8080]

    def test_old_reader_discarding_unknown(self) -> None:
        """Test an older schema can drop newer fields."""
        data = encode(_full_router_v2())

        old = decode(Router, data, config=CodecConfig(preserve_unknown=False))
        forwarded = decode(RouterV2, encode(old))
        assert forwarded.codec is Codec.AUTO
        assert forwarded.max_retries is None
        assert forwarded.start_child_span is True

        cleaned = decode(Router, data).discard_unknown()
        assert encode(cleaned) == encode(old)

    def test_raw_view_matches_schema(self) -> None:
        """Test schema-less decoding sees the same top-level fields."""
        msg = _full_router_v2()
        numbers = [field.number for field in decode_raw(encode(msg))]
        assert numbers == [1, 2, 3, 3, 5, 5, 6, 7, 8, 9, 10]

    def test_field_sizes_sum(self) -> None:
        """Test per-field sizes add up to the encoded size."""
        msg = _full_router_v2()
        assert sum(field_sizes(msg).values()) == len(encode(msg))

    def test_proto_schema(self) -> None:
        """Test .proto generation for the full configuration."""
        proto = to_proto_schema(RouterV2, package="envoy.router.v3")
        assert "message RouterV2 {" in proto
        assert "  repeated AccessLog upstream_log = 3;" in proto
        assert "  UInt32Value max_retries = 8;" in proto
        assert "  sint32 priority_offset = 10;" in proto
        assert "enum Codec {" in proto

    def test_truncated_stream(self) -> None:
        """Test a stream cut inside its last field is rejected."""
        data = encode(_full_router_v2())
        with pytest.raises(DecodeError):
            decode(RouterV2, data[:-1])
