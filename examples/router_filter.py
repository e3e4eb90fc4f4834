#!/usr/bin/env python3
"""HTTP router filter configuration example for tagwire.

This example demonstrates:
1. Declaring a configuration record with nested and repeated fields
2. Encoding it and inspecting the wire bytes
3. Reading data written by a newer schema without losing its extra fields
4. Exporting the layout as a .proto schema
"""

from __future__ import annotations

from typing import Optional

from tagwire import (
    BaseMessage,
    BoolField,
    BytesField,
    MessageField,
    RepeatedField,
    StrField,
    decode,
    decode_raw,
    encode,
    field_sizes,
    to_proto_schema,
)
from tagwire.wellknown import BoolValue


class TypedConfig(BaseMessage):
    """Opaque extension configuration (type URL plus serialized payload)."""

    type_url: str = StrField(1)
    value: bytes = BytesField(2)


class AccessLog(BaseMessage):
    """Upstream access log sink."""

    name: str = StrField(1)
    typed_config: Optional[TypedConfig] = MessageField(4)


class Router(BaseMessage):
    """HTTP router filter settings."""

    dynamic_stats: Optional[BoolValue] = MessageField(1)
    start_child_span: bool = BoolField(2)
    upstream_log: list[AccessLog] = RepeatedField(3)
    suppress_envoy_headers: bool = BoolField(4)
    strict_check_headers: list[str] = RepeatedField(5)
    respect_expected_rq_timeout: bool = BoolField(6)


class RouterV2(Router):
    """A later revision of Router with one extra field."""

    suppress_grpc_request_failure_code_stats: bool = BoolField(7)


def main() -> None:
    """Run the router filter example."""
    print("=" * 60)
    print("tagwire Router Filter Example")
    print("=" * 60)
    print()

    print("1. Building a router configuration...")
    router = Router(
        dynamic_stats=BoolValue(value=False),
        start_child_span=True,
        upstream_log=[AccessLog(name="envoy.access_loggers.file")],
        strict_check_headers=["x-envoy-max-retries", "x-envoy-retry-on"],
    )
    print(f"   {router}")
    print()

    print("2. Encoding...")
    data = encode(router)
    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Hex: {data.hex()}")
    for name, size in field_sizes(router).items():
        print(f"   {name}: {size} bytes")
    print()

    print("3. Raw wire fields...")
    for field in decode_raw(data):
        print(f"   field {field.number} ({field.wire_type.name}): {field.value!r}")
    print()

    print("4. Reading data from a newer schema...")
    newer = RouterV2(start_child_span=True, suppress_grpc_request_failure_code_stats=True)
    older = decode(Router, encode(newer))
    print(f"   Unknown tail kept by the older schema: {older.unknown_fields.hex()}")
    assert encode(older) == encode(newer)
    print("   Re-encoding reproduces the original bytes")
    print()

    print("5. .proto schema...")
    print(to_proto_schema(Router, package="router.v3"))


if __name__ == "__main__":
    main()
