#!/usr/bin/env python3
"""Basic usage example for tagwire.

This example demonstrates:
1. Defining a message with field helpers
2. Encoding to the tag-based wire format
3. Decoding back to a Pydantic model
4. Calculating message sizes
"""

from __future__ import annotations

import enum

from tagwire import (
    BaseMessage,
    BoolField,
    EnumField,
    FloatField,
    IntField,
    RepeatedField,
    StrField,
    decode,
    encode,
    encoded_size,
    field_sizes,
)


class Level(enum.IntEnum):
    """Log level."""

    OFF = 0
    INFO = 1
    DEBUG = 2


class ServiceSettings(BaseMessage):
    """Settings record mixing varint, fixed and length-delimited fields."""

    name: str = StrField(1)
    port: int = IntField(2, kind="uint32")
    offset_ms: int = IntField(3, kind="sint64")
    ratio: float = FloatField(4, kind="float")
    enabled: bool = BoolField(5)
    level: Level = EnumField(6, default=Level.OFF)
    retry_backoff_ms: list[int] = RepeatedField(7, kind="uint32")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("tagwire Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating a settings message...")
    msg = ServiceSettings(
        name="edge",
        port=8080,
        offset_ms=-250,
        ratio=0.5,
        enabled=True,
        level=Level.DEBUG,
        retry_backoff_ms=[25, 50, 100, 200],
    )
    print(f"   {msg}")
    print()

    print("2. Analyzing field sizes...")
    for field_name, size in field_sizes(msg).items():
        print(f"   {field_name}: {size} bytes")
    print(f"   Total: {encoded_size(msg)} bytes")
    print()

    print("3. Encoding...")
    encoded_data = encode(msg)
    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")
    print()

    print("4. Decoding...")
    decoded_msg = decode(ServiceSettings, encoded_data)
    print(f"   {decoded_msg}")
    print()

    print("5. Verifying round-trip...")
    if decoded_msg == msg:
        print("   Round-trip successful")
    else:
        print("   Round-trip FAILED")
    print()

    print("6. Default values are not written...")
    print(f"   Empty message encodes to {len(encode(ServiceSettings()))} bytes")


if __name__ == "__main__":
    main()
