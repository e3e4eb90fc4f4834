"""Protobuf interoperability for tagwire.

This module provides .proto schema generation from tagwire message classes.
"""

from __future__ import annotations

from .convert import to_proto_schema

__all__ = [
    "to_proto_schema",
]
