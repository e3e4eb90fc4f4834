"""Pydantic message modeling for tagwire.

This module provides the BaseMessage class and field helpers for defining
messages in the tag-based wire format.
"""

from __future__ import annotations

from .base import BaseMessage
from .fields import (
    BoolField,
    BytesField,
    EnumField,
    FloatField,
    IntField,
    MessageField,
    RepeatedField,
    StrField,
)

__all__ = [
    "BaseMessage",
    "BoolField",
    "BytesField",
    "EnumField",
    "FloatField",
    "IntField",
    "MessageField",
    "RepeatedField",
    "StrField",
]
