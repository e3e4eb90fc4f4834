"""Schema analysis and raw dump CLI commands."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from ..codec.raw import decode_raw
from ..codec.schema import MessageSchema
from ..codec.wire import WireType, encode_varint
from ..models.base import BaseMessage
from ..utils.sizing import encoded_size


def analyze_file(file_path: Path) -> None:
    """Analyze all BaseMessage classes in a Python file.

    Args:
        file_path: Path to Python file containing message definitions
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Find all BaseMessage subclasses defined in this file (not imported)
    message_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not BaseMessage and issubclass(obj, BaseMessage) and obj.__module__ == "user_module"
    ]

    if not message_classes:
        print(f"No BaseMessage classes found in {file_path}")
        return

    print("|" * 7, "tagwire: Tag-Based Binary Record Codec", "|" * 7)
    print(f"{len(message_classes)} message{'s' if len(message_classes) != 1 else ''} loaded.")
    print()

    for msg_class in message_classes:
        analyze_message_class(msg_class)


def analyze_message_class(msg_class: type[BaseMessage]) -> None:
    """Print the wire layout of a single message class.

    Args:
        msg_class: Message class to analyze
    """
    schema = MessageSchema.from_model(msg_class)
    max_bytes = getattr(msg_class, "tagwire_max_bytes", None)

    print(f"{'=' * 19} {msg_class.__name__} {'=' * 19}")
    print(f"Encoded size of an empty message: {encoded_size(msg_class())} bytes")
    if max_bytes is not None:
        print(f"Allowed maximum size of message: {max_bytes} bytes")
    print()

    print(f"{'#':>5}  {'name':<32} {'kind':<10} {'wire type':<18} tag")
    for field in schema.fields:
        kind = field.kind.value
        if field.message_type is not None:
            kind = field.message_type.__name__
        elif field.enum_type is not None:
            kind = field.enum_type.__name__
        if field.repeated:
            kind = f"{kind}[]"

        wire_type = WireType.LENGTH_DELIMITED if field.packed else field.wire_type
        tag = encode_varint(field.tag(wire_type)).hex()
        print(f"{field.number:>5}  {field.name:<32} {kind:<10} {wire_type.name:<18} {tag}")

    print()


def print_raw(data: bytes) -> None:
    """Print the top-level wire fields of ``data``, one per line."""
    for field in decode_raw(data):
        if isinstance(field.value, bytes):
            value = _render_bytes(field.value)
        else:
            value = str(field.value)
        print(f"{field.number}: ({field.wire_type.name}) {value}")


def _render_bytes(value: bytes) -> str:
    try:
        text = value.decode("utf-8")
    except UnicodeDecodeError:
        return value.hex()
    if text.isprintable():
        return repr(text)
    return value.hex()
