"""Base message class and tagwire-specific Pydantic configuration.

This module provides the BaseMessage class that all tagwire messages should inherit from.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class BaseMessage(BaseModel):
    """Base class for all tagwire messages.

    Messages inherit from this class and declare each wire field with one of
    the field helpers (BoolField, IntField, StrField, ...), which supply the
    field number and the proto3 zero value as default. A message constructed
    with no arguments therefore has every field at its default.

    tagwire-specific options can be configured as ClassVar attributes:

    Example:
        >>> from typing import ClassVar, Optional
        >>> class AccessLog(BaseMessage):
        ...     name: str = StrField(1)
        ...
        ...     tagwire_max_bytes: ClassVar[Optional[int]] = 256

    Attributes:
        unknown_fields: Raw bytes of fields present in decoded data but not
            in this schema. Re-emitted verbatim after the known fields when
            the message is encoded again.
        tagwire_max_bytes: Maximum encoded size in bytes (optional, for validation)
    """

    # ConfigDict for Pydantic v2
    model_config = ConfigDict(
        # Coerce compatible input types (e.g. int for a float field)
        strict=False,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    unknown_fields: bytes = Field(default=b"", repr=False)

    # tagwire-specific class variables (optional)
    tagwire_max_bytes: ClassVar[int | None] = None

    def discard_unknown(self) -> Any:
        """Return a copy with the unknown tail cleared here and in every nested message.

        The message itself is not modified.
        """
        update: dict[str, Any] = {"unknown_fields": b""}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, BaseMessage):
                update[name] = value.discard_unknown()
            elif isinstance(value, list) and value and isinstance(value[0], BaseMessage):
                update[name] = [item.discard_unknown() for item in value]
        return self.model_copy(update=update, deep=True)
