"""Codec configuration.

This module provides the configuration dataclass accepted by encode() and
decode().
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Options for a single encode or decode call.

    Attributes:
        max_depth: Maximum nesting depth of sub-messages (default 100).
            Deeper input is rejected instead of recursing without bound.
        preserve_unknown: Keep the raw bytes of unrecognized fields in the
            message's ``unknown_fields`` (default True). When False they are
            consumed and dropped.

    Examples:
        ```python
        from tagwire import CodecConfig, decode

        # Strip fields this schema does not know about
        router = decode(Router, data, config=CodecConfig(preserve_unknown=False))

        # Refuse deeply nested input
        router = decode(Router, data, config=CodecConfig(max_depth=8))
        ```
    """

    max_depth: int = 100
    preserve_unknown: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")


DEFAULT_CONFIG = CodecConfig()
