"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def flags_wire() -> bytes:
    """Wire bytes of a message with flag_a=True (field 1) and items=["x", "yy"] (field 2)."""
    return bytes.fromhex("08 01 12 01 78 12 02 79 79")


@pytest.fixture
def sample_headers() -> list[str]:
    """Sample header names for repeated string fields."""
    return ["x-envoy-max-retries", "x-envoy-retry-on", "x-envoy-upstream-rq-timeout-ms"]
