"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Optional

from hypothesis import given
from hypothesis import strategies as st

from tagwire import (
    BaseMessage,
    BoolField,
    BytesField,
    IntField,
    MessageField,
    RepeatedField,
    StrField,
    decode,
    decode_raw,
    encode,
    encoded_size,
    skip_field,
)
from tagwire.codec.wire import WireReader, encode_varint, varint_size, zigzag_decode, zigzag_encode


class Leaf(BaseMessage):
    """Nested message for property testing."""

    value: int = IntField(1, kind="sint64")
    label: str = StrField(2)


class Record(BaseMessage):
    """Message for property testing."""

    id: int = IntField(1, kind="uint64")
    delta: int = IntField(2, kind="int32")
    flag: bool = BoolField(3)
    name: str = StrField(4)
    payload: bytes = BytesField(5)
    counts: list[int] = RepeatedField(6, kind="uint32")
    leaf: Optional[Leaf] = MessageField(7)
    leaves: list[Leaf] = RepeatedField(8)


uint64s = st.integers(min_value=0, max_value=(1 << 64) - 1)
int64s = st.integers(min_value=-(1 << 63), max_value=(1 << 63) - 1)

leaves = st.builds(Leaf, value=int64s, label=st.text(max_size=20))
records = st.builds(
    Record,
    id=uint64s,
    delta=st.integers(min_value=-(1 << 31), max_value=(1 << 31) - 1),
    flag=st.booleans(),
    name=st.text(max_size=50),
    payload=st.binary(max_size=50),
    counts=st.lists(st.integers(min_value=0, max_value=(1 << 32) - 1), max_size=10),
    leaf=st.none() | leaves,
    leaves=st.lists(leaves, max_size=5),
)


class TestWireProperties:
    """Property-based tests for wire primitives."""

    @given(value=uint64s)
    def test_varint_roundtrip(self, value: int) -> None:
        """Test varint encoding is invertible and sized exactly."""
        data = encode_varint(value)
        assert len(data) == varint_size(value)
        reader = WireReader(data)
        assert reader.read_varint() == value
        assert reader.at_end()

    @given(value=int64s)
    def test_zigzag_roundtrip(self, value: int) -> None:
        """Test zigzag mapping is invertible."""
        assert zigzag_decode(zigzag_encode(value)) == value


class TestCodecProperties:
    """Property-based tests for codec."""

    @given(msg=records)
    def test_encode_decode_roundtrip(self, msg: Record) -> None:
        """Test encode/decode is invertible."""
        assert decode(Record, encode(msg)) == msg

    @given(msg=records)
    def test_size_matches_encoding(self, msg: Record) -> None:
        """Test the size calculator agrees with the encoder."""
        assert encoded_size(msg) == len(encode(msg))

    @given(msg=records)
    def test_encode_deterministic(self, msg: Record) -> None:
        """Test encoding is deterministic."""
        assert encode(msg) == encode(msg.model_copy(deep=True))

    @given(msg=records)
    def test_skip_covers_every_field(self, msg: Record) -> None:
        """Test skipping field by field consumes the whole buffer."""
        data = encode(msg)
        offset = 0
        count = 0
        while offset < len(data):
            offset += skip_field(data, offset)
            count += 1
        assert offset == len(data)
        assert count == len(decode_raw(data))

    @given(msg=records, extra=st.lists(st.tuples(st.integers(20, 100), uint64s), max_size=5))
    def test_unknown_fields_survive(self, msg: Record, extra: list[tuple[int, int]]) -> None:
        """Test unknown fields appended to a message are re-emitted unchanged."""
        tail = b"".join(encode_varint(number << 3) + encode_varint(value) for number, value in extra)
        data = encode(msg) + tail
        decoded = decode(Record, data)
        assert decoded.unknown_fields == tail
        assert encode(decoded) == data
