"""Property-based tests using hypothesis."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st
from payloads import Another, Test

from transit import DatagramBuffer, DeserializeError, JsonCodec, MsgpackCodec, RawCodec

INT64 = st.integers(min_value=-(2**63), max_value=2**63 - 1)


class TestCodecProperties:
    """Property-based tests for codecs."""

    @given(ten=st.integers(min_value=0, max_value=255))
    def test_struct_roundtrip_msgpack(self, ten: int) -> None:
        """Test encode/decode is invertible."""
        codec = MsgpackCodec()
        assert codec.loads(codec.dumps(Test(ten=ten), Test), Test) == Test(ten=ten)

    @given(ten=st.integers(min_value=0, max_value=255))
    def test_struct_roundtrip_json(self, ten: int) -> None:
        codec = JsonCodec()
        assert codec.loads(codec.dumps(Test(ten=ten), Test), Test) == Test(ten=ten)

    @given(text=st.text())
    def test_text_roundtrip_all_codecs(self, text: str) -> None:
        for codec in (MsgpackCodec(), JsonCodec(), RawCodec()):
            assert codec.loads(codec.dumps(text, str), str) == text

    @given(data=st.binary(max_size=2048))
    def test_binary_roundtrip(self, data: bytes) -> None:
        for codec in (MsgpackCodec(), RawCodec()):
            assert codec.loads(codec.dumps(data, bytes), bytes) == data

    @given(values=st.lists(INT64, max_size=50))
    def test_int_list_roundtrip_msgpack(self, values: list[int]) -> None:
        codec = MsgpackCodec()
        assert codec.loads(codec.dumps(values, list[int]), list[int]) == values

    @given(data=st.text(min_size=0, max_size=64))
    def test_cross_type_always_rejected(self, data: str) -> None:
        """Test Another never decodes as Test, whatever the text."""
        for codec in (MsgpackCodec(), JsonCodec()):
            encoded = codec.dumps(Another(data=data), Another)
            with pytest.raises(DeserializeError):
                codec.loads(encoded, Test)

    @given(ten=st.integers(min_value=0, max_value=255))
    def test_encode_deterministic(self, ten: int) -> None:
        """Test encoding is deterministic."""
        codec = MsgpackCodec()
        assert codec.dumps(Test(ten=ten), Test) == codec.dumps(Test(ten=ten), Test)


class TestBufferProperties:
    """Property-based tests for the datagram buffer."""

    @given(chunks=st.lists(st.binary(max_size=64), max_size=20))
    def test_writer_count_matches_content(self, chunks: list[bytes]) -> None:
        """Test the written view is exactly the concatenated chunks."""
        buffer = DatagramBuffer(2048)
        writer = buffer.writer()
        for chunk in chunks:
            writer.write(chunk)

        assert writer.count == sum(len(c) for c in chunks)
        assert bytes(buffer.written(writer)) == b"".join(chunks)

    @given(first=st.binary(max_size=256), second=st.binary(max_size=256))
    def test_no_residue_between_encodes(self, first: bytes, second: bytes) -> None:
        """Test a second encode never carries bytes from the first."""
        buffer = DatagramBuffer(512)
        buffer.writer().write(first)

        writer = buffer.writer()
        writer.write(second)
        assert bytes(buffer.written(writer)) == second
