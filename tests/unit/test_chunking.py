"""
Chunking Unit Tests
Tests for core/merkle/chunking.py
"""
import pytest

from core.merkle.chunking import (
    DEFAULT_CHUNK_SIZE,
    chunk_blob,
    chunk_count,
    unchunk,
)


class TestChunkBlob:
    """Tests for chunk_blob()."""

    def test_exact_multiple(self):
        """Blob length divisible by chunk_size needs no padding."""
        chunks = chunk_blob(b"abcdefgh", 4)

        assert chunks == [b"abcd", b"efgh"]

    def test_last_chunk_zero_padded(self):
        chunks = chunk_blob(b"abcde", 2)

        assert chunks == [b"ab", b"cd", b"e\x00"]

    def test_all_chunks_full_size(self):
        chunks = chunk_blob(bytes(range(100)), 32)

        assert len(chunks) == 4
        assert all(len(c) == 32 for c in chunks)
        assert chunks[-1] == bytes(range(96, 100)) + b"\x00" * 28

    def test_empty_blob_yields_one_zero_chunk(self):
        chunks = chunk_blob(b"", 32)

        assert chunks == [b"\x00" * 32]

    def test_blob_shorter_than_chunk(self):
        chunks = chunk_blob(b"hi", 8)

        assert chunks == [b"hi" + b"\x00" * 6]

    def test_default_chunk_size(self):
        chunks = chunk_blob(b"x" * 40)

        assert DEFAULT_CHUNK_SIZE == 32
        assert len(chunks) == 2

    def test_accepts_bytearray(self):
        chunks = chunk_blob(bytearray(b"abc"), 2)

        assert chunks == [b"ab", b"c\x00"]
        assert all(isinstance(c, bytes) for c in chunks)

    @pytest.mark.parametrize("bad", [0, -1, -32])
    def test_non_positive_chunk_size_raises(self, bad):
        with pytest.raises(ValueError, match="positive"):
            chunk_blob(b"abc", bad)

    def test_non_integer_chunk_size_raises(self):
        with pytest.raises(ValueError, match="int"):
            chunk_blob(b"abc", 2.5)


class TestRoundTrip:
    """Re-concatenating and truncating reproduces the blob."""

    @pytest.mark.parametrize("length", [1, 5, 31, 32, 33, 64, 150, 1000])
    @pytest.mark.parametrize("size", [1, 3, 32])
    def test_unchunk_restores_blob(self, length, size):
        blob = bytes((i * 13) % 256 for i in range(length))

        assert unchunk(chunk_blob(blob, size), len(blob)) == blob

    def test_trailing_zero_bytes_survive(self):
        """Zeros that belong to the blob are kept when length is known."""
        blob = b"data\x00\x00"

        assert unchunk(chunk_blob(blob, 4), len(blob)) == blob

    def test_negative_length_raises(self):
        with pytest.raises(ValueError):
            unchunk([b"ab"], -1)


class TestChunkCount:
    """chunk_count() agrees with chunk_blob()."""

    @pytest.mark.parametrize("length", [0, 1, 31, 32, 33, 95, 96, 97])
    def test_matches_chunk_blob(self, length):
        assert chunk_count(length, 32) == len(chunk_blob(b"a" * length, 32))
