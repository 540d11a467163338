"""Tests for Buffer value operations."""

from __future__ import annotations

import pytest

from strcalc.buffer import Buffer


class TestConstruction:
    def test_new_copies_prefix(self) -> None:
        assert bytes(Buffer.new(b"12345", 3)) == b"123"

    def test_new_zero_length(self) -> None:
        buf = Buffer.new(b"99", 0)
        assert len(buf) == 0
        assert bytes(buf) == b""

    def test_new_length_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            Buffer.new(b"1", 2)

    def test_duplicate_is_equal_but_distinct(self) -> None:
        buf = Buffer(b"42")
        dup = buf.duplicate()
        assert dup == buf
        assert dup is not buf

    def test_source_bytearray_is_copied(self) -> None:
        raw = bytearray(b"12")
        buf = Buffer(raw)
        raw[0] = ord("9")
        assert bytes(buf) == b"12"


class TestConcat:
    def test_concat(self) -> None:
        a, b = Buffer(b"12"), Buffer(b"34")
        assert bytes(a.concat(b)) == b"1234"

    def test_concat_leaves_operands(self) -> None:
        a, b = Buffer(b"12"), Buffer(b"34")
        a.concat(b)
        assert bytes(a) == b"12"
        assert bytes(b) == b"34"

    def test_concat_length_is_sum(self) -> None:
        assert len(Buffer(b"123").concat(Buffer(b"4567"))) == 7


class TestRepeat:
    def test_repeat(self) -> None:
        assert bytes(Buffer(b"12").repeat(3)) == b"121212"

    def test_repeat_zero_is_empty(self) -> None:
        assert bytes(Buffer(b"12").repeat(0)) == b""

    def test_repeat_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            Buffer(b"1").repeat(-1)


class TestAsUnsigned:
    def test_simple(self) -> None:
        assert Buffer(b"22").as_unsigned() == 22

    def test_leading_zeros(self) -> None:
        assert Buffer(b"007").as_unsigned() == 7

    def test_empty_is_zero(self) -> None:
        assert Buffer(b"").as_unsigned() == 0

    def test_max_unsigned_64(self) -> None:
        assert Buffer(b"18446744073709551615").as_unsigned() == 2**64 - 1

    def test_wraps_modulo_2_64(self) -> None:
        assert Buffer(b"18446744073709551616").as_unsigned() == 0
        assert Buffer(b"18446744073709551617").as_unsigned() == 1
