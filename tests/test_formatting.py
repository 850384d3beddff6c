import pytest

from zonealloc.formatting import (
    format_dec,
    format_hex,
    format_hex_octet,
    format_hex_zeroes,
    hash_djb2,
)


def test_format_dec_zero_is_empty():
    assert format_dec(0) == ""


@pytest.mark.parametrize("n", [1, 9, 10, 1234, 2097152, 16777216])
def test_format_dec_matches_int(n):
    assert int(format_dec(n)) == n


def test_format_hex_zero():
    assert format_hex(0) == "0x"


@pytest.mark.parametrize("n", [1, 15, 255, 4096, 0xBADA55])
def test_format_hex_round_trip(n):
    text = format_hex(n)
    assert text.startswith("0x")
    assert text[2:] == text[2:].upper()
    assert int(text, 16) == n


def test_format_hex_uppercase_digits():
    assert format_hex(0xBADA55) == "0xBADA55"


def test_format_hex_octet_values():
    assert format_hex_octet(0) == "00 "
    assert format_hex_octet(5) == "05 "
    assert format_hex_octet(0xAB) == "AB "


@pytest.mark.parametrize("n", range(256))
def test_format_hex_octet_shape(n):
    text = format_hex_octet(n)
    assert len(text) == 3
    assert text.endswith(" ")
    assert int(text[:2], 16) == n


def test_format_hex_zeroes():
    assert format_hex_zeroes(0) == "0000"
    assert format_hex_zeroes(0x1234) == ""
    assert format_hex_zeroes(0x10) == "00"


def test_negative_rejected():
    with pytest.raises(ValueError):
        format_dec(-1)


def test_hash_needs_eight_bytes():
    with pytest.raises(ValueError):
        hash_djb2(b"\x00" * 7)


def test_hash_ignores_extra_bytes():
    base = bytes(range(8))
    assert hash_djb2(base + b"tail") == hash_djb2(base)


def test_hash_accepts_memoryview_and_is_64_bit():
    data = (0x7F2268500298).to_bytes(8, "little")
    value = hash_djb2(memoryview(data))
    assert value == hash_djb2(data)
    assert 0 <= value < 1 << 64


def test_hash_distinguishes_inputs():
    values = {hash_djb2(i.to_bytes(8, "little")) for i in range(0, 4096, 16)}
    assert len(values) == 256