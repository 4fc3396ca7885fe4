"""Tests for the structural UTF-16 validator."""
import pytest

from source_normalizer.model import Utf16Status
from source_normalizer.utf16 import check_utf16, is_normal_ascii


@pytest.mark.parametrize("data", [b"", b"a", b"abc"])
def test_bad_size(data):
    status, _ = check_utf16(data)
    assert status is Utf16Status.BAD_SIZE


def test_little_endian_without_bom():
    status, counts = check_utf16("int x;\n".encode("utf-16-le"))
    assert status is Utf16Status.OK
    assert counts.little_endian
    assert counts.normal_ascii == 7
    assert counts.weird_ascii == 0
    assert counts.total_characters == 7
    assert counts.non_ascii == 0


def test_big_endian_detected_by_ascii_score():
    status, counts = check_utf16("int x;\n".encode("utf-16-be"))
    assert status is Utf16Status.OK
    assert not counts.little_endian
    assert counts.normal_ascii == 7


@pytest.mark.parametrize("bom, little", [(b"\xFF\xFE", True), (b"\xFE\xFF", False)])
def test_bom_fixes_endianness_and_is_consumed(bom, little):
    body = "ab\n".encode("utf-16-le" if little else "utf-16-be")
    status, counts = check_utf16(bom + body)
    assert status is Utf16Status.OK
    assert counts.little_endian is little
    assert counts.total_characters == 3


def test_surrogate_pair_counts_as_one_character():
    status, counts = check_utf16("a\U0001F600\n".encode("utf-16-le"))
    assert status is Utf16Status.OK
    assert counts.total_characters == 3
    assert counts.non_ascii == 1


def test_non_ascii_bmp_character():
    status, counts = check_utf16("été\n".encode("utf-16-le"))
    assert status is Utf16Status.OK
    assert counts.non_ascii == 2
    assert counts.normal_ascii == 2


def test_weird_ascii_is_counted():
    status, counts = check_utf16("a\x01\n".encode("utf-16-le"))
    assert status is Utf16Status.OK
    assert counts.weird_ascii == 1


@pytest.mark.parametrize("units", [
    [0x61, 0xDC00, 0x0A],           # low surrogate without a high one
    [0x61, 0xD800, 0xD800, 0xDC00],  # two high surrogates in a row
    [0x61, 0xD800, 0x61, 0x0A],      # high surrogate followed by a character
    [0x61, 0x0A, 0xD800],            # ends on a high surrogate
    [0xDC00, 0x61],                  # starts with a low surrogate
])
def test_invalid_surrogates(units):
    data = b"".join(u.to_bytes(2, "little") for u in units)
    status, _ = check_utf16(data)
    assert status is Utf16Status.INVALID


def test_is_normal_ascii():
    assert is_normal_ascii(ord("a"))
    assert is_normal_ascii(ord(" "))
    for ch in "\t\n\v\f\r":
        assert is_normal_ascii(ord(ch))
    assert not is_normal_ascii(0x00)
    assert not is_normal_ascii(0x08)
    assert not is_normal_ascii(0x1B)
    assert not is_normal_ascii(0x7F)
    assert not is_normal_ascii(0x100)
