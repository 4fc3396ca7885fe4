# source_normalizer/utf16.py

"""
Structural UTF-16 check: surrogate pairing, byte order and ASCII statistics.
"""
from __future__ import annotations
from typing import Iterator, Tuple

from .model import Utf16Counts, Utf16Status

_ASCII_DEL = 0x7F
_MIN_HIGH_SURROGATE = 0xD800
_MIN_LOW_SURROGATE = 0xDC00
_MAX_LOW_SURROGATE = 0xDFFF

# Code units examined when guessing the byte order
_MAX_UNITS_TO_EXAMINE = 1000

_CHARACTER, _HIGH_SURROGATE, _LOW_SURROGATE = range(3)


def _unit_type(code: int) -> int:
    if code < _MIN_HIGH_SURROGATE:
        return _CHARACTER
    if code < _MIN_LOW_SURROGATE:
        return _HIGH_SURROGATE
    if code <= _MAX_LOW_SURROGATE:
        return _LOW_SURROGATE
    return _CHARACTER


def is_normal_ascii(code: int) -> bool:
    """Printable 7-bit characters and the usual whitespace (tab, LF, VT, FF, CR)."""
    if code < 0x09 or code > 0x7E:
        return False
    return code >= 0x20 or code <= 0x0D


def _le_unit(data: bytes, pos: int) -> int:
    return data[pos] | (data[pos + 1] << 8)


def _be_unit(data: bytes, pos: int) -> int:
    return (data[pos] << 8) | data[pos + 1]


def _determine_endianness(data: bytes) -> Tuple[bool, int]:
    """Return (little_endian, offset of the first code unit)."""
    if data[0] == 0xFF and data[1] == 0xFE:
        return True, 2
    if data[0] == 0xFE and data[1] == 0xFF:
        return False, 2

    # No BOM: pick the byte order yielding more ASCII, little endian on a tie
    end = min(len(data), 2 * _MAX_UNITS_TO_EXAMINE)
    le = be = 0
    for pos in range(0, end, 2):
        le += is_normal_ascii(_le_unit(data, pos))
        be += is_normal_ascii(_be_unit(data, pos))
    return be <= le, 0


def _iter_units(data: bytes, start: int, little_endian: bool) -> Iterator[int]:
    get_unit = _le_unit if little_endian else _be_unit
    for pos in range(start, len(data), 2):
        yield get_unit(data, pos)


def check_utf16(data: bytes) -> Tuple[Utf16Status, Utf16Counts]:
    """Check whether the data is a structurally valid UTF-16 sequence.

    Args:
        data (bytes): Raw file content.

    Returns:
        Tuple[Utf16Status, Utf16Counts]: Status plus the character counts.
        The counts are only meaningful when the status is ``Utf16Status.OK``.
    """
    counts = Utf16Counts()
    if len(data) < 2 or len(data) % 2:
        return Utf16Status.BAD_SIZE, counts

    counts.little_endian, start = _determine_endianness(data)

    previous = _CHARACTER
    for unit in _iter_units(data, start, counts.little_endian):
        kind = _unit_type(unit)
        if kind == _CHARACTER:
            # a lonely high surrogate just before
            if previous != _CHARACTER:
                return Utf16Status.INVALID, counts
            if unit <= _ASCII_DEL:
                if is_normal_ascii(unit):
                    counts.normal_ascii += 1
                else:
                    counts.weird_ascii += 1
            counts.total_characters += 1
        elif kind == _HIGH_SURROGATE:
            if previous == _HIGH_SURROGATE:
                return Utf16Status.INVALID, counts
        else:
            if previous != _HIGH_SURROGATE:
                return Utf16Status.INVALID, counts
            # a complete pair is one character
            counts.total_characters += 1
            kind = _CHARACTER
        previous = kind

    if previous != _CHARACTER:
        return Utf16Status.INVALID, counts

    return Utf16Status.OK, counts
