# source_normalizer/encoding.py

from __future__ import annotations

from .model import EncodingVerdict, Utf16Status
from .utf16 import check_utf16

# --- constants ------------------------------------------------------------------

_ELF_MAGIC = b"\x7FELF"
_MIN_ELF_SIZE = 50

_PRINTABLE = frozenset(range(0x20, 0x7F)) | frozenset(b"\t\n\v\f\r")


# --- checks ---------------------------------------------------------------------


def _is_elf(data: bytes) -> bool:
    return len(data) > _MIN_ELF_SIZE and data.startswith(_ELF_MAGIC)


def _is_plausible_utf16(data: bytes) -> bool:
    """Valid UTF-16 that also looks like mostly ASCII source text."""
    status, counts = check_utf16(data)
    if status is not Utf16Status.OK:
        return False
    if counts.weird_ascii:
        return False
    # at most 5% of the characters outside ASCII
    return 20 * counts.non_ascii <= counts.total_characters


def _is_mostly_unprintable(data: bytes) -> bool:
    printable = sum(1 for b in data if b in _PRINTABLE)
    unprintable = len(data) - printable
    return 3 * unprintable > printable


# --- public API -----------------------------------------------------------------


def classify_invalid(data: bytes) -> EncodingVerdict:
    """Decide what a file with invalid characters most likely is.

    Only meant to be called after the classifier reported invalid characters.
    A few stray high-bit bytes (a copyright sign, say) must not turn an
    ordinary text file into UTF-16 or binary, hence the gates below.

    Args:
        data (bytes): Full content of the file.

    Returns:
        EncodingVerdict: BINARY, UTF16, or UNKNOWN when neither applies.
    """
    if _is_elf(data):
        return EncodingVerdict.BINARY

    if _is_plausible_utf16(data):
        return EncodingVerdict.UTF16

    if _is_mostly_unprintable(data):
        return EncodingVerdict.BINARY

    return EncodingVerdict.UNKNOWN
