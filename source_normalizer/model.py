# source_normalizer/model.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import FrozenSet


class ErrorFlag(Flag):
    """Problems detected in the raw content of one file."""
    NONE = 0

    # fixable
    TABS = 0x0001
    UNUSUAL_WHITESPACE = 0x0002     # \r, \v, \f
    TRAILING_WHITESPACE = 0x0004
    CRLF_LINE_ENDINGS = 0x0008
    MISSING_NEWLINE = 0x0010
    FIXABLE = 0x001F

    # hopeless
    INVALID_CHARACTERS = 0x0100
    UTF16_ENCODING = 0x0200
    BINARY_CONTENT = 0x0400
    HOPELESS = 0x0700


def is_fixable(flags: ErrorFlag) -> bool:
    """Return True if there is something to fix and nothing hopeless."""
    if flags & ErrorFlag.HOPELESS:
        return False
    return bool(flags & ErrorFlag.FIXABLE)


class EncodingVerdict(Enum):
    """Refined verdict for a file with invalid characters."""
    UNKNOWN = "unknown"
    UTF16 = "utf-16"
    BINARY = "binary"


class Utf16Status(Enum):
    OK = "ok"
    BAD_SIZE = "bad-size"
    INVALID = "invalid"


@dataclass
class Utf16Counts:
    """Character statistics gathered while validating UTF-16."""
    normal_ascii: int = 0
    weird_ascii: int = 0
    total_characters: int = 0
    little_endian: bool = True

    @property
    def non_ascii(self) -> int:
        return self.total_characters - self.normal_ascii - self.weird_ascii


@dataclass
class Options:
    """Settings threaded through traversal, classification and rewriting."""
    tab_width: int = 4
    fix: bool = False
    recursive: bool = False
    verbose: bool = False
    skip: FrozenSet[str] = field(default_factory=frozenset)
    extensions: FrozenSet[str] = field(
        default_factory=lambda: frozenset({".c", ".cc", ".cpp", ".h", ".hpp"})
    )


@dataclass
class FileResult:
    """Outcome of examining one file; also a row of the CSV report."""
    path: str
    size_bytes: int = 0
    errors: ErrorFlag = ErrorFlag.NONE
    verdict: EncodingVerdict | None = None   # only set when invalid characters were seen
    diagnostic: str = ""
    action: str = "none"                      # one of: none | fix | error
    backup_path: str = ""
    error: str = ""

    @property
    def fixable(self) -> bool:
        return is_fixable(self.errors)
