# source_normalizer/classify.py

from __future__ import annotations

from .model import ErrorFlag

# Any byte that is not regarded as whitespace
_NOT_A_SPACE = 0x41

_WHITESPACE = frozenset(b" \t\n\r\v\f")

_LF = 0x0A
_CR = 0x0D
_TAB = 0x09
_OTHER_WHITESPACE = frozenset(b"\r\v\f")


def is_whitespace(byte: int) -> bool:
    return byte in _WHITESPACE


def classify_errors(data: bytes) -> ErrorFlag:
    """Scan the raw content once and collect every detected problem.

    A three byte lookback (current, penultimate, antepenultimate) is enough to
    recognize CR-LF pairs and whitespace at the end of a line.

    Args:
        data (bytes): Full content of the file.

    Returns:
        ErrorFlag: Detected problems, ``ErrorFlag.NONE`` for a clean file.
    """
    errors = ErrorFlag.NONE
    unusual_whitespace = 0

    penultimate = _NOT_A_SPACE
    antepenultimate = _NOT_A_SPACE

    for current in data:
        if current < 0x20 or current > 0x7E:
            if current == _LF:
                last_character = penultimate
                if penultimate == _CR:
                    errors |= ErrorFlag.CRLF_LINE_ENDINGS
                    last_character = antepenultimate
                    # the CR was already tallied as a free standing one
                    unusual_whitespace -= 1
                    penultimate = _NOT_A_SPACE
                if is_whitespace(last_character):
                    errors |= ErrorFlag.TRAILING_WHITESPACE
                # the line feed is not trailing whitespace of the next line
                current = _NOT_A_SPACE
            elif current == _TAB:
                errors |= ErrorFlag.TABS
            elif current in _OTHER_WHITESPACE:
                unusual_whitespace += 1
            else:
                errors |= ErrorFlag.INVALID_CHARACTERS

        antepenultimate = penultimate
        penultimate = current

    if unusual_whitespace > 0:
        errors |= ErrorFlag.UNUSUAL_WHITESPACE

    if data and data[-1] != _LF:
        errors |= ErrorFlag.MISSING_NEWLINE

    return errors
