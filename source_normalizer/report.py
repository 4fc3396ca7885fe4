# source_normalizer/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable, List, Tuple

from .model import ErrorFlag, FileResult

# Phrase per flag, in the order they are reported
_PHRASES: Tuple[Tuple[ErrorFlag, str], ...] = (
    (ErrorFlag.UTF16_ENCODING, "invalid encoding (possibly UTF-16)"),
    (ErrorFlag.BINARY_CONTENT, "binary content"),
    (ErrorFlag.INVALID_CHARACTERS, "invalid characters"),
    (ErrorFlag.TABS, "tabs"),
    (ErrorFlag.UNUSUAL_WHITESPACE, "unusual whitespace"),
    (ErrorFlag.TRAILING_WHITESPACE, "trailing whitespace"),
    (ErrorFlag.CRLF_LINE_ENDINGS, "CR-LF line endings"),
    (ErrorFlag.MISSING_NEWLINE, "no line feed at end of file"),
)


def error_names(flags: ErrorFlag) -> List[str]:
    """Lower-case member names of the set flags, in report order."""
    return [flag.name.lower() for flag, _ in _PHRASES if flag in flags]


def join_phrases(phrases: List[str]) -> str:
    """Join with commas and put an "and" after the last one: "a, b, and c"."""
    if len(phrases) < 2:
        return "".join(phrases)
    return ", ".join(phrases[:-1]) + ", and " + phrases[-1]


def describe_errors(flags: ErrorFlag) -> str:
    """Human readable list of problems, one phrase per set flag."""
    return join_phrases([phrase for flag, phrase in _PHRASES if flag in flags])


def format_diagnostic(path: Path | str, flags: ErrorFlag) -> str:
    return f"File: {path} has {describe_errors(flags)}"


def write_csv(out_path: Path, rows: Iterable[FileResult]) -> None:
    """Write per-file results to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        rows (Iterable[FileResult]): One result per examined file.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "path", "size_bytes", "errors", "verdict", "fixable",
            "action", "backup_path", "error"
        ])
        for r in rows:
            writer.writerow([
                r.path,
                r.size_bytes,
                "|".join(error_names(r.errors)),
                r.verdict.value if r.verdict else "",
                str(r.fixable).lower(),
                r.action,
                r.backup_path,
                r.error
            ])
