# source_normalizer/normalize.py

"""
Per-file pipeline: load, classify, refine the encoding verdict, report, fix.
"""
from __future__ import annotations
import sys
from pathlib import Path
from typing import Tuple

from .classify import classify_errors
from .encoding import classify_invalid
from .model import EncodingVerdict, ErrorFlag, FileResult, Options, is_fixable
from .report import format_diagnostic
from .rewrite import fix_content, safe_replace

_VERDICT_FLAGS = {
    EncodingVerdict.UTF16: ErrorFlag.UTF16_ENCODING,
    EncodingVerdict.BINARY: ErrorFlag.BINARY_CONTENT,
}


def load_file(path: Path) -> bytes:
    """Read the whole file into memory."""
    with path.open("rb") as f:
        return f.read()


def resolve_errors(data: bytes, errors: ErrorFlag) -> Tuple[ErrorFlag, EncodingVerdict | None]:
    """Refine invalid characters into an encoding verdict.

    A UTF-16 or binary verdict replaces the generic invalid characters flag.
    Once anything hopeless is present, the fixable flags are dropped: such a
    file is never rewritten, so only the hopeless condition is reported.

    Returns:
        Tuple[ErrorFlag, EncodingVerdict | None]: Resolved flags and the
        verdict, ``None`` when there were no invalid characters.
    """
    verdict = None
    if errors & ErrorFlag.INVALID_CHARACTERS:
        verdict = classify_invalid(data)
        if verdict in _VERDICT_FLAGS:
            errors = (errors & ~ErrorFlag.INVALID_CHARACTERS) | _VERDICT_FLAGS[verdict]

    if errors & ErrorFlag.HOPELESS:
        errors &= ErrorFlag.HOPELESS

    return errors, verdict


def normalize_file(path: Path, options: Options) -> FileResult:
    """Examine one file, report its problems and fix them when allowed.

    Args:
        path (Path): File to examine.
        options (Options): Tab width, fix mode and verbosity.

    Returns:
        FileResult: What was found and what was done.
    """
    result = FileResult(path=str(path))
    try:
        data = load_file(path)
    except OSError as exc:
        result.action = "error"
        result.error = f"{type(exc).__name__}: {exc}"
        print(f"[ERR] Cannot read {path}: {exc}", file=sys.stderr)
        return result

    result.size_bytes = len(data)
    errors = classify_errors(data)
    if not errors:
        if options.verbose:
            print(f"[INFO] ok {path}")
        return result

    result.errors, result.verdict = resolve_errors(data, errors)
    result.diagnostic = format_diagnostic(path, result.errors)
    print(result.diagnostic, file=sys.stderr)

    if options.fix and is_fixable(result.errors):
        outcome = safe_replace(path, fix_content(data, options.tab_width))
        if isinstance(outcome, Exception):
            result.action = "error"
            result.error = f"{type(outcome).__name__}: {outcome}"
            print(f"[ERR] Failed to fix {path}: {outcome}", file=sys.stderr)
        else:
            result.action = "fix"
            result.backup_path = str(outcome)
            print(f"[INFO] Fixed {path} (backup: {outcome.name})")

    return result
