# source_normalizer/rewrite.py

from __future__ import annotations
from pathlib import Path

BACKUP_SUFFIX = ".bak~"
TEMP_SUFFIX = ".tmp~"

_SPACE = 0x20
_LF = 0x0A
_TAB = 0x09
_OTHER_WHITESPACE = frozenset(b"\r\v\f")


def fix_content(data: bytes, tab_width: int) -> bytes:
    """Return the content with all fixable whitespace problems corrected.

    Tabs are expanded to the next multiple of ``tab_width``, CR, VT and FF
    become single spaces, trailing spaces are removed and the result always
    ends with exactly one line feed (unless it is empty).

    Args:
        data (bytes): Content without hopeless errors.
        tab_width (int): Tab stop distance, at least 1.

    Returns:
        bytes: Normalized content.
    """
    out = bytearray()
    line = bytearray()
    for ch in data:
        if ch == _LF:
            out += line.rstrip(b" ")
            out.append(_LF)
            line.clear()
        elif ch == _TAB:
            line += b" " * (tab_width - len(line) % tab_width)
        elif ch in _OTHER_WHITESPACE:
            line.append(_SPACE)
        else:
            line.append(ch)

    line = line.rstrip(b" ")
    if line:
        out += line
        out.append(_LF)

    return bytes(out)


def sibling(path: Path, suffix: str) -> Path:
    """Path next to ``path`` with ``suffix`` appended to the full name."""
    return path.with_name(path.name + suffix)


def safe_replace(path: Path, content: bytes) -> Path | Exception:
    """Replace a file's content, keeping the previous content as a backup.

    The new content goes to ``<name>.tmp~`` first; then any stale
    ``<name>.bak~`` is removed, the original is renamed to ``<name>.bak~``
    and the temporary file is renamed onto the original name. A failing step
    stops the sequence, so the original content is always either still in
    place or in the backup.

    Args:
        path (Path): File to replace.
        content (bytes): New content.

    Returns:
        Path | Exception: The backup path on success, or the caught exception.
    """
    temp = sibling(path, TEMP_SUFFIX)
    backup = sibling(path, BACKUP_SUFFIX)
    try:
        temp.write_bytes(content)
        if backup.exists():
            backup.unlink()
        path.rename(backup)
        temp.rename(path)
        return backup
    except OSError as exc:
        return exc
