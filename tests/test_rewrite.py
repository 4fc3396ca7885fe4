"""Tests for content normalization and the backup-and-rename replacement."""
from pathlib import Path

import pytest

from source_normalizer.classify import classify_errors
from source_normalizer.model import ErrorFlag
from source_normalizer.rewrite import fix_content, safe_replace, sibling


def test_end_to_end_scenario():
    data = b"int x=1;\t\r\n  \nreturn x;"
    assert fix_content(data, 4) == b"int x=1;\n\nreturn x;\n"


@pytest.mark.parametrize("data, tab_width, expected", [
    (b"\tx\n", 4, b"    x\n"),
    (b"ab\tx\n", 4, b"ab  x\n"),
    (b"abcd\tx\n", 4, b"abcd    x\n"),
    (b"a\tb\tc\n", 8, b"a       b       c\n"),
    (b"abc\tx\n", 1, b"abc x\n"),
])
def test_tab_expansion(data, tab_width, expected):
    assert fix_content(data, tab_width) == expected


@pytest.mark.parametrize("tab_width", [2, 3, 4, 8])
def test_tabs_advance_to_tab_stops(tab_width):
    data = b"\ta\tbc\tdef\tghij\tk\n"
    fixed = fix_content(data, tab_width)
    assert b"\t" not in fixed
    # every letter run starts at a tab stop
    line = fixed.decode("ascii").rstrip("\n")
    col = 0
    for word in line.split():
        col = line.index(word, col)
        assert col % tab_width == 0
        col += len(word)


def test_other_whitespace_becomes_space():
    assert fix_content(b"a\vb\fc\rd\n", 4) == b"a b c d\n"


def test_trailing_spaces_removed():
    assert fix_content(b"a   \nb \t\n", 4) == b"a\nb\n"


def test_crlf_becomes_lf():
    assert fix_content(b"one\r\ntwo\r\n", 4) == b"one\ntwo\n"


def test_missing_newline_added():
    assert fix_content(b"last", 4) == b"last\n"


def test_whitespace_only_tail_is_dropped():
    assert fix_content(b"a\n   ", 4) == b"a\n"
    assert fix_content(b"", 4) == b""


@pytest.mark.parametrize("data", [
    b"int x=1;\t\r\n  \nreturn x;",
    b"\t\t{\r\n\v\f}\r",
    b"a \nb\t\n\n\nc",
])
def test_fix_is_idempotent(data):
    once = fix_content(data, 4)
    assert fix_content(once, 4) == once
    assert classify_errors(once) == ErrorFlag.NONE


def test_sibling_appends_suffix():
    assert sibling(Path("src/main.c"), ".bak~") == Path("src/main.c.bak~")


def test_safe_replace_keeps_backup(tmp_path):
    target = tmp_path / "main.c"
    target.write_bytes(b"old\r\n")

    backup = safe_replace(target, b"new\n")

    assert backup == tmp_path / "main.c.bak~"
    assert target.read_bytes() == b"new\n"
    assert backup.read_bytes() == b"old\r\n"
    assert not (tmp_path / "main.c.tmp~").exists()


def test_safe_replace_overwrites_stale_backup(tmp_path):
    target = tmp_path / "main.c"
    target.write_bytes(b"second\r\n")
    (tmp_path / "main.c.bak~").write_bytes(b"first\n")

    backup = safe_replace(target, b"second\n")

    assert isinstance(backup, Path)
    assert backup.read_bytes() == b"second\r\n"


def test_safe_replace_failure_leaves_original(tmp_path, monkeypatch):
    target = tmp_path / "main.c"
    target.write_bytes(b"keep\r\n")
    original_rename = Path.rename

    def failing_rename(self, other):
        if self == target:
            raise PermissionError("rename denied")
        return original_rename(self, other)

    monkeypatch.setattr(Path, "rename", failing_rename)
    outcome = safe_replace(target, b"keep\n")

    assert isinstance(outcome, PermissionError)
    assert target.read_bytes() == b"keep\r\n"


def test_safe_replace_failure_after_backup_keeps_backup(tmp_path, monkeypatch):
    target = tmp_path / "main.c"
    target.write_bytes(b"keep\r\n")
    temp = tmp_path / "main.c.tmp~"
    original_rename = Path.rename

    def failing_rename(self, other):
        if self == temp:
            raise OSError("disk trouble")
        return original_rename(self, other)

    monkeypatch.setattr(Path, "rename", failing_rename)
    outcome = safe_replace(target, b"keep\n")

    assert isinstance(outcome, OSError)
    assert (tmp_path / "main.c.bak~").read_bytes() == b"keep\r\n"
    assert temp.read_bytes() == b"keep\n"
