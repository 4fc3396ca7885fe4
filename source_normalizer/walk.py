# source_normalizer/walk.py

from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, Set

from .model import Options


def parse_list(values: Iterable[str]) -> Set[str]:
    """Split comma/space separated option values into a set of names."""
    names: Set[str] = set()
    for value in values:
        names.update(n for n in value.replace(",", " ").split() if n)
    return names


def normalize_extensions(values: Iterable[str]) -> Set[str]:
    """Extensions with a leading dot: ``{"c", ".h"}`` -> ``{".c", ".h"}``."""
    return {e if e.startswith(".") else f".{e}" for e in parse_list(values)}


def should_be_skipped(name: str, options: Options) -> bool:
    """Return True for directories not worth entering."""
    return name.startswith(".") or name in options.skip


def has_required_extension(path: Path, options: Options) -> bool:
    return path.suffix in options.extensions


def _log(options: Options, prefix: str, path: Path) -> None:
    if options.verbose:
        print(f"[INFO] {prefix} {path}")


def _iter_directory(directory: Path, options: Options) -> Iterator[Path]:
    for p in sorted(directory.iterdir()):
        if p.is_symlink() and p.is_dir():
            _log(options, "skip", p)
        elif p.is_dir():
            if options.recursive and not should_be_skipped(p.name, options):
                _log(options, "enter", p)
                yield from _iter_directory(p, options)
            else:
                _log(options, "skip", p)
        elif p.is_file():
            select = has_required_extension(p, options)
            _log(options, "examine" if select else "skip", p)
            if select:
                yield p


def iter_files(root: Path, options: Options) -> Iterator[Path]:
    """Iterate over the source files selected by a command line path.

    A regular file is yielded regardless of its extension. For a directory,
    only files with an accepted extension are yielded, and subdirectories are
    entered only in recursive mode. Symlinked directories are never entered.

    Args:
        root (Path): File or directory given on the command line.
        options (Options): Extension, skip and recursion settings.

    Yields:
        Path: Paths to each selected file.
    """
    if root.is_file():
        _log(options, "examine", root)
        yield root
        return

    yield from _iter_directory(root, options)
