# main.py

"""
Orchestrator: read params (JSON + CLI), walk files, detect whitespace and encoding
problems, optionally fix them, optionally write a CSV report.
"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from source_normalizer.model import FileResult, Options
from source_normalizer.normalize import normalize_file
from source_normalizer.report import write_csv
from source_normalizer.walk import iter_files, normalize_extensions, parse_list

PROGRAM_NAME = "source_normalizer"
PROGRAM_VERSION = "1.1"
VERSION_NOTICE = "This program comes with ABSOLUTELY NO WARRANTY."

DEFAULT_EXTENSIONS = "c,cc,cpp,h,hpp"
DEFAULT_TABSIZE = 4
MIN_TABSIZE = 1
MAX_TABSIZE = 100

EPILOG = f"""\
If no extensions are given, the following are assumed: {DEFAULT_EXTENSIONS}
When path is a directory, and also in recursive mode, only files with
the chosen extensions are examined.
If the path is a normal file, it is processed regardless of the extension.
Without '--fix', detected problems are reported but not fixed.
Recursion always skips subdirectories with names having a leading period.
"""


def load_config(path: Path | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            cfg = json.load(f)
    except (OSError, ValueError) as exc:
        print(f"[WARN] Failed to read config {path}: {exc}", file=sys.stderr)
        return {}
    if not isinstance(cfg, dict):
        print(f"[WARN] Ignoring config {path}: expected a JSON object", file=sys.stderr)
        return {}
    return cfg


def tab_size(value: Any) -> int:
    """Validate a tab size given on the command line or in the config."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        size = 0
    if size < MIN_TABSIZE or size > MAX_TABSIZE:
        raise argparse.ArgumentTypeError(f'strange tab size "{value}"')
    return size


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Detect and optionally fix whitespace issues in source files.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("paths", nargs="*", help="Files or directories to examine.")
    p.add_argument("-e", "--extension", action="append", metavar="EXT[,EXT]",
                   help="Extensions to be treated as source files.")
    p.add_argument("-f", "--fix", action="store_true", help="Fix detected easily fixable errors.")
    p.add_argument("-r", "--recursive", action="store_true", help="Recurse to subdirectories.")
    p.add_argument("-s", "--skip", action="append", metavar="NAME[,NAME]",
                   help="Subdirectories to skip when recursing.")
    p.add_argument("-t", "--tabsize", type=tab_size, help=f"Set the tab size (default is {DEFAULT_TABSIZE}).")
    p.add_argument("-v", "--verbose", action="store_true", help="Display lots of messages.")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {PROGRAM_VERSION}\n{VERSION_NOTICE}")
    p.add_argument("--report", type=str, help="Optional path to a CSV report.")
    p.add_argument("--config", type=str, help="Optional JSON config (flags override).")
    return p.parse_args(argv)


def _get_effective_config(args: argparse.Namespace) -> Tuple[Dict[str, Any], Path]:
    """Load CLI + JSON configuration, giving precedence to CLI flags."""
    script_dir = Path(__file__).parent
    default_config_path = script_dir / "params.json"
    config_path = Path(args.config) if args.config else default_config_path
    cfg = load_config(config_path if config_path.exists() else None)
    return cfg, config_path


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def build_options(args: argparse.Namespace, cfg: Dict[str, Any]) -> Options:
    """Merge CLI flags over JSON settings into an Options value."""
    if args.tabsize is not None:
        tabsize = args.tabsize
    else:
        try:
            tabsize = tab_size(cfg.get("tabsize", DEFAULT_TABSIZE))
        except argparse.ArgumentTypeError as exc:
            print(f"[ERR] Invalid config: {exc}", file=sys.stderr)
            raise SystemExit(2)

    extensions = normalize_extensions(args.extension or _as_list(cfg.get("extensions")))
    if not extensions:
        extensions = normalize_extensions([DEFAULT_EXTENSIONS])

    return Options(
        tab_width=tabsize,
        fix=bool(args.fix or cfg.get("fix", False)),
        recursive=bool(args.recursive or cfg.get("recursive", False)),
        verbose=bool(args.verbose or cfg.get("verbose", False)),
        skip=frozenset(parse_list(args.skip or _as_list(cfg.get("skip")))),
        extensions=frozenset(extensions),
    )


def _resolve_paths(args: argparse.Namespace, cfg: Dict[str, Any], config_path: Path) -> Tuple[List[Path], Path | None]:
    """Resolve input paths and the optional report path."""
    inputs = args.paths or _as_list(cfg.get("paths"))
    if not inputs:
        print(f"[ERR] At least one path is required (or set 'paths' in {config_path.name}).", file=sys.stderr)
        print(f"Try '{PROGRAM_NAME} --help' for more information.", file=sys.stderr)
        raise SystemExit(2)

    report = args.report or cfg.get("report")
    return [Path(p) for p in inputs], Path(report) if report else None


def process_file(
    fp: Path,
    options: Options,
    total: int,
    fixed: int,
    unresolved: int,
    errors: int
) -> Tuple[int, int, int, int, FileResult]:
    """Process a single file and return updated counters plus FileResult."""
    total += 1
    row = normalize_file(fp, options)
    if row.action == "error":
        errors += 1
    elif row.action == "fix":
        fixed += 1
    elif row.errors:
        unresolved += 1
    return total, fixed, unresolved, errors, row


def _print_summary(
    report_path: Path | None,
    total: int,
    unresolved: int,
    fixed: int,
    errors: int,
    do_fix: bool
) -> None:
    """Print summary information to stdout."""
    print(f"[INFO] Done. Total: {total} | Unresolved: {unresolved} | Fixed: {fixed} | Errors: {errors}")
    if report_path:
        print(f"[INFO] Report: {report_path.resolve()}")
    if not do_fix:
        print("[INFO] Fix was NOT enabled (report-only mode).")


def main(argv: List[str] | None = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    cfg, config_path = _get_effective_config(args)
    inputs, report_path = _resolve_paths(args, cfg, config_path)
    options = build_options(args, cfg)

    rows: List[FileResult] = []
    total = fixed = unresolved = errors = 0

    for input_path in inputs:
        if not input_path.exists():
            print(f"[ERR] Input not found: {input_path}", file=sys.stderr)
            errors += 1
            continue

        if options.verbose:
            print(f"[INFO] Scanning: {input_path}")
        try:
            for fp in iter_files(input_path, options):
                total, fixed, unresolved, errors, row = process_file(fp, options, total, fixed, unresolved, errors)
                rows.append(row)
        except OSError as exc:
            print(f"[ERR] Failed to scan {input_path}: {exc}", file=sys.stderr)
            errors += 1

    if report_path:
        write_csv(report_path, rows)
    _print_summary(report_path, total, unresolved, fixed, errors, options.fix)

    if errors:
        return 3
    if unresolved:
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
