"""Command-line interface and main entry point for filename-sanitizer."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .renamer import execute_plan, format_plan_summary, format_results, printable
from .sanitizer import SanitizeConfig
from .scanner import build_rename_plan


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser."""

    parser = argparse.ArgumentParser(
        prog="filename-sanitizer",
        description=(
            "Recursively rename files to clean, normalized names: strips "
            "diacritics and stylized Unicode, replaces separators, removes "
            "invalid characters, and optionally applies title case and a "
            "modification-time prefix. Directories are never renamed."
        ),
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path(),
        help="Root directory to scan recursively (default: current directory).",
    )
    parser.add_argument(
        "--underscore",
        action="store_true",
        default=False,
        help="Replace spaces with underscores.",
    )
    parser.add_argument(
        "--remove-underscore",
        action="store_true",
        default=False,
        help="Replace underscores with spaces.",
    )
    parser.add_argument(
        "--separator",
        type=str,
        default="",
        help="Replace spaces and invalid characters with this separator (e.g. _ or -).",
    )
    parser.add_argument(
        "--old-separator",
        type=str,
        default="",
        help="Separator to replace (requires --new-separator).",
    )
    parser.add_argument(
        "--new-separator",
        type=str,
        default="",
        help="Separator that replaces --old-separator.",
    )
    parser.add_argument(
        "--title-case",
        action="store_true",
        default=False,
        help="Capitalize each separator-delimited word.",
    )
    parser.add_argument(
        "--include-timestamp",
        action="store_true",
        default=False,
        help="Prefix names with the modification time (YYYYMMDD_HHMMSS_).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Only show what would be renamed.",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        default=False,
        help=(
            "Descend into symlinked directories that stay under the root. "
            "Symlinked files are always renamed (the link, not its target)."
        ),
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Show detailed information about each rename.",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SanitizeConfig:
    """Build a ``SanitizeConfig`` from parsed arguments."""
    return SanitizeConfig(
        separator=args.separator,
        use_underscore=args.underscore,
        remove_underscore=args.remove_underscore,
        old_separator=args.old_separator,
        new_separator=args.new_separator,
        title_case=args.title_case,
        include_timestamp=args.include_timestamp,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).

    Returns:
        Exit code: 0 on success, 1 on error.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    root_arg: Path = args.path
    dry_run: bool = args.dry_run
    follow_symlinks: bool = args.follow_symlinks
    verbose: bool = args.verbose
    config = config_from_args(args)

    if config.has_conflict:
        print(
            "Error: --underscore and --remove-underscore cannot be used together.",
            file=sys.stderr,
        )
        return 1

    root = root_arg.resolve()
    if not root.is_dir():
        print(printable(f"Error: '{root_arg}' is not a directory."), file=sys.stderr)
        return 1

    try:
        plan = build_rename_plan(root, config, follow_symlinks=follow_symlinks)
    except (OSError, ValueError) as exc:
        print(printable(f"Error scanning {root}: {exc}"), file=sys.stderr)
        return 1

    print(format_plan_summary(plan, dry_run=dry_run, verbose=verbose))

    if not plan.has_changes:
        print("No renames needed. All filenames are already clean.")
        return 0

    if dry_run:
        print("Dry-run mode. Run without --dry-run to apply changes.")
        return 0

    results = execute_plan(plan)
    print(format_results(results))

    failures = [r for r in results if not r.success and not r.skipped]
    for r in failures:
        print(printable(f"  ERROR: {r.action.source} -> {r.error_message}"), file=sys.stderr)

    return 1 if failures else 0
