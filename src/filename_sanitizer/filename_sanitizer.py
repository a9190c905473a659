"""Public API — re-exports all public symbols from the package.

The package ``__init__.py`` re-exports everything from here via
``from .filename_sanitizer import *``.
"""

from __future__ import annotations

# CLI entry point
from .cli import main

# Renamer — plan execution and reporting
from .renamer import (
    execute_plan,
    format_plan_summary,
    format_results,
)

# Sanitizer — pure functions, configuration and constants
from .sanitizer import (
    DEFAULT_CONFIG,
    TIMESTAMP_FORMAT,
    SanitizeConfig,
    add_timestamp_prefix,
    format_timestamp,
    has_timestamp_prefix,
    is_name_clean,
    normalize_unicode,
    remove_invalid_chars,
    replace_separators,
    sanitize_name,
    split_extension,
    to_title_case,
)

# Scanner — filesystem walking and data classes
from .scanner import (
    EntryKind,
    RenameAction,
    RenamePlan,
    RenameResult,
    SkippedEntry,
    build_rename_plan,
    validate_path_under_root,
)

# TUI entry point
from .tui import tui_main

__all__ = [
    # CLI
    "main",
    # Sanitizer functions
    "sanitize_name",
    "is_name_clean",
    "normalize_unicode",
    "replace_separators",
    "remove_invalid_chars",
    "to_title_case",
    "split_extension",
    "has_timestamp_prefix",
    "add_timestamp_prefix",
    "format_timestamp",
    # Sanitizer configuration and constants
    "SanitizeConfig",
    "DEFAULT_CONFIG",
    "TIMESTAMP_FORMAT",
    # Scanner classes
    "EntryKind",
    "RenameAction",
    "RenamePlan",
    "RenameResult",
    "SkippedEntry",
    # Scanner functions
    "build_rename_plan",
    "validate_path_under_root",
    # Renamer functions
    "execute_plan",
    "format_plan_summary",
    "format_results",
    # TUI
    "tui_main",
]

if __name__ == "__main__":
    raise SystemExit(main())
