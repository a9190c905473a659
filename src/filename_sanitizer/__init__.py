__all__ = (  # noqa: F405
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
)

from .filename_sanitizer import *  # noqa: F403
