"""Filesystem walking, rename plan building, and collision detection.

This module scans a directory tree, computes sanitized names for every file,
and produces an ordered plan of rename actions.  Directories are walked but
never renamed.  Entries whose target name is taken, empty or outside the root
are skipped with a warning instead of being renamed.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .sanitizer import DEFAULT_CONFIG, SanitizeConfig, format_timestamp, sanitize_name

# Signature of the name-derivation strategy: (name, timestamp, config) -> new name.
SanitizeFunc = Callable[[str, str, SanitizeConfig], str]

# Sanitized names that can never be used as a filename.
_UNUSABLE_NAMES: frozenset[str] = frozenset({"", ".", ".."})


class EntryKind(enum.Enum):
    """Classification of a filesystem entry."""

    FILE = "file"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class RenameAction:
    """A single planned rename operation."""

    source: Path
    destination: Path
    kind: EntryKind
    original_name: str
    final_name: str
    timestamp: str


@dataclass(frozen=True)
class SkippedEntry:
    """A file that needed renaming but was left alone."""

    path: Path
    reason: str


@dataclass
class RenamePlan:
    """Complete rename plan for a directory tree."""

    root: Path
    actions: list[RenameAction] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    skipped_symlinks: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_entries_scanned: int = 0

    @property
    def total_renames_needed(self) -> int:
        return len(self.actions)

    @property
    def has_changes(self) -> bool:
        """Return ``True`` if any renames are needed."""
        return self.total_renames_needed > 0


@dataclass(frozen=True)
class RenameResult:
    """Result of executing a single rename action."""

    action: RenameAction
    success: bool
    skipped: bool = False
    error_message: str | None = None


def validate_path_under_root(path: Path, root: Path) -> None:
    """Raise ``ValueError`` if *path* is not under *root* after resolution."""
    resolved = path.resolve()
    root_resolved = root.resolve()
    # commonpath avoids string-prefix false positives (/root-other vs /root).
    try:
        common = Path(os.path.commonpath([resolved, root_resolved]))
    except ValueError:
        # Different drives on Windows.
        raise ValueError(f"Path {path} is not under root {root}") from None
    if common != root_resolved:
        raise ValueError(f"Path {path} is not under root {root}")


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def _should_descend(plan: RenamePlan, dpath: Path, follow_symlinks: bool) -> bool:
    """Return ``False`` (and record why) for directory symlinks that are not walked."""
    if not dpath.is_symlink():
        return True
    if not follow_symlinks:
        plan.skipped_symlinks.append(dpath)
        return False
    try:
        validate_path_under_root(dpath, plan.root)
    except ValueError:
        plan.skipped_symlinks.append(dpath)
        plan.warnings.append(f"Not following {dpath}: it resolves outside {plan.root}")
        return False
    return True


def _plan_directory(
    plan: RenamePlan,
    dirpath: Path,
    files: list[tuple[str, EntryKind]],
    existing_names: set[str],
    config: SanitizeConfig,
    sanitize: SanitizeFunc,
) -> None:
    """Add actions for the *files* of a single directory to *plan*.

    *existing_names* holds every entry name in the directory (files,
    symlinks and subdirectories); a target equal to one of them, or
    to a target claimed earlier in this directory, is a collision.
    """
    claimed: set[str] = set()

    for name, kind in sorted(files):
        source = dirpath / name
        timestamp = format_timestamp(source.lstat().st_mtime)
        final_name = sanitize(name, timestamp, config)

        if final_name == name:
            continue

        if final_name in _UNUSABLE_NAMES:
            plan.skipped.append(SkippedEntry(source, "sanitized name is empty"))
            plan.warnings.append(f"Skipped {source}: sanitized name is empty")
            continue

        if "/" in final_name or os.sep in final_name:
            plan.skipped.append(SkippedEntry(source, "sanitized name contains a path separator"))
            plan.warnings.append(f"Skipped {source}: {final_name!r} contains a path separator")
            continue

        if final_name in existing_names or final_name in claimed:
            plan.skipped.append(SkippedEntry(source, f"{final_name!r} already exists"))
            plan.warnings.append(
                f"Skipped {source}: target name {final_name!r} already exists"
            )
            continue

        destination = dirpath / final_name
        try:
            validate_path_under_root(destination, plan.root)
        except ValueError:
            plan.skipped.append(SkippedEntry(source, "target resolves outside the root"))
            plan.warnings.append(f"Skipped {source}: {destination} resolves outside {plan.root}")
            continue

        claimed.add(final_name)
        plan.actions.append(
            RenameAction(
                source=source,
                destination=destination,
                kind=kind,
                original_name=name,
                final_name=final_name,
                timestamp=timestamp,
            )
        )


def build_rename_plan(
    root: Path,
    config: SanitizeConfig = DEFAULT_CONFIG,
    *,
    follow_symlinks: bool = False,
    sanitize: SanitizeFunc = sanitize_name,
) -> RenamePlan:
    """Walk the filesystem under *root* and build a complete rename plan.

    Only files are renamed, symlinked files included (the link itself is
    renamed, never its target); each file's modification time supplies the
    timestamp handed to *sanitize*.  Directories are visited in sorted order
    so the plan is deterministic.  Symlinked directories are only descended
    into with *follow_symlinks*, and never when they resolve outside *root*.

    Args:
        root: Root directory to scan (must exist and be a directory).
        config: Sanitization options, passed through to *sanitize*.
        follow_symlinks: Whether to descend into symlinked directories.
        sanitize: Name-derivation strategy; defaults to :func:`sanitize_name`.

    Returns:
        A ``RenamePlan`` with ordered actions.

    Raises:
        ValueError: If *root* is not a directory.
        OSError: If any part of the tree cannot be read.
    """
    root = root.resolve()
    if not root.is_dir():
        raise ValueError(f"Root path is not a directory: {root}")

    plan = RenamePlan(root=root)
    # A directory reached through a followed link and through its real path is walked once.
    visited: set[Path] = set()

    for dirpath_str, dirnames, filenames in os.walk(
        root, onerror=_raise_walk_error, followlinks=follow_symlinks
    ):
        dirpath = Path(dirpath_str)
        real_dir = dirpath.resolve()
        if real_dir in visited:
            dirnames[:] = []
            continue
        visited.add(real_dir)
        dirnames.sort()

        existing_names = set(filenames) | set(dirnames)
        plan.total_entries_scanned += len(existing_names)

        files = [
            (fname, EntryKind.SYMLINK if (dirpath / fname).is_symlink() else EntryKind.FILE)
            for fname in filenames
        ]
        dirnames[:] = [d for d in dirnames if _should_descend(plan, dirpath / d, follow_symlinks)]

        _plan_directory(plan, dirpath, files, existing_names, config, sanitize)

    return plan
