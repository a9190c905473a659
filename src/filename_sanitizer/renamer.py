"""Plan execution and human-readable reporting."""

from __future__ import annotations

import os

from .scanner import EntryKind, RenamePlan, RenameResult


def printable(text: str) -> str:
    """Return *text* with undecodable filename bytes shown as ``\\xNN`` escapes.

    Names that are not valid in the filesystem encoding arrive as lone
    surrogates, which cannot be written to a UTF-8 stream.
    """
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")


def execute_plan(plan: RenamePlan) -> list[RenameResult]:
    """Execute all rename actions in *plan*, in order.

    For each action:
      1. Verify the source still exists (abort otherwise).
      2. Verify the destination does not already exist (skip otherwise).
      3. Perform ``os.rename(source, destination)`` (abort on ``OSError``).

    Renames completed before an abort are kept; there is no rollback.

    Returns:
        A list of ``RenameResult`` for every action attempted.  After a
        failed result, no further actions were attempted.
    """
    results: list[RenameResult] = []

    for action in plan.actions:
        if not action.source.exists() and not action.source.is_symlink():
            results.append(
                RenameResult(
                    action=action,
                    success=False,
                    error_message=f"Source no longer exists: {action.source}",
                )
            )
            break

        if action.destination.exists() or action.destination.is_symlink():
            results.append(
                RenameResult(
                    action=action,
                    success=False,
                    skipped=True,
                    error_message=f"Destination already exists: {action.destination}",
                )
            )
            continue

        try:
            os.rename(action.source, action.destination)
        except OSError as exc:
            results.append(RenameResult(action=action, success=False, error_message=str(exc)))
            break
        results.append(RenameResult(action=action, success=True))

    return results


def format_plan_summary(plan: RenamePlan, *, dry_run: bool, verbose: bool = False) -> str:
    """Format the rename plan as a human-readable string.

    In dry-run mode every planned rename is listed as ``Dry run: old -> new``.
    Otherwise the renames are listed only in verbose mode, since
    :func:`format_results` reports them once they are done.
    """
    lines: list[str] = []

    lines.append(f"Scanned {plan.total_entries_scanned} entries under {plan.root}")

    if plan.skipped_symlinks:
        lines.append(
            f"Skipped {len(plan.skipped_symlinks)} directory symlinks "
            "(use --follow-symlinks to descend into them)"
        )
        if verbose:
            for sym in plan.skipped_symlinks:
                lines.append(f"  symlink: {sym}")

    if plan.has_changes and (dry_run or verbose):
        label = "Dry run:" if dry_run else "Planned:"
        lines.append(f"Found {plan.total_renames_needed} files to rename:")
        for action in plan.actions:
            kind = " [link]" if action.kind == EntryKind.SYMLINK else ""
            lines.append(f"  {label} {action.original_name} -> {action.final_name}{kind}")
            if verbose:
                lines.append(f"         in {action.source.parent}")

    if plan.warnings:
        lines.append(f"Warnings ({len(plan.warnings)}):")
        for warning in plan.warnings:
            lines.append(f"  ! {warning}")

    return printable("\n".join(lines))


def format_results(results: list[RenameResult]) -> str:
    """Format executed rename results.

    Failed renames are only counted; the caller reports their errors.
    """
    lines: list[str] = []
    renamed = skipped = errors = 0

    for r in results:
        if r.success:
            renamed += 1
            lines.append(f"Renamed: {r.action.original_name} -> {r.action.final_name}")
        elif r.skipped:
            skipped += 1
            lines.append(f"Skipped: {r.action.original_name} ({r.error_message})")
        else:
            errors += 1

    lines.append(f"Done: {renamed} renamed, {skipped} skipped, {errors} errors.")
    return printable("\n".join(lines))
