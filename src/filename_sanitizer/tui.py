"""Interactive TUI for filename-sanitizer.

Accepts the same options as the command line; they seed the sidebar, where
they can be changed before re-scanning.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import ClassVar

from textual import on, work
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    RichLog,
    Static,
    Switch,
)
from textual.widgets.data_table import RowKey

from .cli import config_from_args, create_parser
from .renamer import execute_plan, format_results, printable
from .sanitizer import SanitizeConfig
from .scanner import RenameAction, RenamePlan, RenameResult, build_rename_plan

# Text inputs: widget id -> (label, SanitizeConfig field).
_TEXT_OPTIONS: dict[str, tuple[str, str]] = {
    "separator": ("Separator", "separator"),
    "old-separator": ("Old separator", "old_separator"),
    "new-separator": ("New separator", "new_separator"),
}

# Switches: widget id -> (label, SanitizeConfig field).
_SWITCH_OPTIONS: dict[str, tuple[str, str]] = {
    "underscore": ("Spaces to _", "use_underscore"),
    "remove-underscore": ("_ to spaces", "remove_underscore"),
    "title-case": ("Title case", "title_case"),
    "include-timestamp": ("Timestamp", "include_timestamp"),
}


class SanitizerApp(App[int]):
    """Preview the rename plan for a directory tree and apply it."""

    TITLE = "Filename Sanitizer"  # pyright: ignore[reportUnannotatedClassAttribute]
    AUTO_FOCUS = "#plan"  # pyright: ignore[reportUnannotatedClassAttribute]

    CSS: ClassVar[str] = """
    #options {
        dock: left;
        width: 30;
        padding: 0 1;
        border-right: tall $primary;
    }

    #options Input {
        margin-bottom: 1;
    }

    .switch-row {
        height: 3;
    }

    .switch-row Label {
        width: 16;
        padding: 1 0;
    }

    #options Button {
        width: 100%;
    }

    #plan {
        height: 1fr;
    }

    #selection {
        height: 3;
        padding: 0 1;
        color: $text-muted;
    }

    #messages {
        height: 8;
        border-top: tall $primary;
    }
    """

    BINDINGS: ClassVar[list[tuple[str, str, str]]] = [
        ("q", "quit", "Quit"),
        ("r", "rescan", "Scan"),
        ("a", "apply", "Apply"),
    ]

    def __init__(
        self,
        root: Path,
        config: SanitizeConfig | None = None,
        *,
        follow_symlinks: bool = False,
        dry_run: bool = False,
    ) -> None:
        super().__init__()
        self.root: Path = root  # pyright: ignore[reportUnannotatedClassAttribute]
        self.initial_config: SanitizeConfig = config or SanitizeConfig()
        self.follow_symlinks: bool = follow_symlinks
        self.dry_run: bool = dry_run
        self.current_plan: RenamePlan | None = None
        self.row_actions: dict[RowKey, RenameAction] = {}

    def compose(self) -> ComposeResult:  # pyright: ignore[reportImplicitOverride]
        config = self.initial_config
        yield Header()
        with Vertical(id="options"):
            for widget_id, (label, field_name) in _TEXT_OPTIONS.items():
                yield Label(label)
                yield Input(value=getattr(config, field_name), id=widget_id)
            for widget_id, (label, field_name) in _SWITCH_OPTIONS.items():
                with Horizontal(classes="switch-row"):
                    yield Label(label)
                    yield Switch(value=getattr(config, field_name), id=widget_id)
            with Horizontal(classes="switch-row"):
                yield Label("Follow links")
                yield Switch(value=self.follow_symlinks, id="follow-symlinks")
            yield Button("Scan", id="scan")
            yield Button("Apply", id="apply", variant="warning", disabled=True)
        yield DataTable(id="plan", cursor_type="row", zebra_stripes=True)
        yield Static(id="selection")
        yield RichLog(id="messages", max_lines=500, markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#plan", DataTable).add_columns("From", "To", "Folder", "Modified")
        if self.dry_run:
            self._say("Dry-run mode: renames will not be applied.")
        self.action_rescan()

    def _say(self, message: str) -> None:
        self.query_one("#messages", RichLog).write(printable(message))

    def _current_options(self) -> SanitizeConfig | None:
        """Build a config from the sidebar, or report why it is invalid."""
        values: dict[str, str | bool] = {
            field_name: self.query_one(f"#{widget_id}", Input).value
            for widget_id, (_, field_name) in _TEXT_OPTIONS.items()
        }
        values.update(
            {
                field_name: self.query_one(f"#{widget_id}", Switch).value
                for widget_id, (_, field_name) in _SWITCH_OPTIONS.items()
            }
        )
        config = SanitizeConfig(**values)  # pyright: ignore[reportArgumentType]
        if config.has_conflict:
            self._say("Error: 'Spaces to _' and '_ to spaces' cannot both be on.")
            return None
        return config

    @on(Button.Pressed, "#scan")
    def action_rescan(self) -> None:
        config = self._current_options()
        if config is None:
            return
        self.query_one("#apply", Button).disabled = True
        self.query_one("#plan", DataTable).loading = True
        self.scan(config, self.query_one("#follow-symlinks", Switch).value)

    @on(Button.Pressed, "#apply")
    def action_apply(self) -> None:
        if self.dry_run:
            self._say("Dry-run mode: nothing applied.")
            return
        if self.current_plan is None or not self.current_plan.has_changes:
            self._say("Nothing to apply.")
            return
        self.query_one("#apply", Button).disabled = True
        self.query_one("#scan", Button).disabled = True
        self.apply(self.current_plan)

    @work(exclusive=True, thread=True)
    def scan(self, config: SanitizeConfig, follow_symlinks: bool) -> None:
        try:
            plan = build_rename_plan(self.root, config, follow_symlinks=follow_symlinks)
        except (OSError, ValueError) as exc:
            self.call_from_thread(self._show_plan, None, str(exc))
        else:
            self.call_from_thread(self._show_plan, plan, None)

    def _show_plan(self, plan: RenamePlan | None, error: str | None) -> None:
        self.current_plan = plan
        self.row_actions.clear()
        table = self.query_one("#plan", DataTable)
        table.clear()
        table.loading = False
        self.query_one("#selection", Static).update("")

        if plan is None:
            self._say(f"Error: scan failed: {error}")
            return

        for action in plan.actions:
            folder = action.source.parent.relative_to(plan.root).as_posix()
            key = table.add_row(  # pyright: ignore[reportUnknownMemberType]
                printable(action.original_name),
                printable(action.final_name),
                printable(folder),
                action.timestamp,
            )
            self.row_actions[key] = action

        self._say(f"{plan.total_renames_needed} of {plan.total_entries_scanned} entries to rename.")
        for warning in plan.warnings:
            self._say(f"! {warning}")
        self.query_one("#apply", Button).disabled = self.dry_run or not plan.has_changes

    @work(exclusive=True, thread=True)
    def apply(self, plan: RenamePlan) -> None:
        results = execute_plan(plan)
        self.call_from_thread(self._show_results, results)

    def _show_results(self, results: list[RenameResult]) -> None:
        for line in format_results(results).splitlines():
            self._say(line)
        for r in results:
            if not r.success and not r.skipped:
                self._say(f"ERROR: {r.action.source} -> {r.error_message}")
        self.current_plan = None
        self.query_one("#scan", Button).disabled = False

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        action = self.row_actions.get(event.row_key)
        if action is not None:
            self.query_one("#selection", Static).update(
                printable(f"{action.kind.value}: {action.source} -> {action.destination}")
            )


def tui_main(argv: list[str] | None = None) -> int:
    """Entry point for ``filename-sanitizer-tui``; takes the CLI's options."""
    parser = create_parser()
    parser.prog = "filename-sanitizer-tui"
    args = parser.parse_args(argv)
    config = config_from_args(args)

    if config.has_conflict:
        print(
            "Error: --underscore and --remove-underscore cannot be used together.",
            file=sys.stderr,
        )
        return 1

    root: Path = args.path.resolve()
    if not root.is_dir():
        print(printable(f"Error: '{args.path}' is not a directory."), file=sys.stderr)
        return 1

    app = SanitizerApp(
        root, config, follow_symlinks=args.follow_symlinks, dry_run=args.dry_run
    )
    result = app.run()
    return result if result is not None else 0
