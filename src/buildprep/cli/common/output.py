"""Output formatting utilities for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from buildprep.cli.common.tui_style import (
    QUESTIONARY_STYLE_CONFIRM,
    QUESTIONARY_STYLE_SELECT,
)

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


def _human_size(size: int) -> str:
    """Render a byte count as B / KiB / MiB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size / (1024 * 1024):.1f} MiB"


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts so they stand out in build logs."""
        return f"[buildprep] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def select_many(self, message: str, choices: list[Any]) -> list[Any]:
        """
        Prompt the user to select multiple items from a list.

        Accepts plain strings or ``questionary.Choice`` objects and returns
        the selected values.
        """
        if not choices:
            return []

        picked = questionary.checkbox(
            self._q(message),
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
            qmark="✦",
            instruction="Use ↑/↓, space, a (all), i (invert), enter",
        ).ask()
        return list(picked or [])

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise (including Ctrl-C).
        """
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def catalog_table(self, tables: Iterable[Any], title: str = "Schema catalog") -> None:
        """
        Expects objects with .name .columns .dependencies .script_name
        (like buildprep.core.schema.TableDefinition)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("#", style="meta", justify="right")
        t.add_column("Table", style="ok", no_wrap=True)
        t.add_column("Columns", justify="right")
        t.add_column("References", style="meta")
        t.add_column("Script", style="meta")

        for i, table in enumerate(tables, start=1):
            t.add_row(
                str(i),
                table.name,
                str(len(table.columns)),
                ", ".join(table.dependencies) or "-",
                table.script_name,
            )

        console.print(t)

    def scripts_table(
        self,
        written: Iterable[Path],
        skipped: Iterable[Path],
        title: str = "Schema scripts",
    ) -> None:
        """Render one row per script with whether it was written or kept."""
        t = Table(title=title, show_lines=False)
        t.add_column("Script", style="ok")
        t.add_column("Result")

        rows = [(p, "[ok]written[/]") for p in written]
        rows += [(p, "[meta]exists, kept[/]") for p in skipped]
        for path, result in sorted(rows, key=lambda r: r[0].name):
            t.add_row(escape(path.name), result)

        console.print(t)

    def planned_scripts_table(
        self, paths: Iterable[Path], title: str = "Planned scripts"
    ) -> None:
        """Dry-run view: which scripts would be created and which already exist."""
        t = Table(title=title, show_lines=False)
        t.add_column("Script", style="ok")
        t.add_column("Action")

        for path in paths:
            action = "[meta]keep (exists)[/]" if path.exists() else "[ok]create[/]"
            t.add_row(escape(str(path)), action)

        console.print(t)

    def assets_table(self, snapshot: Any, title: str = "Assets") -> None:
        """
        Expects an object with .assets (items with .name .kind .path)
        and .ignored (paths), like buildprep.core.assets.AssetSnapshot.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("File", style="ok")
        t.add_column("Kind")
        t.add_column("Size", justify="right", style="meta")

        for asset in snapshot.assets:
            kind = asset.kind.value if hasattr(asset.kind, "value") else str(asset.kind)
            t.add_row(escape(asset.name), kind, _human_size(asset.path.stat().st_size))
        for path in snapshot.ignored:
            t.add_row(f"[meta]{escape(path.name)}[/]", "[meta]ignored[/]", "")

        console.print(t)

    def minify_table(self, results: Iterable[Any], title: str = "Minified assets") -> None:
        """
        Expects objects with .asset .original_size .minified_size
        (e.g. buildprep.core.minify.MinifiedAsset)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("File", style="ok")
        t.add_column("Kind", style="meta")
        t.add_column("Before", justify="right")
        t.add_column("After", justify="right")
        t.add_column("Saved", justify="right", style="ok")

        for r in results:
            saved = r.original_size - r.minified_size
            pct = (saved / r.original_size * 100) if r.original_size else 0.0
            t.add_row(
                escape(r.asset.name),
                r.asset.kind.value,
                _human_size(r.original_size),
                _human_size(r.minified_size),
                f"{_human_size(saved)} ({pct:.0f}%)",
            )

        console.print(t)


out = Out()
