"""Progress formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from buildprep.cli.common.output import console
from buildprep.core.minify import MinifiedAsset

_MAX_FILE_NAME_WIDTH = 40


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _asset_label(result: MinifiedAsset) -> str:
    """Render `<kind>: <file>` for the progress description column."""
    name = escape(_truncate(result.asset.name, _MAX_FILE_NAME_WIDTH))
    return f"{result.asset.kind.value}: {name}"


@contextmanager
def asset_progress(total: int | None = None) -> Iterator[Callable[[MinifiedAsset], None]]:
    """
    Show a transient progress bar while assets are rewritten.

    Yields the callback to hand to the minifier as ``on_asset``. With an
    unknown total (the pipeline scans the directory itself) the bar pulses
    and only the count is shown.
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold]Minifying[/]"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[meta]{task.description}[/]"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
    task_id = progress.add_task("", total=total)

    def _advance(result: MinifiedAsset) -> None:
        progress.update(task_id, advance=1, description=_asset_label(result))

    with progress:
        yield _advance
