"""Terminal UI utilities for buildprep."""

from __future__ import annotations

import questionary

from buildprep.cli.common.output import out
from buildprep.core.schema import SchemaCatalog, TableDefinition

_MAX_TABLE_NAME_WIDTH = 48


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _table_choice_title(table: TableDefinition, *, name_width: int) -> str:
    """Format one table choice as `<name>  -> <script>` with aligned script column."""
    short_name = _truncate(table.name, _MAX_TABLE_NAME_WIDTH)
    return f"{short_name.ljust(name_width)}  -> {table.script_name}"


def select_tables(catalog: SchemaCatalog) -> list[str]:
    """Display a checkbox prompt to select tables from the catalog.

    Args:
        catalog: Catalog to choose from.

    Returns:
        The names of the selected tables, or an empty list if none selected.
    """
    shown_names = [_truncate(t.name, _MAX_TABLE_NAME_WIDTH) for t in catalog]
    name_width = max((len(name) for name in shown_names), default=0)

    choices = [
        questionary.Choice(
            title=_table_choice_title(table, name_width=name_width),
            value=table.name,
        )
        for table in catalog
    ]
    return out.select_many("Select tables:", choices)
