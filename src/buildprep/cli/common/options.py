"""Common CLI options for the CLI."""

import typer

AssetRootOpt = typer.Option(
    None,
    "--assets",
    "-a",
    help="Directory holding the stylesheet and script sources (default: ../src)",
    file_okay=False,
)

ScriptsDirOpt = typer.Option(
    None,
    "--scripts-dir",
    "-o",
    help="Directory receiving the generated SQL scripts (default: sql-scripts)",
    file_okay=False,
)

TableOpt = typer.Option(
    [],
    "--table",
    "-t",
    help="Only generate this table (and the tables it references). Reusable.",
    show_default=False,
)

PickOpt = typer.Option(
    False,
    "--pick",
    help="Choose the tables interactively",
)

ConfirmOpt = typer.Option(
    False,
    "--confirm/--no-confirm",
    help="Ask for confirmation before rewriting assets in place",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show what would be written, but don't touch any file",
)
