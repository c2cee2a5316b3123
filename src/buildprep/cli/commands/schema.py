"""Commands for the SQL schema scripts."""

from pathlib import Path

import typer
from rich.markup import escape

from buildprep.cli.common.context import BuildAppContext, build_context
from buildprep.cli.common.exits import EXIT_USAGE, die, exit_from_exc, warn_exit
from buildprep.cli.common.options import DryRunOpt, PickOpt, ScriptsDirOpt, TableOpt
from buildprep.cli.common.output import out
from buildprep.cli.tui import select_tables as tui_select_tables
from buildprep.core.errors import BuildError
from buildprep.core.schema import select_tables
from buildprep.core.scripts import generate_schema_scripts, planned_scripts

schema_app = typer.Typer(
    help="Inspect the table catalog and generate SQL scripts.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@schema_app.callback()
def _init(ctx: typer.Context, scripts_dir: Path | None = ScriptsDirOpt):
    """Initialize schema context."""
    ctx.obj = build_context(scripts_dir=scripts_dir)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@schema_app.command("list")
def list_tables(ctx: typer.Context):
    """List the tables of the catalog in creation order."""
    appctx: BuildAppContext = ctx.obj
    out.catalog_table(appctx.catalog)


@schema_app.command()
def show(ctx: typer.Context, table: str = typer.Argument(..., help="Table name")):
    """Print one table's CREATE TABLE statement."""
    appctx: BuildAppContext = ctx.obj
    if table not in appctx.catalog:
        die(f"Unknown table: {escape(table)}", code=EXIT_USAGE)
    typer.echo(appctx.catalog.get(table).create_statement())


@schema_app.command()
def generate(
    ctx: typer.Context,
    table: list[str] = TableOpt,
    pick: bool = PickOpt,
    dry_run: bool = DryRunOpt,
):
    """
    Generate the drop script and one CREATE TABLE script per table.

    Existing scripts are kept as they are.
    """
    appctx: BuildAppContext = ctx.obj
    config = appctx.config
    catalog = appctx.catalog

    names = list(table)
    if pick:
        names = tui_select_tables(catalog)
        if not names:
            warn_exit("No tables selected", code=0)

    if names:
        try:
            catalog = select_tables(catalog, names)
        except KeyError as exc:
            die(escape(str(exc.args[0])), code=EXIT_USAGE)

    if dry_run:
        out.planned_scripts_table(planned_scripts(catalog, config.scripts_dir))
        warn_exit("Dry-run enabled: no scripts were written", code=0)

    out.info(f"Generating sql scripts in {config.mode.name.lower()} mode")
    try:
        report = generate_schema_scripts(catalog, config.mode, config.scripts_dir)
    except BuildError as exc:
        exit_from_exc(exc)

    if report.created_dir:
        out.info(f"Created directory {escape(str(config.scripts_dir))}")
    out.scripts_table(report.written, report.skipped)
    out.success(
        f"{len(report.written)} script(s) written, {len(report.skipped)} kept"
    )
