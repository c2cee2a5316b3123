"""Commands for the static stylesheet and script assets."""

from pathlib import Path

import typer
from rich.markup import escape

from buildprep.cli.common.context import BuildAppContext, build_context
from buildprep.cli.common.exits import exit_from_exc, ok_exit, warn_exit
from buildprep.cli.common.options import AssetRootOpt, ConfirmOpt, DryRunOpt
from buildprep.cli.common.output import out
from buildprep.cli.common.progress import asset_progress
from buildprep.core.assets import scan_assets
from buildprep.core.config import PACKAGE_ENVIRONMENT_VARIABLE, PRODUCTION_MARKER
from buildprep.core.errors import BuildError
from buildprep.core.minify import minify_snapshot

assets_app = typer.Typer(
    help="Inspect and minify static assets.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@assets_app.callback()
def _init(ctx: typer.Context, asset_root: Path | None = AssetRootOpt):
    """Initialize assets context."""
    ctx.obj = build_context(asset_root=asset_root)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@assets_app.command("list")
def list_assets(ctx: typer.Context):
    """List the stylesheets and scripts directly under the asset directory."""
    appctx: BuildAppContext = ctx.obj
    try:
        snapshot = scan_assets(appctx.config.asset_root)
    except BuildError as exc:
        exit_from_exc(exc)

    if not snapshot.assets and not snapshot.ignored:
        warn_exit("No files found", code=0)
    out.assets_table(snapshot, title=f"Assets in {escape(str(snapshot.root))}")


@assets_app.command()
def minify(
    ctx: typer.Context,
    confirm: bool = ConfirmOpt,
    dry_run: bool = DryRunOpt,
):
    """
    Minify stylesheets and scripts in place (production mode only).
    """
    appctx: BuildAppContext = ctx.obj
    config = appctx.config

    if not config.is_production:
        warn_exit(
            f"{PACKAGE_ENVIRONMENT_VARIABLE} is not '{PRODUCTION_MARKER}': "
            "minification skipped",
            code=0,
        )

    try:
        snapshot = scan_assets(config.asset_root)
    except BuildError as exc:
        exit_from_exc(exc)

    if not snapshot.assets:
        warn_exit("No stylesheets or scripts found", code=0)

    out.assets_table(snapshot, title="Assets to minify")

    if dry_run:
        warn_exit("Dry-run enabled: no assets were rewritten", code=0)

    if confirm and not out.confirm("Rewrite these files in place? There is no backup."):
        ok_exit("Cancelled")

    try:
        with asset_progress(total=len(snapshot.assets)) as on_asset:
            results = minify_snapshot(snapshot, on_asset=on_asset)
    except BuildError as exc:
        exit_from_exc(exc)

    out.minify_table(results)
    out.success(f"Minified {len(results)} file(s)")
