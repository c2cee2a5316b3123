"""CLI application for build-time asset and schema preprocessing."""

from contextlib import nullcontext
from pathlib import Path

import typer
from rich.markup import escape

from buildprep.cli.commands.assets import assets_app
from buildprep.cli.commands.schema import schema_app
from buildprep.cli.common.context import build_context
from buildprep.cli.common.exits import exit_from_exc
from buildprep.cli.common.options import AssetRootOpt, ScriptsDirOpt
from buildprep.cli.common.output import out
from buildprep.cli.common.progress import asset_progress
from buildprep.core.config import PACKAGE_ENVIRONMENT_VARIABLE
from buildprep.core.errors import BuildError
from buildprep.core.pipeline import run_pipeline

app = typer.Typer(
    help="buildprep - minify assets and generate SQL scripts before packaging",
    no_args_is_help=True,
)

app.add_typer(schema_app, name="schema")
app.add_typer(assets_app, name="assets")


@app.command()
def mode():
    """Show the build mode resolved from the environment."""
    appctx = build_context()
    out.kv(
        {
            PACKAGE_ENVIRONMENT_VARIABLE: escape(appctx.raw_env)
            if appctx.raw_env is not None
            else "(unset)",
            "mode": appctx.config.mode.name.lower(),
        }
    )


@app.command()
def run(
    asset_root: Path | None = AssetRootOpt,
    scripts_dir: Path | None = ScriptsDirOpt,
):
    """
    Run the full pipeline: schema scripts (development), then assets (production).
    """
    appctx = build_context(asset_root=asset_root, scripts_dir=scripts_dir)
    config = appctx.config

    out.header(f"buildprep: {config.mode.name.lower()} build")

    try:
        with asset_progress() if config.is_production else nullcontext() as on_asset:
            report = run_pipeline(config, appctx.catalog, on_asset=on_asset)
    except BuildError as exc:
        exit_from_exc(exc)

    if report.scripts is None:
        out.info("Schema scripts: skipped in production mode")
    else:
        if report.scripts.created_dir:
            out.info(f"Created directory {escape(str(config.scripts_dir))}")
        out.scripts_table(report.scripts.written, report.scripts.skipped)

    if report.assets.skipped:
        out.info("Assets: minification skipped in development mode")
    else:
        out.minify_table(report.assets.results)
        for path in report.assets.ignored:
            out.warn(f"Ignored {escape(path.name)}: not a stylesheet or script")

    out.success("Build preprocessing finished")


if __name__ == "__main__":
    app()
