"""Pipeline orchestration.

Runs the schema stage and then the asset stage, in that fixed order, and
lets the first error escape unchanged. There is no retry and no error
aggregation: a failed stage fails the whole build.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from buildprep.core.config import Mode, PipelineConfig
from buildprep.core.minify import MinifiedAsset, MinifyReport, minify_assets
from buildprep.core.schema import SchemaCatalog, default_catalog
from buildprep.core.scripts import ScriptReport, generate_schema_scripts


@dataclass(frozen=True)
class PipelineReport:
    """
    Aggregate result of one pipeline run.

    Attributes:
        config: Configuration the run used.
        scripts: Schema stage report, or None when the stage was skipped.
        assets: Asset stage report.
    """

    config: PipelineConfig
    scripts: ScriptReport | None
    assets: MinifyReport

    @property
    def schema_skipped(self) -> bool:
        return self.scripts is None


def run_pipeline(
    config: PipelineConfig,
    catalog: SchemaCatalog | None = None,
    *,
    on_asset: Callable[[MinifiedAsset], None] | None = None,
) -> PipelineReport:
    """
    Run both build stages.

    Schema scripts are generated in development mode only; production has no
    defined schema strategy, so the stage is skipped there rather than
    guessed. Asset minification runs in production mode only.

    Args:
        config: Resolved pipeline configuration.
        catalog: Tables to script. Defaults to the reference catalog.
        on_asset: Optional progress callback for the asset stage.

    Returns:
        A PipelineReport.

    Raises:
        BuildError: The first failure of any stage, unchanged.
    """
    catalog = catalog if catalog is not None else default_catalog()

    scripts: ScriptReport | None = None
    if config.mode is Mode.DEVELOPMENT:
        scripts = generate_schema_scripts(catalog, config.mode, config.scripts_dir)

    assets = minify_assets(config.asset_root, config.mode, on_asset=on_asset)
    return PipelineReport(config=config, scripts=scripts, assets=assets)
