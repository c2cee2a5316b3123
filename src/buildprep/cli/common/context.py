"""Application context management for the CLI."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from buildprep.core.config import PACKAGE_ENVIRONMENT_VARIABLE, PipelineConfig
from buildprep.core.schema import SchemaCatalog, default_catalog


@dataclass
class BuildAppContext:
    """Per-invocation context: resolved configuration and the schema catalog."""

    config: PipelineConfig
    catalog: SchemaCatalog
    raw_env: str | None = None


def build_context(
    asset_root: Path | None = None,
    scripts_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> BuildAppContext:
    """Resolve the mode once and build the context shared by all commands.

    Args:
        asset_root: Optional override for the asset directory.
        scripts_dir: Optional override for the SQL output directory.
        environ: Environment to read. Defaults to the process environment.

    Returns:
        BuildAppContext: Context holding config and catalog.
    """
    env = os.environ if environ is None else environ
    config = PipelineConfig.from_env(
        env, asset_root=asset_root, scripts_dir=scripts_dir
    )
    return BuildAppContext(
        config=config,
        catalog=default_catalog(),
        raw_env=env.get(PACKAGE_ENVIRONMENT_VARIABLE),
    )
