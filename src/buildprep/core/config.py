"""Build mode resolution and pipeline configuration.

The pipeline is gated by a single environment variable, ``PKG_ENV``.
Only the value ``prod`` selects production mode; anything else, including
an unset variable, is development. The same comparison policy is used by
every stage so the schema and asset steps can never disagree on the mode.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping

PACKAGE_ENVIRONMENT_VARIABLE = "PKG_ENV"
PRODUCTION_MARKER = "prod"

DEFAULT_ASSET_ROOT = Path("..") / "src"
DEFAULT_SCRIPTS_DIR = Path("sql-scripts")


class Mode(str, Enum):
    """
    Resolved build mode.

    Values:
        PRODUCTION: Assets are minified, schema scripts are not generated.
        DEVELOPMENT: Schema scripts are generated, assets are left untouched.
    """

    PRODUCTION = "prod"
    DEVELOPMENT = "dev"


def resolve_mode(environ: Mapping[str, str] | None = None) -> Mode:
    """
    Resolve the build mode from the process environment.

    The value is stripped and compared case-insensitively against ``prod``.
    A missing variable is a valid input and resolves to development.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Mode.PRODUCTION for the production marker, Mode.DEVELOPMENT otherwise.
    """
    env = os.environ if environ is None else environ
    raw = env.get(PACKAGE_ENVIRONMENT_VARIABLE)
    if raw is not None and raw.strip().lower() == PRODUCTION_MARKER:
        return Mode.PRODUCTION
    return Mode.DEVELOPMENT


@dataclass(frozen=True)
class PipelineConfig:
    """
    Process-scoped, read-only configuration for one pipeline run.

    Attributes:
        mode: Resolved build mode.
        asset_root: Flat directory holding the stylesheet and script sources.
        scripts_dir: Directory receiving the generated SQL scripts.
    """

    mode: Mode
    asset_root: Path = DEFAULT_ASSET_ROOT
    scripts_dir: Path = DEFAULT_SCRIPTS_DIR

    @property
    def is_production(self) -> bool:
        return self.mode is Mode.PRODUCTION

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        asset_root: Path | None = None,
        scripts_dir: Path | None = None,
    ) -> PipelineConfig:
        """Build a config from the environment, applying optional path overrides."""
        return cls(
            mode=resolve_mode(environ),
            asset_root=Path(asset_root) if asset_root else DEFAULT_ASSET_ROOT,
            scripts_dir=Path(scripts_dir) if scripts_dir else DEFAULT_SCRIPTS_DIR,
        )
