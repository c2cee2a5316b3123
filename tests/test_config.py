from pathlib import Path

import pytest

from buildprep.core.config import (
    DEFAULT_ASSET_ROOT,
    DEFAULT_SCRIPTS_DIR,
    Mode,
    PipelineConfig,
    resolve_mode,
)


@pytest.mark.parametrize("value", ["prod", "PROD", "Prod", " prod\n"])
def test_resolve_mode_production_marker(value: str):
    assert resolve_mode({"PKG_ENV": value}) is Mode.PRODUCTION


@pytest.mark.parametrize("value", ["dev", "", "production", "prd", "development"])
def test_resolve_mode_anything_else_is_development(value: str):
    assert resolve_mode({"PKG_ENV": value}) is Mode.DEVELOPMENT


def test_resolve_mode_missing_variable_is_development():
    assert resolve_mode({}) is Mode.DEVELOPMENT


def test_resolve_mode_reads_process_environment(monkeypatch):
    monkeypatch.setenv("PKG_ENV", "prod")
    assert resolve_mode() is Mode.PRODUCTION


def test_pipeline_config_defaults():
    config = PipelineConfig.from_env({})

    assert config.mode is Mode.DEVELOPMENT
    assert config.is_production is False
    assert config.asset_root == DEFAULT_ASSET_ROOT
    assert config.scripts_dir == DEFAULT_SCRIPTS_DIR


def test_pipeline_config_path_overrides():
    config = PipelineConfig.from_env(
        {"PKG_ENV": "prod"}, asset_root=Path("web"), scripts_dir=Path("out/sql")
    )

    assert config.is_production is True
    assert config.asset_root == Path("web")
    assert config.scripts_dir == Path("out/sql")
