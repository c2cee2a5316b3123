from pathlib import Path

import pytest

from buildprep.core.config import Mode, PipelineConfig
from buildprep.core.errors import StylesheetParseError
from buildprep.core.pipeline import run_pipeline
from buildprep.core.schema import default_catalog, select_tables


def _contents(directory: Path) -> dict[str, bytes]:
    return {p.name: p.read_bytes() for p in directory.iterdir()}


def test_development_run_generates_scripts_and_leaves_assets(
    tmp_path: Path, asset_dir: Path
):
    before = _contents(asset_dir)
    config = PipelineConfig.from_env(
        {}, asset_root=asset_dir, scripts_dir=tmp_path / "sql-scripts"
    )

    report = run_pipeline(config)

    assert _contents(asset_dir) == before
    assert report.assets.skipped is True
    assert report.schema_skipped is False

    scripts = _contents(tmp_path / "sql-scripts")
    assert len(scripts) == 8
    assert "drop-tables.sql" in scripts
    assert all(scripts.values())


def test_production_run_minifies_and_skips_schema(tmp_path: Path, asset_dir: Path):
    config = PipelineConfig(
        Mode.PRODUCTION, asset_root=asset_dir, scripts_dir=tmp_path / "sql-scripts"
    )

    report = run_pipeline(config)

    assert report.schema_skipped is True
    assert not (tmp_path / "sql-scripts").exists()
    assert [r.asset.name for r in report.assets.results] == ["style.css", "app.js"]
    assert report.assets.minified_size < report.assets.original_size


def test_production_run_with_invalid_stylesheet_aborts(tmp_path: Path, asset_dir: Path):
    (asset_dir / "style.css").write_text(".a { color: red }\n}", encoding="utf-8")
    script_before = (asset_dir / "app.js").read_bytes()
    config = PipelineConfig(Mode.PRODUCTION, asset_root=asset_dir)

    with pytest.raises(StylesheetParseError) as excinfo:
        run_pipeline(config)

    assert excinfo.value.file_name == "style.css"
    assert excinfo.value.stage == "assets"
    assert (asset_dir / "app.js").read_bytes() == script_before


def test_run_pipeline_uses_given_catalog(tmp_path: Path, asset_dir: Path):
    catalog = select_tables(default_catalog(), ["UNITS"])
    config = PipelineConfig(
        Mode.DEVELOPMENT, asset_root=asset_dir, scripts_dir=tmp_path / "out"
    )

    run_pipeline(config, catalog)

    assert sorted(_contents(tmp_path / "out")) == ["drop-tables.sql", "units.sql"]
