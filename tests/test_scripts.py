from pathlib import Path

import pytest

from buildprep.core.config import Mode
from buildprep.core.errors import SchemaScriptError, UnsupportedModeError
from buildprep.core.schema import default_catalog
from buildprep.core.scripts import (
    DROP_TABLES_SCRIPT,
    generate_schema_scripts,
    planned_scripts,
)


def _snapshot(directory: Path) -> dict[str, bytes]:
    return {p.name: p.read_bytes() for p in sorted(directory.iterdir())}


def test_generate_writes_drop_script_and_one_file_per_table(tmp_path: Path):
    out_dir = tmp_path / "sql-scripts"
    catalog = default_catalog()

    report = generate_schema_scripts(catalog, Mode.DEVELOPMENT, out_dir)

    assert report.created_dir is True
    assert report.skipped == []
    files = _snapshot(out_dir)
    assert set(files) == {DROP_TABLES_SCRIPT} | {t.script_name for t in catalog}
    assert all(files.values())
    for table in catalog:
        assert files[table.script_name].decode("ascii") == table.create_statement()


def test_generate_twice_changes_nothing(tmp_path: Path):
    out_dir = tmp_path / "sql-scripts"
    generate_schema_scripts(default_catalog(), Mode.DEVELOPMENT, out_dir)
    before = _snapshot(out_dir)

    report = generate_schema_scripts(default_catalog(), Mode.DEVELOPMENT, out_dir)

    assert report.created_dir is False
    assert report.written == []
    assert len(report.skipped) == 8
    assert _snapshot(out_dir) == before


def test_generate_keeps_existing_files_untouched(tmp_path: Path):
    out_dir = tmp_path / "sql-scripts"
    out_dir.mkdir()
    (out_dir / "units.sql").write_text("-- hand edited", encoding="ascii")
    (out_dir / DROP_TABLES_SCRIPT).write_text("", encoding="ascii")

    report = generate_schema_scripts(default_catalog(), Mode.DEVELOPMENT, out_dir)

    assert (out_dir / "units.sql").read_text(encoding="ascii") == "-- hand edited"
    assert (out_dir / DROP_TABLES_SCRIPT).read_text(encoding="ascii") == ""
    assert {p.name for p in report.skipped} == {"units.sql", DROP_TABLES_SCRIPT}
    assert len(report.written) == 6


def test_generate_does_not_change_working_directory(tmp_path: Path):
    cwd = Path.cwd()
    generate_schema_scripts(default_catalog(), Mode.DEVELOPMENT, tmp_path / "out")
    assert Path.cwd() == cwd


def test_generate_refuses_production_mode(tmp_path: Path):
    with pytest.raises(UnsupportedModeError, match="production"):
        generate_schema_scripts(default_catalog(), Mode.PRODUCTION, tmp_path / "out")

    assert not (tmp_path / "out").exists()


def test_generate_wraps_file_system_errors(tmp_path: Path):
    blocker = tmp_path / "sql-scripts"
    blocker.write_text("not a directory", encoding="ascii")

    with pytest.raises(SchemaScriptError) as excinfo:
        generate_schema_scripts(default_catalog(), Mode.DEVELOPMENT, blocker)

    assert excinfo.value.stage == "schema"
    assert "sql-scripts" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_planned_scripts_lists_drop_script_first(tmp_path: Path):
    paths = planned_scripts(default_catalog(), tmp_path)

    assert paths[0].name == DROP_TABLES_SCRIPT
    assert len(paths) == 8
    assert not tmp_path.joinpath("units.sql").exists()
