"""SQL script generation for the schema catalog.

Scripts are written into an explicit output directory with a
create-if-absent policy: an existing file is left untouched, never
overwritten and never reported as an error. Running the generator twice is
therefore harmless. The process working directory is never changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from buildprep.core.config import Mode
from buildprep.core.errors import SchemaScriptError, UnsupportedModeError
from buildprep.core.schema import SchemaCatalog

DROP_TABLES_SCRIPT = "drop-tables.sql"


@dataclass
class ScriptReport:
    """Outcome of one schema generation run."""

    output_dir: Path
    created_dir: bool = False
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def planned_scripts(catalog: SchemaCatalog, output_dir: Path) -> list[Path]:
    """Return every script path the generator would touch, drop script first."""
    output_dir = Path(output_dir)
    return [output_dir / DROP_TABLES_SCRIPT] + [
        output_dir / table.script_name for table in catalog
    ]


def _write_if_absent(path: Path, content: str) -> bool:
    """Create ``path`` with ``content``; return False when it already exists."""
    try:
        with open(path, "x", encoding="ascii") as handle:
            handle.write(content)
    except FileExistsError:
        return False
    except (OSError, UnicodeEncodeError) as exc:
        raise SchemaScriptError(path, str(exc)) from exc
    return True


def generate_schema_scripts(
    catalog: SchemaCatalog,
    mode: Mode,
    output_dir: Path,
) -> ScriptReport:
    """
    Write the drop-all script and one ``CREATE TABLE`` script per table.

    Args:
        catalog: Tables to script, in creation order.
        mode: Resolved build mode. Only development has a defined strategy.
        output_dir: Directory receiving the scripts; created when missing.

    Returns:
        A ScriptReport listing written and skipped files.

    Raises:
        UnsupportedModeError: In production mode.
        SchemaScriptError: On any file-system failure.
    """
    if mode is not Mode.DEVELOPMENT:
        raise UnsupportedModeError(
            "Schema scripts are only generated in development mode; "
            "no production schema strategy is defined."
        )

    output_dir = Path(output_dir)
    report = ScriptReport(output_dir=output_dir)

    try:
        report.created_dir = not output_dir.is_dir()
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SchemaScriptError(output_dir, str(exc)) from exc

    drop_path = output_dir / DROP_TABLES_SCRIPT
    if _write_if_absent(drop_path, catalog.drop_script()):
        report.written.append(drop_path)
    else:
        report.skipped.append(drop_path)

    for table in catalog:
        path = output_dir / table.script_name
        if _write_if_absent(path, table.create_statement()):
            report.written.append(path)
        else:
            report.skipped.append(path)

    return report
