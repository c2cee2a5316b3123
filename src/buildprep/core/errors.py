"""Error types raised by the build pipeline.

Stages never recover from their own failures. Every error carries the stage
it came from and, where relevant, the file it concerns, so the message that
reaches the hosting build is enough to locate the problem.
"""

from __future__ import annotations

from pathlib import Path


class CatalogError(ValueError):
    """Raised when a schema catalog definition is inconsistent."""


class BuildError(RuntimeError):
    """Base class for failures that abort the build."""

    stage: str = "pipeline"

    def __init__(self, message: str, *, stage: str | None = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class UnsupportedModeError(BuildError):
    """Raised when a stage is asked to run in a mode it has no strategy for."""

    stage = "schema"


class SchemaScriptError(BuildError):
    """Raised when a schema script cannot be written."""

    stage = "schema"

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        super().__init__(f"Cannot write schema script {self.path}: {reason}")


class AssetRootError(BuildError):
    """Raised when the asset root cannot be enumerated."""

    stage = "assets"

    def __init__(self, root: Path, reason: str):
        self.root = Path(root)
        super().__init__(f"Cannot read asset directory {self.root}: {reason}")


class AssetMinifyError(BuildError):
    """Base class for per-file minification failures."""

    stage = "assets"

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path.name}: {reason}")

    @property
    def file_name(self) -> str:
        return self.path.name


class StylesheetParseError(AssetMinifyError):
    """Raised when a stylesheet is rejected by the CSS parser."""

    def __init__(
        self,
        path: Path,
        reason: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ):
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(path, f"{reason}{where}")


class ScriptMinifyError(AssetMinifyError):
    """Raised when a script cannot be minified."""
