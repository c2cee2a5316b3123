"""Static asset discovery.

The asset root is enumerated once per run. Both minification passes work
from that snapshot, so a file appearing or disappearing mid-run cannot give
the stylesheet and script passes different views of the directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from buildprep.core.errors import AssetRootError


class AssetKind(str, Enum):
    """Kind of a static asset, inferred from its file extension."""

    STYLESHEET = "stylesheet"
    SCRIPT = "script"


_KIND_BY_SUFFIX = {
    ".css": AssetKind.STYLESHEET,
    ".js": AssetKind.SCRIPT,
    ".mjs": AssetKind.SCRIPT,
    ".cjs": AssetKind.SCRIPT,
}


def kind_for(path: Path) -> AssetKind | None:
    """Return the asset kind for a path, or None when the extension is unknown."""
    return _KIND_BY_SUFFIX.get(Path(path).suffix.lower())


@dataclass(frozen=True)
class Asset:
    """One stylesheet or script file directly under the asset root."""

    path: Path
    kind: AssetKind

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class AssetSnapshot:
    """
    Result of a single, non-recursive enumeration of the asset root.

    Attributes:
        root: The enumerated directory.
        assets: Recognised files, sorted by name.
        ignored: Regular files whose extension is not a known asset kind.
    """

    root: Path
    assets: tuple[Asset, ...] = ()
    ignored: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def stylesheets(self) -> list[Asset]:
        return [a for a in self.assets if a.kind is AssetKind.STYLESHEET]

    @property
    def scripts(self) -> list[Asset]:
        return [a for a in self.assets if a.kind is AssetKind.SCRIPT]


def scan_assets(root: Path) -> AssetSnapshot:
    """
    Enumerate the regular files directly under ``root``.

    Sub-directories are not descended into and never become assets.

    Raises:
        AssetRootError: If the directory is missing or cannot be listed.
    """
    root = Path(root)
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise AssetRootError(root, exc.strerror or str(exc)) from exc

    assets: list[Asset] = []
    ignored: list[Path] = []
    for entry in entries:
        if not entry.is_file():
            continue
        kind = kind_for(entry)
        if kind is None:
            ignored.append(entry)
        else:
            assets.append(Asset(path=entry, kind=kind))

    return AssetSnapshot(root=root, assets=tuple(assets), ignored=tuple(ignored))
