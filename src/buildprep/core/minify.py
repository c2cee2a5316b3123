"""In-place minification of stylesheet and script assets.

Stylesheets are parsed with tinycss2 first, so malformed input is rejected
with its position instead of being silently mangled, and are then compacted
with rcssmin. Scripts are minified as top-level code with rjsmin.

Files are rewritten in place without a backup. When a later file fails,
earlier files stay minified; the build is expected to fail as a whole and
the source tree to be restored from version control.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

import rcssmin
import rjsmin
import tinycss2

from buildprep.core.assets import Asset, AssetSnapshot, scan_assets
from buildprep.core.config import Mode
from buildprep.core.errors import (
    AssetMinifyError,
    ScriptMinifyError,
    StylesheetParseError,
)

_BLOCK_TYPES = {"() block", "[] block", "{} block"}


@dataclass(frozen=True)
class MinifiedAsset:
    """Size bookkeeping for one rewritten file."""

    asset: Asset
    original_size: int
    minified_size: int

    @property
    def saved(self) -> int:
        return self.original_size - self.minified_size


@dataclass
class MinifyReport:
    """
    Outcome of a minification run.

    Attributes:
        mode: Mode the run was gated on.
        skipped: True when nothing was done because the mode is not production.
        results: One entry per rewritten file, stylesheets first.
        ignored: Files under the root with no recognised asset kind.
    """

    mode: Mode
    skipped: bool = False
    results: list[MinifiedAsset] = field(default_factory=list)
    ignored: list[Path] = field(default_factory=list)

    @property
    def original_size(self) -> int:
        return sum(r.original_size for r in self.results)

    @property
    def minified_size(self) -> int:
        return sum(r.minified_size for r in self.results)


def _first_error(nodes: Iterable) -> tinycss2.ast.ParseError | None:
    """Depth-first search for a parse error anywhere below ``nodes``."""
    for node in nodes:
        node_type = getattr(node, "type", None)
        if node_type == "error":
            return node
        if node_type in ("qualified-rule", "at-rule"):
            found = _first_error(node.prelude)
            if found is None and node.content is not None:
                found = _first_error(
                    tinycss2.parse_blocks_contents(node.content, skip_comments=True)
                )
        elif node_type == "declaration":
            found = _first_error(node.value)
        elif node_type == "function":
            found = _first_error(node.arguments)
        elif node_type in _BLOCK_TYPES:
            found = _first_error(node.content)
        else:
            continue
        if found is not None:
            return found
    return None


def minify_stylesheet(source: str, name: str | Path = "<stylesheet>") -> str:
    """
    Validate and minify one stylesheet.

    Args:
        source: Stylesheet text.
        name: File name used in error messages.

    Returns:
        The minified stylesheet text.

    Raises:
        StylesheetParseError: If the parser reports any syntax error.
    """
    rules = tinycss2.parse_stylesheet(source, skip_comments=True, skip_whitespace=True)
    error = _first_error(rules)
    if error is not None:
        raise StylesheetParseError(
            Path(name),
            error.message,
            line=error.source_line,
            column=error.source_column,
        )
    return rcssmin.cssmin(source)


def minify_script(code: bytes, name: str | Path = "<script>") -> bytes:
    """
    Minify one script as top-level (global) code.

    Raises:
        ScriptMinifyError: If the minifier rejects the input.
    """
    try:
        return rjsmin.jsmin(code)
    except (TypeError, ValueError) as exc:
        raise ScriptMinifyError(Path(name), str(exc)) from exc


def _rewrite(path: Path, data: bytes) -> None:
    with open(path, "wb") as handle:
        handle.write(data)
        handle.flush()


def _minify_stylesheet_file(asset: Asset) -> MinifiedAsset:
    try:
        raw = asset.path.read_bytes()
        source = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StylesheetParseError(asset.path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise AssetMinifyError(asset.path, exc.strerror or str(exc)) from exc

    out = minify_stylesheet(source, asset.name).encode("utf-8")
    try:
        _rewrite(asset.path, out)
    except OSError as exc:
        raise AssetMinifyError(asset.path, exc.strerror or str(exc)) from exc
    return MinifiedAsset(asset, len(raw), len(out))


def _minify_script_file(asset: Asset) -> MinifiedAsset:
    try:
        code = asset.path.read_bytes()
        out = minify_script(code, asset.name)
        _rewrite(asset.path, out)
    except OSError as exc:
        raise ScriptMinifyError(asset.path, exc.strerror or str(exc)) from exc
    return MinifiedAsset(asset, len(code), len(out))


def minify_snapshot(
    snapshot: AssetSnapshot,
    *,
    on_asset: Callable[[MinifiedAsset], None] | None = None,
) -> list[MinifiedAsset]:
    """
    Run the stylesheet pass, then the script pass, over one snapshot.

    The first failure aborts; the script pass never starts if a stylesheet
    fails.
    """
    results: list[MinifiedAsset] = []
    for minify_file, assets in (
        (_minify_stylesheet_file, snapshot.stylesheets),
        (_minify_script_file, snapshot.scripts),
    ):
        for asset in assets:
            result = minify_file(asset)
            results.append(result)
            if on_asset is not None:
                on_asset(result)
    return results


def minify_assets(
    root: Path,
    mode: Mode,
    *,
    on_asset: Callable[[MinifiedAsset], None] | None = None,
) -> MinifyReport:
    """
    Minify every stylesheet and script directly under ``root`` in place.

    Does nothing at all (not even listing the directory) unless ``mode`` is
    production.

    Args:
        root: Asset directory.
        mode: Resolved build mode.
        on_asset: Optional callback invoked after each file is rewritten.

    Returns:
        A MinifyReport.
    """
    if mode is not Mode.PRODUCTION:
        return MinifyReport(mode=mode, skipped=True)

    snapshot = scan_assets(root)
    report = MinifyReport(mode=mode, ignored=list(snapshot.ignored))
    report.results = minify_snapshot(snapshot, on_asset=on_asset)
    return report
