from pathlib import Path

from buildprep.cli.common.progress import _MAX_FILE_NAME_WIDTH, _asset_label
from buildprep.core.assets import Asset, AssetKind
from buildprep.core.minify import MinifiedAsset


def _result(name: str, kind: AssetKind) -> MinifiedAsset:
    return MinifiedAsset(Asset(Path(name), kind), original_size=10, minified_size=4)


def test_asset_label_shows_kind_then_file():
    assert _asset_label(_result("site.css", AssetKind.STYLESHEET)) == "stylesheet: site.css"
    assert _asset_label(_result("app.js", AssetKind.SCRIPT)) == "script: app.js"


def test_asset_label_truncates_long_file_names():
    label = _asset_label(_result("x" * (_MAX_FILE_NAME_WIDTH + 5) + ".js", AssetKind.SCRIPT))

    assert label.endswith("...")
    assert len(label) == len("script: ") + _MAX_FILE_NAME_WIDTH
