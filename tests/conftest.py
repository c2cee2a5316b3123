from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

STYLESHEET = """\
/* layout */
body   {
    margin : 0 ;
    padding: 0   auto;
}

.card:hover  >  a {
    color: #1a2b3c ;   /* accent */
}
"""

SCRIPT = """\
// greet the user
function greet ( name ) {
    var message = "Hello, " + name ;
    return message ;
}

window.greet = greet ;
"""


@pytest.fixture(autouse=True)
def _no_pkg_env(monkeypatch):
    """Every test starts in development mode unless it sets PKG_ENV itself."""
    monkeypatch.delenv("PKG_ENV", raising=False)


@pytest.fixture
def stylesheet_source() -> str:
    return STYLESHEET


@pytest.fixture
def script_source() -> str:
    return SCRIPT


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """A flat asset directory with one stylesheet and one script."""
    root = tmp_path / "src"
    root.mkdir()
    (root / "style.css").write_text(STYLESHEET, encoding="utf-8")
    (root / "app.js").write_text(SCRIPT, encoding="utf-8")
    return root
