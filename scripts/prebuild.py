#!/usr/bin/env python3
"""Run the build preprocessing pipeline before packaging.

Invoked by the hosting build with no arguments, from the directory the
default paths are relative to. A non-zero exit aborts packaging so no
half-minified or half-scripted tree is ever shipped.
"""

from __future__ import annotations

import sys

from buildprep.core.config import PipelineConfig
from buildprep.core.errors import BuildError
from buildprep.core.pipeline import run_pipeline


def main() -> int:
    config = PipelineConfig.from_env()
    print(f"buildprep: {config.mode.name.lower()} build")
    try:
        report = run_pipeline(config)
    except BuildError as exc:
        print(f"buildprep failed [{exc.stage}]: {exc}", file=sys.stderr)
        return 1

    if report.scripts is not None:
        print(
            f"-> sql scripts: {len(report.scripts.written)} written, "
            f"{len(report.scripts.skipped)} kept in {config.scripts_dir}"
        )
    if not report.assets.skipped:
        print(
            f"-> assets: {len(report.assets.results)} minified, "
            f"{report.assets.original_size} -> {report.assets.minified_size} bytes"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
