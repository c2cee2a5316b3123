"""Exit handling utilities for the CLI.

Exit codes: 0 success, 1 build failure, 2 invalid command-line input.
"""

from typing import NoReturn

import typer
from rich.markup import escape

from buildprep.cli.common.output import out
from buildprep.core.errors import BuildError

EXIT_BUILD_FAILED = 1
EXIT_USAGE = 2


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = EXIT_BUILD_FAILED) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(
    exc: Exception, *, message: str | None = None, code: int = EXIT_BUILD_FAILED
) -> NoReturn:
    """
    Print a build failure and exit, chaining the original exception.

    Build errors are prefixed with the stage they came from so the hosting
    build log shows which step stopped packaging.
    """
    if message is None:
        stage = exc.stage if isinstance(exc, BuildError) else "pipeline"
        message = f"{stage} stage failed: {escape(str(exc))}"
    out.error(message)
    raise typer.Exit(code) from exc
