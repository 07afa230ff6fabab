"""
rd_orms.helper.cli

`orm-helper`: start and stop per-ORM databases and services.

Responsibilities:
- Parse the two positional arguments.
- Wire settings, catalog, toolchain and runner into `dispatch.execute`.
- Map `HelperError` to a stderr message and exit status 1.
"""

from __future__ import annotations

import sys
from typing import Optional

import typer

from rd_orms.helper.catalog import default_catalog
from rd_orms.helper.commands import SubprocessRunner
from rd_orms.helper.dispatch import COMMANDS, PROGRAM, execute
from rd_orms.helper.errors import HelperError
from rd_orms.helper.toolchain import Toolchain
from rd_orms.observability.logging import configure_logging
from rd_orms.settings import get_settings

HELP = f"""
Start and stop per-ORM databases and services.

COMMAND is one of: {", ".join(COMMANDS)}.
TARGET is an ORM name or 'all'.

'dev all' brings every database up, then runs every dev service until interrupted.
Ctrl-C sends SIGTERM to each dev service; processes they started themselves may
need to be stopped separately.
"""

app = typer.Typer(add_completion=False, help=HELP)


@app.command()
def helper(
    command: Optional[str] = typer.Argument(None, show_default=False),
    target: Optional[str] = typer.Argument(None, show_default=False),
) -> None:
    settings = get_settings()
    configure_logging(
        service_name=PROGRAM, level=settings.log_level, stream=sys.stderr, renderer="console"
    )
    toolchain = Toolchain.from_settings(settings, default_catalog())

    try:
        execute(command, target, toolchain=toolchain, runner=SubprocessRunner())
    except HelperError as exc:
        if exc.message:
            typer.echo(exc.message, err=True)
        raise typer.Exit(code=exc.exit_code) from None


def main() -> None:
    app(prog_name=PROGRAM)


# --- Module Notes -----------------------------------------------------------
# Both arguments are optional at the parser level so a missing one produces the
# helper's own usage text and exit status 1 instead of the parser's status 2.
