"""
rd_orms.helper.dispatch

Command dispatch for the orchestration helper.

Responsibilities:
- Validate `command`/`target` against the command set and the ORM catalog.
- Run single-target actions sequentially, aborting on the first failure.
- Fan database actions out over every ORM, and run `dev all` as two phases
  (databases up sequentially, then all dev services concurrently).
"""

from __future__ import annotations

from collections.abc import Callable

from rd_orms.helper.catalog import ALL
from rd_orms.helper.commands import ExternalCommand, Runner
from rd_orms.helper.errors import (
    InvalidTargetError,
    UnknownCommandError,
    UnsupportedTargetError,
    UsageError,
)
from rd_orms.helper.fanout import CancellationToken, cancel_on_signals, launch_all
from rd_orms.helper.toolchain import Toolchain
from rd_orms.observability.logging import get_logger

log = get_logger(__name__)

DB_UP = "db:up"
DB_DOWN = "db:down"
DB_RESET = "db:reset"
SERVICE_DEV = "service:dev"
SERVICE_START = "service:start"
DEV = "dev"

COMMANDS = (DB_UP, DB_DOWN, DB_RESET, SERVICE_DEV, SERVICE_START, DEV)
FAN_OUT_COMMANDS = (DB_UP, DB_DOWN, DB_RESET, DEV)

PROGRAM = "orm-helper"


def plan(command: str, orm: str, toolchain: Toolchain) -> list[ExternalCommand]:
    """Commands to run, in order, for one command on one concrete ORM."""

    steps: dict[str, Callable[[], list[ExternalCommand]]] = {
        DB_UP: lambda: [toolchain.db_up(orm)],
        DB_DOWN: lambda: [toolchain.db_down(orm)],
        DB_RESET: lambda: [toolchain.db_reset(orm)],
        SERVICE_DEV: lambda: [toolchain.service_task(orm, "dev")],
        SERVICE_START: lambda: [toolchain.service_task(orm, "start")],
        DEV: lambda: [toolchain.db_up(orm), toolchain.service_task(orm, "dev")],
    }
    try:
        return steps[command]()
    except KeyError:
        raise UnknownCommandError(command, COMMANDS) from None


def validate(command: str | None, target: str | None, toolchain: Toolchain) -> tuple[str, str]:
    catalog = toolchain.catalog
    if not command or not target:
        raise UsageError(program=PROGRAM, commands=COMMANDS, targets=catalog.targets)
    if not catalog.is_target(target):
        raise InvalidTargetError(target, catalog.targets)
    if target == ALL and command not in FAN_OUT_COMMANDS:
        raise UnsupportedTargetError(command, target, FAN_OUT_COMMANDS)
    if command not in COMMANDS:
        raise UnknownCommandError(command, COMMANDS)
    return command, target


def execute(
    command: str | None,
    target: str | None,
    *,
    toolchain: Toolchain,
    runner: Runner,
    token: CancellationToken | None = None,
) -> int:
    """
    Validate and run one helper invocation.

    Returns 0 on success; every failure surfaces as a `HelperError`.
    """

    command, target = validate(command, target, toolchain)
    log.debug("dispatch", command=command, target=target)

    if target != ALL:
        for step in plan(command, target, toolchain):
            runner.run(step)
        return 0

    orms = toolchain.catalog.orms
    if command != DEV:
        for orm in orms:
            for step in plan(command, orm, toolchain):
                runner.run(step)
        return 0

    for orm in orms:
        runner.run(toolchain.db_up(orm))

    token = token or CancellationToken()
    services = [toolchain.service_task(orm, "dev") for orm in orms]
    with cancel_on_signals(token):
        returncodes = launch_all(runner, services, token)

    for orm, returncode in zip(orms, returncodes):
        if returncode != 0:
            # Dev children are servers: their exit status does not fail the run.
            log.warning("dev_service_exited", orm=orm, returncode=returncode)
    return 0


# --- Module Notes -----------------------------------------------------------
# Validation order: missing arguments, target, fan-out support, then the command itself.
