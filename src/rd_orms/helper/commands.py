"""
rd_orms.helper.commands

External command abstraction and the subprocess runner.

Responsibilities:
- Describe one external invocation (arguments, working directory, shell composition).
- Run it to completion with inherited standard streams, or spawn it in the background.
- Translate non-zero exits and spawn errors into `CommandFailedError`.
"""

from __future__ import annotations

import shlex
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from rd_orms.helper.errors import CommandFailedError
from rd_orms.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ExternalCommand:
    """
    Program arguments plus the directory they run in.

    With `shell=True`, `argv` holds a single script for `/bin/sh`, used where several
    tool invocations must run as one `&&`-chained step.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    shell: bool = False

    @classmethod
    def script(cls, script: str, *, cwd: Path | None = None) -> ExternalCommand:
        return cls(argv=(script,), cwd=cwd, shell=True)

    @property
    def display(self) -> str:
        return self.argv[0] if self.shell else shlex.join(self.argv)

    def popen_args(self) -> str | list[str]:
        return self.argv[0] if self.shell else list(self.argv)


class ChildHandle(Protocol):
    pid: int

    def poll(self) -> int | None: ...

    def wait(self) -> int: ...

    def terminate(self) -> None: ...


class Runner(Protocol):
    def run(self, command: ExternalCommand) -> None: ...

    def spawn(self, command: ExternalCommand) -> ChildHandle: ...


class ProcessHandle:
    """Handle on one spawned child; reaped by `wait`."""

    def __init__(self, command: ExternalCommand, process: subprocess.Popen[bytes]) -> None:
        self.command = command
        self._process = process
        self.pid = process.pid

    def poll(self) -> int | None:
        return self._process.poll()

    def wait(self) -> int:
        return self._process.wait()

    def terminate(self) -> None:
        # SIGTERM reaches this child only; processes it started may outlive it.
        if self._process.poll() is not None:
            return
        try:
            self._process.send_signal(signal.SIGTERM)
        except ProcessLookupError:
            return
        log.info("child_terminate_sent", pid=self.pid, command=self.command.display)


class SubprocessRunner:
    """Runs commands with stdin/stdout/stderr inherited from the helper."""

    def _popen(self, command: ExternalCommand) -> subprocess.Popen[bytes]:
        try:
            return subprocess.Popen(command.popen_args(), cwd=command.cwd, shell=command.shell)
        except OSError as exc:
            log.error("spawn_failed", command=command.display, cwd=str(command.cwd), error=str(exc))
            raise CommandFailedError(command.display, None) from exc

    def run(self, command: ExternalCommand) -> None:
        log.info("command_run", command=command.display, cwd=str(command.cwd))
        process = self._popen(command)
        try:
            returncode = process.wait()
        except BaseException:
            # Interrupted while blocking: do not leave the child behind.
            process.terminate()
            process.wait()
            raise
        if returncode != 0:
            log.debug("command_failed", command=command.display, returncode=returncode)
            raise CommandFailedError(command.display, returncode)

    def spawn(self, command: ExternalCommand) -> ProcessHandle:
        log.info("command_spawn", command=command.display, cwd=str(command.cwd))
        handle = ProcessHandle(command, self._popen(command))
        log.debug("command_spawned", command=command.display, pid=handle.pid)
        return handle


# --- Module Notes -----------------------------------------------------------
# `run` is the synchronous variant used by every sequential action; `spawn` backs the
# concurrent `dev all` launcher in `helper.fanout`.
