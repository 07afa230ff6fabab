"""
tests.conftest

Shared fixtures for the helper tests.

Responsibilities:
- Provide a recording runner double and a toolchain rooted in a temp directory.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from rd_orms.helper.catalog import default_catalog
from rd_orms.helper.commands import ExternalCommand
from rd_orms.helper.errors import CommandFailedError
from rd_orms.helper.toolchain import Toolchain
from rd_orms.observability.logging import configure_logging
from rd_orms.settings import Settings


class FakeChild:
    def __init__(self, runner: RecordingRunner, command: ExternalCommand, pid: int) -> None:
        self._runner = runner
        self.command = command
        self.pid = pid
        self.returncode: int | None = None
        self.terminated = False

    def poll(self) -> int | None:
        return self.returncode

    def wait(self) -> int:
        self._runner.events.append(("wait", self.command))
        if self._runner.on_wait is not None:
            self._runner.on_wait(self)
        if self.returncode is None:
            self.returncode = 0
        return self.returncode

    def terminate(self) -> None:
        self._runner.events.append(("terminate", self.command))
        if self.returncode is None:
            self.terminated = True
            self.returncode = -15


@dataclass
class RecordingRunner:
    """Records `run`/`spawn` calls; `fail_on` makes the n-th `run` (1-based) fail."""

    fail_on: int | None = None
    spawn_fail_on: int | None = None
    on_wait: Callable[[FakeChild], None] | None = None
    events: list[tuple[str, ExternalCommand]] = field(default_factory=list)
    children: list[FakeChild] = field(default_factory=list)

    @property
    def ran(self) -> list[ExternalCommand]:
        return [cmd for kind, cmd in self.events if kind == "run"]

    @property
    def spawned(self) -> list[ExternalCommand]:
        return [cmd for kind, cmd in self.events if kind == "spawn"]

    def run(self, command: ExternalCommand) -> None:
        self.events.append(("run", command))
        if self.fail_on is not None and len(self.ran) == self.fail_on:
            raise CommandFailedError(command.display, 1)

    def spawn(self, command: ExternalCommand) -> FakeChild:
        self.events.append(("spawn", command))
        if self.spawn_fail_on is not None and len(self.spawned) == self.spawn_fail_on:
            raise CommandFailedError(command.display, None)
        child = FakeChild(self, command, pid=1000 + len(self.children))
        self.children.append(child)
        return child


@pytest.fixture()
def root_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def toolchain(root_dir: Path) -> Toolchain:
    return Toolchain.from_settings(Settings(root_dir=root_dir), default_catalog())


@pytest.fixture()
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture(autouse=True)
def _restore_logging():
    # The CLI points logging at a stream the test runner closes after each invocation.
    yield
    configure_logging(service_name="tests", level="INFO", stream=sys.__stderr__)
