"""
rd_orms.helper.errors

Exceptions raised by the orchestration helper.

Responsibilities:
- One exception type per failure category, all terminal with exit status 1.
"""

from __future__ import annotations

from collections.abc import Iterable


class HelperError(Exception):
    exit_code = 1

    @property
    def message(self) -> str:
        return str(self)


class UsageError(HelperError):
    """A required positional argument is missing."""

    def __init__(self, *, program: str, commands: Iterable[str], targets: Iterable[str]) -> None:
        super().__init__(
            f"Usage: {program} <command> <target>\n"
            f"Commands: {', '.join(commands)}\n"
            f"Targets: {', '.join(targets)}"
        )


class InvalidTargetError(HelperError):
    def __init__(self, target: str, valid: Iterable[str]) -> None:
        super().__init__(f"Invalid target: {target}. Must be one of: {', '.join(valid)}")
        self.target = target


class UnsupportedTargetError(HelperError):
    """The command exists but cannot fan out over every ORM."""

    def __init__(self, command: str, target: str, supported: Iterable[str]) -> None:
        super().__init__(
            f"Command {command} does not support target '{target}'. "
            f"Commands supporting '{target}': {', '.join(supported)}"
        )
        self.command = command


class UnknownCommandError(HelperError):
    def __init__(self, command: str, valid: Iterable[str]) -> None:
        super().__init__(f"Unknown command: {command}. Must be one of: {', '.join(valid)}")
        self.command = command


class CommandFailedError(HelperError):
    """
    An external process exited non-zero or could not be spawned.

    The tool's own output already reached the operator, so `message` stays empty.
    """

    def __init__(self, display: str, returncode: int | None) -> None:
        super().__init__(display, returncode)
        self.display = display
        self.returncode = returncode

    @property
    def message(self) -> str:
        return ""


# --- Module Notes -----------------------------------------------------------
# Usage, validation and unknown-command errors are raised before anything is spawned.
