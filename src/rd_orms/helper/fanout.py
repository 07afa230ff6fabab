"""
rd_orms.helper.fanout

Concurrent launcher for long-running children with signal-driven cancellation.

Responsibilities:
- Spawn one child per command without waiting between spawns, then join on all.
- Terminate every tracked child when the cancellation token fires.
- Bridge SIGINT/SIGTERM to the token for the duration of the join.

Limitation: cancellation sends SIGTERM to the tracked children only. Processes those
children started themselves (e.g. the dev server a package manager runs) are not
guaranteed to exit with them.
"""

from __future__ import annotations

import signal
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager

from rd_orms.helper.commands import ChildHandle, ExternalCommand, Runner
from rd_orms.observability.logging import get_logger

log = get_logger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class CancellationToken:
    """One-shot cancellation flag with callbacks, run in registration order."""

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def add_callback(self, callback: Callable[[], None]) -> None:
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


@contextmanager
def cancel_on_signals(
    token: CancellationToken, signals: Iterable[signal.Signals] = DEFAULT_SIGNALS
) -> Iterator[CancellationToken]:
    """Route the given signals to `token.cancel()`; previous handlers are restored on exit."""

    def handler(signum: int, _frame: object) -> None:
        log.info("cancel_signal_received", signal=signal.Signals(signum).name)
        token.cancel()

    previous = {}
    try:
        for sig in signals:
            previous[sig] = signal.signal(sig, handler)
        yield token
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)


def launch_all(
    runner: Runner, commands: Sequence[ExternalCommand], token: CancellationToken
) -> list[int]:
    """
    Spawn every command, then wait for all of them.

    Returns the exit codes in spawn order. If a spawn fails, the children already
    started are terminated and awaited before the error propagates.
    """

    children: list[ChildHandle] = []

    def terminate_all() -> None:
        for child in children:
            child.terminate()

    token.add_callback(terminate_all)

    try:
        for command in commands:
            if token.cancelled:
                break
            children.append(runner.spawn(command))
    except BaseException:
        terminate_all()
        for child in children:
            child.wait()
        raise

    if token.cancelled:
        # A signal that landed mid-spawn missed the child that spawn was creating.
        terminate_all()

    log.info("children_started", count=len(children), pids=[c.pid for c in children])
    return [child.wait() for child in children]


# --- Module Notes -----------------------------------------------------------
# Waiting in spawn order is a full join: a child that already exited is simply
# reaped when its turn comes.
