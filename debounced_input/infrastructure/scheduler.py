"""Host scheduling primitives: run a callback after a delay, or cancel it first."""

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol

from debounced_input.logging_config import get_logger

logger = get_logger(__name__)


class SchedulerUnavailableError(RuntimeError):
    """Raised when a scheduler can no longer accept new calls."""


class ScheduledCall(Protocol):
    """Handle for a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. No-op if it already ran."""
        ...


class Scheduler(Protocol):
    """Anything that can run a callback once after `delay` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        ...


class ThreadingScheduler:
    """Schedule each call on its own daemon `threading.Timer`.

    Callbacks run on the timer thread, so consumers must guard shared state.
    """

    def __init__(self) -> None:
        self._closed = False

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        if self._closed:
            raise SchedulerUnavailableError("ThreadingScheduler is closed")

        timer = threading.Timer(delay, callback)
        timer.daemon = True
        try:
            timer.start()
        except RuntimeError as exc:
            # Interpreter shutdown refuses new threads
            raise SchedulerUnavailableError(str(exc)) from exc
        return timer

    def close(self) -> None:
        """Refuse new calls. Timers already started are left to their owners."""
        self._closed = True
        logger.debug("ThreadingScheduler closed")

    @property
    def is_closed(self) -> bool:
        return self._closed


class AsyncioScheduler:
    """Schedule calls on an asyncio event loop.

    All callbacks run on the loop thread, which makes the loop the single
    scheduling context: `call_later` must be called from that thread too.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        if self._loop.is_closed():
            raise SchedulerUnavailableError("Event loop is closed")
        try:
            return self._loop.call_later(delay, callback)
        except RuntimeError as exc:
            raise SchedulerUnavailableError(str(exc)) from exc

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop
