"""Debouncer that coalesces rapid value updates into a single settled value."""

import threading
from collections.abc import Callable
from enum import StrEnum
from typing import Generic, TypeVar

from debounced_input.domain.constants import DEBOUNCE_SECONDS
from debounced_input.domain.models import DebounceConfig
from debounced_input.infrastructure.scheduler import (
    ScheduledCall,
    Scheduler,
    SchedulerUnavailableError,
    ThreadingScheduler,
)
from debounced_input.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class DebouncerState(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    DISPOSED = "disposed"


class Debouncer(Generic[T]):
    """Emit the latest notified value once the input has been quiet for `delay`.

    Each `notify(value)` replaces the pending value and restarts the timer, so a
    burst of updates produces one emission carrying the last value. Values
    notified in between are dropped.

    The registered callback runs on the scheduler's context, outside the
    internal lock, so it may call `notify` again to start a new cycle.
    """

    def __init__(
        self,
        delay: float = DEBOUNCE_SECONDS,
        scheduler: Scheduler | None = None,
        callback: Callable[[T], None] | None = None,
    ) -> None:
        self._config = DebounceConfig(debounce_seconds=delay)
        self._scheduler = scheduler or ThreadingScheduler()
        self._callback = callback
        self._lock = threading.Lock()
        # Held for the whole of an emission; dispose waits on it so nothing
        # is emitted once dispose returns. Reentrant for callbacks that dispose.
        self._emit_lock = threading.RLock()
        self._handle: ScheduledCall | None = None
        # Bumped on every reschedule and on dispose; a firing timer only
        # emits if it still holds the current generation.
        self._generation = 0
        self._pending_value: T | None = None
        self._settled_value: T | None = None
        self._settle_count = 0
        self._disposed = False

    @classmethod
    def from_config(
        cls,
        config: DebounceConfig,
        scheduler: Scheduler | None = None,
        callback: Callable[[T], None] | None = None,
    ) -> "Debouncer[T]":
        return cls(delay=config.debounce_seconds, scheduler=scheduler, callback=callback)

    def notify(self, value: T) -> None:
        """Record `value` and restart the quiet-period timer."""
        with self._lock:
            if self._disposed:
                logger.debug("Ignoring notify on disposed debouncer")
                return

            if self._handle is not None:
                self._handle.cancel()
                self._handle = None
                logger.debug("Debounce reset")

            self._generation += 1
            self._pending_value = value
            generation = self._generation

            try:
                self._handle = self._scheduler.call_later(
                    self._config.debounce_seconds, lambda: self._fire(generation)
                )
            except SchedulerUnavailableError:
                logger.warning("Scheduler unavailable, dropping pending value")
                self._pending_value = None

    def on_settled(self, callback: Callable[[T], None]) -> None:
        """Register the sink for settled values, replacing any previous one."""
        with self._lock:
            self._callback = callback

    def dispose(self) -> None:
        """Cancel the pending timer and stop all future emissions."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._generation += 1
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None
            self._pending_value = None
        with self._emit_lock:
            pass
        logger.info("Debouncer disposed")

    def _fire(self, generation: int) -> None:
        """Emit the pending value unless superseded or disposed."""
        with self._emit_lock:
            with self._lock:
                if self._disposed or generation != self._generation:
                    return
                value = self._pending_value
                self._handle = None
                self._pending_value = None

            logger.debug("Debounce settled: %r", value)

            with self._lock:
                if self._disposed:
                    return
                self._settled_value = value
                self._settle_count += 1
                callback = self._callback

            if callback is None:
                return
            try:
                callback(value)  # type: ignore[arg-type]
            except Exception:
                logger.exception("Settle callback failed for: %r", value)

    def __enter__(self) -> "Debouncer[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    @property
    def delay(self) -> float:
        return self._config.debounce_seconds

    @property
    def state(self) -> DebouncerState:
        with self._lock:
            if self._disposed:
                return DebouncerState.DISPOSED
            if self._handle is not None:
                return DebouncerState.PENDING
            return DebouncerState.IDLE

    @property
    def is_pending(self) -> bool:
        return self.state is DebouncerState.PENDING

    @property
    def is_disposed(self) -> bool:
        with self._lock:
            return self._disposed

    @property
    def settled_value(self) -> T | None:
        """Last value emitted, or None before the first emission."""
        with self._lock:
            return self._settled_value

    @property
    def settle_count(self) -> int:
        with self._lock:
            return self._settle_count
