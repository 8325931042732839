"""Pair a live-editable value with its debounced counterpart."""

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from debounced_input.domain.constants import DEBOUNCE_SECONDS
from debounced_input.infrastructure.debouncer import Debouncer
from debounced_input.infrastructure.scheduler import Scheduler
from debounced_input.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class DebouncedValue(Generic[T]):
    """Forward live updates into a Debouncer and expose the settled result.

    `value` is what the host edits; `debounced_value` is what the host observes.
    Only real changes are forwarded, and `on_debounced` runs only when the
    settled value differs from the previous one.
    """

    def __init__(
        self,
        initial: T,
        delay: float = DEBOUNCE_SECONDS,
        scheduler: Scheduler | None = None,
        on_debounced: Callable[[T], None] | None = None,
    ) -> None:
        self._value = initial
        self._debounced_value = initial
        self._on_debounced = on_debounced
        self._lock = threading.Lock()
        self._debouncer: Debouncer[T] = Debouncer(
            delay=delay, scheduler=scheduler, callback=self._on_settled
        )

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    @property
    def debounced_value(self) -> T:
        with self._lock:
            return self._debounced_value

    @property
    def debouncer(self) -> Debouncer[T]:
        return self._debouncer

    def set(self, new_value: T) -> None:
        """Update the live value, restarting the quiet period if it changed."""
        with self._lock:
            if new_value == self._value:
                return
            self._value = new_value
            # Notify under the lock so the debouncer sees writes in order
            self._debouncer.notify(new_value)

    def dispose(self) -> None:
        self._debouncer.dispose()

    def _on_settled(self, settled: T) -> None:
        with self._lock:
            changed = settled != self._debounced_value
            self._debounced_value = settled
            callback = self._on_debounced

        if not changed:
            return
        logger.debug("Debounced value changed: %r", settled)
        if callback is not None:
            callback(settled)

    def __enter__(self) -> "DebouncedValue[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class DebouncedSearch(DebouncedValue[str]):
    """Search field text with a debounced query, starting empty."""

    def __init__(
        self,
        delay: float = DEBOUNCE_SECONDS,
        scheduler: Scheduler | None = None,
        on_debounced: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__("", delay=delay, scheduler=scheduler, on_debounced=on_debounced)

    @property
    def text(self) -> str:
        return self.value

    @text.setter
    def text(self, new_text: str) -> None:
        self.set(new_text)

    @property
    def debounced_text(self) -> str:
        return self.debounced_value
