"""Tests for DebouncedValue and DebouncedSearch wiring."""

import threading
from unittest.mock import MagicMock, patch

from debounced_input.application.debounced_value import DebouncedSearch, DebouncedValue
from tests.fixtures.virtual_scheduler import VirtualScheduler


class TestDebouncedValueForwarding:
    def test_live_value_should_update_immediately(self, scheduler: VirtualScheduler) -> None:
        value = DebouncedValue(0, delay=0.5, scheduler=scheduler)

        value.value = 3

        assert value.value == 3
        assert value.debounced_value == 0

    def test_debounced_value_should_follow_after_quiet_period(
        self, scheduler: VirtualScheduler
    ) -> None:
        value = DebouncedValue(0, delay=0.5, scheduler=scheduler)

        value.set(1)
        scheduler.advance(0.2)
        value.set(2)
        scheduler.advance(0.49)
        assert value.debounced_value == 0

        scheduler.advance(0.02)
        assert value.debounced_value == 2

    def test_unchanged_value_should_not_restart_quiet_period(
        self, scheduler: VirtualScheduler
    ) -> None:
        value = DebouncedValue("", delay=0.5, scheduler=scheduler)

        value.set("a")
        scheduler.advance(0.3)
        value.set("a")
        scheduler.advance(0.21)

        assert value.debounced_value == "a"
        assert value.debouncer.settle_count == 1

    def test_on_debounced_should_fire_only_when_settled_value_changes(
        self, scheduler: VirtualScheduler
    ) -> None:
        on_debounced = MagicMock()
        value = DebouncedValue("", delay=0.1, scheduler=scheduler, on_debounced=on_debounced)

        value.set("a")
        value.set("")  # Back to the settled value before the timer fires
        scheduler.advance(0.11)
        on_debounced.assert_not_called()

        value.set("b")
        scheduler.advance(0.11)
        on_debounced.assert_called_once_with("b")

    def test_set_should_forward_to_debouncer_while_holding_value_lock(
        self, scheduler: VirtualScheduler
    ) -> None:
        value = DebouncedValue("", delay=0.1, scheduler=scheduler)
        lock_held: list[bool] = []

        def record_lock(_new: str) -> None:
            lock_held.append(value._lock.locked())

        with patch.object(value.debouncer, "notify", side_effect=record_lock):
            value.set("a")
            value.set("b")

        # Concurrent writers reach the debouncer in the order they wrote `value`
        assert lock_held == [True, True]

    def test_concurrent_sets_should_settle_on_final_live_value(
        self, scheduler: VirtualScheduler
    ) -> None:
        value = DebouncedValue("", delay=0.1, scheduler=scheduler)
        writers = [
            threading.Thread(target=value.set, args=(f"q{i}",)) for i in range(20)
        ]
        for writer in writers:
            writer.start()
        for writer in writers:
            writer.join(timeout=2)

        scheduler.advance(0.2)

        assert value.debounced_value == value.value

    def test_dispose_should_freeze_debounced_value(self, scheduler: VirtualScheduler) -> None:
        with DebouncedValue(0, delay=0.1, scheduler=scheduler) as value:
            value.set(5)

        scheduler.advance(1)

        assert value.debounced_value == 0
        assert value.debouncer.is_disposed


class TestDebouncedSearch:
    def test_search_should_start_empty(self, scheduler: VirtualScheduler) -> None:
        search = DebouncedSearch(scheduler=scheduler)

        assert search.text == ""
        assert search.debounced_text == ""
        assert search.debouncer.delay == 1.0

    def test_search_should_emit_settled_query(self, scheduler: VirtualScheduler) -> None:
        queries: list[str] = []
        search = DebouncedSearch(delay=0.3, scheduler=scheduler, on_debounced=queries.append)

        for text in ["p", "py", "pyt", "python"]:
            search.text = text
            scheduler.advance(0.1)

        scheduler.advance(0.21)

        assert queries == ["python"]
        assert search.debounced_text == "python"
