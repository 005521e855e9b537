"""Tests for worldchat.engine.scheduler -- AnnounceScheduler."""

from __future__ import annotations

import threading

import pytest

from worldchat.config.schema import DEFAULT_ANNOUNCE_TEXT, BroadcastConfig
from worldchat.config.store import ConfigStore
from worldchat.engine.directory import InMemoryDirectory, Mailbox
from worldchat.engine.events import AnnouncementFiredEvent
from worldchat.engine.scheduler import AnnounceScheduler
from worldchat.hooks.adapters import SchedulerTicker


@pytest.fixture
def fired() -> list[AnnouncementFiredEvent]:
    return []


@pytest.fixture
def scheduler(
    store: ConfigStore,
    directory: InMemoryDirectory,
    mailbox: Mailbox,
    fired: list[AnnouncementFiredEvent],
) -> AnnounceScheduler:
    sched = AnnounceScheduler(store, directory, mailbox, event_listeners=[fired.append])
    sched.start()
    return sched


# ======================================================================
# Arm / fire
# ======================================================================


class TestArmAndFire:
    """Countdown and one-shot firing."""

    def test_fires_after_cumulative_delay(
        self, scheduler: AnnounceScheduler, mailbox: Mailbox
    ) -> None:
        scheduler.arm("a1")
        assert scheduler.advance(5000) == []
        assert scheduler.pending("a1") == 5000
        assert scheduler.advance(5000) == ["a1"]
        assert mailbox.received("a1") == [DEFAULT_ANNOUNCE_TEXT]
        assert "a1" not in scheduler

    def test_fires_only_once(self, scheduler: AnnounceScheduler, mailbox: Mailbox) -> None:
        scheduler.arm("a1")
        scheduler.advance(5000)
        scheduler.advance(5000)
        assert scheduler.advance(123456) == []
        assert mailbox.received("a1") == [DEFAULT_ANNOUNCE_TEXT]

    def test_overshoot_fires(self, scheduler: AnnounceScheduler) -> None:
        scheduler.arm("a1")
        assert scheduler.advance(60000) == ["a1"]

    def test_zero_elapsed_keeps_entry(self, scheduler: AnnounceScheduler) -> None:
        scheduler.arm("a1")
        assert scheduler.advance(0) == []
        assert scheduler.pending("a1") == 10000

    def test_many_fire_in_one_call(
        self, scheduler: AnnounceScheduler, mailbox: Mailbox
    ) -> None:
        for identity in ("a1", "a2", "h1", "h2"):
            scheduler.arm(identity)
        assert sorted(scheduler.advance(10000)) == ["a1", "a2", "h1", "h2"]
        assert len(scheduler) == 0
        assert mailbox.total == 4

    def test_mixed_due_and_pending(self, scheduler: AnnounceScheduler) -> None:
        scheduler.arm("a1")
        scheduler.advance(6000)
        scheduler.arm("h1")
        assert scheduler.advance(4000) == ["a1"]
        assert scheduler.pending("h1") == 6000

    def test_absent_participant_entry_still_removed(
        self,
        scheduler: AnnounceScheduler,
        directory: InMemoryDirectory,
        mailbox: Mailbox,
        fired: list[AnnouncementFiredEvent],
    ) -> None:
        scheduler.arm("a1")
        directory.remove("a1")
        assert scheduler.advance(10000) == ["a1"]
        assert mailbox.total == 0
        assert "a1" not in scheduler
        assert fired == [AnnouncementFiredEvent(participant_id="a1", delivered=False)]

    def test_not_in_world_participant_not_delivered(
        self, scheduler: AnnounceScheduler, directory: InMemoryDirectory, mailbox: Mailbox
    ) -> None:
        scheduler.arm("h1")
        directory.set_in_world("h1", False)
        scheduler.advance(10000)
        assert mailbox.total == 0
        assert len(scheduler) == 0

    def test_unreachable_is_not_retried(
        self, scheduler: AnnounceScheduler, mailbox: Mailbox
    ) -> None:
        mailbox.unreachable.add("a2")
        scheduler.arm("a2")
        assert scheduler.advance(10000) == ["a2"]
        mailbox.unreachable.clear()
        assert scheduler.advance(10000) == []
        assert mailbox.total == 0

    def test_fired_event(
        self, scheduler: AnnounceScheduler, fired: list[AnnouncementFiredEvent]
    ) -> None:
        scheduler.arm("h2")
        scheduler.advance(10000)
        assert fired == [AnnouncementFiredEvent(participant_id="h2", delivered=True)]

    def test_custom_delay_and_text(
        self, store: ConfigStore, scheduler: AnnounceScheduler, mailbox: Mailbox
    ) -> None:
        store.replace(BroadcastConfig(announce_delay_ms=250, announce_text="Welcome!"))
        scheduler.arm("a1")
        assert scheduler.advance(250) == ["a1"]
        assert mailbox.received("a1") == ["Welcome!"]

    def test_negative_elapsed_counts_as_zero(self, scheduler: AnnounceScheduler) -> None:
        scheduler.arm("a1")
        assert scheduler.advance(-1) == []
        assert scheduler.pending("a1") == 10000

    def test_negative_tick_through_ticker_is_noop(
        self, scheduler: AnnounceScheduler, mailbox: Mailbox
    ) -> None:
        scheduler.arm("a1")
        SchedulerTicker(scheduler).on_update(-500)
        assert scheduler.pending("a1") == 10000
        assert mailbox.total == 0

    def test_listener_added_after_construction(
        self, store: ConfigStore, directory: InMemoryDirectory, mailbox: Mailbox
    ) -> None:
        listeners: list = []
        sched = AnnounceScheduler(store, directory, mailbox, event_listeners=listeners)
        seen: list[AnnouncementFiredEvent] = []
        listeners.append(seen.append)
        sched.start()
        sched.arm("a1")
        sched.advance(10000)
        assert [e.participant_id for e in seen] == ["a1"]

    def test_empty_advance(self, scheduler: AnnounceScheduler) -> None:
        assert scheduler.advance(1000) == []


# ======================================================================
# Re-arm / cancel
# ======================================================================


class TestRearmAndCancel:
    """Reset on re-login and cancellation on logout."""

    def test_rearm_resets_countdown(self, scheduler: AnnounceScheduler) -> None:
        scheduler.arm("a1")
        scheduler.advance(9000)
        scheduler.arm("a1")
        assert len(scheduler) == 1
        assert scheduler.pending("a1") == 10000
        assert scheduler.advance(9000) == []
        assert scheduler.advance(1000) == ["a1"]

    def test_entries_bounded_by_distinct_identities(self, scheduler: AnnounceScheduler) -> None:
        for _ in range(5):
            scheduler.arm("a1")
            scheduler.arm("h1")
        assert len(scheduler) == 2

    def test_cancel_prevents_fire(
        self, scheduler: AnnounceScheduler, mailbox: Mailbox
    ) -> None:
        scheduler.arm("a1")
        scheduler.cancel("a1")
        assert scheduler.advance(999999) == []
        assert mailbox.total == 0

    def test_cancel_twice_is_noop(self, scheduler: AnnounceScheduler) -> None:
        scheduler.arm("a1")
        scheduler.arm("h1")
        scheduler.cancel("a1")
        scheduler.cancel("a1")
        assert "a1" not in scheduler
        assert "h1" in scheduler

    def test_cancel_unknown_is_noop(self, scheduler: AnnounceScheduler) -> None:
        scheduler.cancel("nobody")
        assert len(scheduler) == 0

    def test_pending_unknown(self, scheduler: AnnounceScheduler) -> None:
        assert scheduler.pending("nobody") is None


# ======================================================================
# Configuration and lifecycle
# ======================================================================


class TestLifecycle:
    """start/stop and the announce switch."""

    def test_announce_disabled_does_not_arm(
        self, store: ConfigStore, scheduler: AnnounceScheduler
    ) -> None:
        store.replace(BroadcastConfig(announce_on_join=False))
        scheduler.arm("a1")
        assert len(scheduler) == 0

    def test_not_started_ignores_arm(
        self, store: ConfigStore, directory: InMemoryDirectory, mailbox: Mailbox
    ) -> None:
        sched = AnnounceScheduler(store, directory, mailbox)
        assert sched.running is False
        sched.arm("a1")
        assert len(sched) == 0

    def test_stop_clears_pending(self, scheduler: AnnounceScheduler, mailbox: Mailbox) -> None:
        scheduler.arm("a1")
        scheduler.arm("h1")
        scheduler.stop()
        assert len(scheduler) == 0
        assert scheduler.running is False
        assert scheduler.advance(10000) == []
        assert mailbox.total == 0

    def test_restart(self, scheduler: AnnounceScheduler) -> None:
        scheduler.stop()
        scheduler.start()
        scheduler.arm("a1")
        assert "a1" in scheduler

    def test_concurrent_arm_cancel_advance(self, scheduler: AnnounceScheduler) -> None:
        identities = [f"p{i}" for i in range(50)]

        def churn() -> None:
            for _ in range(200):
                for identity in identities:
                    scheduler.arm(identity)
                    scheduler.cancel(identity)

        def tick() -> None:
            for _ in range(500):
                scheduler.advance(1)

        threads = [threading.Thread(target=churn), threading.Thread(target=tick)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(scheduler) == 0
