# ABOUTME: Unit tests for Notifier messages and the cool-down re-arm of the scan gate.
# ABOUTME: Uses ManualClock so the 3-second cool-down is exact and instantaneous.

import asyncio

import pytest

from shelfscan.scanning.gate import Idle, Locked, ScanGate
from shelfscan.scanning.notifier import AsyncioScheduler, Notifier
from shelfscan.scanning.outcomes import Duplicate, Error, NotFound, Outcome, Success, describe
from tests.fixtures.fakes import ManualClock


class TestDescribe:
    def test_messages_are_distinct_per_kind(self) -> None:
        messages = {
            describe(Success("T")),
            describe(Duplicate("T")),
            describe(NotFound("9790000000001")),
            describe(Error("boom")),
        }
        assert len(messages) == 4

    def test_messages_carry_details(self) -> None:
        assert "T" in describe(Success("T"))
        assert "9790000000001" in describe(NotFound("9790000000001"))
        assert "boom" in describe(Error("boom"))


class TestAnnounce:
    @pytest.mark.parametrize(
        "outcome",
        [Success("T"), Duplicate("T"), NotFound("9784061530194"), Error("boom")],
    )
    def test_every_outcome_rearms_after_cooldown(
        self, clock: ManualClock, outcome: Outcome
    ) -> None:
        """Same cool-down for every kind: the lock clears at exactly 3 seconds."""
        gate = ScanGate()
        gate.admit("9784061530194")
        notifier = Notifier(gate, scheduler=clock)

        notifier.announce(outcome, "9784061530194")
        assert notifier.message == describe(outcome)

        clock.advance(2.5)
        assert gate.state == Locked("9784061530194")
        assert notifier.message != ""

        clock.advance(0.5)
        assert gate.state == Idle()
        assert notifier.message == ""

    def test_custom_cooldown(self, clock: ManualClock) -> None:
        gate = ScanGate()
        gate.admit("9784061530194")
        notifier = Notifier(gate, scheduler=clock, cooldown=1.0)
        notifier.announce(Success("T"), "9784061530194")
        clock.advance(1.0)
        assert gate.state == Idle()

    @pytest.mark.parametrize("cooldown", [float("nan"), float("inf"), -1.0])
    def test_unusable_cooldown_rejected(self, clock: ManualClock, cooldown: float) -> None:
        """A cool-down that never elapses would leave the gate locked for good."""
        with pytest.raises(ValueError, match="Cool-down"):
            Notifier(ScanGate(), scheduler=clock, cooldown=cooldown)

    def test_sink_receives_outcome_and_message(self, clock: ManualClock) -> None:
        received: list[tuple[Outcome, str]] = []
        notifier = Notifier(
            ScanGate(), scheduler=clock, sink=lambda o, m: received.append((o, m))
        )
        notifier.announce(NotFound("9790000000001"), "9790000000001")
        assert received == [(NotFound("9790000000001"), describe(NotFound("9790000000001")))]

    def test_older_timer_does_not_clear_newer_message(self, clock: ManualClock) -> None:
        gate = ScanGate()
        notifier = Notifier(gate, scheduler=clock)
        notifier.announce(Success("First"), "9784061530194")
        clock.advance(1.0)
        notifier.announce(Success("Second"), "9790000000001")

        clock.advance(2.0)
        assert notifier.message == describe(Success("Second"))
        clock.advance(1.0)
        assert notifier.message == ""


class TestAsyncioScheduler:
    def test_runs_callback_on_event_loop(self) -> None:
        fired: list[str] = []

        async def main() -> None:
            AsyncioScheduler().call_later(0.01, lambda: fired.append("done"))
            await asyncio.sleep(0.05)

        asyncio.run(main())
        assert fired == ["done"]
