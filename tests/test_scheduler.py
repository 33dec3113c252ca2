import pytest

from showroom.scheduler import Scheduler, TimerId


def test_timer_fires_once_after_delay(clock):
    sched = Scheduler(clock)
    fired = []
    sched.start(TimerId.CROSSFADE, 180, lambda: fired.append("x"))

    clock.advance_ms(170)
    assert sched.update() == 0
    clock.advance_ms(20)
    assert sched.update() == 1
    assert sched.update() == 0
    assert fired == ["x"]
    assert not sched.is_pending(TimerId.CROSSFADE)


def test_zero_delay_fires_on_next_update(clock):
    sched = Scheduler(clock)
    fired = []
    sched.start(TimerId.ENTER, 0, lambda: fired.append(True))
    assert fired == []
    sched.update()
    assert fired == [True]


def test_restart_replaces_pending_timer(clock):
    sched = Scheduler(clock)
    fired = []
    sched.start(TimerId.CROSSFADE, 180, lambda: fired.append(1))
    clock.advance_ms(100)
    sched.start(TimerId.CROSSFADE, 180, lambda: fired.append(2))
    assert sched.remaining_ms(TimerId.CROSSFADE) == pytest.approx(180)

    clock.advance_ms(500)
    sched.update()
    assert fired == [2]


def test_cancel_and_cancel_all(clock):
    sched = Scheduler(clock)
    fired = []
    sched.start(TimerId.CROSSFADE, 10, lambda: fired.append("fade"))
    sched.start(TimerId.CLOSE, 10, lambda: fired.append("close"))
    assert sched.cancel(TimerId.CROSSFADE)
    assert not sched.cancel(TimerId.CROSSFADE)
    assert sched.pending == [TimerId.CLOSE]

    sched.cancel_all()
    clock.advance_ms(50)
    sched.update()
    assert fired == []
    assert sched.remaining_ms(TimerId.CLOSE) is None


def test_callback_can_cancel_a_timer_due_in_same_update(clock):
    sched = Scheduler(clock)
    fired = []
    sched.start(TimerId.CLOSE, 10, lambda: (fired.append("close"), sched.cancel(TimerId.CROSSFADE)))
    sched.start(TimerId.CROSSFADE, 20, lambda: fired.append("fade"))
    clock.advance_ms(30)
    assert sched.update() == 1
    assert fired == ["close"]


def test_failing_callback_does_not_stop_others(clock):
    sched = Scheduler(clock)
    fired = []

    def boom():
        raise RuntimeError("boom")

    sched.start(TimerId.ENTER, 0, boom)
    sched.start(TimerId.CLOSE, 5, lambda: fired.append("close"))
    clock.advance_ms(10)
    assert sched.update() == 2
    assert fired == ["close"]
