"""Scheduler - named, cancellable single-shot timers.

Runs on the UI thread: ``update()`` is called once per frame and fires every
timer whose deadline has passed. Starting a timer cancels any pending timer
with the same id, so at most one instance of each is ever armed.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

from .logging import now, log


class TimerId(Enum):
    """Timers used by the gallery modal."""
    CROSSFADE = auto()   # Swap displayed image after fade-out
    ENTER = auto()       # Deferred flip to the animated-in visual state
    CLOSE = auto()       # Unmount and reset after the exit transition


@dataclass
class Timer:
    timer_id: TimerId
    deadline: float
    callback: Callable[[], None]
    seq: int = 0


class Scheduler:
    """Owns every pending timer of one controller."""

    def __init__(self, clock: Callable[[], float] = now):
        self._clock = clock
        self._timers: Dict[TimerId, Timer] = {}
        self._seq = 0

    def start(self, timer_id: TimerId, delay_ms: float, callback: Callable[[], None]) -> None:
        """Arm ``timer_id``; a pending timer with the same id is dropped first."""
        if timer_id in self._timers:
            self.cancel(timer_id)
        self._seq += 1
        deadline = self._clock() + max(0.0, delay_ms) / 1000.0
        self._timers[timer_id] = Timer(timer_id, deadline, callback, self._seq)
        log(f"[TIMER] Started {timer_id.name} delay={delay_ms}ms")

    def cancel(self, timer_id: TimerId) -> bool:
        """Cancel a pending timer. Returns True if one was pending."""
        if self._timers.pop(timer_id, None) is None:
            return False
        log(f"[TIMER] Cancelled {timer_id.name}")
        return True

    def cancel_all(self) -> None:
        for timer_id in list(self._timers):
            self.cancel(timer_id)

    def is_pending(self, timer_id: TimerId) -> bool:
        return timer_id in self._timers

    def remaining_ms(self, timer_id: TimerId) -> Optional[float]:
        timer = self._timers.get(timer_id)
        if timer is None:
            return None
        return max(0.0, (timer.deadline - self._clock()) * 1000.0)

    @property
    def pending(self) -> List[TimerId]:
        return list(self._timers)

    def update(self) -> int:
        """Fire due timers in deadline order. Returns how many fired."""
        t = self._clock()
        due = sorted(
            (tm for tm in self._timers.values() if tm.deadline <= t),
            key=lambda tm: (tm.deadline, tm.seq),
        )
        fired = 0
        for timer in due:
            # An earlier callback may have cancelled or re-armed this id.
            if self._timers.get(timer.timer_id) is not timer:
                continue
            del self._timers[timer.timer_id]
            log(f"[TIMER] Fired {timer.timer_id.name}")
            try:
                timer.callback()
            except Exception as e:
                log(f"[TIMER][ERR] Callback failed for {timer.timer_id.name}: {e!r}")
            fired += 1
        return fired
