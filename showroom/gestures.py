"""Gesture interpreter - touch samples to navigation steps.

The classification is pure (``classify_move``, ``interpret_swipe``,
``classify_gesture``); ``GestureInterpreter`` only adds the per-touch
bookkeeping that the event plumbing needs.

Ratios and the two-tier distance floor keep page scrolls on touch screens
from flipping images while quick flicks still register.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence

from . import config as cfg
from .state.touch import GestureIntent, TouchState
from .types import Direction, TouchPoint
from .logging import log


@dataclass(frozen=True)
class SwipeThresholds:
    lock_px: float = cfg.SWIPE_LOCK_PX
    horizontal_ratio: float = cfg.SWIPE_HORIZONTAL_RATIO
    vertical_ratio: float = cfg.SWIPE_VERTICAL_RATIO
    end_ratio: float = cfg.SWIPE_END_RATIO
    fast_ms: float = cfg.SWIPE_FAST_MS
    fast_distance: float = cfg.SWIPE_FAST_DISTANCE_PX
    slow_distance: float = cfg.SWIPE_SLOW_DISTANCE_PX
    min_velocity: float = cfg.SWIPE_MIN_VELOCITY

    def min_distance(self, duration_ms: float) -> float:
        return self.fast_distance if duration_ms < self.fast_ms else self.slow_distance


DEFAULT_THRESHOLDS = SwipeThresholds()


def classify_move(start: TouchPoint, current: TouchPoint,
                  thresholds: SwipeThresholds = DEFAULT_THRESHOLDS) -> GestureIntent:
    """Intent of a touch from its start to the current sample."""
    dx = abs(current.x - start.x)
    dy = abs(current.y - start.y)
    if dx > thresholds.lock_px and dx > thresholds.horizontal_ratio * dy:
        return GestureIntent.HORIZONTAL
    if dy > thresholds.lock_px and dy > thresholds.vertical_ratio * dx:
        return GestureIntent.VERTICAL
    return GestureIntent.UNDECIDED


def interpret_swipe(start: TouchPoint, end: TouchPoint, confirmed_horizontal: bool = False,
                    thresholds: SwipeThresholds = DEFAULT_THRESHOLDS) -> Optional[Direction]:
    """Navigation step for a finished touch, or None if it was not a swipe.

    Dragging the content leftward (end left of start) reveals the next item.
    """
    dx = end.x - start.x
    dy = abs(start.y - end.y)
    duration = end.t_ms - start.t_ms

    horizontal = confirmed_horizontal or abs(dx) > thresholds.end_ratio * dy
    if not horizontal:
        return None

    velocity = abs(dx) / max(duration, 1.0)
    if abs(dx) > thresholds.min_distance(duration) or velocity > thresholds.min_velocity:
        return Direction.NEXT if dx < 0 else Direction.PREV
    return None


def classify_gesture(points: Sequence[TouchPoint],
                     thresholds: SwipeThresholds = DEFAULT_THRESHOLDS) -> Optional[Direction]:
    """Classify a whole single-touch sequence: start, moves..., end."""
    if len(points) < 2:
        return None
    start = points[0]
    intent = GestureIntent.UNDECIDED
    for point in points[1:-1]:
        step = classify_move(start, point, thresholds)
        if step is not GestureIntent.UNDECIDED:
            intent = step
    return interpret_swipe(start, points[-1], intent is GestureIntent.HORIZONTAL, thresholds)


class GestureInterpreter:
    """Feeds raw touch events through the classifier for one touch at a time."""

    def __init__(self, touch: Optional[TouchState] = None,
                 thresholds: SwipeThresholds = DEFAULT_THRESHOLDS):
        self.touch = touch if touch is not None else TouchState()
        self.thresholds = thresholds

    def touch_start(self, points: Sequence[TouchPoint]) -> bool:
        """Begin tracking. Multi-touch is ignored. Returns True if tracking."""
        if len(points) != 1:
            self.touch.clear()
            return False
        self.touch.begin(points[0])
        return True

    def touch_move(self, point: TouchPoint) -> bool:
        """Update intent. Returns True when native scrolling should be suppressed."""
        start = self.touch.start
        if start is None:
            return False
        intent = classify_move(start, point, self.thresholds)
        if intent is not GestureIntent.UNDECIDED and intent is not self.touch.intent:
            self.touch.intent = intent
            log(f"[GESTURE] Intent {intent.name}")
        return self.touch.confirmed_horizontal

    def touch_end(self, point: TouchPoint) -> Optional[Direction]:
        """Finish the touch; tracking is cleared whatever the outcome."""
        start = self.touch.start
        confirmed = self.touch.confirmed_horizontal
        self.touch.clear()
        if start is None:
            return None
        direction = interpret_swipe(start, point, confirmed, self.thresholds)
        if direction is not None:
            log(f"[GESTURE] Swipe {direction.name} dx={point.x - start.x:.0f}")
        return direction

    def cancel(self) -> None:
        self.touch.clear()
