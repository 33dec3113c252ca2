"""Touch state - transient tracking for one swipe interaction."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..types import TouchPoint


class GestureIntent(Enum):
    """Classified intent of a touch in progress."""
    UNDECIDED = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()


@dataclass
class TouchState:
    """Start sample and classified intent of the active touch, if any."""
    start: Optional[TouchPoint] = None
    intent: GestureIntent = GestureIntent.UNDECIDED

    @property
    def active(self) -> bool:
        return self.start is not None

    @property
    def confirmed_horizontal(self) -> bool:
        return self.intent is GestureIntent.HORIZONTAL

    def begin(self, point: TouchPoint) -> None:
        self.start = point
        self.intent = GestureIntent.UNDECIDED

    def clear(self) -> None:
        self.start = None
        self.intent = GestureIntent.UNDECIDED
