"""Window state - screen dimensions and layout mode."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from ..config import MOBILE_BREAKPOINT, WINDOW_HEIGHT, WINDOW_WIDTH


@dataclass
class WindowState:
    screen_w: int = WINDOW_WIDTH
    screen_h: int = WINDOW_HEIGHT

    @property
    def size(self) -> Tuple[int, int]:
        return (self.screen_w, self.screen_h)

    @property
    def is_mobile(self) -> bool:
        """Narrow layout: horizontal thumbnails, full-screen panel."""
        return self.screen_w < MOBILE_BREAKPOINT
