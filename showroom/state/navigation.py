"""Navigation state - selected/displayed image, active video, thumbnail window."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..config import VISIBLE_THUMBNAILS
from ..math_utils import clamp, wrap_index
from ..types import Direction


@dataclass
class NavigationState:
    """Index bookkeeping for one open gallery session.

    ``displayed_image_index`` trails ``selected_image_index`` while a
    cross-fade is running; ``is_entering`` is False during the fade-out half.
    """
    selected_image_index: int = 0
    displayed_image_index: int = 0
    is_entering: bool = True
    active_video_index: int = 0
    thumbnail_offset: int = 0
    image_count: int = 0
    video_count: int = 0
    visible_count: int = VISIBLE_THUMBNAILS

    def reset(self, image_count: int = 0, video_count: int = 0) -> None:
        self.selected_image_index = 0
        self.displayed_image_index = 0
        self.is_entering = True
        self.active_video_index = 0
        self.thumbnail_offset = 0
        self.image_count = max(0, image_count)
        self.video_count = max(0, video_count)

    @property
    def in_transition(self) -> bool:
        return self.displayed_image_index != self.selected_image_index or not self.is_entering

    @property
    def max_thumbnail_offset(self) -> int:
        return max(0, self.image_count - self.visible_count)

    # ─── Images ──────────────────────────────────────────────────────────────

    def select_image(self, index: int) -> bool:
        """Commit a new selection. Returns False for out-of-range or unchanged."""
        if not (0 <= index < self.image_count):
            return False
        if index == self.selected_image_index:
            return False
        self.selected_image_index = index
        self.reconcile_thumbnail_window()
        return True

    def next_image_index(self, direction: Direction) -> Optional[int]:
        """Wrapped neighbour of the selection, or None when there is nowhere to go."""
        if self.image_count <= 1:
            return None
        return wrap_index(self.selected_image_index + int(direction), self.image_count)

    def begin_crossfade(self) -> None:
        self.is_entering = False

    def finish_crossfade(self, index: int) -> None:
        if 0 <= index < self.image_count:
            self.displayed_image_index = index
        self.is_entering = True

    def reconcile_thumbnail_window(self) -> None:
        """Shift the window minimally so the selected thumbnail is visible."""
        offset = self.thumbnail_offset
        visible = max(1, self.visible_count)
        if self.selected_image_index < offset:
            offset = self.selected_image_index
        elif self.selected_image_index >= offset + visible:
            offset = self.selected_image_index - visible + 1
        self.thumbnail_offset = int(clamp(offset, 0, self.max_thumbnail_offset))

    def visible_thumbnail_range(self) -> range:
        end = min(self.image_count, self.thumbnail_offset + self.visible_count)
        return range(self.thumbnail_offset, end)

    # ─── Videos ──────────────────────────────────────────────────────────────

    def select_video(self, index: int) -> bool:
        if not (0 <= index < self.video_count):
            return False
        if index == self.active_video_index:
            return False
        self.active_video_index = index
        return True

    def next_video_index(self, direction: Direction) -> Optional[int]:
        if self.video_count <= 1:
            return None
        return wrap_index(self.active_video_index + int(direction), self.video_count)

    def advance_video(self, direction: Direction) -> bool:
        target = self.next_video_index(direction)
        if target is None:
            return False
        return self.select_video(target)

    # ─── Bounds ──────────────────────────────────────────────────────────────

    def set_counts(self, image_count: int, video_count: int) -> None:
        """Adopt new list lengths; indices past the end go back to 0."""
        self.image_count = max(0, image_count)
        self.video_count = max(0, video_count)
        if self.selected_image_index >= self.image_count:
            self.selected_image_index = 0
        if self.displayed_image_index >= self.image_count:
            self.displayed_image_index = 0
        if self.active_video_index >= self.video_count:
            self.active_video_index = 0
        self.reconcile_thumbnail_window()
