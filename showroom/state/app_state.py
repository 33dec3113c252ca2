"""Composite ViewerState - combines all sub-states."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .window import WindowState
from .page import PageState
from .modal import ModalState
from .navigation import NavigationState
from .touch import TouchState
from ..types import ImageItem, Interior, MediaItem, VideoItem


@dataclass
class ViewerState:
    """
    Everything the renderer reads, grouped by concern:
        state.window.screen_w
        state.page.scroll_y
        state.modal.phase
        state.nav.selected_image_index
        state.touch.intent
    """
    interiors: List[Interior] = field(default_factory=list)
    window: WindowState = field(default_factory=WindowState)
    page: PageState = field(default_factory=PageState)
    modal: ModalState = field(default_factory=ModalState)
    nav: NavigationState = field(default_factory=NavigationState)
    touch: TouchState = field(default_factory=TouchState)

    @property
    def displayed_image(self) -> Optional[ImageItem]:
        return self.modal.catalog.image_at(self.nav.displayed_image_index)

    @property
    def active_video(self) -> Optional[VideoItem]:
        return self.modal.catalog.video_at(self.nav.active_video_index)

    @property
    def pane_media(self) -> Optional[MediaItem]:
        """What the media pane shows: the displayed image, else the active video."""
        return self.displayed_image or self.active_video
