"""Command Pattern for input handling.

Commands encapsulate actions that can be triggered by various inputs
(keys, clicks, swipes). Each command has an execute() method and an
optional can_execute() guard.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple
import webbrowser

if TYPE_CHECKING:
    from .controller import GalleryController
    from .state import ViewerState

from .catalog import CatalogError, load_interiors
from .state import ModalPhase
from .types import Direction, MediaKind, TouchPoint
from .layout import HitKind, ModalLayout, grid_tile_at, hit_test, modal_layout
from .logging import log


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, ctl: "GalleryController") -> bool:
        """Execute the command. Returns True if action was taken."""

    def can_execute(self, ctl: "GalleryController") -> bool:
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Modal Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OpenGallery(Command):
    """Open the interior at a grid position."""
    interior_index: int

    def can_execute(self, ctl: "GalleryController") -> bool:
        return 0 <= self.interior_index < len(ctl.state.interiors)

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log(f"[CMD] OpenGallery: {self.interior_index}")
        return ctl.open_gallery(self.interior_index)


class CloseGallery(Command):
    """Close button, backdrop click or Escape."""

    def can_execute(self, ctl: "GalleryController") -> bool:
        return ctl.phase in (ModalPhase.OPENING, ModalPhase.OPEN)

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log("[CMD] CloseGallery")
        return ctl.close_gallery()


@dataclass
class KeyPress(Command):
    """A key routed through the modal's keyboard bindings."""
    key: int

    def execute(self, ctl: "GalleryController") -> bool:
        return ctl.handle_key(self.key)


# ═══════════════════════════════════════════════════════════════════════════
# Image Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class AdvanceImage(Command):
    """Arrow buttons and swipes on the image pane."""
    direction: Direction

    def can_execute(self, ctl: "GalleryController") -> bool:
        return ctl.state.modal.interactive and ctl.nav.image_count > 1

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log(f"[CMD] AdvanceImage: {self.direction.name}")
        return ctl.advance_image(self.direction)


@dataclass
class SelectImage(Command):
    """Click on a thumbnail."""
    index: int

    def can_execute(self, ctl: "GalleryController") -> bool:
        return (ctl.state.modal.interactive and
                0 <= self.index < ctl.nav.image_count and
                self.index != ctl.nav.selected_image_index)

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log(f"[CMD] SelectImage: {ctl.nav.selected_image_index} -> {self.index}")
        return ctl.select_image(self.index)


# ═══════════════════════════════════════════════════════════════════════════
# Video Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class AdvanceVideo(Command):
    direction: Direction

    def can_execute(self, ctl: "GalleryController") -> bool:
        return ctl.state.modal.interactive and ctl.nav.video_count > 1

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log(f"[CMD] AdvanceVideo: {self.direction.name}")
        return ctl.advance_video(self.direction)


@dataclass
class SelectVideo(Command):
    """Click on a video selector pill."""
    index: int

    def can_execute(self, ctl: "GalleryController") -> bool:
        return ctl.state.modal.interactive and 0 <= self.index < ctl.nav.video_count

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log(f"[CMD] SelectVideo: {self.index}")
        return ctl.select_video(self.index)


# ═══════════════════════════════════════════════════════════════════════════
# External handlers
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OpenExternal(Command):
    """Hand a video or document URL to the system handler."""
    url: str

    def can_execute(self, ctl: "GalleryController") -> bool:
        return bool(self.url) and ctl.state.modal.interactive

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log(f"[CMD] OpenExternal: {self.url}")
        try:
            return webbrowser.open(self.url)
        except webbrowser.Error as e:
            log(f"[CMD][ERR] OpenExternal failed: {e!r}")
            return False


# ═══════════════════════════════════════════════════════════════════════════
# Page Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class ScrollPage(Command):
    """Wheel scroll of the showcase grid; ignored while the page is locked."""
    dy: float

    def can_execute(self, ctl: "GalleryController") -> bool:
        return ctl.state.page.can_scroll

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        ctl.state.page.scroll_by(self.dy, ctl.state.window.screen_h)
        return True


@dataclass
class ReloadCatalog(Command):
    """Re-read the interiors export; an open gallery keeps showing its record."""
    path: str = ""

    def can_execute(self, ctl: "GalleryController") -> bool:
        return bool(self.path)

    def execute(self, ctl: "GalleryController") -> bool:
        if not self.can_execute(ctl):
            return False
        log(f"[CMD] ReloadCatalog: {self.path}")
        try:
            interiors = load_interiors(self.path)
        except CatalogError as e:
            log(f"[CMD][ERR] ReloadCatalog failed: {e}")
            return False
        ctl.replace_interiors(interiors)
        return True


class CloseApp(Command):
    """Close the application."""

    def execute(self, ctl: "GalleryController") -> bool:
        log("[CMD] CloseApp")
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Touch Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class TouchStart(Command):
    """First sample of a touch or pointer drag; several points = multi-touch."""
    points: Tuple[TouchPoint, ...]

    def execute(self, ctl: "GalleryController") -> bool:
        return ctl.touch_start(self.points)


@dataclass
class TouchMove(Command):
    point: TouchPoint

    def execute(self, ctl: "GalleryController") -> bool:
        return ctl.touch_move(self.point)


@dataclass
class TouchEnd(Command):
    """Release; a recognised swipe advances the pane the touch started on."""
    point: TouchPoint
    target: MediaKind = MediaKind.IMAGE

    def execute(self, ctl: "GalleryController") -> bool:
        return ctl.touch_end(self.point, self.target)


# ═══════════════════════════════════════════════════════════════════════════
# Pointer routing
# ═══════════════════════════════════════════════════════════════════════════

def current_layout(state: "ViewerState") -> ModalLayout:
    modal = state.modal
    docs = len(modal.interior.document_files) if modal.interior else 0
    return modal_layout(state.window, len(modal.catalog.images), len(modal.catalog.videos), docs)


def swipe_target(state: "ViewerState") -> MediaKind:
    """Pane a drag on the media area navigates: images unless there are none."""
    return MediaKind.IMAGE if state.modal.catalog.images else MediaKind.VIDEO


def click_commands(state: "ViewerState", px: float, py: float) -> List[Command]:
    """Commands for a primary click at (px, py)."""
    if not state.modal.mounted:
        tile = grid_tile_at(state.window, len(state.interiors), state.page.scroll_y, px, py)
        return [OpenGallery(tile)] if tile is not None else []

    hit = hit_test(current_layout(state), px, py)
    nav = state.nav
    if hit.kind in (HitKind.CLOSE, HitKind.BACKDROP):
        return [CloseGallery()]
    if hit.kind is HitKind.PREV:
        return [AdvanceImage(Direction.PREV)]
    if hit.kind is HitKind.NEXT:
        return [AdvanceImage(Direction.NEXT)]
    if hit.kind is HitKind.THUMB:
        return [SelectImage(nav.thumbnail_offset + hit.index)]
    if hit.kind is HitKind.VIDEO_PILL:
        return [SelectVideo(hit.index)]
    if hit.kind is HitKind.VIDEO_CARD and state.active_video is not None:
        return [OpenExternal(state.active_video.url)]
    if hit.kind is HitKind.DOCUMENT and state.modal.interior is not None:
        docs = state.modal.interior.document_files
        if 0 <= hit.index < len(docs):
            return [OpenExternal(docs[hit.index].url)]
    if hit.kind is HitKind.MEDIA and not state.modal.catalog.images and state.active_video is not None:
        return [OpenExternal(state.active_video.url)]
    return []
