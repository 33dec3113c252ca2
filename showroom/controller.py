"""Gallery controller - modal lifecycle, cross-fade and navigation.

Lifecycle:

    CLOSED --open_gallery()--> OPENING --next frame--> OPEN
    OPEN/OPENING --close_gallery()--> CLOSING --CLOSE_DELAY_MS--> CLOSED

Every transition that arms a timer cancels the previous instance first, and
opening cancels all timers of the previous session, so a stale timer can
never mutate indices of a gallery that is no longer shown.
"""

from __future__ import annotations
from typing import Callable, Optional, Sequence

from . import config as cfg
from .catalog import build_catalog
from .gestures import GestureInterpreter, SwipeThresholds, DEFAULT_THRESHOLDS
from .scheduler import Scheduler, TimerId
from .state import ViewerState, ModalPhase
from .types import Direction, Interior, MediaKind, TouchPoint
from .logging import log, now


class GalleryController:
    """Owns the viewer state of one embedding page and all its timers."""

    def __init__(self, state: Optional[ViewerState] = None,
                 scheduler: Optional[Scheduler] = None,
                 clock: Callable[[], float] = now,
                 thresholds: SwipeThresholds = DEFAULT_THRESHOLDS,
                 crossfade_ms: float = cfg.CROSSFADE_MS,
                 close_delay_ms: float = cfg.CLOSE_DELAY_MS):
        self.state = state if state is not None else ViewerState()
        self.clock = clock
        self.scheduler = scheduler if scheduler is not None else Scheduler(clock)
        self.gestures = GestureInterpreter(self.state.touch, thresholds)
        self.crossfade_ms = crossfade_ms
        self.close_delay_ms = close_delay_ms

    @property
    def phase(self) -> ModalPhase:
        return self.state.modal.phase

    @property
    def nav(self):
        return self.state.nav

    # ═══════════════════════════════════════════════════════════════════════
    # Modal lifecycle
    # ═══════════════════════════════════════════════════════════════════════

    def open_gallery(self, index: int) -> bool:
        """Show the interior at ``index`` of the page's list, starting fresh."""
        if not (0 <= index < len(self.state.interiors)):
            log(f"[MODAL] open_gallery ignored: index {index} out of range")
            return False

        # Timers of the previous session must not touch the new one.
        self.scheduler.cancel(TimerId.CROSSFADE)
        self.scheduler.cancel(TimerId.ENTER)
        self.scheduler.cancel(TimerId.CLOSE)
        self.gestures.cancel()

        interior = self.state.interiors[index]
        catalog = build_catalog(interior)
        modal = self.state.modal
        modal.interior_index = index
        modal.interior = interior
        modal.catalog = catalog
        self.state.nav.reset(len(catalog.images), len(catalog.videos))

        if self.state.page.lock_scroll():
            log(f"[MODAL] Scroll locked (saved overflow={self.state.page.saved_overflow!r})")

        prev_phase = modal.phase
        modal.phase = ModalPhase.OPENING
        modal.animated_in = False
        modal.phase_t0 = self.clock()
        self.scheduler.start(TimerId.ENTER, 0, self._on_enter_frame)
        log(f"[MODAL] {prev_phase.name} -> OPENING interior id={interior.id} "
            f"images={len(catalog.images)} videos={len(catalog.videos)}")
        return True

    def _on_enter_frame(self) -> None:
        modal = self.state.modal
        if modal.phase is not ModalPhase.OPENING:
            return
        modal.phase = ModalPhase.OPEN
        modal.animated_in = True
        modal.phase_t0 = self.clock()
        log("[MODAL] OPENING -> OPEN")

    def close_gallery(self) -> bool:
        """Start the exit transition; state is cleared when it finishes."""
        modal = self.state.modal
        if modal.phase not in (ModalPhase.OPEN, ModalPhase.OPENING):
            return False

        self.scheduler.cancel(TimerId.CROSSFADE)
        self.scheduler.cancel(TimerId.ENTER)
        self.gestures.cancel()

        prev_phase = modal.phase
        modal.phase = ModalPhase.CLOSING
        modal.animated_in = False
        modal.phase_t0 = self.clock()
        log(f"[MODAL] {prev_phase.name} -> CLOSING")
        if self.close_delay_ms <= 0:
            self._on_close_finished()
        else:
            self.scheduler.start(TimerId.CLOSE, self.close_delay_ms, self._on_close_finished)
        return True

    def _on_close_finished(self) -> None:
        modal = self.state.modal
        if modal.phase is not ModalPhase.CLOSING:
            return
        self.state.nav.reset()
        modal.clear()
        if self.state.page.unlock_scroll():
            log(f"[MODAL] Scroll restored (overflow={self.state.page.overflow!r})")
        log("[MODAL] CLOSING -> CLOSED")

    # ═══════════════════════════════════════════════════════════════════════
    # Images (with cross-fade)
    # ═══════════════════════════════════════════════════════════════════════

    def select_image(self, index: int) -> bool:
        """Select an image; the displayed one follows after the fade-out."""
        nav = self.state.nav
        if not self.state.modal.interactive:
            return False
        if not nav.select_image(index):
            return False

        nav.begin_crossfade()
        # Last write wins: re-arming replaces a fade still in flight.
        self.scheduler.start(TimerId.CROSSFADE, self.crossfade_ms,
                             lambda: self._on_crossfade(index))
        log(f"[NAV] Image -> {index} (offset={nav.thumbnail_offset})")
        return True

    def _on_crossfade(self, index: int) -> None:
        nav = self.state.nav
        if index != nav.selected_image_index:
            return
        nav.finish_crossfade(index)

    def advance_image(self, direction: Direction) -> bool:
        target = self.state.nav.next_image_index(direction)
        if target is None:
            return False
        return self.select_image(target)

    # ═══════════════════════════════════════════════════════════════════════
    # Videos
    # ═══════════════════════════════════════════════════════════════════════

    def select_video(self, index: int) -> bool:
        if not self.state.modal.interactive:
            return False
        changed = self.state.nav.select_video(index)
        if changed:
            log(f"[NAV] Video -> {index}")
        return changed

    def advance_video(self, direction: Direction) -> bool:
        target = self.state.nav.next_video_index(direction)
        if target is None:
            return False
        return self.select_video(target)

    def refresh_catalog(self) -> None:
        """Rebuild the catalog of the shown interior after its record changed."""
        modal = self.state.modal
        if modal.interior_index is None or not (0 <= modal.interior_index < len(self.state.interiors)):
            return
        modal.interior = self.state.interiors[modal.interior_index]
        modal.catalog = build_catalog(modal.interior)

        nav = self.state.nav
        selected = nav.selected_image_index
        nav.set_counts(len(modal.catalog.images), len(modal.catalog.videos))
        # A fade aimed at an index that no longer exists would never land
        if nav.selected_image_index != selected or (
                nav.displayed_image_index != nav.selected_image_index
                and not self.scheduler.is_pending(TimerId.CROSSFADE)):
            self.scheduler.cancel(TimerId.CROSSFADE)
            nav.finish_crossfade(nav.selected_image_index)
        log(f"[MODAL] Catalog refreshed images={nav.image_count} videos={nav.video_count} "
            f"selected={nav.selected_image_index}")

    def replace_interiors(self, interiors: Sequence[Interior]) -> None:
        """Swap the page's interior list; the open gallery follows its record by id."""
        self.state.interiors = list(interiors)
        modal = self.state.modal
        if modal.interior is None:
            return
        for i, interior in enumerate(self.state.interiors):
            if interior.id == modal.interior.id:
                modal.interior_index = i
                self.refresh_catalog()
                return
        log(f"[MODAL] Interior id={modal.interior.id} no longer listed")
        modal.interior_index = None
        self.close_gallery()

    # ═══════════════════════════════════════════════════════════════════════
    # Keyboard and touch
    # ═══════════════════════════════════════════════════════════════════════

    def handle_key(self, key: int) -> bool:
        """Keyboard shortcuts; only bound while the modal is fully open."""
        if not self.state.modal.accepts_input:
            return False
        if key == cfg.KEY_CLOSE:
            return self.close_gallery()
        if key == cfg.KEY_NEXT_IMAGE and self.state.nav.image_count > 1:
            return self.advance_image(Direction.NEXT)
        if key == cfg.KEY_PREV_IMAGE and self.state.nav.image_count > 1:
            return self.advance_image(Direction.PREV)
        return False

    def touch_start(self, points: Sequence[TouchPoint]) -> bool:
        if not self.state.modal.accepts_input:
            return False
        return self.gestures.touch_start(points)

    def touch_move(self, point: TouchPoint) -> bool:
        """Returns True when the page must not scroll for this touch."""
        return self.gestures.touch_move(point)

    def touch_end(self, point: TouchPoint, target: MediaKind = MediaKind.IMAGE) -> bool:
        direction = self.gestures.touch_end(point)
        if direction is None or not self.state.modal.accepts_input:
            return False
        if target is MediaKind.VIDEO:
            return self.advance_video(direction)
        return self.advance_image(direction)

    # ═══════════════════════════════════════════════════════════════════════
    # Frame
    # ═══════════════════════════════════════════════════════════════════════

    def update(self) -> None:
        """Fire due timers; called once per frame."""
        self.scheduler.update()
