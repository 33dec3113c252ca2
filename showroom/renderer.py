"""Renderer - handles all drawing operations.

The Renderer only reads viewer state and draws it. Fades are the one piece
of state it owns: they follow ``modal.animated_in`` and ``nav.is_entering``
so the controller never has to know about alpha values.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .state import ViewerState
    from .media import MediaLoader

from .rl_compat import (
    rl,
    make_rect as RL_Rect, make_vec2 as RL_V2, make_color as RL_Color,
    draw_text as RL_DrawText, measure_text, fit_text, is_texture_valid,
)
from .animation import AnimationType, FadeController
from .layout import (
    ModalLayout, Rect,
    cover_source, fit_rect, grid_tile_rect,
)
from .commands import current_layout
from .types import LoadPriority, MediaKind, TextureInfo
from . import config as cfg
from .config import (
    COLOR_PAGE_BG, COLOR_PANEL_BG, COLOR_TEXT, COLOR_MUTED, COLOR_ACCENT, COLOR_PLACEHOLDER,
    FONT_SIZE_TITLE, FONT_SIZE_TEXT, FONT_SIZE_SMALL,
    CLOSE_BTN_RADIUS, NAV_BTN_RADIUS, BACKDROP_ALPHA_MAX,
)


WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


@dataclass
class Renderer:
    """
    Handles all drawing operations.

    Usage:
        renderer = Renderer(loader)
        renderer.draw_frame(state)
    """
    loader: "MediaLoader"
    fades: FadeController = field(default_factory=FadeController)

    def begin_frame(self) -> None:
        rl.BeginDrawing()
        rl.ClearBackground(RL_Color(COLOR_PAGE_BG))

    def end_frame(self) -> None:
        rl.EndDrawing()

    # ═══════════════════════════════════════════════════════════════════════
    # Textures
    # ═══════════════════════════════════════════════════════════════════════

    def draw_texture_in(self, ti: TextureInfo, src: Rect, dst: Rect, alpha: float = 1.0) -> None:
        if not ti or not is_texture_valid(ti.tex) or dst.w <= 0 or dst.h <= 0:
            return
        rl.DrawTexturePro(
            ti.tex,
            RL_Rect(src.x, src.y, src.w, src.h),
            RL_Rect(dst.x, dst.y, dst.w, dst.h),
            RL_V2(0, 0), 0.0, RL_Color(WHITE, alpha),
        )

    def draw_cover(self, url: Optional[str], box: Rect, priority: LoadPriority,
                   alpha: float = 1.0) -> None:
        """Image cropped to fill ``box``; a placeholder until it has loaded."""
        ti = self.loader.request(url, priority)
        if ti is None:
            if self.loader.is_failed(url):
                return
            rl.DrawRectangleRec(RL_Rect(box.x, box.y, box.w, box.h), RL_Color(COLOR_PLACEHOLDER, alpha))
            return
        self.draw_texture_in(ti, cover_source(ti.w, ti.h, box), box, alpha)

    def draw_contained(self, url: Optional[str], box: Rect, alpha: float = 1.0) -> None:
        """Image letterboxed inside ``box``."""
        ti = self.loader.request(url, LoadPriority.CURRENT)
        if ti is None:
            return
        self.draw_texture_in(ti, Rect(0, 0, ti.w, ti.h), fit_rect(ti.w, ti.h, box), alpha)

    def _draw_centered_text(self, text: str, box: Rect, size: int, rgb, alpha: float) -> None:
        text = fit_text(text, size, box.w)
        tw = measure_text(text, size)
        RL_DrawText(text, int(box.x + (box.w - tw) / 2), int(box.y + (box.h - size) / 2),
                    size, RL_Color(rgb, alpha))

    # ═══════════════════════════════════════════════════════════════════════
    # Showcase grid
    # ═══════════════════════════════════════════════════════════════════════

    def draw_grid(self, state: "ViewerState") -> None:
        window = state.window
        for i, interior in enumerate(state.interiors):
            r = grid_tile_rect(window, i, state.page.scroll_y)
            if r.bottom < 0 or r.y > window.screen_h:
                continue
            self.draw_cover(interior.tile_image, r, LoadPriority.GRID)
            band = Rect(r.x, r.bottom - 48, r.w, 48)
            rl.DrawRectangleRec(RL_Rect(band.x, band.y, band.w, band.h), RL_Color(BLACK, 0.45))
            RL_DrawText(fit_text(interior.title, FONT_SIZE_TEXT, r.w - 24),
                        int(r.x + 12), int(band.y + 8), FONT_SIZE_TEXT, RL_Color(WHITE))
            if interior.location:
                RL_DrawText(fit_text(interior.location, FONT_SIZE_SMALL, r.w - 24),
                            int(r.x + 12), int(band.y + 8 + FONT_SIZE_TEXT + 2),
                            FONT_SIZE_SMALL, RL_Color(WHITE, 0.8))

    # ═══════════════════════════════════════════════════════════════════════
    # Modal
    # ═══════════════════════════════════════════════════════════════════════

    def draw_modal(self, state: "ViewerState") -> None:
        modal = state.modal
        alpha = self.fades.drive(AnimationType.MODAL, modal.animated_in)
        if not modal.mounted or modal.interior is None:
            return

        sw, sh = state.window.size
        rl.DrawRectangle(0, 0, sw, sh, RL_Color(BLACK, alpha * BACKDROP_ALPHA_MAX))

        layout = current_layout(state)
        p = layout.panel
        rl.DrawRectangleRec(RL_Rect(p.x, p.y, p.w, p.h), RL_Color(COLOR_PANEL_BG, alpha))

        self.draw_media(state, layout, alpha)
        self.draw_nav_buttons(layout, alpha)
        self.draw_thumbnails(state, layout, alpha)
        self.draw_videos(state, layout, alpha)
        self.draw_info(state, layout, alpha)
        self.draw_close_button(layout, alpha)

    def draw_media(self, state: "ViewerState", layout: ModalLayout, alpha: float) -> None:
        catalog = state.modal.catalog
        box = layout.media
        if catalog.is_empty:
            self._draw_centered_text(cfg.EMPTY_MEDIA_TEXT, box, FONT_SIZE_TEXT, COLOR_MUTED, alpha)
            return

        item = state.pane_media
        if item is None:
            return
        if item.kind is MediaKind.VIDEO:
            # Video only: the media pane becomes the video card
            rl.DrawRectangleRec(RL_Rect(box.x, box.y, box.w, box.h), RL_Color(BLACK, alpha))
            self._draw_play_icon(box, alpha)
            label = Rect(box.x, box.bottom - 48, box.w, 40)
            self._draw_centered_text(item.url, label, FONT_SIZE_SMALL, WHITE, alpha)
            return

        # The displayed image fades out while the selection is pending
        media_alpha = self.fades.drive(AnimationType.MEDIA, state.nav.is_entering)
        self.draw_contained(item.url, box, alpha * media_alpha)

    def _draw_play_icon(self, box: Rect, alpha: float) -> None:
        cx, cy = box.center
        r = min(box.w, box.h, 120.0) * 0.3
        rl.DrawCircle(int(cx), int(cy), r, RL_Color(WHITE, alpha * 0.2))
        rl.DrawTriangle(
            RL_V2(cx - r * 0.35, cy - r * 0.5),
            RL_V2(cx - r * 0.35, cy + r * 0.5),
            RL_V2(cx + r * 0.55, cy),
            RL_Color(WHITE, alpha),
        )

    def draw_nav_buttons(self, layout: ModalLayout, alpha: float) -> None:
        for center, left in ((layout.prev_center, True), (layout.next_center, False)):
            if center is None:
                continue
            cx, cy = int(center[0]), int(center[1])
            rl.DrawCircle(cx, cy, NAV_BTN_RADIUS, RL_Color(BLACK, alpha * 0.4))
            rl.DrawCircleLines(cx, cy, NAV_BTN_RADIUS, RL_Color(WHITE, alpha))
            if left:
                self._draw_arrow_left(cx, cy, 18, RL_Color(WHITE, alpha))
            else:
                self._draw_arrow_right(cx, cy, 18, RL_Color(WHITE, alpha))

    def _draw_arrow_left(self, cx: int, cy: int, size: float, color) -> None:
        points = [
            RL_V2(cx + size * 0.4, cy - size * 0.6),
            RL_V2(cx - size * 0.4, cy),
            RL_V2(cx + size * 0.4, cy + size * 0.6),
        ]
        rl.DrawLineEx(points[0], points[1], 2.5, color)
        rl.DrawLineEx(points[1], points[2], 2.5, color)

    def _draw_arrow_right(self, cx: int, cy: int, size: float, color) -> None:
        points = [
            RL_V2(cx - size * 0.4, cy - size * 0.6),
            RL_V2(cx + size * 0.4, cy),
            RL_V2(cx - size * 0.4, cy + size * 0.6),
        ]
        rl.DrawLineEx(points[0], points[1], 2.5, color)
        rl.DrawLineEx(points[1], points[2], 2.5, color)

    def draw_thumbnails(self, state: "ViewerState", layout: ModalLayout, alpha: float) -> None:
        nav = state.nav
        images = state.modal.catalog.images
        for slot, index in enumerate(nav.visible_thumbnail_range()):
            if slot >= len(layout.thumbs) or index >= len(images):
                break
            r = layout.thumbs[slot]
            selected = index == nav.selected_image_index
            self.draw_cover(images[index].thumb_url, r, LoadPriority.THUMB,
                            alpha if selected else alpha * 0.6)
            if selected:
                rl.DrawRectangleLinesEx(RL_Rect(r.x - 2, r.y - 2, r.w + 4, r.h + 4),
                                        2.0, RL_Color(COLOR_ACCENT, alpha))

    def draw_videos(self, state: "ViewerState", layout: ModalLayout, alpha: float) -> None:
        if state.active_video is None:
            return
        card = layout.video_card
        if card is not None:
            rl.DrawRectangleRec(RL_Rect(card.x, card.y, card.w, card.h), RL_Color(BLACK, alpha))
            self._draw_centered_text(f"Play video {state.nav.active_video_index + 1}",
                                     card, FONT_SIZE_SMALL, WHITE, alpha)
        for i, r in enumerate(layout.video_pills):
            active = i == state.nav.active_video_index
            bg = COLOR_ACCENT if active else COLOR_PLACEHOLDER
            rl.DrawRectangleRec(RL_Rect(r.x, r.y, r.w, r.h), RL_Color(bg, alpha))
            self._draw_centered_text(f"Video {i + 1}", r, FONT_SIZE_SMALL,
                                     WHITE if active else COLOR_TEXT, alpha)

    def draw_info(self, state: "ViewerState", layout: ModalLayout, alpha: float) -> None:
        interior = state.modal.interior
        info = layout.info
        if interior is None or info is None or info.h <= 0:
            return

        x = int(info.x)
        y = info.y
        RL_DrawText(fit_text(interior.title, FONT_SIZE_TITLE, info.w), x, int(y),
                    FONT_SIZE_TITLE, RL_Color(COLOR_TEXT, alpha))
        y += FONT_SIZE_TITLE + 8
        if interior.subtitle:
            RL_DrawText(fit_text(interior.subtitle, FONT_SIZE_TEXT, info.w), x, int(y),
                        FONT_SIZE_TEXT, RL_Color(COLOR_MUTED, alpha))
            y += FONT_SIZE_TEXT + 12

        for label, value in (("Location", interior.location), ("Area", interior.area),
                             ("Style", interior.style)):
            if not value:
                continue
            RL_DrawText(fit_text(f"{label}: {value}", FONT_SIZE_SMALL, info.w), x, int(y),
                        FONT_SIZE_SMALL, RL_Color(COLOR_TEXT, alpha))
            y += FONT_SIZE_SMALL + 6

        docs_top = layout.documents[0].y if layout.documents else info.bottom
        if interior.description:
            y += 6
            for line in self._wrap(interior.description, FONT_SIZE_SMALL, info.w):
                if y + FONT_SIZE_SMALL > docs_top:
                    break
                RL_DrawText(line, x, int(y), FONT_SIZE_SMALL, RL_Color(COLOR_MUTED, alpha))
                y += FONT_SIZE_SMALL + 4

        for doc, r in zip(interior.document_files, layout.documents):
            RL_DrawText(fit_text(doc.display_name, FONT_SIZE_SMALL, r.w), int(r.x),
                        int(r.y + (r.h - FONT_SIZE_SMALL) / 2), FONT_SIZE_SMALL,
                        RL_Color(COLOR_ACCENT, alpha))

    @staticmethod
    def _wrap(text: str, size: int, max_w: float):
        line = ""
        for word in text.split():
            candidate = f"{line} {word}" if line else word
            if line and measure_text(candidate, size) > max_w:
                yield line
                line = word
            else:
                line = candidate
        if line:
            yield line

    def draw_close_button(self, layout: ModalLayout, alpha: float) -> None:
        cx, cy = int(layout.close_center[0]), int(layout.close_center[1])
        rl.DrawCircle(cx, cy, CLOSE_BTN_RADIUS, RL_Color(BLACK, alpha * 0.6))
        cross = CLOSE_BTN_RADIUS * 0.5
        color = RL_Color(WHITE, alpha)
        rl.DrawLineEx(RL_V2(cx - cross, cy - cross), RL_V2(cx + cross, cy + cross), 2.0, color)
        rl.DrawLineEx(RL_V2(cx + cross, cy - cross), RL_V2(cx - cross, cy + cross), 2.0, color)

    # ═══════════════════════════════════════════════════════════════════════
    # Convenience methods
    # ═══════════════════════════════════════════════════════════════════════

    def draw_all(self, state: "ViewerState") -> None:
        """Draw everything in correct order."""
        self.draw_grid(state)
        self.draw_modal(state)

    def draw_frame(self, state: "ViewerState") -> None:
        """Complete frame: begin, draw all, end."""
        self.begin_frame()
        self.draw_all(state)
        self.end_frame()
