"""Layout - screen geometry shared by the renderer and the input handler.

Pure functions of window size and list lengths; nothing here touches raylib,
so hit testing is exercised without a window.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from . import config as cfg
from .math_utils import point_in_circle
from .state.window import WindowState


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2.0, self.y + self.h / 2.0)

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.right and self.y <= py < self.bottom

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.w, self.h)


def fit_rect(src_w: float, src_h: float, box: Rect) -> Rect:
    """Largest rect with the source aspect ratio centred inside ``box``."""
    if src_w <= 0 or src_h <= 0 or box.w <= 0 or box.h <= 0:
        return Rect(box.x, box.y, 0.0, 0.0)
    scale = min(box.w / src_w, box.h / src_h)
    w, h = src_w * scale, src_h * scale
    return Rect(box.x + (box.w - w) / 2.0, box.y + (box.h - h) / 2.0, w, h)


def cover_source(src_w: float, src_h: float, box: Rect) -> Rect:
    """Centred region of the source that fills ``box`` without distortion."""
    if src_w <= 0 or src_h <= 0 or box.w <= 0 or box.h <= 0:
        return Rect(0.0, 0.0, src_w, src_h)
    target = box.w / box.h
    if src_w / src_h > target:
        w = src_h * target
        return Rect((src_w - w) / 2.0, 0.0, w, src_h)
    h = src_w / target
    return Rect(0.0, (src_h - h) / 2.0, src_w, h)


# ═══════════════════════════════════════════════════════════════════════════
# Showcase grid
# ═══════════════════════════════════════════════════════════════════════════

def grid_columns(window: WindowState) -> int:
    return cfg.GRID_COLUMNS_MOBILE if window.is_mobile else cfg.GRID_COLUMNS


def grid_tile_rect(window: WindowState, index: int, scroll_y: float = 0.0) -> Rect:
    cols = grid_columns(window)
    m, s = cfg.GRID_MARGIN, cfg.GRID_SPACING
    tile_w = (window.screen_w - 2 * m - (cols - 1) * s) / cols
    row, col = divmod(index, cols)
    x = m + col * (tile_w + s)
    y = m + row * (cfg.GRID_TILE_HEIGHT + s) - scroll_y
    return Rect(x, y, tile_w, cfg.GRID_TILE_HEIGHT)


def grid_content_height(window: WindowState, count: int) -> float:
    if count <= 0:
        return 0.0
    rows = (count + grid_columns(window) - 1) // grid_columns(window)
    return 2 * cfg.GRID_MARGIN + rows * cfg.GRID_TILE_HEIGHT + (rows - 1) * cfg.GRID_SPACING


def grid_tile_at(window: WindowState, count: int, scroll_y: float,
                 px: float, py: float) -> Optional[int]:
    for i in range(count):
        if grid_tile_rect(window, i, scroll_y).contains(px, py):
            return i
    return None


# ═══════════════════════════════════════════════════════════════════════════
# Modal
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class ModalLayout:
    panel: Rect
    close_center: Tuple[float, float]
    media: Rect
    prev_center: Optional[Tuple[float, float]] = None
    next_center: Optional[Tuple[float, float]] = None
    thumbs: List[Rect] = field(default_factory=list)      # visible slots, left/top first
    thumbs_vertical: bool = True
    video_card: Optional[Rect] = None
    video_pills: List[Rect] = field(default_factory=list)
    info: Optional[Rect] = None
    documents: List[Rect] = field(default_factory=list)


def _thumb_slots(origin_x: float, origin_y: float, count: int, vertical: bool) -> List[Rect]:
    step = cfg.THUMB_SIZE + cfg.THUMB_SPACING
    slots = []
    for i in range(count):
        if vertical:
            slots.append(Rect(origin_x, origin_y + i * step, cfg.THUMB_SIZE, cfg.THUMB_SIZE))
        else:
            slots.append(Rect(origin_x + i * step, origin_y, cfg.THUMB_SIZE, cfg.THUMB_SIZE))
    return slots


def _video_row(x: float, y: float, video_count: int,
               with_card: bool = True) -> Tuple[Optional[Rect], List[Rect]]:
    card = Rect(x, y, cfg.VIDEO_PILL_WIDTH * 2, cfg.VIDEO_PILL_HEIGHT) if with_card else None
    pills = []
    if video_count > 1:
        px = card.right + cfg.THUMB_SPACING if card is not None else x
        for i in range(video_count):
            pills.append(Rect(px + i * (cfg.VIDEO_PILL_WIDTH + cfg.THUMB_SPACING), y,
                              cfg.VIDEO_PILL_WIDTH, cfg.VIDEO_PILL_HEIGHT))
    return card, pills


def _document_rows(info: Rect, doc_count: int) -> List[Rect]:
    rows = []
    for i in range(doc_count):
        y = info.bottom - (doc_count - i) * cfg.DOC_ROW_HEIGHT
        rows.append(Rect(info.x, y, info.w, cfg.DOC_ROW_HEIGHT))
    return rows


def modal_layout(window: WindowState, image_count: int, video_count: int,
                 doc_count: int = 0, visible_thumbs: int = cfg.VISIBLE_THUMBNAILS) -> ModalLayout:
    """Geometry of the open modal for the current window and catalog sizes."""
    sw, sh = window.screen_w, window.screen_h
    pad = cfg.PANEL_PADDING
    slots = min(image_count, visible_thumbs) if image_count > 1 else 0
    # With no images the media pane is already the video card
    has_videos = video_count > 1 or (video_count > 0 and image_count > 0)
    video_row_h = (cfg.VIDEO_PILL_HEIGHT + pad) if has_videos else 0

    if window.is_mobile:
        m = cfg.PANEL_MARGIN_MOBILE
        panel = Rect(m, m, sw - 2 * m, sh - 2 * m)
        media = Rect(panel.x + pad, panel.y + pad + 2 * cfg.CLOSE_BTN_RADIUS,
                     panel.w - 2 * pad, panel.h * 0.45)
        cursor_y = media.bottom + pad
        thumbs = _thumb_slots(media.x, cursor_y, slots, vertical=False)
        if thumbs:
            cursor_y += cfg.THUMB_SIZE + pad
        card, pills = (None, [])
        if has_videos:
            card, pills = _video_row(media.x, cursor_y, video_count, image_count > 0)
            cursor_y += video_row_h
        info = Rect(media.x, cursor_y, media.w, max(0.0, panel.bottom - pad - cursor_y))
        vertical = False
    else:
        m = cfg.PANEL_MARGIN
        panel = Rect(m, m, sw - 2 * m, sh - 2 * m)
        left = panel.x + pad
        thumbs = _thumb_slots(left, panel.y + pad, slots, vertical=True)
        if thumbs:
            left += cfg.THUMB_SIZE + pad
        info_x = panel.right - pad - cfg.INFO_PANEL_WIDTH
        top = panel.y + pad
        info = Rect(info_x, top + 2 * cfg.CLOSE_BTN_RADIUS + cfg.CLOSE_BTN_MARGIN,
                    cfg.INFO_PANEL_WIDTH,
                    panel.bottom - pad - (top + 2 * cfg.CLOSE_BTN_RADIUS + cfg.CLOSE_BTN_MARGIN))
        media = Rect(left, top, max(0.0, info_x - pad - left),
                     max(0.0, panel.bottom - pad - top - video_row_h))
        card, pills = (None, [])
        if has_videos:
            card, pills = _video_row(media.x, media.bottom + pad, video_count, image_count > 0)
        vertical = True

    close_d = cfg.CLOSE_BTN_MARGIN + cfg.CLOSE_BTN_RADIUS
    layout = ModalLayout(
        panel=panel,
        close_center=(panel.right - close_d, panel.y + close_d),
        media=media,
        thumbs=thumbs,
        thumbs_vertical=vertical,
        video_card=card,
        video_pills=pills,
        info=info,
        documents=_document_rows(info, doc_count) if info is not None else [],
    )
    if image_count > 1:
        cy = media.y + media.h / 2.0
        inset = cfg.NAV_BTN_RADIUS + 12
        layout.prev_center = (media.x + inset, cy)
        layout.next_center = (media.right - inset, cy)
    return layout


# ═══════════════════════════════════════════════════════════════════════════
# Hit testing
# ═══════════════════════════════════════════════════════════════════════════

class HitKind(Enum):
    NONE = auto()
    BACKDROP = auto()
    PANEL = auto()
    CLOSE = auto()
    PREV = auto()
    NEXT = auto()
    THUMB = auto()
    VIDEO_CARD = auto()
    VIDEO_PILL = auto()
    DOCUMENT = auto()
    MEDIA = auto()


@dataclass(frozen=True)
class Hit:
    kind: HitKind
    index: int = -1


def hit_test(layout: ModalLayout, px: float, py: float) -> Hit:
    """What a click at (px, py) lands on; THUMB indices are slot positions."""
    cx, cy = layout.close_center
    if point_in_circle(px, py, cx, cy, cfg.CLOSE_BTN_RADIUS):
        return Hit(HitKind.CLOSE)
    if not layout.panel.contains(px, py):
        return Hit(HitKind.BACKDROP)
    for center, kind in ((layout.prev_center, HitKind.PREV), (layout.next_center, HitKind.NEXT)):
        if center and point_in_circle(px, py, center[0], center[1], cfg.NAV_BTN_RADIUS):
            return Hit(kind)
    for i, r in enumerate(layout.thumbs):
        if r.contains(px, py):
            return Hit(HitKind.THUMB, i)
    if layout.video_card and layout.video_card.contains(px, py):
        return Hit(HitKind.VIDEO_CARD)
    for i, r in enumerate(layout.video_pills):
        if r.contains(px, py):
            return Hit(HitKind.VIDEO_PILL, i)
    for i, r in enumerate(layout.documents):
        if r.contains(px, py):
            return Hit(HitKind.DOCUMENT, i)
    if layout.media.contains(px, py):
        return Hit(HitKind.MEDIA)
    return Hit(HitKind.PANEL)
