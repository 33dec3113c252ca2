"""Application configuration constants."""

from __future__ import annotations

# Performance
TARGET_FPS = 60
MEDIA_WORKERS = 4
TEXTURE_UPLOADS_PER_FRAME = 2

# Window
WINDOW_TITLE = "Showroom"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
MOBILE_BREAKPOINT = 768     # Narrower windows use the horizontal thumbnail strip

# Modal timings (milliseconds)
CROSSFADE_MS = 180
CLOSE_DELAY_MS = 360
MODAL_FADE_MS = 300
MEDIA_FADE_MS = 180

# Thumbnail strip
VISIBLE_THUMBNAILS = 5
THUMB_SIZE = 84
THUMB_SPACING = 10

# Swipe detection
SWIPE_LOCK_PX = 8               # Movement before an intent is decided
SWIPE_HORIZONTAL_RATIO = 3.0    # dx > ratio * dy confirms horizontal during move
SWIPE_VERTICAL_RATIO = 2.0      # dy > ratio * dx confirms vertical during move
SWIPE_END_RATIO = 2.5           # dx > ratio * dy at release counts as horizontal
SWIPE_FAST_MS = 300
SWIPE_FAST_DISTANCE_PX = 20
SWIPE_SLOW_DISTANCE_PX = 35
SWIPE_MIN_VELOCITY = 0.2        # px/ms

# Showcase grid
GRID_COLUMNS = 3
GRID_COLUMNS_MOBILE = 1
GRID_MARGIN = 24
GRID_SPACING = 20
GRID_TILE_HEIGHT = 320
GRID_SCROLL_STEP = 60

# Modal panel
PANEL_MARGIN = 40
PANEL_MARGIN_MOBILE = 0
PANEL_PADDING = 20
INFO_PANEL_WIDTH = 320
VIDEO_PILL_HEIGHT = 32
VIDEO_PILL_WIDTH = 96
DOC_ROW_HEIGHT = 28
CLOSE_BTN_RADIUS = 22
CLOSE_BTN_MARGIN = 16
NAV_BTN_RADIUS = 28
BACKDROP_ALPHA_MAX = 0.75

# Font settings
FONT_SIZE_TITLE = 28
FONT_SIZE_TEXT = 18
FONT_SIZE_SMALL = 14

# Colours (RGB)
COLOR_PAGE_BG = (245, 243, 240)
COLOR_PANEL_BG = (255, 255, 255)
COLOR_TEXT = (20, 20, 20)
COLOR_MUTED = (120, 120, 120)
COLOR_ACCENT = (190, 140, 80)
COLOR_PLACEHOLDER = (225, 222, 218)

# Hotkeys (raylib key codes)
# See: https://github.com/raysan5/raylib/blob/master/src/raylib.h
KEY_CLOSE = 256             # KEY_ESCAPE
KEY_NEXT_IMAGE = 262        # KEY_RIGHT
KEY_PREV_IMAGE = 263        # KEY_LEFT
KEY_RELOAD = 294            # KEY_F5

# Media cache
MEDIA_CACHE_DIR = ".showroom_cache"
DOWNLOAD_TIMEOUT_S = 20
MAX_TEXTURE_DIMENSION = 4096

# Previews
PREVIEW_SIZE = 600
PREVIEW_QUALITY = 85
PREVIEW_DIR = "previews"

EMPTY_MEDIA_TEXT = "Media temporarily unavailable"
