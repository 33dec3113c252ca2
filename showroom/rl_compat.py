"""Raylib compatibility layer - abstracts differences between raylibpy and python-raylib."""

from __future__ import annotations
from typing import Any, List, Tuple

try:
    import raylibpy as rl
    RL_VERSION = "raylibpy"
except ImportError:
    import raylib as rl
    RL_VERSION = "python-raylib"


def make_rect(x: float, y: float, w: float, h: float) -> Any:
    """Create a raylib Rectangle compatible with the current binding."""
    if hasattr(rl, 'Rectangle'):
        try:
            return rl.Rectangle(x, y, w, h)
        except TypeError:
            pass
    r = rl.ffi.new("Rectangle *")
    r[0].x = float(x)
    r[0].y = float(y)
    r[0].width = float(w)
    r[0].height = float(h)
    return r[0]


def make_vec2(x: float, y: float) -> Any:
    """Create a raylib Vector2 compatible with the current binding."""
    if hasattr(rl, 'Vector2'):
        try:
            return rl.Vector2(x, y)
        except TypeError:
            pass
    v = rl.ffi.new("Vector2 *")
    v[0].x = float(x)
    v[0].y = float(y)
    return v[0]


def make_color(rgb: Tuple[int, int, int], alpha: float = 1.0) -> Any:
    """Create a raylib Color from an RGB tuple and a 0..1 alpha."""
    a = int(max(0.0, min(1.0, alpha)) * 255)
    ctor = getattr(rl, "Color", None)
    if ctor:
        try:
            return ctor(int(rgb[0]), int(rgb[1]), int(rgb[2]), a)
        except TypeError:
            pass
    c = rl.ffi.new("Color *")
    c[0].r, c[0].g, c[0].b, c[0].a = int(rgb[0]), int(rgb[1]), int(rgb[2]), a
    return c[0]


def _text_arg(text: str) -> Any:
    return text if RL_VERSION == "raylibpy" else text.encode('utf-8')


def draw_text(text: str, x: int, y: int, size: int, color: Any) -> None:
    rl.DrawText(_text_arg(text), int(x), int(y), int(size), color)


def measure_text(text: str, size: int) -> int:
    return rl.MeasureText(_text_arg(text), int(size))


def fit_text(text: str, size: int, max_w: float) -> str:
    """Trim text with an ellipsis until it fits ``max_w`` pixels."""
    if measure_text(text, size) <= max_w:
        return text
    while text and measure_text(text + "...", size) > max_w:
        text = text[:-1]
    return text + "..."


def load_texture(path: str) -> Any:
    return rl.LoadTexture(_text_arg(path))


def unload_texture(tex: Any) -> None:
    if get_texture_id(tex) > 0:
        rl.UnloadTexture(tex)


def get_texture_id(tex: Any) -> int:
    return getattr(tex, 'id', 0) or 0


def is_texture_valid(tex: Any) -> bool:
    return get_texture_id(tex) > 0


def touch_points() -> List[Tuple[float, float]]:
    """Current touch positions (empty when no finger is down)."""
    points = []
    for i in range(rl.GetTouchPointCount()):
        pos = rl.GetTouchPosition(i)
        points.append((pos.x, pos.y))
    return points


__all__ = [
    'rl',
    'RL_VERSION',
    'make_rect',
    'make_vec2',
    'make_color',
    'draw_text',
    'measure_text',
    'fit_text',
    'load_texture',
    'unload_texture',
    'get_texture_id',
    'is_texture_valid',
    'touch_points',
]
