"""Small numeric helpers shared by state, layout and animation code."""

from __future__ import annotations


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def lerp(a: float, b: float, t: float) -> float:
    """Blend a -> b; ``t`` outside [0, 1] is clamped."""
    return a + (b - a) * clamp(t, 0.0, 1.0)


def ease_out_quad(t: float) -> float:
    """Fast start, soft landing. Used for the modal backdrop and panel."""
    t = clamp(t, 0.0, 1.0)
    inv = 1.0 - t
    return 1.0 - inv * inv


def ease_in_out_cubic(t: float) -> float:
    """Symmetric S-curve. Used for the image cross-fade."""
    t = clamp(t, 0.0, 1.0)
    if t < 0.5:
        return 4.0 * t ** 3
    return 1.0 - (2.0 - 2.0 * t) ** 3 / 2.0


def wrap_index(index: int, length: int) -> int:
    """Index modulo ``length``, so -1 is the last item. 0 for an empty list."""
    if length <= 0:
        return 0
    return index % length


def point_in_circle(px: float, py: float, cx: float, cy: float, r: float) -> bool:
    return (px - cx) ** 2 + (py - cy) ** 2 <= r * r
