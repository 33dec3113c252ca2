"""Animation system - eased fades that follow the modal's visual flags.

The controller only flips booleans (``animated_in``, ``is_entering``); the
fades here turn those flips into alpha values the renderer can draw, so a
flip mid-fade continues smoothly from wherever the previous fade was.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict

from . import config as cfg
from .math_utils import lerp, ease_out_quad, ease_in_out_cubic
from .logging import now


class AnimationType(Enum):
    MODAL = auto()   # Backdrop and panel, follows modal.animated_in
    MEDIA = auto()   # Main image, follows nav.is_entering


_EASING: Dict[AnimationType, Callable[[float], float]] = {
    AnimationType.MODAL: ease_out_quad,
    AnimationType.MEDIA: ease_in_out_cubic,
}

_DURATION_MS: Dict[AnimationType, float] = {
    AnimationType.MODAL: cfg.MODAL_FADE_MS,
    AnimationType.MEDIA: cfg.MEDIA_FADE_MS,
}


@dataclass
class Fade:
    """One eased transition between two alpha values."""
    anim_type: AnimationType
    start_time: float
    duration_ms: float
    from_value: float
    to_value: float

    def progress(self, t: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return min(1.0, max(0.0, (t - self.start_time) * 1000.0 / self.duration_ms))

    def value(self, t: float) -> float:
        eased = _EASING[self.anim_type](self.progress(t))
        return lerp(self.from_value, self.to_value, eased)

    def is_complete(self, t: float) -> bool:
        return self.progress(t) >= 1.0


@dataclass
class FadeController:
    """Current fade per animation type."""
    clock: Callable[[], float] = now
    fades: Dict[AnimationType, Fade] = field(default_factory=dict)

    def value(self, anim_type: AnimationType) -> float:
        fade = self.fades.get(anim_type)
        if fade is None:
            return 0.0
        return fade.value(self.clock())

    def drive(self, anim_type: AnimationType, visible: bool) -> float:
        """Aim the fade at 1.0 (visible) or 0.0; restart only when the aim changes."""
        target = 1.0 if visible else 0.0
        fade = self.fades.get(anim_type)
        t = self.clock()
        if fade is None or fade.to_value != target:
            current = fade.value(t) if fade is not None else 0.0
            self.fades[anim_type] = Fade(anim_type, t, _DURATION_MS[anim_type], current, target)
        return self.fades[anim_type].value(t)

    def snap(self, anim_type: AnimationType, value: float) -> None:
        """Jump to a value without animating."""
        self.fades[anim_type] = Fade(anim_type, self.clock(), 0.0, value, value)

    def is_animating(self, anim_type: AnimationType) -> bool:
        fade = self.fades.get(anim_type)
        return fade is not None and not fade.is_complete(self.clock())
