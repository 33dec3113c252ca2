"""Input Handler - maps raylib input events to commands.

Polls keyboard, mouse and touch once per frame and returns the commands to
execute. A press on the media pane doubles as the start of a swipe, so mouse
drags and single-finger touches share one gesture path.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .state import ViewerState

from .rl_compat import rl, touch_points
from .commands import (
    Command,
    KeyPress, CloseApp, ReloadCatalog, ScrollPage,
    TouchStart, TouchMove, TouchEnd,
    click_commands, current_layout, swipe_target,
)
from .layout import HitKind, hit_test
from .types import MediaKind, TouchPoint
from .config import (
    KEY_CLOSE, KEY_NEXT_IMAGE, KEY_PREV_IMAGE, KEY_RELOAD,
    GRID_SCROLL_STEP, SWIPE_LOCK_PX,
)
from .logging import now_ms


@dataclass
class MouseState:
    """Current mouse state snapshot."""
    x: float = 0.0
    y: float = 0.0
    left_pressed: bool = False
    left_released: bool = False
    left_down: bool = False
    wheel: float = 0.0


@dataclass
class InputHandler:
    """Handles input polling and command generation."""

    key_close: int = KEY_CLOSE
    key_next: int = KEY_NEXT_IMAGE
    key_prev: int = KEY_PREV_IMAGE
    key_reload: int = KEY_RELOAD

    # Drag in progress on the media pane
    _drag_start: Optional[TouchPoint] = None
    _drag_last: Optional[TouchPoint] = None
    _drag_target: MediaKind = MediaKind.IMAGE
    _multi_touch: bool = False
    _tap_commands: List[Command] = field(default_factory=list)

    def poll_mouse(self) -> MouseState:
        pos = rl.GetMousePosition()
        return MouseState(
            x=pos.x,
            y=pos.y,
            left_pressed=rl.IsMouseButtonPressed(rl.MOUSE_BUTTON_LEFT),
            left_released=rl.IsMouseButtonReleased(rl.MOUSE_BUTTON_LEFT),
            left_down=rl.IsMouseButtonDown(rl.MOUSE_BUTTON_LEFT),
            wheel=rl.GetMouseWheelMove(),
        )

    @property
    def dragging(self) -> bool:
        return self._drag_start is not None

    def _reset_drag(self) -> None:
        self._drag_start = None
        self._drag_last = None
        self._multi_touch = False
        self._tap_commands = []

    def _poll_keys(self, state: "ViewerState") -> List[Command]:
        commands: List[Command] = []
        if rl.IsKeyPressed(self.key_reload):
            commands.append(ReloadCatalog())
        if not state.modal.mounted:
            # Escape on the bare page leaves the app
            if rl.IsKeyPressed(self.key_close):
                commands.append(CloseApp())
            return commands
        for key in (self.key_close, self.key_next, self.key_prev):
            if rl.IsKeyPressed(key):
                commands.append(KeyPress(key))
        return commands

    def _begin_drag(self, state: "ViewerState", mouse: MouseState,
                    pressed: List[Command]) -> List[Command]:
        """Start a swipe if the press landed on the media pane or video card."""
        hit = hit_test(current_layout(state), mouse.x, mouse.y)
        if hit.kind is HitKind.MEDIA:
            target = swipe_target(state)
        elif hit.kind is HitKind.VIDEO_CARD:
            target = MediaKind.VIDEO
        else:
            return pressed

        point = TouchPoint(mouse.x, mouse.y, now_ms())
        self._drag_start = point
        self._drag_last = point
        self._drag_target = target
        # Opening a link waits for release so a swipe does not also trigger it
        self._tap_commands = pressed
        return [TouchStart((point,))]

    def _poll_drag(self, mouse: MouseState) -> List[Command]:
        commands: List[Command] = []
        touches = touch_points()
        if len(touches) > 1 and not self._multi_touch:
            # A second finger cancels the swipe
            self._multi_touch = True
            t = now_ms()
            commands.append(TouchStart(tuple(TouchPoint(x, y, t) for x, y in touches)))

        point = TouchPoint(mouse.x, mouse.y, now_ms())
        if mouse.left_released or not mouse.left_down:
            commands.append(TouchEnd(point, self._drag_target))
            start = self._drag_start
            if (not self._multi_touch and start is not None and
                    abs(point.x - start.x) < SWIPE_LOCK_PX and abs(point.y - start.y) < SWIPE_LOCK_PX):
                commands.extend(self._tap_commands)
            self._reset_drag()
            return commands

        last = self._drag_last
        if last is None or (point.x, point.y) != (last.x, last.y):
            commands.append(TouchMove(point))
            self._drag_last = point
        return commands

    def poll(self, state: "ViewerState") -> List[Command]:
        """Poll all inputs and return list of commands to execute."""
        commands: List[Command] = self._poll_keys(state)
        mouse = self.poll_mouse()

        if not state.modal.mounted:
            self._reset_drag()
            if mouse.wheel != 0.0:
                commands.append(ScrollPage(-mouse.wheel * GRID_SCROLL_STEP))
            if mouse.left_pressed:
                commands.extend(click_commands(state, mouse.x, mouse.y))
            return commands

        if self.dragging:
            commands.extend(self._poll_drag(mouse))
            return commands

        if mouse.left_pressed:
            pressed = click_commands(state, mouse.x, mouse.y)
            if state.modal.accepts_input:
                commands.extend(self._begin_drag(state, mouse, pressed))
            else:
                commands.extend(pressed)
        return commands


# Singleton instance for convenience
_default_handler: Optional[InputHandler] = None


def get_input_handler() -> InputHandler:
    """Get the default input handler instance."""
    global _default_handler
    if _default_handler is None:
        _default_handler = InputHandler()
    return _default_handler
