"""Console logging stamped with elapsed time and the current frame.

Lines look like ``[  1.234s F000042] [MODAL] OPENING -> OPEN``; the bracketed
tag after the stamp names the subsystem (``[MODAL]``, ``[NAV]``, ``[TIMER]``,
``[MEDIA]`` ...), with ``[ERR]`` appended for failures.
"""

from __future__ import annotations
import sys
import time
from typing import Optional, TextIO


class Logger:
    """Process-wide logger; the frame counter is advanced by the main loop."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._t0 = time.perf_counter()
        self._frame = 0
        self._stream = stream
        self.enabled = True

    @property
    def frame(self) -> int:
        return self._frame

    @frame.setter
    def frame(self, value: int) -> None:
        self._frame = value

    def increment_frame(self) -> None:
        self._frame += 1

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self._t0

    def format(self, msg: str) -> str:
        return f"[{self.elapsed:7.3f}s F{self._frame:06d}] {msg}\n"

    def log(self, msg: str) -> None:
        if not self.enabled:
            return
        line = self.format(msg)
        for stream in (self._stream or sys.stdout, sys.stderr):
            # A closed or broken pipe falls through to stderr.
            try:
                stream.write(line)
                stream.flush()
                return
            except (OSError, ValueError):
                continue

    __call__ = log


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def log(msg: str) -> None:
    get_logger().log(msg)


def set_enabled(enabled: bool) -> None:
    """Silence or restore output (tests switch it off)."""
    get_logger().enabled = enabled


def get_frame() -> int:
    return get_logger().frame


def increment_frame() -> None:
    get_logger().increment_frame()


def now() -> float:
    """Monotonic seconds; the clock timers and fades run on."""
    return time.perf_counter()


def now_ms() -> float:
    """Monotonic milliseconds; the unit of touch timestamps."""
    return time.perf_counter() * 1000.0
