"""Page state - the showcase grid behind the modal and its scroll lock."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

OVERFLOW_HIDDEN = "hidden"


@dataclass
class PageState:
    """Scroll position and overflow style of the embedding page.

    ``overflow`` mirrors a document body style: while it is ``"hidden"`` the
    page ignores wheel and drag scrolling.
    """
    overflow: str = ""
    scroll_y: float = 0.0
    content_height: float = 0.0
    _saved_overflow: Optional[str] = None

    @property
    def scroll_locked(self) -> bool:
        return self._saved_overflow is not None

    @property
    def saved_overflow(self) -> Optional[str]:
        return self._saved_overflow

    @property
    def can_scroll(self) -> bool:
        return self.overflow != OVERFLOW_HIDDEN

    def lock_scroll(self) -> bool:
        """Hide overflow, remembering the prior value. No-op if already locked."""
        if self._saved_overflow is not None:
            return False
        self._saved_overflow = self.overflow
        self.overflow = OVERFLOW_HIDDEN
        return True

    def unlock_scroll(self) -> bool:
        """Restore the overflow value seen by the matching lock."""
        if self._saved_overflow is None:
            return False
        self.overflow = self._saved_overflow
        self._saved_overflow = None
        return True

    def scroll_by(self, dy: float, viewport_h: float) -> None:
        if not self.can_scroll:
            return
        max_scroll = max(0.0, self.content_height - viewport_h)
        self.scroll_y = min(max_scroll, max(0.0, self.scroll_y + dy))
