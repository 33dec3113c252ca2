"""Modal state - lifecycle phase and visual flags of the gallery overlay."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from ..types import Interior, MediaCatalog


class ModalPhase(Enum):
    CLOSED = auto()
    OPENING = auto()
    OPEN = auto()
    CLOSING = auto()


@dataclass
class ModalState:
    """What the overlay shows and which visual state it is animating towards."""
    phase: ModalPhase = ModalPhase.CLOSED
    interior_index: Optional[int] = None
    interior: Optional[Interior] = None
    catalog: MediaCatalog = field(default_factory=MediaCatalog)
    animated_in: bool = False
    phase_t0: float = 0.0

    @property
    def mounted(self) -> bool:
        """Overlay is rendered (any phase but CLOSED)."""
        return self.phase is not ModalPhase.CLOSED

    @property
    def accepts_input(self) -> bool:
        """Keyboard and swipe bindings are live only while fully open."""
        return self.phase is ModalPhase.OPEN

    @property
    def interactive(self) -> bool:
        """Clicks on thumbnails and pills count from the first rendered frame."""
        return self.phase in (ModalPhase.OPENING, ModalPhase.OPEN)

    def clear(self) -> None:
        self.phase = ModalPhase.CLOSED
        self.interior_index = None
        self.interior = None
        self.catalog = MediaCatalog()
        self.animated_in = False
