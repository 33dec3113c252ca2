"""State management submodules for Showroom."""

from .window import WindowState
from .page import PageState
from .modal import ModalState, ModalPhase
from .navigation import NavigationState
from .touch import TouchState, GestureIntent
from .app_state import ViewerState

__all__ = [
    'WindowState',
    'PageState',
    'ModalState',
    'ModalPhase',
    'NavigationState',
    'TouchState',
    'GestureIntent',
    'ViewerState',
]
