"""Core data types for Showroom."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, List, Optional, Tuple, Union


class MediaKind(Enum):
    """Discriminator of the media item union."""
    IMAGE = "image"
    VIDEO = "video"


class Direction(IntEnum):
    """Navigation step: +1 forward, -1 backward."""
    NEXT = 1
    PREV = -1


class LoadPriority(IntEnum):
    """Priority levels for background media loading."""
    CURRENT = 0   # Image in the main pane
    THUMB = 1     # Thumbnail strip previews
    GRID = 2      # Cover tiles of the showcase grid


@dataclass
class LoadTask:
    """A request for the background media loader."""
    url: str
    priority: LoadPriority
    timestamp: float = 0.0

    def __lt__(self, other: LoadTask) -> bool:
        """Compare tasks for priority queue ordering."""
        if self.priority != other.priority:
            return self.priority < other.priority
        return self.timestamp < other.timestamp


@dataclass(frozen=True)
class DocumentFile:
    """An attachment listed in the metadata panel."""
    url: str
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return self.url.rstrip("/").split("/")[-1] or self.url


@dataclass(frozen=True)
class Interior:
    """A showcased client project, read-only to the viewer."""
    id: int
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    cover_preview: Optional[str] = None
    gallery_images: Tuple[str, ...] = ()
    gallery_previews: Tuple[Optional[str], ...] = ()
    video_urls: Tuple[str, ...] = ()
    document_files: Tuple[DocumentFile, ...] = ()
    location: Optional[str] = None
    area: Optional[str] = None
    style: Optional[str] = None
    sort_order: Optional[int] = None
    created_at: Optional[str] = None

    @property
    def tile_image(self) -> Optional[str]:
        """Image shown on the showcase grid: preview first, then full cover."""
        return self.cover_preview or self.cover_image or (
            self.gallery_images[0] if self.gallery_images else None)


@dataclass(frozen=True)
class ImageItem:
    url: str
    preview_url: Optional[str] = None

    @property
    def kind(self) -> MediaKind:
        return MediaKind.IMAGE

    @property
    def thumb_url(self) -> str:
        return self.preview_url or self.url


@dataclass(frozen=True)
class VideoItem:
    url: str

    @property
    def kind(self) -> MediaKind:
        return MediaKind.VIDEO


MediaItem = Union[ImageItem, VideoItem]


@dataclass
class MediaCatalog:
    """Independently navigated image and video sequences of one interior."""
    images: List[ImageItem] = field(default_factory=list)
    videos: List[VideoItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.images and not self.videos

    def image_at(self, index: int) -> Optional[ImageItem]:
        if 0 <= index < len(self.images):
            return self.images[index]
        return None

    def video_at(self, index: int) -> Optional[VideoItem]:
        if 0 <= index < len(self.videos):
            return self.videos[index]
        return None


@dataclass(frozen=True)
class TouchPoint:
    """A single touch sample; ``t_ms`` is a monotonic timestamp."""
    x: float
    y: float
    t_ms: float = 0.0


@dataclass
class TextureInfo:
    """Information about a loaded texture."""
    tex: Any  # rl.Texture2D - using Any to avoid raylib import
    w: int
    h: int
    url: str = ""
