"""Media catalog - interior records to navigable image/video sequences.

Everything here is pure and tolerant of partial rows: missing arrays become
empty sequences, short or gappy preview arrays fall back to the full image.
"""

from __future__ import annotations
import json
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .types import DocumentFile, ImageItem, Interior, MediaCatalog, VideoItem
from .logging import log


class CatalogError(Exception):
    """Raised when an interiors export cannot be read at all."""


def _preview_at(previews: Sequence[Optional[str]], index: int, fallback: str) -> str:
    if 0 <= index < len(previews) and previews[index]:
        return previews[index]
    return fallback


def build_image_items(interior: Interior) -> List[ImageItem]:
    """Cover first (if any), then gallery images, each paired with its preview."""
    items: List[ImageItem] = []
    if interior.cover_image:
        items.append(ImageItem(
            url=interior.cover_image,
            preview_url=interior.cover_preview or interior.cover_image,
        ))
    # Preview alignment follows the source position, so blanks are skipped
    # only after pairing.
    for i, url in enumerate(interior.gallery_images):
        if not url:
            continue
        items.append(ImageItem(url=url, preview_url=_preview_at(interior.gallery_previews, i, url)))
    return items


def build_video_items(interior: Interior) -> List[VideoItem]:
    return [VideoItem(url=url) for url in interior.video_urls if url]


def build_catalog(interior: Interior) -> MediaCatalog:
    return MediaCatalog(images=build_image_items(interior), videos=build_video_items(interior))


# ═══════════════════════════════════════════════════════════════════════════
# Row parsing
# ═══════════════════════════════════════════════════════════════════════════

def _field(row: Mapping[str, Any], snake: str, camel: str) -> Any:
    value = row.get(snake)
    if value is None:
        value = row.get(camel)
    return value


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _url_list(value: Any) -> Tuple[Optional[str], ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(v.strip() if isinstance(v, str) and v.strip() else None for v in value)


def _documents(value: Any) -> Tuple[DocumentFile, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    docs = []
    for entry in value:
        if isinstance(entry, str) and entry.strip():
            docs.append(DocumentFile(url=entry.strip()))
        elif isinstance(entry, Mapping) and _text(entry.get("url")):
            docs.append(DocumentFile(url=_text(entry.get("url")), name=_text(entry.get("name"))))
    return tuple(docs)


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def interior_from_row(row: Mapping[str, Any]) -> Interior:
    """Build an Interior from a ``client_interiors`` row or a camelCase payload.

    Raises:
        ValueError: if the row has no usable integer ``id``.
    """
    interior_id = _int_or_none(row.get("id"))
    if interior_id is None:
        raise ValueError(f"interior row without id: {row.get('id')!r}")

    gallery = _url_list(_field(row, "gallery_images", "galleryImages"))
    return Interior(
        id=interior_id,
        title=_text(row.get("title")) or "",
        subtitle=_text(row.get("subtitle")),
        description=_text(row.get("description")),
        cover_image=_text(_field(row, "cover_image", "coverImage")),
        cover_preview=_text(_field(row, "cover_preview", "coverPreview")),
        gallery_images=tuple(url or "" for url in gallery),
        gallery_previews=_url_list(_field(row, "gallery_previews", "galleryPreviews")),
        video_urls=tuple(url for url in _url_list(_field(row, "video_urls", "videoUrls")) if url),
        document_files=_documents(_field(row, "document_files", "documentFiles")),
        location=_text(row.get("location")),
        area=_text(row.get("area")),
        style=_text(row.get("style")),
        sort_order=_int_or_none(_field(row, "sort_order", "sortOrder")),
        created_at=_text(_field(row, "created_at", "createdAt")),
    )


def sort_interiors(interiors: Iterable[Interior]) -> List[Interior]:
    """Order like the showcase: sort_order ascending (missing last), newest first."""
    # Two stable passes: secondary key first.
    by_created = sorted(interiors, key=lambda it: it.created_at or "", reverse=True)
    return sorted(by_created, key=lambda it: (it.sort_order is None, it.sort_order or 0))


def load_interiors(path: str) -> List[Interior]:
    """Load a JSON export: a list of rows or ``{"interiors": [...]}``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise CatalogError(f"cannot read {path}: {e}") from e

    if isinstance(data, Mapping):
        data = data.get("interiors")
    if not isinstance(data, list):
        raise CatalogError(f"{path}: expected a list of interiors")

    interiors = []
    for i, row in enumerate(data):
        if not isinstance(row, Mapping):
            log(f"[CATALOG][SKIP] row {i}: not an object")
            continue
        try:
            interiors.append(interior_from_row(row))
        except ValueError as e:
            log(f"[CATALOG][SKIP] row {i}: {e}")

    log(f"[CATALOG] Loaded {len(interiors)} interiors from {path}")
    return sort_interiors(interiors)
