"""Preview generation - square JPEG previews for gallery thumbnails.

Mirrors what the admin screen does when a gallery image is uploaded: crop
the centred square, scale it to ``PREVIEW_SIZE`` and save as JPEG.
"""

from __future__ import annotations
import json
import os
from typing import Any, Dict, List, Optional

from PIL import Image

from . import config as cfg
from .logging import log


def generate_preview(src_path: str, dst_path: str,
                     size: int = cfg.PREVIEW_SIZE,
                     quality: int = cfg.PREVIEW_QUALITY) -> bool:
    """
    Write a centre-cropped square preview of an image.

    Args:
        src_path: Source image file.
        dst_path: Destination JPEG path (parent directories are created).
        size: Edge length of the square preview.
        quality: JPEG quality.

    Returns:
        True if successful, False otherwise.
    """
    try:
        with Image.open(src_path) as img:
            img = img.convert('RGB')
            min_side = min(img.width, img.height)
            left = (img.width - min_side) // 2
            top = (img.height - min_side) // 2
            square = img.crop((left, top, left + min_side, top + min_side))
            square = square.resize((size, size), Image.LANCZOS)
            parent = os.path.dirname(dst_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            square.save(dst_path, format='JPEG', quality=quality)
        log(f"[PREVIEW] {os.path.basename(src_path)} -> {dst_path}")
        return True
    except (OSError, ValueError) as e:
        log(f"[PREVIEW][ERR] {src_path}: {e!r}")
        return False


def _local_path(url: Any, base_dir: str) -> Optional[str]:
    if not isinstance(url, str) or not url or "://" in url:
        return None
    path = url if os.path.isabs(url) else os.path.join(base_dir, url)
    return path if os.path.isfile(path) else None


def _preview_name(row_id: Any, slot: str) -> str:
    return f"interior-{row_id}-{slot}.jpg"


_CAMEL_KEYS = {
    "cover_image": "coverImage",
    "cover_preview": "coverPreview",
    "gallery_images": "galleryImages",
    "gallery_previews": "galleryPreviews",
}


def _key(row: Dict[str, Any], name: str) -> str:
    """Key ``name`` is stored under; camelCase exports keep their spelling."""
    if row.get(name) is not None:
        return name
    if any(camel in row for camel in _CAMEL_KEYS.values()):
        return _CAMEL_KEYS[name]
    return name


def attach_previews(rows: List[Dict[str, Any]], out_dir: str, base_dir: str = ".") -> int:
    """Generate previews for local images and record them on the rows.

    Relative image paths are resolved against ``base_dir`` and preview paths
    are stored relative to it. Rows may use snake_case or camelCase keys;
    previews are written back in the spelling the row already uses.

    ``gallery_previews`` stays index-aligned with ``gallery_images``: entries
    that could not be generated keep their previous value (or ``None``).
    Returns the number of previews written.
    """
    written = 0
    for row in rows:
        row_id = row.get("id")
        cover = _local_path(row.get(_key(row, "cover_image")), base_dir)
        cover_key = _key(row, "cover_preview")
        if cover and not row.get(cover_key):
            dst = os.path.join(out_dir, _preview_name(row_id, "cover"))
            if generate_preview(cover, dst):
                row[cover_key] = os.path.relpath(dst, base_dir)
                written += 1

        images = row.get(_key(row, "gallery_images"))
        if not isinstance(images, list):
            continue
        previews_key = _key(row, "gallery_previews")
        previews = row.get(previews_key)
        previews = list(previews) if isinstance(previews, list) else []
        previews += [None] * (len(images) - len(previews))
        for i, url in enumerate(images):
            if previews[i]:
                continue
            src = _local_path(url, base_dir)
            if not src:
                continue
            dst = os.path.join(out_dir, _preview_name(row_id, str(i)))
            if generate_preview(src, dst):
                previews[i] = os.path.relpath(dst, base_dir)
                written += 1
        row[previews_key] = previews
    return written


def attach_previews_file(catalog_path: str, out_dir: str) -> int:
    """Rewrite a JSON export in place with generated preview paths."""
    with open(catalog_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    rows = data.get("interiors") if isinstance(data, dict) else data
    if not isinstance(rows, list):
        raise ValueError(f"{catalog_path}: expected a list of interiors")

    base_dir = os.path.dirname(os.path.abspath(catalog_path))
    written = attach_previews([r for r in rows if isinstance(r, dict)], out_dir, base_dir)

    with open(catalog_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    log(f"[PREVIEW] Wrote {written} previews for {catalog_path}")
    return written
