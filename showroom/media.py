"""Media loading - fetch, normalise and upload images off the UI thread.

Workers resolve a URL (local path, ``file://`` or http(s)) and re-encode it
with Pillow into a PNG raylib can read; the UI thread then turns finished
files into textures. A failed URL stays empty: no retries, no placeholder.
"""

from __future__ import annotations
import hashlib
import io
import os
import urllib.parse
import urllib.request
from collections import deque
from queue import Empty, PriorityQueue
from threading import Lock, Thread
from typing import Any, Callable, Deque, Dict, List, Optional, Set, Tuple

from PIL import Image

from . import config as cfg
from .types import LoadPriority, LoadTask, TextureInfo
from .logging import log, now


class MediaError(Exception):
    """A media URL could not be fetched or decoded."""


def cache_path_for(url: str, cache_dir: str = cfg.MEDIA_CACHE_DIR) -> str:
    key = hashlib.sha1(url.encode('utf-8')).hexdigest()
    return os.path.join(cache_dir, f"{key}.png")


def _read_source(url: str, base_dir: str = "") -> bytes:
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme in ("http", "https"):
        req = urllib.request.Request(url, headers={"User-Agent": "showroom"})
        with urllib.request.urlopen(req, timeout=cfg.DOWNLOAD_TIMEOUT_S) as resp:
            return resp.read()
    path = urllib.request.url2pathname(parsed.path) if parsed.scheme == "file" else url
    if base_dir and not os.path.isabs(path):
        path = os.path.join(base_dir, path)
    with open(path, 'rb') as f:
        return f.read()


def prepare_media(url: str, cache_dir: str = cfg.MEDIA_CACHE_DIR, base_dir: str = "",
                  max_dim: int = cfg.MAX_TEXTURE_DIMENSION) -> Tuple[str, int, int]:
    """Fetch ``url`` into the cache as PNG. Returns (path, width, height).

    Raises:
        MediaError: on network, file or decode failure.
    """
    dst = cache_path_for(url if "://" in url else os.path.join(base_dir, url), cache_dir)
    try:
        if os.path.exists(dst):
            with Image.open(dst) as cached:
                return dst, cached.width, cached.height

        data = _read_source(url, base_dir)
        with Image.open(io.BytesIO(data)) as img:
            img = img.convert('RGBA' if 'A' in img.getbands() else 'RGB')
            if img.width > max_dim or img.height > max_dim:
                img.thumbnail((max_dim, max_dim), Image.LANCZOS)
            os.makedirs(cache_dir, exist_ok=True)
            tmp = dst + ".part"
            img.save(tmp, format='PNG')
            os.replace(tmp, dst)
            return dst, img.width, img.height
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise MediaError(f"{url}: {e}") from e


class MediaLoader:
    """Prioritised background loader with UI-thread texture upload."""

    def __init__(self, texture_factory: Callable[[str], Any],
                 workers: int = cfg.MEDIA_WORKERS,
                 cache_dir: str = cfg.MEDIA_CACHE_DIR, base_dir: str = ""):
        self.texture_factory = texture_factory
        self.cache_dir = cache_dir
        self.base_dir = base_dir
        self.task_queue: "PriorityQueue[LoadTask]" = PriorityQueue()
        self.running = True
        self.ready: Deque[Tuple[str, Optional[str], int, int]] = deque()
        self.ready_lock = Lock()
        self.textures: Dict[str, TextureInfo] = {}
        self.requested: Set[str] = set()
        self.failed: Set[str] = set()
        self.workers: List[Thread] = []

        for _ in range(workers):
            worker = Thread(target=self._worker_loop, daemon=True)
            worker.start()
            self.workers.append(worker)

    def _worker_loop(self) -> None:
        while self.running:
            try:
                task = self.task_queue.get(timeout=0.1)
            except Empty:
                continue
            try:
                path, w, h = prepare_media(task.url, self.cache_dir, self.base_dir)
                result = (task.url, path, w, h)
            except MediaError as e:
                log(f"[MEDIA][ERR] {e}")
                result = (task.url, None, 0, 0)
            with self.ready_lock:
                self.ready.append(result)
            self.task_queue.task_done()

    def request(self, url: Optional[str], priority: LoadPriority) -> Optional[TextureInfo]:
        """Texture for ``url`` if loaded; otherwise queue it once."""
        if not url:
            return None
        ti = self.textures.get(url)
        if ti is not None:
            return ti
        if url not in self.requested and url not in self.failed:
            self.requested.add(url)
            self.task_queue.put(LoadTask(url, priority, now()))
        return None

    def is_failed(self, url: Optional[str]) -> bool:
        return bool(url) and url in self.failed

    def poll(self, budget: int = cfg.TEXTURE_UPLOADS_PER_FRAME) -> int:
        """Upload up to ``budget`` finished files as textures (UI thread only)."""
        batch = []
        with self.ready_lock:
            while self.ready and len(batch) < budget:
                batch.append(self.ready.popleft())

        for url, path, w, h in batch:
            self.requested.discard(url)
            if path is None:
                self.failed.add(url)
                continue
            try:
                tex = self.texture_factory(path)
            except (OSError, RuntimeError) as e:
                log(f"[MEDIA][ERR] upload {url}: {e!r}")
                self.failed.add(url)
                continue
            self.textures[url] = TextureInfo(tex=tex, w=w, h=h, url=url)
            log(f"[MEDIA] Ready {os.path.basename(urllib.parse.urlparse(url).path)} {w}x{h}")
        return len(batch)

    def shutdown(self, unload: Optional[Callable[[Any], None]] = None) -> None:
        self.running = False
        for worker in self.workers:
            worker.join(timeout=1.0)
        if unload is not None:
            for ti in self.textures.values():
                try:
                    unload(ti.tex)
                except RuntimeError as e:
                    log(f"[MEDIA][ERR] unload {ti.url}: {e!r}")
        self.textures.clear()
