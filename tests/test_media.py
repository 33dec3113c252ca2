import os

import pytest
from PIL import Image

from showroom.media import MediaError, MediaLoader, cache_path_for, prepare_media
from showroom.types import LoadPriority


@pytest.fixture
def photo(tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (50, 30), (200, 10, 10)).save(path)
    return path


def test_prepare_media_caches_as_png(tmp_path, photo):
    cache = tmp_path / "cache"
    path, w, h = prepare_media("photo.png", str(cache), str(tmp_path))
    assert (w, h) == (50, 30)
    assert os.path.dirname(path) == str(cache)
    assert path.endswith(".png")

    os.remove(photo)
    assert prepare_media("photo.png", str(cache), str(tmp_path)) == (path, 50, 30)


def test_prepare_media_shrinks_oversized_images(tmp_path, photo):
    _, w, h = prepare_media(str(photo), str(tmp_path / "cache"), max_dim=20)
    assert (w, h) == (20, 12)


def test_prepare_media_reads_file_urls(tmp_path, photo):
    _, w, h = prepare_media(photo.as_uri(), str(tmp_path / "cache"))
    assert (w, h) == (50, 30)


def test_prepare_media_errors(tmp_path):
    with pytest.raises(MediaError):
        prepare_media("missing.png", str(tmp_path / "cache"), str(tmp_path))

    (tmp_path / "broken.jpg").write_bytes(b"not an image")
    with pytest.raises(MediaError):
        prepare_media("broken.jpg", str(tmp_path / "cache"), str(tmp_path))


def test_cache_path_is_stable_per_url(tmp_path):
    assert cache_path_for("a.jpg", "c") == cache_path_for("a.jpg", "c")
    assert cache_path_for("a.jpg", "c") != cache_path_for("b.jpg", "c")


def test_loader_uploads_on_poll_and_remembers_failures(tmp_path, photo):
    uploaded = []

    def factory(path):
        uploaded.append(path)
        return object()

    loader = MediaLoader(factory, workers=1, cache_dir=str(tmp_path / "cache"), base_dir=str(tmp_path))
    try:
        assert loader.request("photo.png", LoadPriority.CURRENT) is None
        assert loader.request("missing.png", LoadPriority.THUMB) is None
        assert loader.request("", LoadPriority.THUMB) is None
        loader.task_queue.join()

        assert uploaded == []
        assert loader.poll(budget=5) == 2
        ti = loader.request("photo.png", LoadPriority.CURRENT)
        assert (ti.w, ti.h, ti.url) == (50, 30, "photo.png")
        assert len(uploaded) == 1

        assert loader.is_failed("missing.png")
        assert loader.request("missing.png", LoadPriority.THUMB) is None
        assert loader.task_queue.empty()
    finally:
        unloaded = []
        loader.shutdown(unload=unloaded.append)
    assert len(unloaded) == 1
    assert loader.textures == {}
