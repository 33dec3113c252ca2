import pytest

from showroom.controller import GalleryController
from showroom.logging import set_enabled
from showroom.scheduler import Scheduler
from showroom.state import ViewerState
from showroom.types import DocumentFile, Interior


class FakeClock:
    """Manually advanced clock in seconds, like ``logging.now``."""

    def __init__(self, t=100.0):
        self.t = t

    def __call__(self):
        return self.t

    def advance_ms(self, ms):
        self.t += ms / 1000.0


@pytest.fixture(autouse=True)
def quiet_logging():
    set_enabled(False)
    yield
    set_enabled(True)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_interior():
    def _make(interior_id=1, images=3, videos=0, docs=0, cover=False, **kwargs):
        return Interior(
            id=interior_id,
            title=f"Interior {interior_id}",
            cover_image="cover.jpg" if cover else None,
            gallery_images=tuple(f"img{i}.jpg" for i in range(images)),
            video_urls=tuple(f"https://video.example/{i}" for i in range(videos)),
            document_files=tuple(DocumentFile(f"https://files.example/doc{i}.pdf") for i in range(docs)),
            **kwargs,
        )
    return _make


@pytest.fixture
def make_controller(clock, make_interior):
    """Controller over a page of interiors; ``counts`` is (images, videos) per interior."""
    def _make(*counts, page_overflow=""):
        interiors = [make_interior(i + 1, images=n_img, videos=n_vid)
                     for i, (n_img, n_vid) in enumerate(counts or [(3, 0)])]
        state = ViewerState(interiors=interiors)
        state.page.overflow = page_overflow
        return GalleryController(state=state, scheduler=Scheduler(clock), clock=clock)
    return _make


@pytest.fixture
def open_controller(make_controller):
    """Open interior 0 and let the enter frame pass."""
    def _open(*counts, **kwargs):
        ctl = make_controller(*counts, **kwargs)
        assert ctl.open_gallery(0)
        ctl.update()
        return ctl
    return _open
