import pytest

from showroom import config as cfg
from showroom.scheduler import TimerId
from showroom.state import ModalPhase
from showroom.types import Direction, MediaKind, TouchPoint


# 1. Lifecycle
def test_open_goes_through_opening_to_open(make_controller):
    ctl = make_controller((3, 0))
    assert ctl.open_gallery(0)
    assert ctl.phase is ModalPhase.OPENING
    assert ctl.state.modal.animated_in is False

    ctl.update()
    assert ctl.phase is ModalPhase.OPEN
    assert ctl.state.modal.animated_in is True


def test_open_out_of_range_is_ignored(make_controller):
    ctl = make_controller((3, 0))
    assert not ctl.open_gallery(5)
    assert not ctl.open_gallery(-1)
    assert ctl.phase is ModalPhase.CLOSED


def test_close_waits_for_exit_transition(open_controller, clock):
    ctl = open_controller((3, 1))
    ctl.select_image(2)
    assert ctl.close_gallery()
    assert ctl.phase is ModalPhase.CLOSING
    assert not ctl.scheduler.is_pending(TimerId.CROSSFADE)

    clock.advance_ms(cfg.CLOSE_DELAY_MS - 10)
    ctl.update()
    assert ctl.phase is ModalPhase.CLOSING

    clock.advance_ms(20)
    ctl.update()
    assert ctl.phase is ModalPhase.CLOSED
    assert ctl.state.modal.interior is None
    assert ctl.nav.selected_image_index == 0


def test_close_when_closed_is_noop(make_controller):
    ctl = make_controller((3, 0))
    assert not ctl.close_gallery()


def test_reopen_while_closing_cancels_pending_close(open_controller, clock):
    ctl = open_controller((3, 0), (2, 0))
    ctl.close_gallery()
    clock.advance_ms(100)
    ctl.open_gallery(1)
    ctl.update()

    clock.advance_ms(cfg.CLOSE_DELAY_MS * 2)
    ctl.update()
    assert ctl.phase is ModalPhase.OPEN
    assert ctl.state.modal.interior_index == 1
    assert ctl.nav.image_count == 2


# 2. Reset-on-open
def test_open_resets_indices(open_controller):
    ctl = open_controller((12, 3), (12, 3))
    nav = ctl.nav
    ctl.select_image(9)
    ctl.select_video(2)
    nav.displayed_image_index = 7
    assert nav.thumbnail_offset > 0

    ctl.open_gallery(1)
    assert (nav.selected_image_index, nav.displayed_image_index,
            nav.active_video_index, nav.thumbnail_offset) == (0, 0, 0, 0)
    assert nav.is_entering


# 3. Wraparound and single-item no-op
@pytest.mark.parametrize("count", [2, 3, 7])
@pytest.mark.parametrize("direction", [Direction.NEXT, Direction.PREV])
def test_advance_wraps_back_to_start(open_controller, count, direction):
    ctl = open_controller((count, 0))
    for start in range(count):
        ctl.nav.selected_image_index = start
        for _ in range(count):
            assert ctl.advance_image(direction)
        assert ctl.nav.selected_image_index == start


def test_advance_prev_from_first_goes_to_last(open_controller):
    ctl = open_controller((4, 0))
    ctl.advance_image(Direction.PREV)
    assert ctl.nav.selected_image_index == 3


@pytest.mark.parametrize("count", [0, 1])
def test_advance_with_single_image_never_starts_crossfade(open_controller, count):
    ctl = open_controller((count, 0))
    for direction in (Direction.NEXT, Direction.PREV):
        assert not ctl.advance_image(direction)
    assert ctl.nav.selected_image_index == 0
    assert not ctl.scheduler.is_pending(TimerId.CROSSFADE)


# 4. Cross-fade
def test_crossfade_swaps_displayed_after_delay(open_controller, clock):
    ctl = open_controller((3, 0))
    ctl.select_image(1)
    assert ctl.nav.displayed_image_index == 0
    assert ctl.nav.is_entering is False

    clock.advance_ms(cfg.CROSSFADE_MS)
    ctl.update()
    assert ctl.nav.displayed_image_index == 1
    assert ctl.nav.is_entering is True


def test_second_select_replaces_pending_crossfade(open_controller, clock):
    ctl = open_controller((5, 0))
    ctl.select_image(1)
    clock.advance_ms(100)
    ctl.update()
    ctl.select_image(3)

    seen = set()
    for _ in range(30):
        clock.advance_ms(10)
        ctl.update()
        seen.add(ctl.nav.displayed_image_index)
    assert 1 not in seen
    assert ctl.nav.displayed_image_index == 3
    assert ctl.scheduler.pending == []


def test_select_same_or_invalid_index_is_noop(open_controller):
    ctl = open_controller((3, 0))
    assert not ctl.select_image(0)
    assert not ctl.select_image(3)
    assert not ctl.scheduler.is_pending(TimerId.CROSSFADE)


def test_clicks_count_during_opening(make_controller):
    ctl = make_controller((3, 2))
    ctl.open_gallery(0)
    assert ctl.select_image(2)
    assert ctl.select_video(1)


# 5. Videos are independent of images
def test_video_navigation_does_not_touch_images(open_controller):
    ctl = open_controller((3, 3))
    ctl.select_image(2)
    assert ctl.advance_video(Direction.PREV)
    assert ctl.nav.active_video_index == 2
    assert ctl.nav.selected_image_index == 2
    assert not ctl.select_video(5)


# 6. Keyboard
def test_keys_only_bound_while_open(make_controller, clock):
    ctl = make_controller((3, 0))
    assert not ctl.handle_key(cfg.KEY_NEXT_IMAGE)

    ctl.open_gallery(0)
    assert not ctl.handle_key(cfg.KEY_NEXT_IMAGE)

    ctl.update()
    assert ctl.handle_key(cfg.KEY_NEXT_IMAGE)
    assert ctl.nav.selected_image_index == 1
    assert ctl.handle_key(cfg.KEY_PREV_IMAGE)
    assert ctl.nav.selected_image_index == 0
    assert not ctl.handle_key(65)

    assert ctl.handle_key(cfg.KEY_CLOSE)
    assert ctl.phase is ModalPhase.CLOSING
    assert not ctl.handle_key(cfg.KEY_NEXT_IMAGE)


def test_arrow_keys_ignored_with_single_image(open_controller):
    ctl = open_controller((1, 0))
    assert not ctl.handle_key(cfg.KEY_NEXT_IMAGE)
    assert not ctl.handle_key(cfg.KEY_PREV_IMAGE)


# 7. Swipes
def _swipe(ctl, x0, x1, duration_ms, target=MediaKind.IMAGE, y0=300.0, y1=300.0):
    ctl.touch_start([TouchPoint(x0, y0, 1000.0)])
    ctl.touch_move(TouchPoint((x0 + x1) / 2, (y0 + y1) / 2, 1000.0 + duration_ms / 2))
    return ctl.touch_end(TouchPoint(x1, y1, 1000.0 + duration_ms), target)


def test_left_drag_advances_right_drag_retreats(open_controller, clock):
    ctl = open_controller((3, 0))
    assert _swipe(ctl, 300, 200, 150)
    assert ctl.nav.selected_image_index == 1

    clock.advance_ms(cfg.CROSSFADE_MS)
    ctl.update()
    assert _swipe(ctl, 200, 300, 150)
    assert ctl.nav.selected_image_index == 0


def test_vertical_drag_does_not_navigate(open_controller):
    ctl = open_controller((3, 0))
    assert not _swipe(ctl, 300, 340, 200, y0=300, y1=360)
    assert ctl.nav.selected_image_index == 0


def test_swipe_on_video_target_moves_videos(open_controller):
    ctl = open_controller((3, 2))
    assert _swipe(ctl, 300, 200, 150, target=MediaKind.VIDEO)
    assert ctl.nav.active_video_index == 1
    assert ctl.nav.selected_image_index == 0


def test_multi_touch_is_ignored(open_controller):
    ctl = open_controller((3, 0))
    assert not ctl.touch_start([TouchPoint(300, 300, 0), TouchPoint(400, 300, 0)])
    assert not ctl.touch_end(TouchPoint(100, 300, 100))
    assert ctl.nav.selected_image_index == 0


def test_touch_ignored_until_open(make_controller):
    ctl = make_controller((3, 0))
    ctl.open_gallery(0)
    assert not ctl.touch_start([TouchPoint(300, 300, 0)])


# 8. Scroll lock
def test_scroll_lock_restores_previous_overflow(open_controller, clock):
    ctl = open_controller((3, 0), page_overflow="scroll")
    page = ctl.state.page
    assert page.overflow == "hidden"
    assert not page.can_scroll

    ctl.close_gallery()
    clock.advance_ms(cfg.CLOSE_DELAY_MS)
    ctl.update()
    assert page.overflow == "scroll"
    assert page.can_scroll


def test_reopen_keeps_first_saved_overflow(open_controller, clock):
    ctl = open_controller((3, 0), (3, 0), page_overflow="auto")
    ctl.close_gallery()
    ctl.open_gallery(1)
    ctl.update()
    ctl.close_gallery()
    clock.advance_ms(cfg.CLOSE_DELAY_MS)
    ctl.update()
    assert ctl.state.page.overflow == "auto"


def test_immediate_close_when_delay_is_zero(make_controller):
    ctl = make_controller((3, 0), page_overflow="scroll")
    ctl.close_delay_ms = 0
    ctl.open_gallery(0)
    ctl.update()
    ctl.close_gallery()
    assert ctl.phase is ModalPhase.CLOSED
    assert ctl.state.page.overflow == "scroll"


# 9. Catalog refresh
def test_refresh_catalog_clamps_indices(open_controller, make_interior):
    ctl = open_controller((5, 2))
    ctl.select_image(4)
    ctl.select_video(1)
    ctl.state.interiors[0] = make_interior(1, images=2, videos=1)
    ctl.refresh_catalog()
    assert ctl.nav.image_count == 2
    assert ctl.nav.selected_image_index == 0
    assert ctl.nav.active_video_index == 0


def test_shrinking_during_crossfade_settles_on_new_selection(open_controller, make_interior, clock):
    ctl = open_controller((5, 0))
    ctl.select_image(1)
    clock.advance_ms(cfg.CROSSFADE_MS)
    ctl.update()
    ctl.select_image(4)

    ctl.state.interiors[0] = make_interior(1, images=3)
    ctl.refresh_catalog()
    clock.advance_ms(900)
    ctl.update()

    nav = ctl.nav
    assert nav.selected_image_index == 0
    assert nav.displayed_image_index == nav.selected_image_index
    assert nav.is_entering
    assert ctl.scheduler.pending == []


def test_refresh_keeps_pending_crossfade_when_selection_survives(open_controller, make_interior, clock):
    ctl = open_controller((5, 0))
    ctl.select_image(2)
    ctl.state.interiors[0] = make_interior(1, images=4)
    ctl.refresh_catalog()
    assert ctl.scheduler.is_pending(TimerId.CROSSFADE)
    assert ctl.nav.is_entering is False

    clock.advance_ms(cfg.CROSSFADE_MS)
    ctl.update()
    assert ctl.nav.displayed_image_index == 2
    assert ctl.nav.is_entering


def test_replace_interiors_follows_open_record_by_id(open_controller, make_interior):
    ctl = open_controller((3, 0), (6, 0))
    ctl.open_gallery(1)
    ctl.update()
    ctl.select_image(5)

    ctl.replace_interiors([make_interior(2, images=2), make_interior(1, images=3)])
    assert ctl.state.modal.interior_index == 0
    assert ctl.nav.image_count == 2
    assert ctl.nav.selected_image_index == ctl.nav.displayed_image_index == 0
    assert ctl.phase is ModalPhase.OPEN


def test_replace_interiors_closes_when_record_disappears(open_controller, make_interior, clock):
    ctl = open_controller((3, 0), (3, 0))
    ctl.replace_interiors([make_interior(2)])
    assert ctl.phase is ModalPhase.CLOSING

    clock.advance_ms(cfg.CLOSE_DELAY_MS)
    ctl.update()
    assert ctl.phase is ModalPhase.CLOSED
    assert len(ctl.state.interiors) == 1


def test_pane_media_falls_back_to_active_video(open_controller):
    ctl = open_controller((0, 2))
    ctl.select_video(1)
    item = ctl.state.pane_media
    assert item.kind is MediaKind.VIDEO
    assert item.url == "https://video.example/1"

    ctl = open_controller((2, 2))
    assert ctl.state.pane_media.kind is MediaKind.IMAGE
