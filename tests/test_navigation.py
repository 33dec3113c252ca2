import itertools

import pytest

from showroom.state import NavigationState
from showroom.types import Direction


def test_thumbnail_window_follows_selection_minimally():
    nav = NavigationState()
    nav.reset(image_count=12)

    nav.select_image(6)
    assert nav.thumbnail_offset == 2
    nav.select_image(4)
    assert nav.thumbnail_offset == 2
    nav.select_image(1)
    assert nav.thumbnail_offset == 1
    nav.select_image(11)
    assert nav.thumbnail_offset == 7
    assert list(nav.visible_thumbnail_range()) == [7, 8, 9, 10, 11]


@pytest.mark.parametrize("count", [0, 1, 4, 5, 6, 13])
def test_selection_always_inside_thumbnail_window(count):
    nav = NavigationState()
    nav.reset(image_count=count)
    sequence = [0, count - 1, 3, 9, 2, 12, 7, 0, 5, count // 2, -1, count]
    for index in itertools.chain(sequence, range(count), reversed(range(count))):
        nav.select_image(index)
        assert nav.thumbnail_offset <= nav.selected_image_index < nav.thumbnail_offset + nav.visible_count
        assert 0 <= nav.thumbnail_offset <= nav.max_thumbnail_offset


def test_small_lists_never_scroll_the_window():
    nav = NavigationState()
    nav.reset(image_count=4)
    nav.select_image(3)
    assert nav.thumbnail_offset == 0
    assert list(nav.visible_thumbnail_range()) == [0, 1, 2, 3]


def test_next_image_index_wraps():
    nav = NavigationState()
    nav.reset(image_count=3)
    assert nav.next_image_index(Direction.NEXT) == 1
    assert nav.next_image_index(Direction.PREV) == 2
    nav.selected_image_index = 2
    assert nav.next_image_index(Direction.NEXT) == 0


@pytest.mark.parametrize("count", [0, 1])
def test_next_image_index_none_without_neighbours(count):
    nav = NavigationState()
    nav.reset(image_count=count)
    assert nav.next_image_index(Direction.NEXT) is None
    assert nav.next_video_index(Direction.NEXT) is None


def test_crossfade_flags():
    nav = NavigationState()
    nav.reset(image_count=3)
    nav.select_image(2)
    nav.begin_crossfade()
    assert nav.in_transition
    assert nav.displayed_image_index == 0

    nav.finish_crossfade(2)
    assert nav.displayed_image_index == 2
    assert nav.is_entering
    assert not nav.in_transition


def test_video_index_independent_of_images():
    nav = NavigationState()
    nav.reset(image_count=3, video_count=2)
    assert nav.advance_video(Direction.NEXT)
    assert nav.active_video_index == 1
    assert nav.advance_video(Direction.NEXT)
    assert nav.active_video_index == 0
    assert nav.selected_image_index == 0
    assert not nav.select_video(2)


def test_set_counts_resets_out_of_range_indices():
    nav = NavigationState()
    nav.reset(image_count=10, video_count=3)
    nav.select_image(8)
    nav.finish_crossfade(8)
    nav.select_video(2)

    nav.set_counts(4, 3)
    assert nav.selected_image_index == 0
    assert nav.displayed_image_index == 0
    assert nav.active_video_index == 2
    assert nav.thumbnail_offset == 0
