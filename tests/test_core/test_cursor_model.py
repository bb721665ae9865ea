# tests/test_core/test_cursor_model.py
"""Tests for cursor movement, clamping and viewport scrolling in `CursorModel`."""

import pytest

from pound.core.CursorModel import CursorModel, Direction, Viewport
from pound.core.TextBuffer import TextBuffer


@pytest.fixture
def buffer() -> TextBuffer:
    return TextBuffer(["hello", "hi", "", "a\tb"])


@pytest.fixture
def cursor() -> CursorModel:
    return CursorModel(screen_rows=2, screen_columns=4)


def test_right_at_end_of_line_wraps_to_next_row(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(4, 0, buffer)
    cursor.move(Direction.RIGHT, buffer)
    assert cursor.position == (5, 0)
    cursor.move(Direction.RIGHT, buffer)
    assert cursor.position == (0, 1)


def test_right_steps_over_tab_as_one_character(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(1, 3, buffer)
    cursor.move(Direction.RIGHT, buffer)
    assert cursor.position == (2, 3)


def test_right_at_end_of_last_row_is_a_no_op(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(3, 3, buffer)
    cursor.move(Direction.RIGHT, buffer)
    assert cursor.position == (3, 3)

    single = TextBuffer(["hello"])
    cursor.set_position(5, 0, single)
    cursor.move(Direction.RIGHT, single)
    assert cursor.position == (5, 0)


def test_right_on_virtual_row_is_a_no_op(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(0, 4, buffer)
    cursor.move(Direction.RIGHT, buffer)
    assert cursor.position == (0, 4)


def test_left_at_column_zero_goes_to_end_of_previous_row(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(0, 1, buffer)
    cursor.move(Direction.LEFT, buffer)
    assert cursor.position == (5, 0)
    cursor.set_position(0, 0, buffer)
    cursor.move(Direction.LEFT, buffer)
    assert cursor.position == (0, 0)


def test_vertical_moves_clamp_column(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(5, 0, buffer)
    cursor.move(Direction.DOWN, buffer)
    assert cursor.position == (2, 1)
    cursor.move(Direction.DOWN, buffer)
    assert cursor.position == (0, 2)
    cursor.move(Direction.UP, buffer)
    cursor.move(Direction.UP, buffer)
    cursor.move(Direction.UP, buffer)
    assert cursor.position == (0, 0)


def test_down_stops_at_virtual_row(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(0, 3, buffer)
    cursor.move(Direction.DOWN, buffer)
    cursor.move(Direction.DOWN, buffer)
    assert cursor.cursor_y == buffer.row_count


def test_home_and_end(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(1, 3, buffer)
    cursor.move(Direction.END, buffer)
    assert cursor.cursor_x == 3
    cursor.move(Direction.HOME, buffer)
    assert cursor.cursor_x == 0


def test_scroll_keeps_cursor_visible_with_minimal_offsets(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(3, 3, buffer)
    cursor.scroll(buffer)

    assert cursor.render_x == 9
    assert cursor.viewport.row_offset == 2
    assert cursor.viewport.column_offset == 6
    assert cursor.viewport.contains(cursor.cursor_y, cursor.render_x)

    cursor.set_position(0, 0, buffer)
    cursor.scroll(buffer)
    assert cursor.viewport.row_offset == 0
    assert cursor.viewport.column_offset == 0


def test_scroll_on_virtual_row(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(0, 4, buffer)
    cursor.scroll(buffer)
    assert cursor.render_x == 0
    assert cursor.viewport.row_offset == 3


def test_force_rescroll_puts_cursor_row_on_top(buffer: TextBuffer) -> None:
    cursor = CursorModel(screen_rows=3, screen_columns=10)
    cursor.set_position(0, 2, buffer)
    cursor.force_rescroll(buffer)
    cursor.scroll(buffer)
    assert cursor.viewport.row_offset == 2


def test_page_down_and_page_up() -> None:
    buffer = TextBuffer([str(i) for i in range(10)])
    cursor = CursorModel(screen_rows=2, screen_columns=10)

    cursor.move(Direction.PAGE_DOWN, buffer)
    assert cursor.cursor_y == 3

    cursor.viewport.row_offset = 4
    cursor.set_position(0, 5, buffer)
    cursor.move(Direction.PAGE_UP, buffer)
    assert cursor.cursor_y == 2


def test_set_position_clamps_into_buffer(cursor: CursorModel, buffer: TextBuffer) -> None:
    cursor.set_position(99, 99, buffer)
    assert cursor.position == (0, 4)
    cursor.set_position(99, 1, buffer)
    assert cursor.position == (2, 1)


def test_resize_and_viewport_contains() -> None:
    cursor = CursorModel(0, 0)
    assert cursor.viewport == Viewport(1, 1)
    cursor.resize(5, 20)
    assert cursor.viewport.contains(4, 19)
    assert not cursor.viewport.contains(5, 0)
