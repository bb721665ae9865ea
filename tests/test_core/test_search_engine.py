# tests/test_core/test_search_engine.py
"""SearchEngine Tests
====================

Incremental search: first match on typing, row stepping with Up/Down,
column stepping with Left/Right, match overlays and their removal.
"""

from typing import Callable

import pytest

from pound.core import SearchEngine
from pound.core.CursorModel import CursorModel
from pound.core.Events import EditorKey
from pound.core.HighlightProfile import Highlight, HighlightProfile
from pound.core.SearchEngine import SearchDirection
from pound.core.TextBuffer import TextBuffer


def _match_spans(buffer: TextBuffer) -> list:
    return [
        (row, col)
        for row, line in enumerate(buffer)
        for col, tag in enumerate(line.tags)
        if tag == Highlight.SEARCH_MATCH
    ]


@pytest.fixture
def cursor() -> CursorModel:
    return CursorModel(screen_rows=10, screen_columns=40)


def test_down_up_escape_scenario(cursor: CursorModel) -> None:
    """First step hits row 0, Down moves to row 1, Up comes back, end removes every overlay."""
    buffer = TextBuffer(["apple", "banana apple"])
    before = [list(line.tags) for line in buffer]
    state = SearchEngine.start()

    assert SearchEngine.step(state, buffer, cursor, "apple", EditorKey.INSERT)
    assert cursor.position == (0, 0)
    assert buffer[0].tags == [Highlight.SEARCH_MATCH] * 5

    assert SearchEngine.step(state, buffer, cursor, "apple", EditorKey.DOWN)
    assert cursor.position == (7, 1)
    assert buffer[0].tags == before[0]
    assert buffer[1].tags[7:] == [Highlight.SEARCH_MATCH] * 5

    assert SearchEngine.step(state, buffer, cursor, "apple", EditorKey.UP)
    assert cursor.position == (0, 0)
    assert buffer[1].tags == before[1]

    SearchEngine.end(state, buffer)

    assert [line.tags for line in buffer] == before
    assert _match_spans(buffer) == []
    assert state.saved is None


def test_no_wraparound(cursor: CursorModel) -> None:
    buffer = TextBuffer(["apple", "banana apple"])
    state = SearchEngine.start()
    SearchEngine.step(state, buffer, cursor, "apple")

    assert not SearchEngine.step(state, buffer, cursor, "apple", EditorKey.UP)
    assert cursor.position == (0, 0)

    assert SearchEngine.step(state, buffer, cursor, "apple", EditorKey.DOWN)
    assert not SearchEngine.step(state, buffer, cursor, "apple", EditorKey.DOWN)
    assert cursor.position == (7, 1)
    assert _match_spans(buffer) == [(1, col) for col in range(7, 12)]


def test_left_and_right_step_within_the_row(cursor: CursorModel) -> None:
    buffer = TextBuffer(["ab ab ab", "ab"])
    state = SearchEngine.start()

    SearchEngine.step(state, buffer, cursor, "ab")
    assert SearchEngine.step(state, buffer, cursor, "ab", EditorKey.RIGHT)
    assert cursor.position == (3, 0)
    assert SearchEngine.step(state, buffer, cursor, "ab", EditorKey.RIGHT)
    assert cursor.position == (6, 0)
    assert not SearchEngine.step(state, buffer, cursor, "ab", EditorKey.RIGHT)
    assert cursor.position == (6, 0)

    assert SearchEngine.step(state, buffer, cursor, "ab", EditorKey.LEFT)
    assert cursor.position == (3, 0)
    assert state.x_direction is SearchDirection.BACKWARD
    assert _match_spans(buffer) == [(0, 3), (0, 4)]


def test_backward_column_miss_aborts_the_sweep(cursor: CursorModel) -> None:
    buffer = TextBuffer(["ab", "xx ab", "zz", "ab"])
    state = SearchEngine.start()
    SearchEngine.step(state, buffer, cursor, "ab")
    SearchEngine.step(state, buffer, cursor, "ab", EditorKey.DOWN)
    assert cursor.position == (3, 1)

    # Down is still active; row 2 has nothing before column 3, so row 3 is never tried.
    assert not SearchEngine.step(state, buffer, cursor, "ab", EditorKey.LEFT)
    assert state.y_direction is SearchDirection.FORWARD
    assert cursor.position == (3, 1)


def test_typing_restarts_from_the_top_and_restores_overlay(cursor: CursorModel) -> None:
    buffer = TextBuffer(["one", "two", "one"])
    state = SearchEngine.start()
    SearchEngine.step(state, buffer, cursor, "one")
    SearchEngine.step(state, buffer, cursor, "one", EditorKey.DOWN)
    assert cursor.cursor_y == 2

    assert not SearchEngine.step(state, buffer, cursor, "onex", EditorKey.INSERT)
    assert state.y_direction is None
    assert _match_spans(buffer) == []

    assert SearchEngine.step(state, buffer, cursor, "one", EditorKey.BACKSPACE)
    assert cursor.cursor_y == 0


def test_empty_query_is_a_no_op(cursor: CursorModel) -> None:
    buffer = TextBuffer(["abc"])
    state = SearchEngine.start()
    assert not SearchEngine.step(state, buffer, cursor, "")
    assert _match_spans(buffer) == []
    assert cursor.position == (0, 0)


def test_match_after_tab_maps_cursor_to_logical_column(cursor: CursorModel) -> None:
    buffer = TextBuffer(["\tneedle"])
    state = SearchEngine.start()
    assert SearchEngine.step(state, buffer, cursor, "needle")
    assert state.x_index == 8
    assert cursor.cursor_x == 1


def test_match_forces_rescroll(cursor: CursorModel) -> None:
    buffer = TextBuffer([""] * 30 + ["target"])
    state = SearchEngine.start()
    SearchEngine.step(state, buffer, cursor, "target")
    assert cursor.viewport.row_offset == buffer.row_count
    cursor.scroll(buffer)
    assert cursor.viewport.row_offset == 30


def test_overlay_is_restored_over_syntax_tags(
    make_buffer: Callable, x_profile: HighlightProfile, cursor: CursorModel
) -> None:
    buffer = make_buffer(["x = 1 // x"], x_profile)
    before = list(buffer[0].tags)
    state = SearchEngine.start()

    SearchEngine.step(state, buffer, cursor, "1 //")
    assert buffer[0].tags[4:8] == [Highlight.SEARCH_MATCH] * 4

    SearchEngine.end(state, buffer)
    assert buffer[0].tags == before


def test_restore_after_row_changed_retags(
    make_buffer: Callable, x_profile: HighlightProfile, cursor: CursorModel
) -> None:
    buffer = make_buffer(["x"], x_profile)
    state = SearchEngine.start()
    SearchEngine.step(state, buffer, cursor, "x")

    buffer[0].logical_text = "x 1"
    buffer[0].update_render()
    SearchEngine.end(state, buffer)

    assert buffer[0].tags == ["keyword", Highlight.NORMAL, Highlight.NUMBER]
