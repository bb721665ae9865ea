# pound/core/SearchEngine.py
"""SearchEngine Module for the Pound Editor
=========================================
Incremental, direction-aware search over the render text of a buffer.

A search session is an explicit `SearchState` value created by `start()`,
passed into every `step()` call and closed by `end()`. The engine keeps no
state of its own.

While a match is shown, the matched span of its row is overlaid with
``Highlight.SEARCH_MATCH``. The row's previous tags are kept in the session
(at most one snapshot at a time) and written back before the next overlay,
when the query text changes, and when the session ends, so no match tag
survives the session.

Stepping:
---------
- Typing (no arrow key): directions reset, the sweep starts at the top row
  and takes the first occurrence in each row.
- Down / Up: continue on the rows after / before the last match. Upward
  sweeps stop at row 0; there is no wrap-around in either direction.
- Right / Left: continue after / before the last match column. Searching
  left only looks at the prefix before the last match and gives up as soon
  as a row has no earlier occurrence.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional

from pound.core.Events import EditorKey
from pound.core.HighlightProfile import Highlight


if TYPE_CHECKING:
    from pound.core.CursorModel import CursorModel
    from pound.core.TextBuffer import TextBuffer


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


Y_KEYS = {EditorKey.DOWN: SearchDirection.FORWARD, EditorKey.UP: SearchDirection.BACKWARD}
X_KEYS = {EditorKey.RIGHT: SearchDirection.FORWARD, EditorKey.LEFT: SearchDirection.BACKWARD}


@dataclass
class SearchState:
    """Mutable state of one search session.

    Attributes:
        y_index (int): Row of the last match.
        x_index (int): Render column of the last match.
        y_direction (Optional[SearchDirection]): Row stepping direction.
        x_direction (Optional[SearchDirection]): Column stepping direction.
        saved (Optional[tuple[int, list[str]]]): Row index and its tags from
            before the current overlay.
        query (str): Current query text.
    """

    y_index: int = 0
    x_index: int = 0
    y_direction: Optional[SearchDirection] = None
    x_direction: Optional[SearchDirection] = None
    saved: Optional[tuple[int, list[str]]] = None
    query: str = ""


def start() -> SearchState:
    """Opens a search session."""
    logging.debug("Search: session started.")
    return SearchState()


def restore_highlight(state: SearchState, buffer: "TextBuffer") -> None:
    """Writes the saved tag snapshot back onto its row and forgets it."""
    if state.saved is None:
        return
    row, tags = state.saved
    state.saved = None
    if 0 <= row < buffer.row_count and len(tags) == buffer[row].render_length:
        buffer[row].tags = tags
    else:
        # The row changed under the session; let the engine rebuild it.
        buffer.highlighter.update(buffer.lines, row)


def _candidate_rows(state: SearchState, row_count: int) -> Iterator[int]:
    if state.y_direction is None and state.x_direction is not None:
        # column stepping stays on the last matched row
        if state.y_index < row_count:
            yield state.y_index
        return
    for i in range(row_count):
        if state.y_direction is SearchDirection.FORWARD:
            row = state.y_index + i + 1
            if row >= row_count:
                return
        elif state.y_direction is SearchDirection.BACKWARD:
            row = state.y_index - i - 1
            if row < 0:
                return
        else:
            row = i
        yield row


def _find_in_row(state: SearchState, render_text: str, query: str) -> Optional[int]:
    if state.x_direction is SearchDirection.FORWARD:
        start_at = min(len(render_text), state.x_index + 1)
        index = render_text.find(query, start_at)
    elif state.x_direction is SearchDirection.BACKWARD:
        index = render_text[: state.x_index].rfind(query)
    else:
        index = render_text.find(query)
    return index if index >= 0 else None


def step(
    state: SearchState,
    buffer: "TextBuffer",
    cursor: "CursorModel",
    query: str,
    key: Optional[EditorKey] = None,
) -> bool:
    """Processes one prompt event of an active session.

    Args:
        state (SearchState): The session, updated in place.
        buffer (TextBuffer): Buffer being searched.
        cursor (CursorModel): Moved to the match when one is found.
        query (str): The query text after this event.
        key (Optional[EditorKey]): The key of this event; arrow keys step,
            anything else counts as a change to the query text.

    Returns:
        bool: True if a match was found and the cursor moved.
    """
    if key not in Y_KEYS and key not in X_KEYS:
        state.y_direction = None
        state.x_direction = None
        restore_highlight(state, buffer)
    if key in Y_KEYS:
        state.y_direction = Y_KEYS[key]
    if key in X_KEYS:
        state.x_direction = X_KEYS[key]
    state.query = query

    if not query:
        return False

    for row in _candidate_rows(state, buffer.row_count):
        line = buffer[row]
        index = _find_in_row(state, line.render_text, query)
        if index is None:
            if state.x_direction is SearchDirection.BACKWARD:
                break
            continue

        restore_highlight(state, buffer)
        state.saved = (row, list(line.tags))
        end = min(index + len(query), line.render_length)
        line.tags[index:end] = [Highlight.SEARCH_MATCH] * (end - index)

        cursor.cursor_y = row
        cursor.cursor_x = line.render_to_logical(index)
        state.y_index = row
        state.x_index = index
        cursor.force_rescroll(buffer)
        logging.debug(f"Search: '{query}' matched at ({row},{index}).")
        return True

    logging.debug(f"Search: no match for '{query}'.")
    return False


def end(state: SearchState, buffer: "TextBuffer") -> None:
    """Closes the session: restores any overlaid row and clears the state."""
    restore_highlight(state, buffer)
    state.y_index = 0
    state.x_index = 0
    state.y_direction = None
    state.x_direction = None
    state.query = ""
    logging.debug("Search: session ended.")
