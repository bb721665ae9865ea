# pound/core/Editor.py
"""pound.core.Editor
====================
Editor: the facade over the Pound editing core.

This module defines the `Editor` class, which owns one `TextBuffer`, one
`CursorModel` and, while a search prompt is open, one `SearchState`. It
exposes the core operations to the terminal front end:

- Navigation: `move`
- Editing: `insert_char`, `delete_char` (backspace), `delete_forward`,
  `insert_newline`, `join_rows`
- Search: `start_search`, `step_search`, `end_search`
- Files: `load`, `save` (save-as when a path is given)
- Input dispatch: `handle_event` for the abstract `KeyEvent` stream
- Render boundary: `visible_rows` for the paint collaborator

Raw-mode handling, key decoding and drawing live outside this package. The
editor never touches the terminal.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from pound.core import SearchEngine
from pound.core.ColumnMapper import TAB_STOP, ColumnMapper
from pound.core.CursorModel import CursorModel, Direction
from pound.core.errors import NoFilenameError
from pound.core.Events import EditorKey, KeyEvent
from pound.core.HighlightEngine import HighlightEngine
from pound.core.HighlightProfile import HighlightProfile, profiles_from_config, resolve_profile
from pound.core.SearchEngine import SearchState
from pound.core.TextBuffer import PathLike, TextBuffer
from pound.utils.logging_config import KEY_LOGGER
from pound.utils.utils import DEFAULT_CONFIG, deep_merge


QUIT_TIMES = 2
HELP_MESSAGE = "HELP: Ctrl-Q = Quit | Ctrl-S = Save | Ctrl-F = Find"
SEARCH_PROMPT = "Search: {} (ESC / Arrows / Enter)"

MOVE_KEYS = {
    EditorKey.UP: Direction.UP,
    EditorKey.DOWN: Direction.DOWN,
    EditorKey.LEFT: Direction.LEFT,
    EditorKey.RIGHT: Direction.RIGHT,
    EditorKey.HOME: Direction.HOME,
    EditorKey.END: Direction.END,
    EditorKey.PAGE_UP: Direction.PAGE_UP,
    EditorKey.PAGE_DOWN: Direction.PAGE_DOWN,
}

PLAIN_PROFILE = HighlightProfile(file_type="text", extensions=frozenset())


@dataclass
class RenderedRow:
    """One visible row handed to the paint collaborator."""

    row: int
    text: str
    tags: list[str]
    colors: list[int]


## ==================== Editor Class ====================
class Editor:
    """Class Editor
    ===============
    Owns the buffer, cursor and search session of one editing session.

    Attributes:
        config (dict): Merged configuration (see `pound.utils.utils.load_config`).
        buffer (TextBuffer): The document.
        cursor (CursorModel): Cursor position and viewport.
        search (Optional[SearchState]): The open search session, if any.
        status_message (str): Last message for the status bar.
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        screen_rows: int = 24,
        screen_columns: int = 80,
    ):
        self.config = config if config is not None else deep_merge({}, DEFAULT_CONFIG)
        editor_config = self.config.get("editor", {})
        self.mapper = ColumnMapper(int(editor_config.get("tab_stop", TAB_STOP)))
        self.profiles = profiles_from_config(self.config)
        self.buffer = TextBuffer(mapper=self.mapper)
        self.cursor = CursorModel(screen_rows, screen_columns)
        self.search: Optional[SearchState] = None
        self._pre_search_cursor: Optional[tuple[int, int, int, int]] = None
        self.quit_times = int(editor_config.get("quit_times", QUIT_TIMES))
        self._quit_countdown = self.quit_times
        self.status_message = HELP_MESSAGE

    # --- State helpers ---

    @property
    def profile(self) -> Optional[HighlightProfile]:
        return self.buffer.highlighter.profile

    @property
    def dirty(self) -> int:
        return self.buffer.dirty

    def _set_status_message(self, message: str) -> None:
        self.status_message = message
        logging.debug(f"Status: {message}")

    def _highlighter_for(self, filename: Optional[PathLike]) -> HighlightEngine:
        return HighlightEngine(resolve_profile(filename, self.profiles))

    def status_info(self) -> tuple[str, str]:
        """Left and right halves of the status bar."""
        modified = " (modified)" if self.dirty > 0 else ""
        left = f"{self.buffer.filename or '[No Name]'}{modified} - {self.buffer.row_count} lines"
        file_type = self.profile.file_type if self.profile else "no ft"
        right = f"{file_type} | {self.cursor.cursor_y + 1}/{self.buffer.row_count}"
        return left, right

    # --- Files ---

    def load(self, path: PathLike) -> None:
        """Opens `path`, resolves its highlight profile and resets the cursor.

        Raises:
            OSError: The file cannot be read.
        """
        self.buffer.load(path, highlighter=self._highlighter_for(path))
        self.cursor.set_position(0, 0, self.buffer)
        self.cursor.viewport.row_offset = 0
        self.cursor.viewport.column_offset = 0
        self._set_status_message(HELP_MESSAGE)

    def save(self, path: Optional[PathLike] = None) -> int:
        """Saves the buffer; with `path`, saves as that file.

        Save-as re-resolves the highlight profile from the new name and retags
        the whole buffer once.

        Returns:
            int: Bytes written.

        Raises:
            NoFilenameError: No path bound and none given.
            OSError: The write failed; the buffer stays dirty.
        """
        written = self.buffer.save(path)
        if path is not None:
            self.buffer.set_highlighter(self._highlighter_for(path))
        self._set_status_message(f"{written} bytes written to disk")
        return written

    # --- Navigation and editing ---

    def move(self, direction: Direction) -> None:
        self.cursor.move(direction, self.buffer)

    def insert_char(self, char: str) -> None:
        """Inserts `char` at the cursor; on the virtual row a new line is appended first."""
        if self.cursor.cursor_y == self.buffer.row_count:
            self.buffer.insert_row(self.buffer.row_count, "")
        self.buffer.insert_char(self.cursor.cursor_y, self.cursor.cursor_x, char)
        self.cursor.cursor_x += 1

    def delete_char(self) -> None:
        """Backspace: deletes the character left of the cursor or joins with the previous row."""
        cursor = self.cursor
        if cursor.cursor_y == self.buffer.row_count:
            return
        if cursor.cursor_x == 0 and cursor.cursor_y == 0:
            return
        if cursor.cursor_x > 0:
            self.buffer.delete_char(cursor.cursor_y, cursor.cursor_x - 1)
            cursor.cursor_x -= 1
        else:
            self.join_rows(cursor.cursor_y)

    def delete_forward(self) -> None:
        """Delete key: removes the character under the cursor or joins the next row."""
        row, col = self.cursor.cursor_y, self.cursor.cursor_x
        if row >= self.buffer.row_count:
            return
        if col < len(self.buffer[row]):
            self.buffer.delete_char(row, col)
        elif row + 1 < self.buffer.row_count:
            self.buffer.join_rows(row + 1)

    def insert_newline(self) -> None:
        """Splits the current row at the cursor and moves to the start of the new row."""
        cursor = self.cursor
        if cursor.cursor_x == 0:
            self.buffer.insert_row(cursor.cursor_y, "")
        else:
            self.buffer.split_row(cursor.cursor_y, cursor.cursor_x)
        cursor.cursor_y += 1
        cursor.cursor_x = 0

    def join_rows(self, at: int) -> None:
        """Appends row `at` to row ``at - 1``, keeping the cursor on the same text."""
        if not 0 < at < self.buffer.row_count:
            return
        join_column = len(self.buffer[at - 1])
        self.buffer.join_rows(at)
        cursor = self.cursor
        if cursor.cursor_y == at:
            cursor.cursor_y = at - 1
            cursor.cursor_x += join_column
        elif cursor.cursor_y > at:
            cursor.cursor_y -= 1

    # --- Search ---

    def start_search(self) -> SearchState:
        """Opens a search session, remembering the cursor for cancellation."""
        view = self.cursor.viewport
        self._pre_search_cursor = (
            self.cursor.cursor_x,
            self.cursor.cursor_y,
            view.row_offset,
            view.column_offset,
        )
        self.search = SearchEngine.start()
        self._set_status_message(SEARCH_PROMPT.format(""))
        return self.search

    def step_search(self, query: str, key: Optional[EditorKey] = None) -> bool:
        """Runs one incremental search step; opens a session if none is active."""
        if self.search is None:
            self.start_search()
        return SearchEngine.step(self.search, self.buffer, self.cursor, query, key)

    def end_search(self, cancel: bool = False) -> None:
        """Closes the search session; with `cancel`, returns the cursor to where it was."""
        if self.search is None:
            return
        SearchEngine.end(self.search, self.buffer)
        self.search = None
        if cancel and self._pre_search_cursor is not None:
            cursor_x, cursor_y, row_offset, column_offset = self._pre_search_cursor
            self.cursor.set_position(cursor_x, cursor_y, self.buffer)
            self.cursor.viewport.row_offset = row_offset
            self.cursor.viewport.column_offset = column_offset
        self._pre_search_cursor = None
        self._set_status_message("")

    def _handle_search_event(self, event: KeyEvent) -> None:
        state = self.search
        query = state.query
        key = event.key

        if key is EditorKey.ENTER:
            if query:
                self.end_search()
            return
        if key is EditorKey.ESCAPE:
            self.end_search(cancel=True)
            return
        if key in (EditorKey.BACKSPACE, EditorKey.DELETE):
            query = query[:-1]
        elif key is EditorKey.INSERT and event.char:
            query += event.char

        self.step_search(query, key)
        self._set_status_message(SEARCH_PROMPT.format(query))

    # --- Input dispatch ---

    def _handle_save(self) -> None:
        try:
            self.save()
        except NoFilenameError:
            self._set_status_message("Save aborted: no filename")
        except OSError as e:
            self._set_status_message(f"Error saving file: {str(e)[:60]}")

    def _handle_quit(self) -> bool:
        if self.dirty > 0 and self._quit_countdown > 0:
            self._set_status_message(
                f"WARNING! File has unsaved changes. Press Ctrl-Q {self._quit_countdown} more times to quit."
            )
            self._quit_countdown -= 1
            return True
        logging.info("Quit requested.")
        return False

    def handle_event(self, event: KeyEvent) -> bool:
        """Dispatches one abstract input event.

        While a search session is open the event edits the query or steps the
        search instead.

        Returns:
            bool: False when the editor should quit, True otherwise.
        """
        KEY_LOGGER.debug(f"event={event.key.value} char={event.char!r} search={self.search is not None}")

        if self.search is not None:
            self._handle_search_event(event)
            return True

        key = event.key
        if key is EditorKey.QUIT:
            return self._handle_quit()
        self._quit_countdown = self.quit_times

        if key in MOVE_KEYS:
            self.move(MOVE_KEYS[key])
        elif key is EditorKey.INSERT:
            if event.char:
                self.insert_char(event.char)
        elif key is EditorKey.BACKSPACE:
            self.delete_char()
        elif key is EditorKey.DELETE:
            self.delete_forward()
        elif key is EditorKey.ENTER:
            self.insert_newline()
        elif key is EditorKey.SAVE:
            self._handle_save()
        elif key is EditorKey.FIND:
            self.start_search()
        return True

    # --- Render boundary ---

    def display_attribute(self, tag: str) -> int:
        """xterm-256 colour index for `tag` under the active profile."""
        return (self.profile or PLAIN_PROFILE).color_for(tag, self.config.get("colors"))

    def visible_rows(self) -> list[RenderedRow]:
        """Scrolls the viewport to the cursor and returns the visible row slices.

        Rows past the end of the buffer are not included; the paint
        collaborator decides how to draw them.
        """
        self.cursor.scroll(self.buffer)
        view = self.cursor.viewport
        start = view.column_offset
        stop = view.column_offset + view.screen_columns

        rows: list[RenderedRow] = []
        for file_row in range(view.row_offset, min(view.row_offset + view.screen_rows, self.buffer.row_count)):
            line = self.buffer[file_row]
            tags = line.tags[start:stop]
            rows.append(
                RenderedRow(
                    row=file_row,
                    text=line.render_text[start:stop],
                    tags=tags,
                    colors=[self.display_attribute(tag) for tag in tags],
                )
            )
        return rows
