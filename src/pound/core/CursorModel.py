# pound/core/CursorModel.py
"""CursorModel Module for the Pound Editor
========================================
Logical cursor position plus the viewport (scroll offsets) over a
`TextBuffer`.

``cursor_x`` is a logical column and ``cursor_y`` a row index. ``cursor_y``
may equal the buffer's row count: that is the virtual row after the last line,
where typing appends a new line. ``render_x`` is the cursor's column in the
tab-expanded render text, recomputed by `scroll()` before every paint.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pound.core.TextBuffer import TextBuffer


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


@dataclass
class Viewport:
    """Visible window over the buffer, in rows and render columns."""

    screen_rows: int
    screen_columns: int
    row_offset: int = 0
    column_offset: int = 0

    def contains(self, row: int, render_x: int) -> bool:
        return (
            self.row_offset <= row < self.row_offset + self.screen_rows
            and self.column_offset <= render_x < self.column_offset + self.screen_columns
        )


## ==================== CursorModel Class ====================
class CursorModel:
    """Class CursorModel
    ====================
    Moves the cursor over a buffer and keeps it inside the viewport.

    Attributes:
        cursor_x (int): Logical column.
        cursor_y (int): Row index, ``0 <= cursor_y <= buffer.row_count``.
        render_x (int): Render column of the cursor, as of the last `scroll()`.
        viewport (Viewport): Scroll offsets and screen dimensions.
    """

    def __init__(self, screen_rows: int, screen_columns: int):
        self.cursor_x = 0
        self.cursor_y = 0
        self.render_x = 0
        self.viewport = Viewport(max(1, screen_rows), max(1, screen_columns))

    @property
    def position(self) -> tuple[int, int]:
        return self.cursor_x, self.cursor_y

    def _row_length(self, buffer: "TextBuffer", row: int) -> int:
        if 0 <= row < buffer.row_count:
            return len(buffer[row])
        return 0

    def _current_render_x(self, buffer: "TextBuffer") -> int:
        if self.cursor_y < buffer.row_count:
            return buffer[self.cursor_y].logical_to_render(self.cursor_x)
        return 0

    def move(self, direction: Direction, buffer: "TextBuffer") -> None:
        """Moves the cursor one step in `direction`, then clamps `cursor_x`.

        Args:
            direction (Direction): Requested movement.
            buffer (TextBuffer): The buffer being navigated.
        """
        row_count = buffer.row_count

        if direction is Direction.UP:
            self.cursor_y = max(0, self.cursor_y - 1)
        elif direction is Direction.DOWN:
            self.cursor_y = min(self.cursor_y + 1, row_count)
        elif direction is Direction.LEFT:
            if self.cursor_x > 0:
                self.cursor_x -= 1
            elif self.cursor_y > 0:
                self.cursor_y -= 1
                self.cursor_x = self._row_length(buffer, self.cursor_y)
        elif direction is Direction.RIGHT:
            if self.cursor_y < row_count:
                line = buffer[self.cursor_y]
                render_x = line.logical_to_render(self.cursor_x)
                if render_x < line.render_length:
                    self.cursor_x += 1
                elif render_x == line.render_length and self.cursor_y + 1 < row_count:
                    self.cursor_y += 1
                    self.cursor_x = 0
        elif direction is Direction.HOME:
            self.cursor_x = 0
        elif direction is Direction.END:
            self.cursor_x = self._row_length(buffer, self.cursor_y)
        elif direction is Direction.PAGE_UP:
            self.cursor_y = self.viewport.row_offset
            for _ in range(self.viewport.screen_rows):
                self.move(Direction.UP, buffer)
        elif direction is Direction.PAGE_DOWN:
            self.cursor_y = min(
                self.viewport.row_offset + self.viewport.screen_rows - 1, row_count
            )
            for _ in range(self.viewport.screen_rows):
                self.move(Direction.DOWN, buffer)

        self.cursor_x = min(self.cursor_x, self._row_length(buffer, self.cursor_y))
        logging.debug(f"cursor {direction.value} -> ({self.cursor_y},{self.cursor_x})")

    def scroll(self, buffer: "TextBuffer") -> None:
        """Recomputes `render_x` and the minimal offsets that keep the cursor visible."""
        view = self.viewport
        self.render_x = self._current_render_x(buffer)

        view.row_offset = min(view.row_offset, self.cursor_y)
        if self.cursor_y >= view.row_offset + view.screen_rows:
            view.row_offset = self.cursor_y - view.screen_rows + 1

        view.column_offset = min(view.column_offset, self.render_x)
        if self.render_x >= view.column_offset + view.screen_columns:
            view.column_offset = self.render_x - view.screen_columns + 1

    def force_rescroll(self, buffer: "TextBuffer") -> None:
        """Pushes `row_offset` past the end so the next `scroll()` puts the
        cursor row at the top of the window."""
        self.viewport.row_offset = buffer.row_count

    def resize(self, screen_rows: int, screen_columns: int) -> None:
        self.viewport.screen_rows = max(1, screen_rows)
        self.viewport.screen_columns = max(1, screen_columns)

    def set_position(self, cursor_x: int, cursor_y: int, buffer: "TextBuffer") -> None:
        """Places the cursor, clamping it into the buffer (virtual row included)."""
        self.cursor_y = max(0, min(cursor_y, buffer.row_count))
        self.cursor_x = max(0, min(cursor_x, self._row_length(buffer, self.cursor_y)))
