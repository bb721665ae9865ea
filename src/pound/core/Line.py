# pound/core/Line.py
"""Line Module for the Pound Editor
=================================
A `Line` is one row of the buffer: its logical text, the tab-expanded render
text derived from it, one highlight tag per rendered character, and the
"ends inside a block comment" continuation flag consumed by the next line.

Every logical edit rebuilds the render text and resets the tags to
``Highlight.NORMAL`` so that ``len(tags) == len(render_text)`` holds the
moment the edit returns. The owning `TextBuffer` then asks its
`HighlightEngine` to classify the line properly.
"""

from typing import Optional

from pound.core.ColumnMapper import ColumnMapper
from pound.core.errors import TagInvariantError
from pound.core.HighlightProfile import Highlight


DEFAULT_MAPPER = ColumnMapper()


class Line:
    """One row of text with its render form and highlight tags.

    Attributes:
        logical_text (str): The raw characters, tabs included.
        render_text (str): `logical_text` with tabs expanded to spaces.
        tags (list[str]): One highlight tag per character of `render_text`.
        continues_block_comment (bool): True when the line ends inside an
            unterminated block comment.
        starts_in_block_comment (Optional[bool]): The predecessor's flag this
            line was last classified with; ``None`` until first classified or
            after an edit.
    """

    def __init__(self, logical_text: str = "", mapper: Optional[ColumnMapper] = None):
        self.mapper = mapper or DEFAULT_MAPPER
        self.logical_text = logical_text
        self.render_text = ""
        self.tags: list[str] = []
        self.continues_block_comment = False
        self.starts_in_block_comment: Optional[bool] = None
        self.update_render()

    def __repr__(self) -> str:
        return f"Line({self.logical_text!r})"

    def __len__(self) -> int:
        return len(self.logical_text)

    def update_render(self) -> None:
        """Rebuilds `render_text` from `logical_text` and resets the tags."""
        self.render_text = self.mapper.expand(self.logical_text)
        self.tags = [Highlight.NORMAL] * len(self.render_text)
        self.starts_in_block_comment = None

    def insert_char(self, at: int, char: str) -> None:
        at = max(0, min(at, len(self.logical_text)))
        self.logical_text = self.logical_text[:at] + char + self.logical_text[at:]
        self.update_render()

    def delete_char(self, at: int) -> None:
        if not 0 <= at < len(self.logical_text):
            return
        self.logical_text = self.logical_text[:at] + self.logical_text[at + 1:]
        self.update_render()

    def append_text(self, text: str) -> None:
        self.logical_text += text
        self.update_render()

    def split_off(self, at: int) -> str:
        """Truncates the line at logical column `at` and returns the removed tail."""
        at = max(0, min(at, len(self.logical_text)))
        tail = self.logical_text[at:]
        self.logical_text = self.logical_text[:at]
        self.update_render()
        return tail

    @property
    def render_length(self) -> int:
        return len(self.render_text)

    def logical_to_render(self, x: int) -> int:
        return self.mapper.logical_to_render(self.logical_text, x)

    def render_to_logical(self, render_x: int) -> int:
        return self.mapper.render_to_logical(self.logical_text, render_x)

    def check_invariant(self) -> None:
        """Raises `TagInvariantError` if the tags no longer cover the render text."""
        if len(self.tags) != len(self.render_text):
            raise TagInvariantError(len(self.render_text), len(self.tags))
