# pound/core/TextBuffer.py
"""TextBuffer Module for the Pound Editor
=======================================
This module provides the `TextBuffer` class: the ordered collection of `Line`
objects making up one document, its optional file path and its dirty counter.

Responsibilities:
-----------------
- Loading a file: encoding detection with ``chardet``, splitting on newline
  boundaries, and a single full highlighting pass.
- Saving: logical lines joined by ``\\n``, written over the file so that it is
  truncated to the exact new length.
- Structural and character edits (insert/delete characters, insert/join/split
  rows). Every edit re-renders the touched line(s) and hands them to the
  buffer's `HighlightEngine` before returning, so the tag invariant holds for
  every line whenever control is back with the caller.

Column arguments are logical columns. Out-of-range positions are clamped or
ignored rather than raising: the cursor model treats ``row == len(buffer)`` as
a valid virtual row and the buffer follows suit.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Union

import chardet

from pound.core.ColumnMapper import ColumnMapper
from pound.core.errors import NoFilenameError
from pound.core.HighlightEngine import HighlightEngine
from pound.core.Line import Line


logger = logging.getLogger("pound")

CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75

PathLike = Union[str, os.PathLike]


def split_lines(content: str) -> list[str]:
    """Splits file content on ``\\n`` boundaries.

    A trailing ``\\r`` is dropped from each line and a final newline does not
    produce an extra empty line. Empty content yields no lines.
    """
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def decode_content(raw: bytes) -> tuple[str, str]:
    """Decodes raw file bytes, returning ``(text, encoding)``.

    A confident ``chardet`` guess is tried first, then UTF-8 and Latin-1;
    Latin-1 accepts any byte sequence so decoding always succeeds.
    """
    if not raw:
        return "", "utf-8"

    detected = chardet.detect(raw[:CHARDET_SAMPLE_SIZE])
    guess = detected.get("encoding")
    confidence = detected.get("confidence") or 0.0
    logger.debug(f"Chardet detected encoding '{guess}' with confidence {confidence:.2f}.")

    if guess and guess.lower() == "ascii":
        # ascii is a subset of utf-8
        guess = "utf-8"

    candidates: list[str] = []
    if guess and confidence >= CHARDET_MIN_CONFIDENCE:
        candidates.append(guess)
    candidates.extend(enc for enc in ("utf-8", "latin-1") if enc not in candidates)

    for encoding in candidates:
        try:
            return raw.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Decoding with '{encoding}' failed: {e}")
    return raw.decode("utf-8", errors="replace"), "utf-8"


## ==================== TextBuffer Class ====================
class TextBuffer:
    """Class TextBuffer
    ===================
    An ordered, exclusively owned sequence of lines plus file binding.

    Attributes:
        lines (list[Line]): Rows in file order.
        path (Optional[Path]): File the buffer is bound to, if any.
        dirty (int): Number of edits since the last load or successful save.
        encoding (str): Encoding used to decode the file, reused when saving
            unless the text no longer fits it, in which case saving switches
            to utf-8.
        mapper (ColumnMapper): Tab expansion shared by every line.
        highlighter (HighlightEngine): Classifies lines after each edit.
    """

    def __init__(
        self,
        lines: Optional[list[str]] = None,
        path: Optional[PathLike] = None,
        mapper: Optional[ColumnMapper] = None,
        highlighter: Optional[HighlightEngine] = None,
    ):
        self.mapper = mapper or ColumnMapper()
        self.highlighter = highlighter or HighlightEngine()
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.encoding = "utf-8"
        self.dirty = 0
        self.lines: list[Line] = [Line(text, self.mapper) for text in (lines or [])]
        self.highlighter.highlight_all(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, row: int) -> Line:
        return self.lines[row]

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    @property
    def row_count(self) -> int:
        return len(self.lines)

    @property
    def filename(self) -> Optional[str]:
        return self.path.name if self.path else None

    def text(self) -> list[str]:
        """Returns the logical text of every line."""
        return [line.logical_text for line in self.lines]

    def set_highlighter(self, highlighter: HighlightEngine) -> None:
        """Switches the highlighting engine and retags the whole buffer once."""
        self.highlighter = highlighter
        self.highlighter.highlight_all(self.lines)

    # --- File I/O ---

    def load(self, path: PathLike, highlighter: Optional[HighlightEngine] = None) -> None:
        """Replaces the buffer content with the file at `path`.

        Args:
            path: File to read.
            highlighter: Engine to use from now on, typically one built for
                the file's type. Keeps the current engine when omitted.

        Raises:
            OSError: The file cannot be read. Fatal at start-up; the buffer
                is left untouched.
        """
        target = Path(path)
        try:
            raw = target.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read file '{target}': {e}", exc_info=True)
            raise

        content, encoding = decode_content(raw)
        self.lines = [Line(text, self.mapper) for text in split_lines(content)]
        self.path = target
        self.encoding = encoding
        self.dirty = 0
        if highlighter is not None:
            self.highlighter = highlighter
        self.highlighter.highlight_all(self.lines)
        logger.info(f"Loaded '{target}' ({len(self.lines)} lines, encoding '{encoding}').")

    def save(self, path: Optional[PathLike] = None) -> int:
        """Writes the logical lines, joined by ``\\n``, to the bound file.

        Args:
            path: Optional new target. When given, the buffer is bound to it
                once the write succeeds (save-as).

        Returns:
            int: Number of bytes written.

        Raises:
            NoFilenameError: No path is bound and none was supplied.
            OSError: The write failed; `dirty` and `path` are left unchanged.
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise NoFilenameError("no filename bound to buffer")

        content = "\n".join(self.text())
        try:
            data = content.encode(self.encoding)
        except UnicodeEncodeError as e:
            logger.warning(
                f"Text cannot be encoded as '{self.encoding}' ({e.reason} at {e.start}); saving as utf-8."
            )
            self.encoding = "utf-8"
            data = content.encode(self.encoding)
        try:
            # "wb" truncates, so the file ends up exactly len(data) bytes long.
            with open(target, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error(f"Failed to write file '{target}': {e}", exc_info=True)
            raise

        self.path = target
        self.dirty = 0
        logger.info(f"{len(data)} bytes written to '{target}'.")
        return len(data)

    # --- Edits ---

    def insert_row(self, at: int, text: str = "") -> None:
        at = max(0, min(at, len(self.lines)))
        self.lines.insert(at, Line(text, self.mapper))
        self.highlighter.update(self.lines, at)
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        if not 0 <= at < len(self.lines):
            return
        del self.lines[at]
        if at < len(self.lines):
            # The successor now follows a different line; re-seed it.
            self.highlighter.update(self.lines, at)
        self.dirty += 1

    def insert_char(self, row: int, col: int, char: str) -> None:
        if not 0 <= row < len(self.lines):
            return
        self.lines[row].insert_char(col, char)
        self.highlighter.update(self.lines, row)
        self.dirty += 1
        logger.debug(f"TextBuffer: inserted {char!r} at ({row},{col}).")

    def delete_char(self, row: int, col: int) -> None:
        if not 0 <= row < len(self.lines) or not 0 <= col < len(self.lines[row]):
            return
        self.lines[row].delete_char(col)
        self.highlighter.update(self.lines, row)
        self.dirty += 1
        logger.debug(f"TextBuffer: deleted char at ({row},{col}).")

    def split_row(self, row: int, col: int) -> None:
        """Breaks `row` at logical column `col`; the tail becomes a new row below."""
        if not 0 <= row < len(self.lines):
            return
        tail = self.lines[row].split_off(col)
        self.lines.insert(row + 1, Line(tail, self.mapper))
        self.highlighter.update(self.lines, row, row + 2)
        self.dirty += 1

    def join_rows(self, at: int) -> None:
        """Appends row `at` to row ``at - 1`` and removes it."""
        if not 0 < at < len(self.lines):
            return
        current = self.lines.pop(at)
        self.lines[at - 1].append_text(current.logical_text)
        self.highlighter.update(self.lines, at - 1)
        self.dirty += 1
