# pound/core/HighlightEngine.py
"""HighlightEngine Module for the Pound Editor
============================================
This module provides the `HighlightEngine` class, a single-pass heuristic
lexer that classifies every rendered character of a line and carries
block-comment state from one line to the next.

Key Features:
-------------
- One shared scanning procedure for every language; the language-specific
  parts come from an immutable `HighlightProfile`.
- Recognises line comments, block comments spanning lines, double-quoted
  strings, single-quoted character literals (with backslash escapes),
  numbers and keyword groups.
- Incremental retagging: after an edit only the touched lines are scanned,
  then the engine walks forward while the continuation flag handed to the
  next line differs from the flag that line was last classified with.
  The walk is iterative, so an unterminated block comment at the top of a
  very large file costs one pass and no recursion depth.

This is not a parser: classification looks at one line at a time and
only carries the block-comment flag across lines.
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from pound.core.HighlightProfile import Highlight, HighlightProfile


if TYPE_CHECKING:
    from pound.core.Line import Line

SEPARATORS = frozenset(",.()+-/*=~%<>\"';&")

QUOTE_TAGS = {'"': Highlight.STRING, "'": Highlight.CHAR_LITERAL}


def is_separator(char: str) -> bool:
    """True for whitespace and the fixed punctuation separator set."""
    return char.isspace() or char in SEPARATORS


## ==================== HighlightEngine Class ====================
class HighlightEngine:
    """Class HighlightEngine
    =======================
    Retags lines of a buffer according to one optional `HighlightProfile`.

    The engine itself holds no per-buffer state; everything it carries between
    lines lives on the lines (`continues_block_comment` and
    `starts_in_block_comment`). With ``profile=None`` every character is
    tagged ``Highlight.NORMAL`` and no line continues a block comment.

    Attributes:
        profile (Optional[HighlightProfile]): Active file-type definition.

    Methods:
        classify(render_text, starts_in_comment) -> tuple[list[str], bool]:
            Tags one line given the predecessor's continuation flag.
        retag(lines, at):
            Classifies a single line in place.
        update(lines, start, stop=None):
            Retags ``lines[start:stop]`` and propagates forward.
        highlight_all(lines):
            Full-document pass, used at load and after the profile changes.
    """

    def __init__(self, profile: Optional[HighlightProfile] = None):
        self.profile = profile

    @property
    def file_type(self) -> Optional[str]:
        return self.profile.file_type if self.profile else None

    def classify(self, render_text: str, starts_in_comment: bool) -> tuple[list[str], bool]:
        """Classifies one rendered line.

        Args:
            render_text (str): The tab-expanded text of the line.
            starts_in_comment (bool): Whether the previous line ended inside an
                unterminated block comment.

        Returns:
            tuple[list[str], bool]: One tag per character of `render_text`, and
            whether this line ends inside a block comment.
        """
        profile = self.profile
        length = len(render_text)
        if profile is None:
            return [Highlight.NORMAL] * length, False

        tags: list[str] = []
        line_comment = profile.line_comment
        block = profile.block_comment
        in_string: Optional[str] = None
        in_comment = starts_in_comment
        previous_separator = True

        i = 0
        while i < length:
            char = render_text[i]
            previous_tag = tags[i - 1] if i > 0 else Highlight.NORMAL

            # line comment: the rest of the line is a comment
            if (
                in_string is None
                and not in_comment
                and line_comment
                and render_text.startswith(line_comment, i)
            ):
                tags.extend([Highlight.COMMENT] * (length - i))
                break

            if in_string is not None:
                string_tag = QUOTE_TAGS[in_string]
                tags.append(string_tag)
                if char == "\\" and i + 1 < length:
                    tags.append(string_tag)
                    i += 2
                    continue
                if char == in_string:
                    in_string = None
                i += 1
                previous_separator = True
                continue

            if char in QUOTE_TAGS and not in_comment:
                in_string = char
                tags.append(QUOTE_TAGS[char])
                i += 1
                continue

            if not in_comment and (
                (char.isdigit() and (previous_separator or previous_tag == Highlight.NUMBER))
                or (char == "." and previous_tag == Highlight.NUMBER)
            ):
                tags.append(Highlight.NUMBER)
                i += 1
                previous_separator = False
                continue

            if previous_separator and not in_comment:
                keyword = self._match_keyword(render_text, i)
                if keyword is not None:
                    tag, size = keyword
                    tags.extend([tag] * size)
                    i += size
                    previous_separator = False
                    continue

            if block is not None:
                opener, closer = block
                if in_comment:
                    if render_text.startswith(closer, i):
                        tags.extend([Highlight.BLOCK_COMMENT] * len(closer))
                        i += len(closer)
                        in_comment = False
                        previous_separator = True
                    else:
                        tags.append(Highlight.BLOCK_COMMENT)
                        i += 1
                    continue
                if render_text.startswith(opener, i):
                    tags.extend([Highlight.BLOCK_COMMENT] * len(opener))
                    i += len(opener)
                    in_comment = True
                    continue

            tags.append(Highlight.NORMAL)
            previous_separator = is_separator(char)
            i += 1

        return tags, in_comment

    def _match_keyword(self, render_text: str, i: int) -> Optional[tuple[str, int]]:
        """Returns ``(tag, length)`` of the first keyword starting at `i`, if any.

        A keyword only matches when followed by a separator or the end of line.
        """
        for group in self.profile.keyword_groups:
            for word in group.words:
                end = i + len(word)
                if not render_text.startswith(word, i):
                    continue
                if end == len(render_text) or is_separator(render_text[end]):
                    return group.tag, len(word)
        return None

    def retag(self, lines: Sequence["Line"], at: int) -> None:
        """Classifies ``lines[at]`` in place using its predecessor's flag."""
        line = lines[at]
        starts_in_comment = at > 0 and lines[at - 1].continues_block_comment
        tags, ends_in_comment = self.classify(line.render_text, starts_in_comment)
        line.tags = tags
        line.continues_block_comment = ends_in_comment
        line.starts_in_block_comment = starts_in_comment
        line.check_invariant()

    def update(self, lines: Sequence["Line"], start: int, stop: Optional[int] = None) -> int:
        """Retags ``lines[start:stop]`` then propagates the continuation flag.

        After the directly edited range, the next line is retagged whenever the
        flag it was last seeded with differs from its predecessor's current
        flag; the walk ends at the first line that is already consistent or at
        the end of the buffer.

        Args:
            lines (Sequence[Line]): The buffer's lines.
            start (int): First line to retag.
            stop (Optional[int]): One past the last line that must be retagged
                unconditionally. Defaults to ``start + 1``.

        Returns:
            int: Number of lines retagged.
        """
        count = len(lines)
        if not 0 <= start < count:
            return 0
        stop = min(count, start + 1 if stop is None else stop)

        retagged = 0
        for i in range(start, stop):
            self.retag(lines, i)
            retagged += 1

        i = stop
        while i < count and lines[i].starts_in_block_comment != lines[i - 1].continues_block_comment:
            self.retag(lines, i)
            retagged += 1
            i += 1

        if retagged > stop - start:
            logging.debug(
                f"HighlightEngine: continuation change propagated over {retagged - (stop - start)} line(s) "
                f"after row {stop - 1}."
            )
        return retagged

    def highlight_all(self, lines: Sequence["Line"]) -> None:
        """Retags every line from the top, once."""
        for i in range(len(lines)):
            self.retag(lines, i)
        logging.debug(
            f"HighlightEngine: full pass over {len(lines)} line(s) "
            f"with profile '{self.file_type or 'none'}'."
        )
