# src/pound/core/__init__.py
"""Public facade for pound.core: re-export the main classes from CamelCase modules.

Keeps one-class-per-module file names (TextBuffer.py, HighlightEngine.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .ColumnMapper import ColumnMapper  # noqa: F401
from .CursorModel import CursorModel, Direction, Viewport  # noqa: F401
from .Editor import Editor  # noqa: F401
from .errors import NoFilenameError, PoundError, TagInvariantError  # noqa: F401
from .Events import EditorKey, KeyEvent  # noqa: F401
from .HighlightEngine import HighlightEngine  # noqa: F401
from .HighlightProfile import Highlight, HighlightProfile, KeywordGroup  # noqa: F401
from .Line import Line  # noqa: F401
from .SearchEngine import SearchState  # noqa: F401
from .TextBuffer import TextBuffer  # noqa: F401


__all__ = [
    "ColumnMapper",
    "CursorModel",
    "Direction",
    "Viewport",
    "Editor",
    "EditorKey",
    "KeyEvent",
    "Highlight",
    "HighlightEngine",
    "HighlightProfile",
    "KeywordGroup",
    "Line",
    "NoFilenameError",
    "PoundError",
    "SearchState",
    "TagInvariantError",
    "TextBuffer",
]
