# pound/core/Events.py
"""Abstract input events consumed by the editor core.

Decoding raw terminal bytes into these events is the job of an external
reader; the core only ever sees `KeyEvent` values, one at a time.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EditorKey(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    INSERT = "insert"  # printable character or tab, carried in KeyEvent.char
    BACKSPACE = "backspace"
    DELETE = "delete"
    ENTER = "enter"
    ESCAPE = "escape"
    SAVE = "save"
    FIND = "find"
    QUIT = "quit"


ARROW_KEYS = frozenset({EditorKey.UP, EditorKey.DOWN, EditorKey.LEFT, EditorKey.RIGHT})


@dataclass(frozen=True)
class KeyEvent:
    key: EditorKey
    char: Optional[str] = None

    @classmethod
    def insert(cls, char: str) -> "KeyEvent":
        return cls(EditorKey.INSERT, char)
