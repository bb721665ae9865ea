# tests/conftest.py
"""Pytest configuration with shared fixtures for the Pound editor tests.

Tooling: pytest, Ruff
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from pound.core.Editor import Editor
from pound.core.HighlightEngine import HighlightEngine
from pound.core.HighlightProfile import HighlightProfile, KeywordGroup
from pound.core.TextBuffer import TextBuffer
from pound.utils.utils import DEFAULT_CONFIG, deep_merge


# --- Profiles ---
@pytest.fixture
def x_profile() -> HighlightProfile:
    """A tiny profile: keyword group ``{x}``, ``//`` line comments, C block comments.

    Returns:
        HighlightProfile: Profile for the ``.tst`` extension.
    """
    return HighlightProfile(
        file_type="test",
        extensions=frozenset({"tst"}),
        line_comment="//",
        block_comment=("/*", "*/"),
        keyword_groups=(KeywordGroup(tag="keyword", words=("x",), color="#8b0000"),),
    )


@pytest.fixture
def block_profile() -> HighlightProfile:
    """A profile with only block comment markers and one keyword group.

    Returns:
        HighlightProfile: Profile with ``/* */`` and the keyword ``c``.
    """
    return HighlightProfile(
        file_type="block",
        extensions=frozenset({"blk"}),
        block_comment=("/*", "*/"),
        keyword_groups=(KeywordGroup(tag="keyword", words=("c",)),),
    )


# --- Buffers ---
@pytest.fixture
def make_buffer() -> Callable[..., TextBuffer]:
    """Factory building a `TextBuffer` from lines and an optional profile.

    Returns:
        Callable[..., TextBuffer]: ``make_buffer(lines, profile=None)``.
    """

    def _make(lines: list[str], profile: Optional[HighlightProfile] = None) -> TextBuffer:
        return TextBuffer(list(lines), highlighter=HighlightEngine(profile))

    return _make


# --- Configuration ---
@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Provide a baseline configuration for editor tests.

    Returns:
        dict[str, Any]: Default configuration with logging kept off the console.
    """
    return deep_merge(DEFAULT_CONFIG, {"editor": {"tab_stop": 8, "quit_times": 2}})


# --- Editor fixtures ---
@pytest.fixture
def editor(mock_config: dict[str, Any]) -> Editor:
    """Create an `Editor` with an empty buffer and a 10x40 screen.

    Returns:
        Editor: A fresh editor instance.
    """
    return Editor(mock_config, screen_rows=10, screen_columns=40)


@pytest.fixture
def rust_file(tmp_path: Path) -> Path:
    """Write a small Rust source file with a multi-line block comment.

    Returns:
        Path: Path to ``main.rs`` in a temporary directory.
    """
    path = tmp_path / "main.rs"
    path.write_text('/* header\n   still comment */\nfn main() {\n\tlet x = 42; // answer\n}\n')
    return path
