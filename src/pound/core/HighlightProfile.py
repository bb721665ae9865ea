# pound/core/HighlightProfile.py
"""HighlightProfile Module for the Pound Editor
=============================================
Per-file-type highlighting definitions, expressed as plain data.

A `HighlightProfile` bundles everything the single shared scanner in
`HighlightEngine` needs to classify a file type: its extensions, the
line-comment marker, an optional block-comment marker pair and an ordered
list of keyword groups. New languages are added by data, either to
`BUILTIN_PROFILES` or through ``[syntax.<name>]`` tables in the user's
``config.toml`` (see `profiles_from_config`).

Profiles are frozen after construction and may be shared freely.

Tags:
    Built-in tags are members of the `Highlight` string enum. Keyword groups
    declare their own tag names (plain strings such as ``"keyword"`` or
    ``"type"``), so a tag sequence is simply a list of strings.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from pound.utils.utils import hex_to_xterm


DEFAULT_COLOR = -1  # terminal default foreground


class Highlight(str, Enum):
    """Built-in classification tags."""

    NORMAL = "normal"
    NUMBER = "number"
    STRING = "string"
    CHAR_LITERAL = "char_literal"
    COMMENT = "comment"
    BLOCK_COMMENT = "block_comment"
    SEARCH_MATCH = "search_match"


@dataclass(frozen=True)
class KeywordGroup:
    """An ordered keyword class: every word in `words` is tagged `tag`."""

    tag: str
    words: tuple[str, ...]
    color: Optional[str] = None


@dataclass(frozen=True)
class HighlightProfile:
    """Immutable highlighting definition for one file type.

    Attributes:
        file_type (str): Human readable name shown in the status bar.
        extensions (frozenset[str]): File extensions without the dot.
        line_comment (str): Line comment marker; empty when the language has none.
        block_comment (Optional[tuple[str, str]]): Opening and closing markers.
        keyword_groups (tuple[KeywordGroup, ...]): Tried in declared order;
            the first matching word wins.
    """

    file_type: str
    extensions: frozenset[str]
    line_comment: str = ""
    block_comment: Optional[tuple[str, str]] = None
    keyword_groups: tuple[KeywordGroup, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # zero-width markers or words would never advance the scanner
        if self.block_comment is not None and not all(self.block_comment):
            raise ValueError(f"{self.file_type}: block comment markers must not be empty")
        for group in self.keyword_groups:
            if not all(group.words):
                raise ValueError(f"{self.file_type}: keyword group '{group.tag}' contains an empty word")

    def matches_extension(self, extension: str) -> bool:
        return extension in self.extensions

    def color_for(self, tag: str, palette: Optional[Mapping[str, str]] = None) -> int:
        """Maps a tag to an xterm-256 colour index for the paint collaborator.

        Keyword groups use their own colour; built-in tags look up `palette`
        (the ``colors`` section of the configuration). Unknown tags and
        ``Highlight.NORMAL`` map to ``DEFAULT_COLOR``.
        """
        for group in self.keyword_groups:
            if group.tag == tag and group.color:
                return hex_to_xterm(group.color)
        hex_color = (palette or {}).get(str(getattr(tag, "value", tag)))
        if not hex_color:
            return DEFAULT_COLOR
        return hex_to_xterm(hex_color)


# --- Built-in profiles ---

RUST_PROFILE = HighlightProfile(
    file_type="rust",
    extensions=frozenset({"rs"}),
    line_comment="//",
    block_comment=("/*", "*/"),
    keyword_groups=(
        KeywordGroup(
            tag="keyword",
            color="#8b0000",
            words=(
                "mod", "unsafe", "extern", "crate", "use", "type", "struct", "enum",
                "union", "const", "static", "mut", "let", "if", "else", "impl",
                "trait", "for", "fn", "self", "Self", "while", "true", "false",
                "in", "continue", "break", "loop", "match",
            ),
        ),
        KeywordGroup(
            tag="type",
            color="#8b008b",
            words=(
                "isize", "i8", "i16", "i32", "i64", "usize", "u8", "u16", "u32",
                "u64", "f32", "f64", "char", "str", "bool", "T", "U", "R", "F",
                "L", "S", "Fn", "FnOnce", "FnMut",
            ),
        ),
    ),
)

PYTHON_PROFILE = HighlightProfile(
    file_type="python",
    extensions=frozenset({"py", "pyw"}),
    line_comment="#",
    keyword_groups=(
        KeywordGroup(
            tag="keyword",
            color="#8b0000",
            words=(
                "and", "as", "assert", "async", "await", "break", "class",
                "continue", "def", "del", "elif", "else", "except", "finally",
                "for", "from", "global", "if", "import", "in", "is", "lambda",
                "nonlocal", "not", "or", "pass", "raise", "return", "try",
                "while", "with", "yield", "True", "False", "None",
            ),
        ),
        KeywordGroup(
            tag="type",
            color="#8b008b",
            words=("int", "float", "str", "bytes", "bool", "list", "dict", "set", "tuple", "self"),
        ),
    ),
)

C_PROFILE = HighlightProfile(
    file_type="c",
    extensions=frozenset({"c", "h"}),
    line_comment="//",
    block_comment=("/*", "*/"),
    keyword_groups=(
        KeywordGroup(
            tag="keyword",
            color="#8b0000",
            words=(
                "switch", "if", "while", "for", "break", "continue", "return",
                "else", "struct", "union", "typedef", "static", "enum", "case",
                "default", "goto", "sizeof", "const", "extern", "volatile", "do",
            ),
        ),
        KeywordGroup(
            tag="type",
            color="#8b008b",
            words=("int", "long", "double", "float", "char", "unsigned", "signed", "void", "short"),
        ),
    ),
)

BUILTIN_PROFILES: tuple[HighlightProfile, ...] = (RUST_PROFILE, PYTHON_PROFILE, C_PROFILE)


def _profile_from_table(name: str, table: Mapping[str, Any]) -> HighlightProfile:
    block = table.get("block_comment")
    if block is not None:
        if len(block) != 2:
            raise ValueError(f"syntax.{name}.block_comment must be a pair of markers")
        block = (str(block[0]), str(block[1]))
    groups = tuple(
        KeywordGroup(
            tag=str(group.get("tag", "keyword")),
            words=tuple(str(word) for word in group.get("words", [])),
            color=group.get("color"),
        )
        for group in table.get("keywords", [])
    )
    return HighlightProfile(
        file_type=str(table.get("file_type", name)),
        extensions=frozenset(str(ext).lstrip(".") for ext in table.get("extensions", [])),
        line_comment=str(table.get("line_comment", "")),
        block_comment=block,
        keyword_groups=groups,
    )


def profiles_from_config(config: Mapping[str, Any]) -> tuple[HighlightProfile, ...]:
    """Builds the profile list: user ``[syntax.*]`` tables first, then the built-ins.

    A malformed table is logged and skipped; it never prevents start-up.
    """
    user_profiles: list[HighlightProfile] = []
    for name, table in (config.get("syntax") or {}).items():
        if not isinstance(table, Mapping):
            logging.warning(f"Ignoring syntax entry '{name}': expected a table.")
            continue
        try:
            user_profiles.append(_profile_from_table(name, table))
            logging.debug(f"Loaded user syntax profile '{name}'.")
        except (TypeError, ValueError) as e:
            logging.error(f"Invalid syntax profile '{name}': {e}")
    return tuple(user_profiles) + BUILTIN_PROFILES


def profile_for_extension(
    extension: str, profiles: Iterable[HighlightProfile] = BUILTIN_PROFILES
) -> Optional[HighlightProfile]:
    """Returns the first profile declaring `extension`, or None."""
    extension = extension.lstrip(".")
    if not extension:
        return None
    return next((p for p in profiles if p.matches_extension(extension)), None)


def resolve_profile(
    filename: Optional[str], profiles: Iterable[HighlightProfile] = BUILTIN_PROFILES
) -> Optional[HighlightProfile]:
    """Resolves the profile for a filename by its extension.

    Args:
        filename: Path or bare filename; ``None`` for an unnamed buffer.
        profiles: Candidate profiles in priority order.

    Returns:
        The matching profile, or None when the file type is unknown. No
        profile is not an error: every character then classifies as Normal.
    """
    if not filename:
        return None
    _, extension = os.path.splitext(os.fspath(filename))
    profile = profile_for_extension(extension, profiles)
    logging.debug(
        f"Resolved highlight profile for '{filename}': "
        f"{profile.file_type if profile else 'none'}"
    )
    return profile
