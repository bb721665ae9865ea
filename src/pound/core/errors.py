# pound/core/errors.py
"""Exception types raised by the Pound editing core.

I/O failures are not wrapped: ``OSError`` from load and save propagates to
the caller unchanged after being logged.
"""


class PoundError(Exception):
    """Base class for editor core errors."""


class NoFilenameError(PoundError):
    """Save was requested but no path is bound and none was supplied.

    Non-fatal: the caller may prompt for a filename and retry with
    ``save(path)``.
    """


class TagInvariantError(PoundError, RuntimeError):
    """A line's tag sequence no longer matches its render text.

    This is an internal consistency failure, never a user error.
    """

    def __init__(self, render_length: int, tag_length: int):
        super().__init__(
            f"highlight tags out of sync with render text: "
            f"{tag_length} tags for {render_length} rendered characters"
        )
        self.render_length = render_length
        self.tag_length = tag_length
