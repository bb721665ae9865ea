# pound/core/ColumnMapper.py
"""ColumnMapper Module for the Pound Editor
=========================================
Pure conversions between *logical* columns (indexes into a line's raw
characters) and *render* columns (indexes into its tab-expanded display text).

Only tabs change width: a tab advances the running render column to the next
multiple of the tab stop, every other character advances it by one. For
tab-free text both directions are the identity.
"""

TAB_STOP = 8


class ColumnMapper:
    """Logical/render column conversion driven by a fixed tab stop.

    Attributes:
        tab_stop (int): Width of a tab cell. Defaults to ``TAB_STOP`` (8).
    """

    def __init__(self, tab_stop: int = TAB_STOP):
        if tab_stop < 1:
            raise ValueError(f"tab_stop must be positive, got {tab_stop}")
        self.tab_stop = tab_stop

    def _advance(self, render_x: int, char: str) -> int:
        if char == "\t":
            return render_x + self.tab_stop - (render_x % self.tab_stop)
        return render_x + 1

    def expand(self, text: str) -> str:
        """Returns `text` with every tab replaced by spaces up to the next tab stop."""
        parts: list[str] = []
        render_x = 0
        for char in text:
            next_x = self._advance(render_x, char)
            parts.append(" " * (next_x - render_x) if char == "\t" else char)
            render_x = next_x
        return "".join(parts)

    def logical_to_render(self, text: str, x: int) -> int:
        """Converts logical column `x` of `text` to a render column.

        Args:
            text (str): The line's logical text.
            x (int): Logical column. Values past the end fold over the whole line.

        Returns:
            int: Render column of the cell that starts at `x`.
        """
        render_x = 0
        for char in text[:x]:
            render_x = self._advance(render_x, char)
        return render_x

    def render_to_logical(self, text: str, render_x: int) -> int:
        """Converts render column `render_x` back to a logical column.

        Scans forward and returns the first logical index whose cumulative
        render column exceeds `render_x`, so a render column that falls inside
        a tab's cell maps to that tab. Returns ``len(text)`` when no character
        reaches past `render_x`.
        """
        current = 0
        for logical_x, char in enumerate(text):
            current = self._advance(current, char)
            if current > render_x:
                return logical_x
        return len(text)
