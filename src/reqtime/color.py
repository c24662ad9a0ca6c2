"""Terminal colour palette."""

from __future__ import annotations

from enum import Enum

from rich.color import Color as RichColor
from rich.style import Style
from rich.text import Text

ANSI_FOREGROUND_BASE = 30


class Color(str, Enum):
    """Foreground colours available for highlighting output."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"

    @classmethod
    def parse(cls, value: str) -> Color:
        """Parse a colour name case-insensitively."""
        try:
            return cls(value.lower())
        except ValueError:
            names = ", ".join(c.value for c in cls)
            raise ValueError(f"Invalid color, must be one of: {names}") from None

    @property
    def code(self) -> int:
        """ANSI SGR foreground code."""
        return ANSI_CODES[self]

    @property
    def style(self) -> Style:
        return Style(color=RichColor.from_ansi(self.code - ANSI_FOREGROUND_BASE))

    def paint(self, text: str) -> Text:
        """Wrap ``text`` in this colour."""
        return Text(text, style=self.style)


ANSI_CODES: dict[Color, int] = {
    Color.BLACK: 30,
    Color.RED: 31,
    Color.GREEN: 32,
    Color.YELLOW: 33,
    Color.BLUE: 34,
    Color.MAGENTA: 35,
    Color.CYAN: 36,
    Color.WHITE: 37,
}
