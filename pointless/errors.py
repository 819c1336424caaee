"""Error reporting with source location traces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

MAX_LOCATIONS = 20
"""Capacity of an error trace; at most ``MAX_LOCATIONS - 1`` entries are kept."""

_SEPARATOR = "-" * 79


@dataclass(frozen=True)
class Location:
    """A position in a source file, with the text of the line it starts on."""

    path: str
    line_num: int
    col_num: int
    line_chars: str = ""
    token_kind: Optional[str] = None
    token_text: str = ""

    def line_text(self) -> str:
        """Return the source line, without anything after its newline."""
        return self.line_chars.split("\n", 1)[0]


class PtlsError(Exception):
    """An error in a program, carrying a trace of source locations."""

    kind = "Error"

    def __init__(
        self,
        message: str,
        location: Optional[Location] = None,
        kind: Optional[str] = None,
        locations: Iterable[Location] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.locations: list[Location] = []
        for loc in locations:
            self.push_location(loc)
        if location is not None:
            self.push_location(location)

    def push_location(self, location: Location) -> None:
        """Add a location to the trace; ignored once the trace is full."""
        if len(self.locations) + 1 < MAX_LOCATIONS:
            self.locations.append(location)

    def pop_location(self) -> Location:
        """Remove and return the most recent location."""
        if not self.locations:
            raise IndexError("error trace is empty")
        return self.locations.pop()

    def format(self) -> str:
        """Render the error report, most recent location first."""
        parts = [
            _SEPARATOR,
            "\n",
            f"{self.kind}:\n\n",
            self.message,
            "\n",
            _SEPARATOR,
            "\n",
        ]
        for loc in reversed(self.locations):
            parts.append(
                f"\nAt (line {loc.line_num}) (column {loc.col_num})"
                f" in '{loc.path}'\n"
            )
            parts.append(loc.line_text() + "\n")
            parts.append(" " * max(loc.col_num - 1, 0) + "^")
        parts.append("\n")
        return "".join(parts)


class PtlsNameError(PtlsError):
    """A missing or duplicate name definition."""

    kind = "Name Error"