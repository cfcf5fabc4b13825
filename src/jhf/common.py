"""Central module containing constants, types and errors of the JHF format."""

from __future__ import annotations

from typing import Optional, Tuple

###############################################################################
# Types
###############################################################################

JhfPoint = Tuple[int, int]  # (x, y), y grows downwards
JhfPolyline = Tuple[JhfPoint, ...]  # one pen-down path
JhfStrokes = Tuple[JhfPolyline, ...]  # all pen-down paths of a glyph


###############################################################################
# Consts
###############################################################################

COORD_ORIGIN = "R"  # character encoding the coordinate value 0
PEN_UP = " R"  # pseudo-pair separating two polylines
CODE_WIDTH = 5  # columns of the glyph code field
COUNT_WIDTH = 3  # columns of the pair count field
HEADER_WIDTH = CODE_WIDTH + COUNT_WIDTH
LINE_WIDTH = 72  # records are wrapped at this column
SENTINEL_CODE = 12345  # "assign the next free code"
FONT_SUFFIX = ".jhf"


###############################################################################
# Errors
###############################################################################


class JhfError(Exception):
    """Base exception for all errors raised by the jhf package."""


class FormatError(JhfError, ValueError):
    """Raised when font container data or a record is malformed.

    Attributes:
        line: Index of the physical line where the problem was detected, or None.
        content: The offending text.
    """

    def __init__(self, message: str, line: Optional[int] = None, content: str = "") -> None:
        self.line = line
        self.content = content
        if line is not None:
            message = f"entry {line}: {message}"
        if content:
            message = f"{message} ({content!r})"
        super().__init__(message)


class UnknownGlyphError(JhfError, KeyError):
    """Raised when a glyph code is not part of a font."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(code)

    def __str__(self) -> str:
        return f"glyph code {self.code} unknown"


class FontNotFoundError(JhfError, LookupError):
    """Raised when a font source does not provide the requested font."""

    def __init__(self, name: str, location: str = "") -> None:
        self.name = name
        self.location = location
        super().__init__(name)

    def __str__(self) -> str:
        if self.location:
            return f"failed to read {self.name!r} ({self.location!r})"
        return f"failed to read {self.name!r}"


class TranslationError(JhfError, ValueError):
    """Raised when a translation table file contains a syntax error."""


###############################################################################
# Functions
###############################################################################


def coord_value(character: str) -> int:
    """Returns the signed coordinate value encoded by a single character."""
    return ord(character) - ord(COORD_ORIGIN)


def coord_char(value: int) -> str:
    """Returns the character encoding a signed coordinate value."""
    return chr(ord(COORD_ORIGIN) + value)
