"""Hershey glyph representation and composite text produced by layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from jhf.common import JhfPoint, JhfStrokes
from jhf.geom import JhfBox

###############################################################################
# Glyph
###############################################################################


def _freeze_strokes(strokes: Iterable[Iterable[Sequence[int]]]) -> JhfStrokes:
    return tuple(tuple((int(pt[0]), int(pt[1])) for pt in line) for line in strokes)


@dataclass
class JhfGlyph:
    """Representation of a decoded Hershey glyph.

    Coordinates follow the page convention: x grows to the right, y grows
    downwards. Left and right are the nominal box stored in the record header,
    top and bottom are derived from the strokes (padded by one unit).

    Attributes:
        left: Nominal left edge from the record header.
        right: Nominal right edge from the record header.
        top: Smallest stroke y minus one, 0 without strokes.
        bottom: Largest stroke y plus one, 0 without strokes.
        strokes: Ordered polylines, each an ordered tuple of (x, y) points.
    """

    _left: int
    _right: int
    _top: int
    _bottom: int
    _strokes: JhfStrokes

    def __init__(
        self,
        left: int,
        right: int,
        top: int = 0,
        bottom: int = 0,
        strokes: Iterable[Iterable[Sequence[int]]] = (),
    ) -> None:
        """
        Initialize a JhfGlyph.

        Args:
            left (int): Nominal left edge.
            right (int): Nominal right edge.
            top (int, optional): Top of the inked area. Defaults to 0.
            bottom (int, optional): Bottom of the inked area. Defaults to 0.
            strokes (Iterable, optional): Polylines of (x, y) points. Defaults to no strokes.
        """
        self._left = left
        self._right = right
        self._top = top
        self._bottom = bottom
        self._strokes = _freeze_strokes(strokes)

    @classmethod
    def from_strokes(cls, left: int, right: int, strokes: Iterable[Iterable[Sequence[int]]]) -> JhfGlyph:
        """
        Factory method to create a JhfGlyph deriving top and bottom from the strokes.

        Args:
            left (int): Nominal left edge.
            right (int): Nominal right edge.
            strokes (Iterable): Polylines of (x, y) points.
        """
        frozen = _freeze_strokes(strokes)
        ys = [pt[1] for line in frozen for pt in line]
        if not ys:
            return cls(left, right, 0, 0, frozen)
        return cls(left, right, min(ys) - 1, max(ys) + 1, frozen)

    @property
    def left(self) -> int:
        """Nominal left edge of the glyph."""
        return self._left

    @property
    def right(self) -> int:
        """Nominal right edge of the glyph."""
        return self._right

    @property
    def top(self) -> int:
        """Top of the inked area (smallest y minus one)."""
        return self._top

    @property
    def bottom(self) -> int:
        """Bottom of the inked area (largest y plus one)."""
        return self._bottom

    @property
    def strokes(self) -> JhfStrokes:
        """The polylines of this glyph."""
        return self._strokes

    @property
    def width(self) -> int:
        """Advance width, i.e. the distance the layout cursor moves after this glyph."""
        return self._right - self._left

    @property
    def point_count(self) -> int:
        """Number of stroke points over all polylines."""
        return sum(len(line) for line in self._strokes)

    def points(self) -> NDArray[np.int64]:
        """Returns all stroke points as an (n, 2) integer array."""
        if not self._strokes:
            return np.zeros((0, 2), dtype=np.int64)
        return np.array([pt for line in self._strokes for pt in line], dtype=np.int64).reshape(-1, 2)

    def bounding_box(self) -> JhfBox:
        """Returns the nominal box (left, top, right, bottom) of this glyph."""
        return JhfBox(self._left, self._top, self._right, self._bottom)

    def ink_box(self) -> JhfBox:
        """Returns the tight box around the stroke points."""
        return JhfBox.from_points(self.points())


###############################################################################
# Composite text
###############################################################################


@dataclass
class JhfCompositeText(JhfGlyph):
    """A glyph-shaped aggregate of several glyphs laid out side by side.

    Left and right are nominal: the left edge of the first glyph and the
    final layout cursor. The true extents are the smallest and largest x of
    any emitted stroke point, which differ from the nominal box as glyphs
    are packed by advance width and not by ink.
    """

    _true_left_extent: int
    _true_right_extent: int

    def __init__(
        self,
        left: int,
        right: int,
        top: int,
        bottom: int,
        strokes: Iterable[Iterable[JhfPoint]],
        true_left_extent: int,
        true_right_extent: int,
    ) -> None:
        super().__init__(left, right, top, bottom, strokes)
        self._true_left_extent = true_left_extent
        self._true_right_extent = true_right_extent

    @property
    def true_left_extent(self) -> int:
        """Smallest x reached by any rendered stroke point."""
        return self._true_left_extent

    @property
    def true_right_extent(self) -> int:
        """Largest x reached by any rendered stroke point."""
        return self._true_right_extent

    def true_box(self) -> JhfBox:
        """Returns the rendering box (true_left_extent, top, true_right_extent, bottom)."""
        return JhfBox(self._true_left_extent, self._top, self._true_right_extent, self._bottom)

