"""Pixel raster for drawing glyph strokes, rendered as ASCII art or PNG."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Union

import numpy as np
import PIL.Image

from jhf.geom import JhfBox
from jhf.glyph import JhfCompositeText, JhfGlyph


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding towards zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


@dataclass
class JhfRaster:
    """A monochrome raster covering a box of glyph coordinates.

    The covered box includes xmin/ymin and excludes xmax/ymax. The pixel
    data is stored as NumPy array of shape (height, width) where 1 marks ink.
    Pixel (x, y) in glyph coordinates is stored at row y - ymin and column
    x - xmin. Drawing outside the box is silently clipped.
    """

    _box: JhfBox
    _pixels: np.ndarray

    def __init__(self, box: JhfBox):
        """Initialize an empty raster.

        Args:
            box: The covered box in glyph coordinates.
        """
        self._box = box
        self._pixels = np.zeros((box.height, box.width), dtype=np.uint8)

    @classmethod
    def for_glyph(cls, glyph: JhfGlyph) -> JhfRaster:
        """Create a raster covering the origin and the glyph, with the glyph drawn."""
        box = JhfBox(min(0, glyph.left), min(0, glyph.top), glyph.right + 1, max(0, glyph.bottom))
        raster = cls(box)
        raster.draw_strokes(glyph.strokes)
        return raster

    @classmethod
    def for_text(cls, composite: JhfCompositeText) -> JhfRaster:
        """Create a raster covering the true extents of composite text, with the text drawn."""
        raster = cls(composite.true_box().expanded(1))
        raster.draw_strokes(composite.strokes)
        return raster

    @property
    def box(self) -> JhfBox:
        """The covered box in glyph coordinates."""
        return self._box

    @property
    def pixels(self) -> np.ndarray:
        """Get the pixel data as NumPy array of shape (height, width)."""
        return self._pixels

    def is_set(self, x: int, y: int) -> bool:
        """Returns True if pixel (x, y) is inked, False if empty or outside the raster."""
        if not (self._box.xmin <= x < self._box.xmax and self._box.ymin <= y < self._box.ymax):
            return False
        return bool(self._pixels[y - self._box.ymin, x - self._box.xmin])

    def set(self, x: int, y: int) -> None:
        """Ink pixel (x, y), ignored outside the raster."""
        if self._box.xmin <= x < self._box.xmax and self._box.ymin <= y < self._box.ymax:
            self._pixels[y - self._box.ymin, x - self._box.xmin] = 1

    def scribe(self, x0: int, y0: int, x1: int, y1: int) -> None:
        """Draw a one pixel wide line from (x0, y0) to (x1, y1)."""
        if x1 < x0:
            x0, y0, x1, y1 = x1, y1, x0, y0
        dx, dy = x1 - x0, y1 - y0
        inc = 1
        if dy < 0:
            dy = -dy
            inc = -1
        self.set(x1, y1)
        if dx > dy:
            for x in range(x0, x1):
                self.set(x, y0 + _div_trunc(inc * (x - x0) * dy, dx))
            return
        for y in range(y0, y1, inc):
            self.set(x0 + _div_trunc(inc * (y - y0) * dx, dy), y)

    def draw_strokes(self, strokes: Iterable[Sequence[Sequence[int]]]) -> None:
        """Draw polylines, a single point polyline draws a dot."""
        for line in strokes:
            for i, (x, y) in enumerate(line):
                if i == 0:
                    self.scribe(x, y, x, y)
                else:
                    self.scribe(line[i - 1][0], line[i - 1][1], x, y)

    def render(self) -> str:
        """Render as ASCII art.

        Inked pixels are '#', empty pixels '.'. A header row marks the x = 0
        column with 'V' and the y = 0 row is marked with '>'. The rows and
        columns run up to and including xmax/ymax.
        """
        xs = range(self._box.xmin, self._box.xmax + 1)
        lines = [" " + "".join("V" if x == 0 else " " for x in xs)]
        for y in range(self._box.ymin, self._box.ymax + 1):
            marker = ">" if y == 0 else " "
            lines.append(marker + "".join("#" if self.is_set(x, y) else "." for x in xs))
        return "\n".join(lines) + "\n"

    def save_as(self, filename: Union[str, Path]) -> None:
        """Save as grayscale image (black ink on white), format derived from the suffix."""
        image = np.where(self._pixels > 0, 0, 255).astype(np.uint8)
        PIL.Image.fromarray(image).save(filename)
