"""Handling geometries"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.typing import NDArray


###############################################################################
# JhfBox
###############################################################################
@dataclass
class JhfBox:
    """
    Represents a rectangular box in glyph coordinates (y grows downwards).

    Attributes:
        xmin (int): The minimum x-coordinate (left).
        ymin (int): The minimum y-coordinate (top).
        xmax (int): The maximum x-coordinate (right).
        ymax (int): The maximum y-coordinate (bottom).
    """

    _xmin: int
    _ymin: int
    _xmax: int
    _ymax: int

    def __init__(self, xmin: int, ymin: int, xmax: int, ymax: int):
        """Initialize JhfBox with coordinates.

        Args:
            xmin: The minimum x-coordinate
            ymin: The minimum y-coordinate
            xmax: The maximum x-coordinate
            ymax: The maximum y-coordinate
        """
        self._xmin = xmin
        self._ymin = ymin
        self._xmax = xmax
        self._ymax = ymax

        # Normalize coordinates to ensure xmin <= xmax and ymin <= ymax
        if self._xmin > self._xmax:
            self._xmin, self._xmax = self._xmax, self._xmin
        if self._ymin > self._ymax:
            self._ymin, self._ymax = self._ymax, self._ymin

    @classmethod
    def from_points(cls, points: NDArray[np.int64]) -> JhfBox:
        """Returns the tight box around an (n, 2) array of points, or an empty box at the origin."""
        if points.size == 0:
            return cls(0, 0, 0, 0)
        xmin, ymin = points.min(axis=0)
        xmax, ymax = points.max(axis=0)
        return cls(int(xmin), int(ymin), int(xmax), int(ymax))

    @property
    def xmin(self) -> int:
        """int: The minimum x-coordinate."""
        return self._xmin

    @property
    def ymin(self) -> int:
        """int: The minimum y-coordinate."""
        return self._ymin

    @property
    def xmax(self) -> int:
        """int: The maximum x-coordinate."""
        return self._xmax

    @property
    def ymax(self) -> int:
        """int: The maximum y-coordinate."""
        return self._ymax

    @property
    def extent(self) -> Tuple[int, int, int, int]:
        """The extent of the box as Tuple (xmin, ymin, xmax, ymax)."""
        return self._xmin, self._ymin, self._xmax, self._ymax

    @property
    def width(self) -> int:
        """int: The width of the box (difference between xmax and xmin)."""
        return self._xmax - self._xmin

    @property
    def height(self) -> int:
        """int: The height of the box (difference between ymax and ymin)."""
        return self._ymax - self._ymin

    def expanded(self, margin: int) -> JhfBox:
        """Returns a new box grown by margin on every side."""
        return JhfBox(self._xmin - margin, self._ymin - margin, self._xmax + margin, self._ymax + margin)

    def union(self, other: JhfBox) -> JhfBox:
        """Returns the smallest box containing this box and other."""
        return JhfBox(
            min(self._xmin, other.xmin),
            min(self._ymin, other.ymin),
            max(self._xmax, other.xmax),
            max(self._ymax, other.ymax),
        )

    def __str__(self):
        return f"JhfBox(xmin={self._xmin}, ymin={self._ymin}, xmax={self._xmax}, ymax={self._ymax})"
