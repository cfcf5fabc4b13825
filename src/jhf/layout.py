"""Line layout of text set in a Hershey font."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import numpy as np

from jhf.common import JhfPolyline
from jhf.glyph import JhfCompositeText, JhfGlyph
from jhf.glyph_factory import GlyphSource, JhfGlyphFactory, TableGlyphSource

logger = logging.getLogger(__name__)

SPACE_CODE = ord(" ")

# Substitutes for useful but frequently omitted characters.
FALLBACK_GLYPHS: Dict[int, JhfGlyph] = {
    SPACE_CODE: JhfGlyph(left=-8, right=8),
    ord("-"): JhfGlyph.from_strokes(-13, 13, [[(-9, 0), (10, 0)]]),
    ord("'"): JhfGlyph.from_strokes(-2, 2, [[(1, -12), (1, -5)]]),
}


###############################################################################
# JhfTextLayouter
###############################################################################


class JhfTextLayouter:
    """
    Composes a string into one composite glyph by placing glyphs edge to edge.

    No scaling is applied and spacing is purely additive: each glyph moves the
    cursor by its advance width (right - left).

    Algorithm:
        1. Iterate the text codepoint by codepoint.
        2. Get the glyph of the codepoint from the font. Unknown codepoints
           use the fallback glyph of the codepoint or, if there is none,
           the fallback space.
        3. The first glyph initializes the cursor to its nominal left.
        4. Translate every stroke point x to x - glyph.left + cursor (y is
           untouched) and append the translated polylines.
        5. Track top/bottom as min/max over all glyphs and the true extents
           as min/max over all emitted x-values.
        6. Advance the cursor by the advance width of the glyph.

    Result:
        left is the nominal left of the first glyph, right is the final
        cursor. The true extents give the tight rendering bounds.
    """

    def __init__(self, font_source: GlyphSource) -> None:
        """
        Initialize the layouter.

        Args:
            font_source: Source of the glyphs, typically the glyph factory of a JhfFont.
        """
        self._glyph_factory = JhfGlyphFactory.create_with_fallback(
            font_source,
            TableGlyphSource(FALLBACK_GLYPHS, default=SPACE_CODE),
        )

    def glyph(self, code: int) -> JhfGlyph:
        """Returns the glyph used for code, substituting a fallback glyph if unknown."""
        return self._glyph_factory.get_glyph(code)

    def layout(self, text: str) -> JhfCompositeText:
        """
        Layout text into a composite glyph.

        Args:
            text: The text to layout.

        Returns:
            JhfCompositeText with the translated strokes, the nominal box and
            the true horizontal extents.
        """
        strokes: List[JhfPolyline] = []
        left = cursor = top = bottom = 0
        true_left: Optional[int] = None
        true_right: Optional[int] = None

        for index, character in enumerate(text):
            glyph = self.glyph(ord(character))
            if index == 0:
                left = cursor = glyph.left
                top, bottom = glyph.top, glyph.bottom
            else:
                top = min(top, glyph.top)
                bottom = max(bottom, glyph.bottom)

            offset = cursor - glyph.left
            for line in glyph.strokes:
                points = np.array(line, dtype=np.int64).reshape(-1, 2)
                points[:, 0] += offset
                if len(points):
                    xmin, xmax = int(points[:, 0].min()), int(points[:, 0].max())
                    true_left = xmin if true_left is None else min(true_left, xmin)
                    true_right = xmax if true_right is None else max(true_right, xmax)
                strokes.append(tuple((int(x), int(y)) for x, y in points))
            cursor += glyph.width

        logger.debug("laid out %d characters over %d units", len(text), cursor - left)
        return JhfCompositeText(
            left=left,
            right=cursor,
            top=top,
            bottom=bottom,
            strokes=strokes,
            true_left_extent=0 if true_left is None else true_left,
            true_right_extent=0 if true_right is None else true_right,
        )
