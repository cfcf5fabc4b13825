"""SVG page representation for drawing Hershey glyphs and composite text."""

from __future__ import annotations

import copy
import gzip
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import svgwrite
import svgwrite.base
import svgwrite.container
import svgwrite.elementfactory
from svgwrite.extensions import Inkscape

from jhf.geom import JhfBox
from jhf.glyph import JhfCompositeText, JhfGlyph


@dataclass
class JhfSvgPage:
    """An SVG document showing glyphs in their own coordinate system.

    Glyph y-values grow downwards like SVG y-values, so the viewbox is the
    glyph box itself and one glyph unit is drawn as unit_mm millimeters.
    Strokes go to the visible "main" layer. The nominal box of every glyph,
    and the true box of composite text, go to the "debug" layer, which is
    hidden in Inkscape and only written on request.
    """

    _inkscape: Inkscape

    drawing: svgwrite.Drawing
    main_layer: svgwrite.container.Group
    debug_layer: svgwrite.container.Group
    stroke_width: float

    def __init__(self, viewbox: JhfBox, unit_mm: float = 1.0, stroke_width: float = 1.0):
        """
        Initialize an empty page framing the given box of glyph coordinates.

        Args:
            viewbox (JhfBox): Glyph coordinates covered by the page.
            unit_mm (float, optional): Printed size of one glyph unit in millimeters. Defaults to 1.0.
            stroke_width (float, optional): Pen width in glyph units. Defaults to 1.0.
        """
        self.drawing = svgwrite.Drawing(
            size=(f"{viewbox.width * unit_mm}mm", f"{viewbox.height * unit_mm}mm"),
            viewBox=f"{viewbox.xmin} {viewbox.ymin} {viewbox.width} {viewbox.height}",
            profile="full",
        )
        self.stroke_width = stroke_width
        self._inkscape = Inkscape(self.drawing)
        self.main_layer = self._inkscape.layer(label="main", locked=False)
        self.debug_layer = self._inkscape.layer(label="debug", locked=False, display="none")

    @classmethod
    def for_glyph(cls, glyph: JhfGlyph, margin: int = 2, unit_mm: float = 1.0) -> JhfSvgPage:
        """
        Create a page showing the glyph with a margin around its box, with the glyph added.

        Composite text is framed by its true extents, other glyphs by their
        nominal box.

        Args:
            glyph (JhfGlyph): The glyph or composite text to show.
            margin (int, optional): Margin around the box in glyph units. Defaults to 2.
            unit_mm (float, optional): Size of one glyph unit in millimeters. Defaults to 1.0.

        Returns:
            JhfSvgPage: A new page containing the glyph.
        """
        box = glyph.true_box() if isinstance(glyph, JhfCompositeText) else glyph.bounding_box()
        page = cls(box.union(glyph.bounding_box()).expanded(margin), unit_mm)
        page.add_glyph(glyph)
        return page


    def add(
        self,
        element: Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder],
        add_to_debug_layer: bool = False,
    ) -> Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder]:
        """Put an element on the glyph layer, or on the hidden debug layer.

        Returns the element so calls can be chained by the caller.
        """
        layer = self.debug_layer if add_to_debug_layer else self.main_layer
        return layer.add(element)

    def add_box(self, box: JhfBox, color: str = "red") -> None:
        """Add the outline of box to the debug layer."""
        self.add(
            self.drawing.rect(
                insert=(box.xmin, box.ymin),
                size=(box.width, box.height),
                stroke=color,
                stroke_width=self.stroke_width / 4,
                fill="none",
            ),
            True,
        )

    def add_glyph(self, glyph: JhfGlyph, dx: int = 0, dy: int = 0, color: str = "black") -> None:
        """Add the strokes of glyph, shifted by (dx, dy), to the main layer.

        Every polyline becomes one SVG polyline. A single point polyline is
        drawn as zero length line with round caps so it shows as a dot.
        """
        for line in glyph.strokes:
            if not line:
                continue
            points = [(x + dx, y + dy) for x, y in line]
            if len(points) == 1:
                points.append(points[0])
            self.add(
                self.drawing.polyline(
                    points=points,
                    stroke=color,
                    stroke_width=self.stroke_width,
                    stroke_linecap="round",
                    stroke_linejoin="round",
                    fill="none",
                )
            )
        box = glyph.bounding_box()
        self.add_box(JhfBox(box.xmin + dx, box.ymin + dy, box.xmax + dx, box.ymax + dy))
        if isinstance(glyph, JhfCompositeText):
            box = glyph.true_box()
            self.add_box(JhfBox(box.xmin + dx, box.ymin + dy, box.xmax + dx, box.ymax + dy), "blue")

    def assembled_drawing(self, include_debug_layer: bool = False) -> svgwrite.Drawing:
        """Returns a standalone drawing holding the glyph layer.

        The page itself is left untouched, so it can still receive glyphs and
        be written again. The debug layer with the glyph boxes is placed below
        the glyph layer if requested.
        """
        drawing = copy.deepcopy(self.drawing)
        if include_debug_layer:
            drawing.add(copy.deepcopy(self.debug_layer))
        drawing.add(copy.deepcopy(self.main_layer))
        return drawing

    def to_svg(self, include_debug_layer: bool = False, pretty: bool = False, indent: int = 2) -> str:
        """Returns the SVG document text of the page."""
        buffer = io.StringIO()
        self.assembled_drawing(include_debug_layer).write(buffer, pretty=pretty, indent=indent)
        return buffer.getvalue()

    def save_as(
        self,
        filename: Union[str, Path],
        include_debug_layer: bool = False,
        pretty: bool = False,
        indent: int = 2,
        compressed: bool = False,
    ) -> None:
        """Write the glyph page to filename.

        Args:
            filename: Target file, usually ending in ``.svg`` or ``.svgz``.
            include_debug_layer: Also write the (hidden) layer with the glyph boxes.
            pretty: Indent the XML for reading by humans.
            indent: Spaces per level when pretty printing.
            compressed: Gzip the document, as expected for ``.svgz`` files.
        """
        data = self.to_svg(include_debug_layer, pretty, indent).encode("utf-8")
        if compressed:
            data = gzip.compress(data)
        Path(filename).write_bytes(data)
