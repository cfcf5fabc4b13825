"""Tests for the SVG page"""

import gzip

import pytest

from jhf.font import JhfFont
from jhf.geom import JhfBox
from jhf.glyph import JhfGlyph
from jhf.page import JhfSvgPage


@pytest.fixture(name="futural")
def fixture_futural():
    """The bundled simplex font"""
    return JhfFont.load("futural")


class TestJhfSvgPage:
    """Test cases for JhfSvgPage class"""

    def test_viewbox(self, futural, tmp_path):
        """Test that the viewbox frames the glyph box with a margin"""
        filename = tmp_path / "i.svg"
        JhfSvgPage.for_glyph(futural.glyph(73)).save_as(filename)
        content = filename.read_text(encoding="utf-8")
        assert 'viewBox="-6 -15 12 27"' in content
        assert content.count("<polyline") == 1

    def test_one_polyline_per_stroke(self, futural):
        """Test that every stroke becomes one SVG polyline"""
        page = JhfSvgPage.for_glyph(futural.glyph(72))
        content = page.assembled_drawing().tostring()
        assert content.count("<polyline") == 3

    def test_empty_and_single_point_strokes(self):
        """Test that empty strokes are skipped and single points are kept"""
        glyph = JhfGlyph.from_strokes(-2, 2, [[], [(1, 1)], []])
        content = JhfSvgPage.for_glyph(glyph).assembled_drawing().tostring()
        assert content.count("<polyline") == 1

    def test_debug_layer(self, futural):
        """Test that the boxes only appear with the debug layer included"""
        page = JhfSvgPage.for_glyph(futural.text("II"))
        without_debug = page.assembled_drawing().tostring()
        with_debug = page.assembled_drawing(include_debug_layer=True).tostring()
        assert "<rect" not in without_debug
        assert with_debug.count("<rect") == 2
        assert 'stroke="blue"' in with_debug
        assert with_debug.count("<polyline") == 2

    def test_assembling_keeps_page_reusable(self, futural):
        """Test that assembling twice gives the same output"""
        page = JhfSvgPage.for_glyph(futural.glyph(65))
        assert page.assembled_drawing().tostring() == page.assembled_drawing().tostring()

    def test_add_box(self):
        """Test adding a box to the debug layer"""
        page = JhfSvgPage(JhfBox(0, 0, 10, 10))
        page.add_box(JhfBox(1, 2, 3, 4), "green")
        content = page.assembled_drawing(include_debug_layer=True).tostring()
        assert 'stroke="green"' in content

    def test_save_compressed(self, futural, tmp_path):
        """Test saving as svgz"""
        filename = tmp_path / "a.svgz"
        JhfSvgPage.for_glyph(futural.glyph(65)).save_as(filename, compressed=True)
        content = gzip.decompress(filename.read_bytes()).decode("utf-8")
        assert content.count("<polyline") == 3

    def test_to_svg_leaves_page_open(self, futural):
        """Test that serializing does not consume the page"""
        page = JhfSvgPage.for_glyph(futural.glyph(73))
        first = page.to_svg()
        page.add_glyph(futural.glyph(73), dx=8)
        second = page.to_svg()
        assert first.count("<polyline") == 1
        assert second.count("<polyline") == 2
        assert 'inkscape:label="debug"' not in second
        assert 'inkscape:label="debug"' in page.to_svg(include_debug_layer=True)

    def test_save_as_str_path(self, futural, tmp_path):
        """Test that the file name can be given as string"""
        filename = tmp_path / "i.svg"
        page = JhfSvgPage.for_glyph(futural.glyph(73))
        page.save_as(str(filename), pretty=True)
        assert filename.read_text(encoding="utf-8") == page.to_svg(pretty=True)
