"""Test module for jhf.codec

The tests are run using pytest.
"""

import pytest

from jhf.codec import JhfCodec
from jhf.common import FormatError
from jhf.font_source import BUNDLED_FONT_DIR
from jhf.glyph import JhfGlyph

RECORD_A = "   65  9I[RFJ[ RRFZ[ RMTWT"


class TestParse:
    """Splitting container content into raw records"""

    def test_single_record(self):
        """Test a single record with trailing newline"""
        records = JhfCodec.parse(f"{RECORD_A}\n".encode("ascii"))
        assert records == {65: "I[RFJ[ RRFZ[ RMTWT"}

    def test_str_content_is_accepted(self):
        """Test that already decoded text is parsed the same way"""
        assert JhfCodec.parse(RECORD_A) == JhfCodec.parse(RECORD_A.encode("ascii"))

    def test_blank_lines_are_ignored(self):
        """Test that empty lines between and after records are skipped"""
        records = JhfCodec.parse(b"   32  1JZ\n\n   73  3NVRFR[\n\n")
        assert records == {32: "JZ", 73: "NVRFR["}

    def test_crlf_line_endings(self):
        """Test that carriage returns are not part of the record data"""
        records = JhfCodec.parse(b"   32  1JZ\r\n   73  3NVRFR[\r\n")
        assert records == {32: "JZ", 73: "NVRFR["}

    def test_wrapped_record(self):
        """Test a record continued on the following physical lines"""
        body = "JZ" + "RF" * 40
        text = f"   66 41{body}"
        wrapped = "\n".join(text[i : i + 72] for i in range(0, len(text), 72))
        assert "\n" in wrapped
        records = JhfCodec.parse(wrapped + "\n   32  1JZ\n")
        assert records == {66: body, 32: "JZ"}

    def test_wrapped_record_split_inside_pen_up(self):
        """Test that a line break between the two characters of a pen-up pair is harmless"""
        records = JhfCodec.parse("   33  4JZRF\n RRG\n")
        assert records == {33: "JZRF RRG"}

    def test_sentinel_codes_are_numbered(self):
        """Test that sentinel codes get private codes 1, 2, 3"""
        records = JhfCodec.parse(b"12345  1JZ\n12345  3NVRFR[\n12345  1MW\n")
        assert sorted(records) == [1, 2, 3]
        assert records[1] == "JZ"
        assert records[2] == "NVRFR["
        assert records[3] == "MW"
        assert 12345 not in records

    def test_sentinel_numbering_restarts_per_parse(self):
        """Test that the private counter is local to one parse call"""
        content = b"12345  1JZ\n12345  1MW\n"
        assert sorted(JhfCodec.parse(content)) == [1, 2]
        assert sorted(JhfCodec.parse(content)) == [1, 2]

    def test_duplicate_code_last_wins(self):
        """Test that a later record replaces an earlier one with the same code"""
        records = JhfCodec.parse(b"   65  1JZ\n   65  1MW\n")
        assert records == {65: "MW"}

    def test_bundled_font_record_count(self):
        """Test the bundled simplex font"""
        records = JhfCodec.parse((BUNDLED_FONT_DIR / "futural.jhf").read_bytes(), "futural")
        assert sorted(records) == list(range(32, 128))
        assert records[72] == "G]KFK[ RYFY[ RKPYP"


class TestParseErrors:
    """Malformed container content"""

    def test_short_entry(self):
        """Test an entry shorter than the header"""
        with pytest.raises(FormatError) as excinfo:
            JhfCodec.parse(b"   32  1JZ\n   65\n")
        assert excinfo.value.line == 1
        assert excinfo.value.content == "   65"

    def test_non_numeric_count(self):
        """Test a count field that is not a number"""
        with pytest.raises(FormatError) as excinfo:
            JhfCodec.parse(b"   65  xJZ\n")
        assert excinfo.value.line == 0

    def test_count_with_two_tokens(self):
        """Test a count field holding two numbers"""
        with pytest.raises(FormatError):
            JhfCodec.parse(b"   651 1JZ\n")

    def test_non_numeric_code(self):
        """Test a code field that is not a number"""
        with pytest.raises(FormatError) as excinfo:
            JhfCodec.parse(b"   6A  1JZ\n", "broken")
        assert "broken" in str(excinfo.value)
        assert "code" in str(excinfo.value)

    def test_excess_data(self):
        """Test a record holding more pairs than declared"""
        with pytest.raises(FormatError) as excinfo:
            JhfCodec.parse(b"   65  1JZRR\n")
        assert "excessive data" in str(excinfo.value)

    def test_truncated_record(self):
        """Test a record cut off by the end of input"""
        with pytest.raises(FormatError):
            JhfCodec.parse(b"   65  3JZRF\n")

    def test_zero_count(self):
        """Test that a record without the left/right pair is rejected while parsing"""
        with pytest.raises(FormatError) as excinfo:
            JhfCodec.parse(b"   65  0\n   73  3NVRFR[\n", "empty")
        assert excinfo.value.line == 0
        assert "bad count field" in str(excinfo.value)

    def test_negative_count(self):
        """Test that a negative pair count is rejected"""
        with pytest.raises(FormatError) as excinfo:
            JhfCodec.parse(b"   65 -1JZ\n")
        assert excinfo.value.content == " -1"

    def test_format_error_is_value_error(self):
        """Test that callers can catch format errors as ValueError"""
        with pytest.raises(ValueError):
            JhfCodec.parse(b"junk")


class TestDecode:
    """Decoding raw records into glyphs"""

    def test_two_polylines(self):
        """Test a record with a pen-up between two polylines"""
        glyph = JhfCodec.decode("RRRPRT RRMRT")
        assert glyph.left == 0
        assert glyph.right == 0
        assert glyph.strokes == (((0, -2), (0, 2)), ((0, -5), (0, 2)))
        assert glyph.top == -6
        assert glyph.bottom == 3

    def test_letter_a(self):
        """Test the letter A of the simplex font"""
        glyph = JhfCodec.decode("I[RFJ[ RRFZ[ RMTWT")
        assert (glyph.left, glyph.right) == (-9, 9)
        assert glyph.strokes == (
            ((0, -12), (-8, 9)),
            ((0, -12), (8, 9)),
            ((-5, 2), (5, 2)),
        )
        assert (glyph.top, glyph.bottom) == (-13, 10)

    def test_header_only_has_no_strokes(self):
        """Test that a space glyph has no strokes and a zero vertical extent"""
        glyph = JhfCodec.decode("JZ")
        assert glyph.strokes == ()
        assert (glyph.left, glyph.right) == (-8, 8)
        assert (glyph.top, glyph.bottom) == (0, 0)
        assert glyph.width == 16

    def test_header_is_not_a_stroke_point(self):
        """Test that top and bottom ignore the left/right pair"""
        glyph = JhfCodec.decode("AcRR")
        assert glyph.strokes == (((0, 0),),)
        assert (glyph.top, glyph.bottom) == (-1, 1)

    def test_empty_polylines_are_kept(self):
        """Test that consecutive pen-up pairs produce empty polylines"""
        glyph = JhfCodec.decode("JZ R RRR")
        assert glyph.strokes == ((), (), ((0, 0),))

    def test_extent_after_empty_first_polyline(self):
        """Test that top and bottom come from the points, not from the origin"""
        glyph = JhfCodec.decode("RR RRV")
        assert glyph.strokes == ((), ((0, 4),))
        assert (glyph.top, glyph.bottom) == (3, 5)

    def test_deterministic(self):
        """Test that decoding the same record twice gives equal glyphs"""
        assert JhfCodec.decode("I[RFJ[ RRFZ[ RMTWT") == JhfCodec.decode("I[RFJ[ RRFZ[ RMTWT")

    def test_odd_record(self):
        """Test that a record with half a pair cannot be decoded"""
        with pytest.raises(FormatError):
            JhfCodec.decode("JZR")


class TestEncode:
    """Encoding glyphs into records"""

    def test_letter_a(self):
        """Test that encoding reproduces the stored record"""
        glyph = JhfCodec.decode("I[RFJ[ RRFZ[ RMTWT")
        assert JhfCodec.encode(glyph, 65) == RECORD_A

    def test_space(self):
        """Test a glyph without strokes"""
        assert JhfCodec.encode(JhfGlyph(-8, 8), 32) == "   32  1JZ"

    def test_count_includes_pen_up_pairs(self):
        """Test that the pair count covers header, points and pen-up pairs"""
        glyph = JhfGlyph.from_strokes(0, 0, [[(0, -2), (0, 2)], [(0, -5), (0, 2)]])
        assert JhfCodec.encode(glyph, 1) == "    1  6RRRPRT RRMRT"

    def test_wrapping(self):
        """Test that long records are wrapped at 72 columns without padding"""
        glyph = JhfGlyph.from_strokes(-8, 8, [[(i % 10, -(i % 7)) for i in range(50)]])
        text = JhfCodec.encode(glyph, 1234)
        lines = text.split("\n")
        assert [len(line) for line in lines] == [72, 38]
        assert "".join(lines).startswith(" 1234 51")

    def test_round_trip_through_parse(self):
        """Test decode(encode(glyph)) for a wrapped multi polyline glyph"""
        glyph = JhfGlyph.from_strokes(
            -11,
            11,
            [[(x, -12 + x) for x in range(-7, 8)], [(7, -12), (7, 9)], [(-7, -2)]],
        )
        records = JhfCodec.parse(JhfCodec.encode(glyph, 500))
        assert JhfCodec.decode(records[500]) == glyph

    def test_bundled_font_round_trip_is_byte_exact(self):
        """Test that re-encoding every record reproduces the bundled file"""
        content = (BUNDLED_FONT_DIR / "futural.jhf").read_text(encoding="latin-1")
        records = JhfCodec.parse(content)
        glyphs = {code: JhfCodec.decode(record) for code, record in records.items()}
        assert JhfCodec.encode_records(glyphs) == content
        for code, glyph in glyphs.items():
            assert JhfCodec.decode(JhfCodec.parse(JhfCodec.encode(glyph, code))[code]) == glyph
