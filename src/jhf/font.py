"""Hershey font handling: loading, glyph access and text composition."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Union

from jhf.codec import JhfCodec
from jhf.font_source import FontSource, get_font_source
from jhf.glyph import JhfCompositeText, JhfGlyph
from jhf.glyph_factory import JhfGlyphFactory
from jhf.layout import JhfTextLayouter

logger = logging.getLogger(__name__)


###############################################################################
# JhfFont
###############################################################################
class JhfFont:
    """Hershey font with cached glyph decoding.

    The raw records are split once at load time and never change afterwards.
    Glyphs are decoded on first request through a cached glyph factory, so a
    font can be shared by several threads.
    """

    def __init__(self, name: str, records: Mapping[int, str]) -> None:
        """
        Initialize a JhfFont from raw records.

        Args:
            name (str): Name of the font, e.g. "futural".
            records (Mapping[int, str]): Raw record data keyed by glyph code.
        """
        self._name = name
        self._records = MappingProxyType(dict(records))
        self._glyph_factory = JhfGlyphFactory.create_from_records(self._records)

    @classmethod
    def from_bytes(cls, content: Union[bytes, str], name: str = "") -> JhfFont:
        """Create a font from the content of a ``.jhf`` container.

        Raises:
            FormatError: If the content is malformed.
        """
        return cls(name, JhfCodec.parse(content, name))

    @classmethod
    def load(cls, name: str, source: Optional[FontSource] = None) -> JhfFont:
        """Load a named font.

        Args:
            name: Font name without the ``.jhf`` suffix.
            source: Font source to read from. Defaults to the configured source
                (see jhf.font_source.set_font_dir).

        Raises:
            FontNotFoundError: If the source has no such font.
            FormatError: If the font data is malformed.
        """
        if source is None:
            source = get_font_source()
        font = cls.from_bytes(source.read_font(name), name)
        logger.info("loaded font %r with %d glyphs", name, len(font))
        return font

    @property
    def name(self) -> str:
        """Returns the name of the font."""
        return self._name

    @property
    def records(self) -> Mapping[int, str]:
        """Returns the read-only raw records of the font."""
        return self._records

    @property
    def glyph_factory(self) -> JhfGlyphFactory:
        """Returns the glyph factory used by this font."""
        return self._glyph_factory

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, code: object) -> bool:
        return code in self._records

    def __str__(self) -> str:
        return f'JhfFont("{self._name}", glyphs: {len(self._records)})'

    def glyph(self, code: int) -> JhfGlyph:
        """Returns the decoded glyph of code.

        Raises:
            UnknownGlyphError: If the font has no glyph for code.
        """
        return self._glyph_factory.get_glyph(code)

    def marshal(self, code: int) -> str:
        """Returns the stored record of the glyph of code, re-encoded.

        Raises:
            UnknownGlyphError: If the font has no glyph for code.
        """
        return JhfCodec.encode(self.glyph(code), code)

    def codes(self) -> List[int]:
        """Returns the glyph codes of the font in ascending order."""
        return sorted(self._records)

    def scan(self) -> Iterator[int]:
        """Returns a fresh iterator over the glyph codes in ascending order."""
        return iter(self.codes())

    def cached_codes(self) -> List[int]:
        """Returns the codes decoded so far in ascending order."""
        return self._glyph_factory.cached_codes()

    def text(self, text: str) -> JhfCompositeText:
        """Returns the composite glyph of text set in this font.

        Unknown characters are replaced by fallback glyphs, this never fails.
        """
        return JhfTextLayouter(self._glyph_factory).layout(text)

    def to_jhf(self) -> str:
        """Returns the whole font encoded as container text in ascending code order."""
        return JhfCodec.encode_records({code: self.glyph(code) for code in self.codes()})

