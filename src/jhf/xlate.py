"""Translation tables mapping Hershey glyph codes to Unicode codepoints.

A translation file (``<font>.utf8``) holds one mapping per line::

    # comment
    2199 32          glyph 2199 is the space
    2214-2239 97     glyphs 2214..2239 are 'a'..'z'

Everything after ``#`` is ignored. A range maps consecutive glyph codes to
consecutive codepoints starting at the target.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from jhf.common import TranslationError
from jhf.font import JhfFont
from jhf.glyph import JhfGlyph

logger = logging.getLogger(__name__)

TRANSLATION_SUFFIX = ".utf8"


def _parse_int(text: str, what: str, path: str, index: int) -> int:
    try:
        return int(text)
    except ValueError as e:
        raise TranslationError(f"file {path!r} has bad {what} {text!r} on line {index}") from e


def parse_translation(content: str, path: str = "") -> Dict[int, int]:
    """Parse the content of a translation file.

    Args:
        content: Text of the translation file.
        path: File name, only used in error messages.

    Returns:
        Dictionary mapping glyph codes to Unicode codepoints.

    Raises:
        TranslationError: On lines with a wrong number of fields or bad numbers.
    """
    table: Dict[int, int] = {}
    for index, line in enumerate(content.split("\n")):
        fields = line.split("#", 1)[0].split()
        if not fields:
            continue
        if len(fields) != 2:
            raise TranslationError(f"file {path!r} contains syntax error on line {index}: {fields!r}")
        target = _parse_int(fields[1], "target number", path, index)
        bounds = fields[0].split("-")
        first = _parse_int(bounds[0], "base", path, index)
        if len(bounds) == 1:
            table[first] = target
            continue
        if len(bounds) != 2:
            raise TranslationError(f"file {path!r} has bad range {fields[0]!r} on line {index}")
        last = _parse_int(bounds[1], "second field", path, index)
        for code in range(first, last + 1):
            table[code] = target
            target += 1
    return table


def load_translation(path: Union[str, Path]) -> Optional[Dict[int, int]]:
    """Load a translation file.

    Returns:
        The translation table, or None if the file does not exist.

    Raises:
        TranslationError: If the file contains syntax errors.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("no translation file %s", path)
        return None
    table = parse_translation(content, str(path))
    logger.debug("loaded %d translations from %s", len(table), path)
    return table


def invert_translation(table: Mapping[int, int]) -> Dict[int, int]:
    """Returns the table mapping codepoints back to glyph codes."""
    return {target: code for code, target in table.items()}


def translate_font(font: JhfFont, table: Mapping[int, int]) -> Dict[int, JhfGlyph]:
    """Returns the glyphs of font keyed by their translated codepoint.

    Raises:
        UnknownGlyphError: If the table refers to a glyph the font lacks.
    """
    glyphs: Dict[int, JhfGlyph] = {}
    for code, target in table.items():
        glyphs[target] = font.glyph(code)
    return glyphs
