"""Reading and writing of the Hershey JHF container format.

A JHF container is ASCII text holding one logical record per glyph::

    CCCCCNNNLRxyxyxy RxyXY...

with a 5 column glyph code, a 3 column count of 2 character pairs, the
nominal left/right pair and the stroke points. Every coordinate character
encodes ``ord(c) - ord('R')``. The pair ``" R"`` lifts the pen, i.e. it ends
the current polyline. Long records are wrapped at 72 columns without any
continuation marker, the pair count tells how much data belongs to a record.

Example (an ``H``)::

    '   72  9G]KFK[ RYFY[ RKPYP'

    left/right  'G]'  -> (-11, 11)
    polyline 1  'KF' 'K['  -> (-7, -12) (-7, 9)
    polyline 2  'YF' 'Y['  -> (7, -12) (7, 9)
    polyline 3  'KP' 'YP'  -> (-7, -2) (7, -2)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Union

from jhf.common import (
    CODE_WIDTH,
    HEADER_WIDTH,
    LINE_WIDTH,
    PEN_UP,
    SENTINEL_CODE,
    FormatError,
    JhfPoint,
    coord_char,
    coord_value,
)
from jhf.glyph import JhfGlyph

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


class JhfCodec:
    """Codec for the JHF container format.

    All methods are static. ``parse`` splits container content into raw
    records, ``decode`` turns one raw record into a JhfGlyph and ``encode``
    is the exact inverse of both: ``decode(encode(glyph, code)[8:])``
    reproduces a decoded glyph and re-encoding the records of a well-formed
    container reproduces its text.
    """

    @dataclass
    class _ParseState:
        """Internal state of one parse call."""

        name: str
        auto_inc: int = 1
        pending: str = ""

        def next_private_code(self) -> int:
            code = self.auto_inc
            self.auto_inc += 1
            return code

    @staticmethod
    def _parse_number(field: str, what: str, line: int, name: str) -> int:
        tokens = field.split()
        if len(tokens) != 1 or not _NUMBER_RE.fullmatch(tokens[0]):
            prefix = f"{name!r} " if name else ""
            raise FormatError(f"{prefix}bad {what} field", line, field)
        return int(tokens[0])

    @staticmethod
    def parse(content: Union[bytes, str], name: str = "") -> Dict[int, str]:
        """Split container content into raw records keyed by glyph code.

        Args:
            content: The whole content of a ``.jhf`` file.
            name: Font name, only used in error messages.

        Returns:
            Dictionary mapping each glyph code to its record data, which
            starts with the left/right pair.

        Raises:
            FormatError: On short entries, non-numeric header fields, a pair
                count below one, excess data or a record truncated by the end
                of input.
        """
        text = content.decode("latin-1") if isinstance(content, bytes) else content
        state = JhfCodec._ParseState(name)
        records: Dict[int, str] = {}
        index = 0
        for index, physical_line in enumerate(text.split("\n")):
            state.pending += physical_line.removesuffix("\r")
            if state.pending == "":
                continue  # typically the last line
            if len(state.pending) < HEADER_WIDTH:
                raise FormatError("illegal size", index, state.pending)
            count = JhfCodec._parse_number(state.pending[CODE_WIDTH:HEADER_WIDTH], "count", index, name)
            if count < 1:
                # every record holds at least the left/right pair
                prefix = f"{name!r} " if name else ""
                raise FormatError(f"{prefix}bad count field", index, state.pending[CODE_WIDTH:HEADER_WIDTH])
            want, got = 2 * count, len(state.pending) - HEADER_WIDTH
            if want < got:
                raise FormatError(
                    f"excessive data ({got} > {want})",
                    index,
                    state.pending[HEADER_WIDTH:],
                )
            if got < want:
                continue
            code = JhfCodec._parse_number(state.pending[:CODE_WIDTH], "code", index, name)
            if code == SENTINEL_CODE:
                code = state.next_private_code()
            records[code] = state.pending[HEADER_WIDTH:]
            state.pending = ""
        if state.pending:
            raise FormatError("truncated record at end of input", index, state.pending)
        logger.debug("parsed %d records of font %r", len(records), name)
        return records

    @staticmethod
    def decode(record: str) -> JhfGlyph:
        """Decode one raw record (starting at the left/right pair) into a glyph.

        The first pair is the nominal left/right box. Every following pair is
        a stroke point, except the pen-up pair which ends the current polyline.
        Top and bottom are the extreme stroke y-values padded by one unit.

        Raises:
            FormatError: If the record does not consist of whole pairs.
        """
        if len(record) < 2 or len(record) % 2:
            raise FormatError("record is not a sequence of pairs", None, record)
        left, right = coord_value(record[0]), coord_value(record[1])
        strokes: List[List[JhfPoint]] = []
        if len(record) > 2:
            scribe: List[JhfPoint] = []
            for i in range(2, len(record), 2):
                pair = record[i : i + 2]
                if pair == PEN_UP:
                    strokes.append(scribe)
                    scribe = []
                    continue
                scribe.append((coord_value(pair[0]), coord_value(pair[1])))
            strokes.append(scribe)
        return JhfGlyph.from_strokes(left, right, strokes)

    @staticmethod
    def encode(glyph: JhfGlyph, code: int) -> str:
        """Encode a glyph into its stored record, wrapped at 72 columns.

        The pair count includes the left/right pair and the pen-up pairs.
        The last line is not padded and no trailing newline is added.
        """
        pairs = [coord_char(glyph.left) + coord_char(glyph.right)]
        for i, line in enumerate(glyph.strokes):
            if i != 0:
                pairs.append(PEN_UP)
            pairs.extend(coord_char(x) + coord_char(y) for x, y in line)
        text = f"{code:5d}{len(pairs):3d}{''.join(pairs)}"
        return "\n".join(text[i : i + LINE_WIDTH] for i in range(0, len(text), LINE_WIDTH))

    @staticmethod
    def encode_records(glyphs: Dict[int, JhfGlyph]) -> str:
        """Encode several glyphs into container text in ascending code order.

        Every record is terminated by a newline.
        """
        return "".join(JhfCodec.encode(glyphs[code], code) + "\n" for code in sorted(glyphs))
