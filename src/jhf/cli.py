"""
jhf-query - command line tool to explore Hershey fonts.

Usage:
    jhf-query --ls
    jhf-query --font futural --scan
    jhf-query --font futural --glyph 65
    jhf-query --font futural --banner "Hello, World"
    jhf-query --font futural --banner "Hello" --svg hello.svg
    jhf-query --dir jhfdata/hershey --font rowmans --xlate jhfdata/xlate --dest out

Glyphs and banners are shown as ASCII art on stdout, everything else is
reported through logging on stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from jhf.codec import JhfCodec
from jhf.common import FONT_SUFFIX, JhfError
from jhf.font import JhfFont
from jhf.font_source import list_fonts, set_font_dir
from jhf.glyph import JhfGlyph
from jhf.page import JhfSvgPage
from jhf.raster import JhfRaster
from jhf.xlate import TRANSLATION_SUFFIX, invert_translation, load_translation, translate_font

logger = logging.getLogger(__name__)

DEFAULT_FONT = "futural"


def build_parser() -> argparse.ArgumentParser:
    """Returns the argument parser of the tool."""
    parser = argparse.ArgumentParser(
        prog="jhf-query",
        description="Explore Hershey fonts stored in jhf format.",
    )
    parser.add_argument("--font", default=DEFAULT_FONT, help="name of font")
    parser.add_argument("--ls", action="store_true", help="list known fonts and exit")
    parser.add_argument("--scan", action="store_true", help="list known codes for --font")
    parser.add_argument("--glyph", type=int, default=-1, help="display font code as ascii art")
    parser.add_argument("--dir", default="", help="font directory, Ex. jhfdata/hershey")
    parser.add_argument("--xlate", default="", help="directory of utf8 translation files")
    parser.add_argument(
        "--skipped", action="store_true", help="just show codes without utf8 translation"
    )
    parser.add_argument("--dest", default="", help="write translated *.jhf files here")
    parser.add_argument("--banner", default="", help="text to display")
    parser.add_argument("--svg", default="", help="also write the banner (or --glyph) as SVG file")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def describe_glyph(code: int, glyph: JhfGlyph, table: Optional[Dict[int, int]] = None) -> str:
    """Returns the one line description of a glyph shown above its ASCII art."""
    box = f"({glyph.left},{glyph.top}), ({glyph.right},{glyph.bottom})"
    if table is None:
        return f"glyph {code}: {box}"
    if code in table:
        return f"glyph {code} [{table[code]} = `{chr(table[code])}`]: {box}"
    return f"glyph {code} [???]: {box}"


def show_glyph(font: JhfFont, code: int, table: Optional[Dict[int, int]] = None, skipped: bool = False) -> None:
    """Print the description and ASCII art of one glyph.

    With skipped set, glyphs that have a translation are not shown.
    """
    glyph = font.glyph(code)
    if table is not None and code in table and skipped:
        return
    print()
    print(describe_glyph(code, glyph, table))
    print(JhfRaster.for_glyph(glyph).render(), end="")


def scan_font(font: JhfFont, args: argparse.Namespace, table: Optional[Dict[int, int]]) -> None:
    """Show every glyph of font, or just list the codes if --glyph is given."""
    for code in font.scan():
        if args.glyph == -1:
            show_glyph(font, code, table, args.skipped)
        elif table is None:
            logger.info("glyph: %d", code)
        elif code in table:
            if args.skipped:
                continue
            logger.info("glyph: %d [%d = `%s`]", code, table[code], chr(table[code]))
        else:
            logger.info("glyph: %d [???]", code)


def banner_text(text: str, table: Optional[Dict[int, int]] = None) -> str:
    """Map the characters of a banner back to glyph codes of the font.

    With a translation table the banner is written in Unicode while the font
    is keyed by its own glyph codes. Characters without translation are
    passed unchanged.
    """
    if table is None:
        return text
    lookup = invert_translation(table)
    return "".join(chr(lookup.get(ord(character), ord(character))) for character in text)


def write_translated(font: JhfFont, table: Dict[int, int], dest: str) -> Path:
    """Write the glyphs of font re-keyed by the translation table into dest."""
    glyphs = translate_font(font, table)
    path = Path(dest) / f"{font.name}{FONT_SUFFIX}"
    path.write_text(JhfCodec.encode_records(glyphs), encoding="latin-1")
    return path


def run(args: argparse.Namespace) -> int:
    """Execute the parsed command line, returns the exit status."""
    if args.dir:
        set_font_dir(args.dir)
    if args.ls:
        logger.info("known fonts: %s", list_fonts())
        return 0

    table: Optional[Dict[int, int]] = None
    if args.xlate:
        table = load_translation(Path(args.xlate) / f"{args.font}{TRANSLATION_SUFFIX}")

    font = JhfFont.load(args.font)

    drawable: Optional[JhfGlyph] = None
    if args.scan:
        scan_font(font, args, table)
    elif args.glyph != -1:
        show_glyph(font, args.glyph, table, args.skipped)
        drawable = font.glyph(args.glyph)

    if args.banner:
        composite = font.text(banner_text(args.banner, table))
        print(JhfRaster.for_text(composite).render(), end="")
        drawable = composite

    if args.svg and drawable is not None:
        JhfSvgPage.for_glyph(drawable).save_as(args.svg)
        logger.info("wrote %r", args.svg)

    if args.dest:
        if table is None:
            logger.error("no translation --xlate to perform into --dest=%r directory", args.dest)
            return 1
        path = write_translated(font, table, args.dest)
        logger.info("wrote %r", str(path))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point of jhf-query."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    try:
        return run(args)
    except (JhfError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
