"""Sources of ``.jhf`` font files and the process-wide font directory setting.

By default fonts are read from the dataset bundled with the package. Calling
``set_font_dir(path)`` makes all following loads read from an external
directory instead, ``set_font_dir("")`` or ``reset_font_dir()`` switches back
to the bundled fonts. Fonts loaded before a switch are not affected.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import List, Optional, Protocol, Union

from jhf.common import FONT_SUFFIX, FontNotFoundError

logger = logging.getLogger(__name__)

BUNDLED_FONT_DIR = Path(__file__).resolve().parent / "fonts"

###############################################################################
# Core Protocols
###############################################################################


class FontSource(Protocol):
    """Protocol for font sources.

    A font source lists the names of the fonts it provides and reads the raw
    container bytes of a named font.
    """

    def list_fonts(self) -> List[str]:
        """Returns the sorted names of the available fonts, without suffix."""

    def read_font(self, name: str) -> bytes:
        """Returns the raw content of the named font.

        Raises:
            FontNotFoundError: If the font is not available.
        """


###############################################################################
# Source Implementations
###############################################################################


class DirectoryFontSource:
    """Font source reading ``*.jhf`` files from one directory.

    Font names are confined to the directory: names containing path
    separators or parent references are treated as unknown fonts.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """Initialize with a font directory.

        Args:
            path: Directory holding the ``.jhf`` files.

        Raises:
            NotADirectoryError: If path is not an existing directory.
        """
        self._root = Path(path)
        if not self._root.is_dir():
            raise NotADirectoryError(f"font directory {str(path)!r} is not a directory")

    @property
    def root(self) -> Path:
        """Returns the font directory."""
        return self._root

    def list_fonts(self) -> List[str]:
        return sorted(p.stem for p in self._root.iterdir() if p.suffix == FONT_SUFFIX and p.is_file())

    def read_font(self, name: str) -> bytes:
        file_name = f"{name}{FONT_SUFFIX}"
        if not name or Path(file_name).name != file_name or name in (".", ".."):
            raise FontNotFoundError(name, file_name)
        path = self._root / file_name
        try:
            return path.read_bytes()
        except OSError as e:
            raise FontNotFoundError(name, str(path)) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._root)!r})"


class BundledFontSource(DirectoryFontSource):
    """Font source serving the fonts shipped with the package."""

    def __init__(self) -> None:
        super().__init__(BUNDLED_FONT_DIR)


###############################################################################
# Process-wide configuration
###############################################################################

_lock = threading.Lock()
_font_source: FontSource = BundledFontSource()


def get_font_source() -> FontSource:
    """Returns the font source used for loading fonts by name."""
    with _lock:
        return _font_source


def set_font_source(source: FontSource) -> None:
    """Replace the font source used for future font loads."""
    global _font_source  # pylint: disable=global-statement
    with _lock:
        _font_source = source
    logger.info("font source set to %r", source)


def set_font_dir(path: Optional[Union[str, Path]]) -> None:
    """Read future font loads from path, or from the bundled fonts if path is empty.

    Raises:
        NotADirectoryError: If path is not an existing directory.
    """
    if not path:
        reset_font_dir()
        return
    set_font_source(DirectoryFontSource(path))


def reset_font_dir() -> None:
    """Restore the bundled fonts as source of future font loads."""
    set_font_source(BundledFontSource())


def list_fonts() -> List[str]:
    """Returns the names of the fonts of the configured source."""
    return get_font_source().list_fonts()


def read_font(name: str) -> bytes:
    """Returns the raw content of a font of the configured source.

    Raises:
        FontNotFoundError: If the font is not available.
    """
    return get_font_source().read_font(name)
