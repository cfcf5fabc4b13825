"""Composition-based glyph factory system.

This module separates glyph production into sources and caches. A source
knows how to produce a glyph for a code (decoding a raw record, looking up a
fixed table, trying several sources in turn), a cache keeps produced glyphs
and the factory combines both behind one thread-safe ``get_glyph``.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Protocol

from jhf.codec import JhfCodec
from jhf.common import UnknownGlyphError
from jhf.glyph import JhfGlyph

logger = logging.getLogger(__name__)

###############################################################################
# Core Protocols
###############################################################################


class GlyphSource(Protocol):
    """Protocol for glyph sources.

    A glyph source is responsible for providing the glyph of a code.
    """

    def get_glyph(self, code: int) -> JhfGlyph:
        """Get the glyph for the specified code.

        Args:
            code: The glyph code.

        Returns:
            JhfGlyph instance for the code.

        Raises:
            UnknownGlyphError: If the code is not available.
        """


###############################################################################
# Cache Interface
###############################################################################


class GlyphCache(ABC):
    """Abstract interface for glyph caching.

    A cache stores glyphs that have been decoded to avoid repeated decoding.
    Caches are not synchronized themselves, the owning factory serializes
    access.
    """

    @abstractmethod
    def get(self, code: int) -> Optional[JhfGlyph]:
        """Get a glyph from the cache.

        Args:
            code: The glyph code.

        Returns:
            The cached glyph, or None if not in cache.
        """

    @abstractmethod
    def put(self, code: int, glyph: JhfGlyph) -> None:
        """Store a glyph in the cache.

        Args:
            code: The glyph code.
            glyph: The glyph to cache.
        """

    @abstractmethod
    def codes(self) -> List[int]:
        """Returns the codes currently held, in ascending order."""


###############################################################################
# Cache Implementations
###############################################################################


class MemoryGlyphCache(GlyphCache):
    """In-memory glyph cache.

    Stores glyphs in a dictionary for fast access during runtime.
    """

    def __init__(self):
        """Initialize an empty memory cache."""
        self._cache: Dict[int, JhfGlyph] = {}

    def get(self, code: int) -> Optional[JhfGlyph]:
        """Get a glyph from the memory cache."""
        return self._cache.get(code)

    def put(self, code: int, glyph: JhfGlyph) -> None:
        """Store a glyph in the memory cache."""
        self._cache[code] = glyph

    def codes(self) -> List[int]:
        return sorted(self._cache)

    def __len__(self) -> int:
        return len(self._cache)


###############################################################################
# Source Implementations
###############################################################################


@dataclass
class RecordGlyphSource:
    """Glyph source that decodes raw JHF records.

    Every call decodes again, combine it with a cache to decode only once.
    """

    _records: Mapping[int, str]

    def __init__(self, records: Mapping[int, str]):
        """Initialize with raw records.

        Args:
            records: Mapping of glyph code to raw record data.
        """
        self._records = records

    def get_glyph(self, code: int) -> JhfGlyph:
        """Decode the record of code.

        Raises:
            UnknownGlyphError: If there is no record for code.
        """
        try:
            record = self._records[code]
        except KeyError:
            raise UnknownGlyphError(code) from None
        return JhfCodec.decode(record)


@dataclass
class TableGlyphSource:
    """Glyph source serving a fixed table of glyphs.

    If a default code is configured, unknown codes are answered with the
    glyph of the default code instead of raising.
    """

    _glyphs: Mapping[int, JhfGlyph]
    _default: Optional[int]

    def __init__(self, glyphs: Mapping[int, JhfGlyph], default: Optional[int] = None):
        """Initialize with a glyph table.

        Args:
            glyphs: Mapping of glyph code to glyph.
            default: Code whose glyph substitutes unknown codes, None to raise instead.
        """
        if default is not None and default not in glyphs:
            raise ValueError(f"default code {default} is not part of the table")
        self._glyphs = MappingProxyType(dict(glyphs))
        self._default = default

    def get_glyph(self, code: int) -> JhfGlyph:
        """Get a glyph from the table.

        Raises:
            UnknownGlyphError: If code is unknown and no default is configured.
        """
        glyph = self._glyphs.get(code)
        if glyph is not None:
            return glyph
        if self._default is None:
            raise UnknownGlyphError(code)
        return self._glyphs[self._default]


@dataclass
class FallbackGlyphSource:
    """Glyph source that tries primary then secondary sources.

    Attempts to get glyphs from the primary source first. If the primary does
    not know a code, falls back to the secondary source.
    """

    _primary: GlyphSource
    _secondary: GlyphSource

    def __init__(self, primary: GlyphSource, secondary: GlyphSource):
        """Initialize with primary and secondary sources.

        Args:
            primary: The primary source to try first.
            secondary: The secondary source to use as fallback.
        """
        self._primary = primary
        self._secondary = secondary

    def get_glyph(self, code: int) -> JhfGlyph:
        """Get a glyph, trying primary then secondary source.

        Raises:
            UnknownGlyphError: If neither source has the code.
        """
        try:
            return self._primary.get_glyph(code)
        except UnknownGlyphError:
            logger.debug("glyph code %d not in primary source, using fallback", code)
            return self._secondary.get_glyph(code)


###############################################################################
# Unified Factory
###############################################################################


@dataclass
class JhfGlyphFactory:
    """Unified glyph factory using composition.

    Combines a source and an optional cache. The factory operates in this
    order:
    1. Check cache (if present)
    2. Get from source
    3. Store in cache (if present)
    4. Return glyph

    Steps 1 to 3 run under a lock so concurrent callers asking for the same
    code decode it once and all receive the same glyph object. The lock is
    held for one code at a time only.
    """

    source: GlyphSource
    cache: Optional[GlyphCache] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def get_glyph(self, code: int) -> JhfGlyph:
        """Get the glyph for the specified code.

        Args:
            code: The glyph code.

        Returns:
            JhfGlyph instance for the code.

        Raises:
            UnknownGlyphError: If the code is not available in the source.
        """
        if self.cache is None:
            return self.source.get_glyph(code)

        with self._lock:
            cached = self.cache.get(code)
            if cached is not None:
                return cached
            # pylint: disable=assignment-from-no-return
            glyph = self.source.get_glyph(code)
            logger.debug("decoded glyph code %d", code)
            self.cache.put(code, glyph)
            return glyph

    def cached_codes(self) -> List[int]:
        """Returns the codes held by the cache in ascending order, empty without cache."""
        if self.cache is None:
            return []
        with self._lock:
            return self.cache.codes()

    @staticmethod
    def create_from_records(records: Mapping[int, str]) -> JhfGlyphFactory:
        """Create a memory cached factory decoding the given raw records.

        Args:
            records: Mapping of glyph code to raw record data.

        Returns:
            JhfGlyphFactory configured for the common use case.
        """
        return JhfGlyphFactory(source=RecordGlyphSource(records), cache=MemoryGlyphCache())

    @staticmethod
    def create_with_fallback(primary: GlyphSource, secondary: GlyphSource) -> JhfGlyphFactory:
        """Create an uncached factory with primary and fallback sources.

        Args:
            primary: Primary source to try first.
            secondary: Secondary source as fallback.

        Returns:
            JhfGlyphFactory with fallback capability.
        """
        return JhfGlyphFactory(source=FallbackGlyphSource(primary, secondary))
