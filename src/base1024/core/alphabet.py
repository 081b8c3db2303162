"""Base-1024 pictograph alphabets.

Two versions of the 1024-symbol table exist. Each symbol stands for a
10-bit ordinal. V2 keeps the V1 symbol at every ordinal except where V1
used a text-presentation or modifier code point; those positions carry a
V2-only pictograph instead. A symbol shared by both versions always has
the same ordinal in both.

Padding symbols sit outside both tables:
  FILL            : pads a final block of 1-3 bytes out to 4 symbols
  PADDING_LAST_*  : last symbol of a final block of 4 bytes; marker k
                    carries the last 2 data bits, as ordinal k << 8
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from .errors import AlphabetError

SYMBOL_COUNT = 1024
BITS_PER_SYMBOL = 10
MARKER_COUNT = 4
MARKER_SHIFT = 8


class Version(IntFlag):
    V1 = 1
    V2 = 2
    ALL = V1 | V2


class PaddingRole(Enum):
    NONE = "none"
    FILL = "fill"
    LAST = "last"


@dataclass(frozen=True)
class SymbolInfo:
    """Reverse-lookup entry for a symbol.

    For LAST markers the ordinal is subindex << 8: the value of the 4th
    10-bit field, whose high 2 bits are the marker subindex.
    """
    ordinal: int
    versions: Version
    padding: PaddingRole = PaddingRole.NONE


# Padding code points
FILL = "\u2615"
PADDING_LAST_V1 = ("\u269C", "\U0001F3CD", "\U0001F4D1", "\U0001F64B")
PADDING_LAST_V2 = ("\U0001F977", "\U0001F6FC", "\U0001F4D1", "\U0001F64B")

# V1 table: inclusive code point ranges in ordinal order
_V1_RANGES = [
    (0x1F300, 0x1F5FF),   # misc symbols and pictographs
    (0x1F600, 0x1F64F),   # emoticons
    (0x1F680, 0x1F6C5),   # transport and map
    (0x1F910, 0x1F93A),
    (0x1F93C, 0x1F945),
    (0x1F947, 0x1F970),
    (0x1F973, 0x1F976),
    (0x1F97A, 0x1F983),
]

# V1 positions replaced in V2, and their replacements (same order)
_V2_REPLACED = [
    (0x1F321, 0x1F32C),   # thermometer .. wind face, text presentation
    (0x1F394, 0x1F39F),   # heart with tip .. admission tickets
    (0x1F3FB, 0x1F3FF),   # skin tone modifiers
]
_V2_SUBSTITUTES = [(0x1F984, 0x1F9A0)]


def _expand(ranges, exclude=()) -> list[str]:
    return [chr(cp) for lo, hi in ranges for cp in range(lo, hi + 1)
            if chr(cp) not in exclude]


def _default_tables() -> tuple[list[str], list[str]]:
    padding = {FILL, *PADDING_LAST_V1, *PADDING_LAST_V2}
    v1 = _expand(_V1_RANGES, exclude=padding)
    swap = dict(zip(_expand(_V2_REPLACED), _expand(_V2_SUBSTITUTES)))
    v2 = [swap.get(s, s) for s in v1]
    return v1, v2


def parse_symbol_list(text: str) -> list[str]:
    """Parse a symbol list: one hex code point per line.

    Case-insensitive; blank lines and surrounding whitespace are ignored,
    and a leading "U+" or "0x" is accepted.
    """
    symbols = []
    for lineno, line in enumerate(text.strip().lower().splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        if line.startswith(("u+", "0x")):
            line = line[2:]
        try:
            cp = int(line, 16)
            symbols.append(chr(cp))
        except ValueError:
            raise AlphabetError(
                f"Line {lineno}: not a hex code point: {line!r}") from None
    return symbols


@dataclass(frozen=True)
class Alphabet:
    """Both symbol tables, the padding symbols and the reverse lookup.

    Build instances with Alphabet.build(), which validates the tables.
    """
    v1: tuple[str, ...]
    v2: tuple[str, ...]
    fill: str
    last_v1: tuple[str, ...]
    last_v2: tuple[str, ...]
    reverse: Mapping[str, SymbolInfo] = field(repr=False)

    @classmethod
    def build(cls, v1: Iterable[str], v2: Iterable[str], fill: str = FILL,
              last_v1: Iterable[str] = PADDING_LAST_V1,
              last_v2: Iterable[str] = PADDING_LAST_V2) -> "Alphabet":
        """Validate the tables and build the merged reverse lookup.

        Raises AlphabetError if either table is not 1024 distinct symbols,
        a symbol shared by V1 and V2 has different ordinals, a padding
        symbol is also a data symbol, or a marker list is not 4 long.
        """
        v1, v2 = tuple(v1), tuple(v2)
        last_v1, last_v2 = tuple(last_v1), tuple(last_v2)

        reverse: dict[str, SymbolInfo] = {}
        _merge_table(reverse, v1, Version.V1)
        _merge_table(reverse, v2, Version.V2)

        if fill in reverse:
            raise AlphabetError(f"Fill symbol {_cp(fill)} is also a data symbol")
        reverse[fill] = SymbolInfo(0, Version.ALL, PaddingRole.FILL)

        _merge_markers(reverse, last_v1, Version.V1)
        _merge_markers(reverse, last_v2, Version.V2)

        return cls(v1, v2, fill, last_v1, last_v2, MappingProxyType(reverse))

    @classmethod
    def from_files(cls, v1_path, v2_path, **padding) -> "Alphabet":
        """Build from two symbol list files (see parse_symbol_list)."""
        v1 = parse_symbol_list(Path(v1_path).read_text(encoding="utf-8"))
        v2 = parse_symbol_list(Path(v2_path).read_text(encoding="utf-8"))
        return cls.build(v1, v2, **padding)

    def table(self, version: Version) -> tuple[str, ...]:
        """Return the 1024-symbol table for V1 or V2."""
        if version is Version.V1:
            return self.v1
        if version is Version.V2:
            return self.v2
        raise ValueError(f"Alphabet version must be V1 or V2, got {version!r}")

    def markers(self, version: Version) -> tuple[str, ...]:
        """Return the last-block markers for V1 or V2, by subindex."""
        if version is Version.V1:
            return self.last_v1
        if version is Version.V2:
            return self.last_v2
        raise ValueError(f"Alphabet version must be V1 or V2, got {version!r}")

    def symbol_at(self, version: Version, ordinal: int) -> str:
        """Return the symbol encoding a 10-bit ordinal."""
        if not 0 <= ordinal < SYMBOL_COUNT:
            raise ValueError(
                f"Ordinal must be 0-{SYMBOL_COUNT - 1}, got {ordinal}")
        return self.table(version)[ordinal]

    def last_marker(self, version: Version, subindex: int) -> str:
        if not 0 <= subindex < MARKER_COUNT:
            raise ValueError(
                f"Marker subindex must be 0-{MARKER_COUNT - 1}, got {subindex}")
        return self.markers(version)[subindex]

    def info_for(self, symbol: str) -> SymbolInfo | None:
        """Look up a symbol. None if it has no role in either alphabet."""
        return self.reverse.get(symbol)


def _cp(symbol: str) -> str:
    if len(symbol) == 1:
        return f"U+{ord(symbol):04X}"
    return repr(symbol)


def _merge_table(reverse: dict, table: tuple, version: Version) -> None:
    if len(table) != SYMBOL_COUNT:
        raise AlphabetError(
            f"{version.name} table must have {SYMBOL_COUNT} symbols, "
            f"got {len(table)}")

    seen = set()
    for ordinal, symbol in enumerate(table):
        if len(symbol) != 1:
            raise AlphabetError(
                f"{version.name}[{ordinal}] is not a single code point: {symbol!r}")
        if symbol in seen:
            raise AlphabetError(
                f"{version.name} table repeats {_cp(symbol)} at {ordinal}")
        seen.add(symbol)

        info = reverse.get(symbol)
        if info is None:
            reverse[symbol] = SymbolInfo(ordinal, version)
        elif info.ordinal != ordinal:
            raise AlphabetError(
                f"Ordinal mismatch for {_cp(symbol)}: "
                f"{info.ordinal} in {info.versions.name}, {ordinal} in {version.name}")
        else:
            reverse[symbol] = SymbolInfo(ordinal, info.versions | version)


def _merge_markers(reverse: dict, markers: tuple, version: Version) -> None:
    if len(markers) != MARKER_COUNT:
        raise AlphabetError(
            f"{version.name} needs {MARKER_COUNT} last-block markers, "
            f"got {len(markers)}")

    for subindex, symbol in enumerate(markers):
        ordinal = subindex << MARKER_SHIFT
        info = reverse.get(symbol)
        if info is None:
            reverse[symbol] = SymbolInfo(ordinal, version, PaddingRole.LAST)
        elif info.padding is PaddingRole.LAST and info.ordinal == ordinal:
            reverse[symbol] = SymbolInfo(ordinal, info.versions | version,
                                         PaddingRole.LAST)
        else:
            raise AlphabetError(
                f"{version.name} marker {subindex} ({_cp(symbol)}) "
                f"collides with an existing symbol")


# Built once; read-only afterwards
DEFAULT_ALPHABET = Alphabet.build(*_default_tables())
