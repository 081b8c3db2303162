"""Base-1024 block codec.

Every 5 input bytes (40 bits) become four 10-bit ordinals, most
significant first, each written as one symbol of the chosen alphabet.
Every block is exactly 4 symbols.

A short final block of r bytes (1-4) is zero-extended to 40 bits and
split the same way:

    r   symbols
    1   d  FILL FILL FILL
    2   d  d    FILL FILL
    3   d  d    d    FILL
    4   d  d    d    LAST[k]

With 4 bytes the 4th field holds only the last 2 data bits, k, in its
high bits; it is written as last-block marker k, whose ordinal is k << 8.
Input whose length is a multiple of 5 ends on a full block.

Decoding infers the alphabet version from the symbols themselves: the
first version-specific symbol fixes it, and any later symbol from the
other version is rejected.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .alphabet import (
    BITS_PER_SYMBOL,
    DEFAULT_ALPHABET,
    MARKER_SHIFT,
    Alphabet,
    PaddingRole,
    Version,
)
from .errors import (
    MisplacedPadding,
    TrailingDataAfterTerminator,
    TruncatedStream,
    UnknownSymbol,
    VersionMismatch,
)

logger = logging.getLogger(__name__)

BLOCK_BYTES = 5
BLOCK_SYMBOLS = 4
_MASK = (1 << BITS_PER_SYMBOL) - 1


def encoded_length(n: int) -> int:
    """Number of symbols produced when encoding n bytes."""
    if n < 0:
        raise ValueError(f"Length must be non-negative, got {n}")
    return -(-n // BLOCK_BYTES) * BLOCK_SYMBOLS


def _describe(symbol: str) -> str:
    if isinstance(symbol, str) and len(symbol) == 1:
        return f"U+{ord(symbol):04X}"
    return repr(symbol)


def _split(value: int) -> list[int]:
    """Split a 40-bit value into four 10-bit fields, most significant first."""
    return [(value >> shift) & _MASK for shift in (30, 20, 10, 0)]


class Encoder:
    """Incremental encoder.

    feed() returns the symbols for every complete 5-byte block seen so
    far and holds back at most 4 bytes; finish() writes the final short
    block, if any.
    """

    def __init__(self, version: Version = Version.V2,
                 alphabet: Alphabet | None = None):
        self.alphabet = alphabet or DEFAULT_ALPHABET
        self.version = version
        self._table = self.alphabet.table(version)
        self._markers = self.alphabet.markers(version)
        self._pending = b""
        self._finished = False

    def feed(self, data: bytes) -> str:
        if self._finished:
            raise ValueError("Encoder already finished")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Encoder.feed() takes bytes, not {type(data).__name__}")
        buf = self._pending + bytes(data)
        end = len(buf) - len(buf) % BLOCK_BYTES
        out = [self._full_block(buf[i:i + BLOCK_BYTES])
               for i in range(0, end, BLOCK_BYTES)]
        self._pending = buf[end:]
        return "".join(out)

    def finish(self) -> str:
        if self._finished:
            raise ValueError("Encoder already finished")
        self._finished = True
        if not self._pending:
            return ""
        out = self._short_block(self._pending)
        self._pending = b""
        return out

    def _full_block(self, block: bytes) -> str:
        t = self._table
        return "".join(t[f] for f in _split(int.from_bytes(block, "big")))

    def _short_block(self, block: bytes) -> str:
        residual = len(block)
        fields = _split(int.from_bytes(block.ljust(BLOCK_BYTES, b"\x00"), "big"))
        if residual == BLOCK_SYMBOLS:
            symbols = [self._table[f] for f in fields[:3]]
            symbols.append(self._markers[fields[3] >> MARKER_SHIFT])
        else:
            symbols = [self._table[f] for f in fields[:residual]]
            symbols += [self.alphabet.fill] * (BLOCK_SYMBOLS - residual)
        return "".join(symbols)


class Decoder:
    """Incremental decoder.

    feed() returns the bytes of every block completed so far; finish()
    checks the stream ended on a block boundary.

    The alphabet version inferred so far is available as `version`
    (None while only symbols shared by both versions have been seen).
    """

    def __init__(self, alphabet: Alphabet | None = None):
        self.alphabet = alphabet or DEFAULT_ALPHABET
        self.version: Version | None = None
        self.position = 0
        self._fields: list[int] = []
        self._fills = 0
        self._terminated = False
        self._finished = False

    def feed(self, symbols: Iterable[str]) -> bytes:
        if self._finished:
            raise ValueError("Decoder already finished")
        if isinstance(symbols, (bytes, bytearray)):
            raise TypeError("Decoder.feed() takes symbols, not bytes")
        out = bytearray()
        for symbol in symbols:
            self._consume(symbol, out)
            self.position += 1
        return bytes(out)

    def finish(self) -> bytes:
        if self._finished:
            raise ValueError("Decoder already finished")
        self._finished = True
        if self._fields or self._fills:
            raise TruncatedStream(
                f"Stream ends inside a block after "
                f"{len(self._fields) + self._fills} of {BLOCK_SYMBOLS} symbols",
                position=self.position)
        return b""

    def _consume(self, symbol: str, out: bytearray) -> None:
        pos = self.position
        if self._terminated:
            raise TrailingDataAfterTerminator(
                f"Symbol {_describe(symbol)} at {pos} follows the final short block",
                position=pos, symbol=symbol)

        info = self.alphabet.info_for(symbol)
        if info is None:
            raise UnknownSymbol(
                f"Unknown symbol {_describe(symbol)} at {pos}",
                position=pos, symbol=symbol)

        if info.versions != Version.ALL:
            if self.version is None:
                self.version = info.versions
            elif not info.versions & self.version:
                raise VersionMismatch(
                    f"Symbol {_describe(symbol)} at {pos} is {info.versions.name} "
                    f"but the stream is {self.version.name}",
                    position=pos, symbol=symbol)

        if info.padding is PaddingRole.NONE:
            if self._fills:
                raise MisplacedPadding(
                    f"Data symbol {_describe(symbol)} at {pos} follows fill",
                    position=pos, symbol=symbol)
            self._fields.append(info.ordinal)
            if len(self._fields) == BLOCK_SYMBOLS:
                out += self._take(BLOCK_BYTES)

        elif info.padding is PaddingRole.FILL:
            if not self._fields:
                raise MisplacedPadding(
                    f"Fill at {pos} with no data symbol before it in the block",
                    position=pos, symbol=symbol)
            self._fills += 1
            if len(self._fields) + self._fills == BLOCK_SYMBOLS:
                out += self._take(len(self._fields))
                self._terminated = True

        else:
            if len(self._fields) != BLOCK_SYMBOLS - 1:
                raise MisplacedPadding(
                    f"Last-block marker at {pos} must be the 4th symbol of a "
                    f"block after 3 data symbols",
                    position=pos, symbol=symbol)
            self._fields.append(info.ordinal)
            out += self._take(BLOCK_SYMBOLS)
            self._terminated = True

    def _take(self, nbytes: int) -> bytes:
        """Pack the block's fields into 40 bits and return the first nbytes."""
        value = 0
        for ordinal in self._fields:
            value = (value << BITS_PER_SYMBOL) | ordinal
        value <<= BITS_PER_SYMBOL * (BLOCK_SYMBOLS - len(self._fields))
        self._fields = []
        self._fills = 0
        return value.to_bytes(BLOCK_BYTES, "big")[:nbytes]


def encode(data: bytes, version: Version = Version.V2,
           alphabet: Alphabet | None = None) -> str:
    """Encode bytes as a string of base-1024 symbols."""
    encoder = Encoder(version, alphabet)
    return encoder.feed(data) + encoder.finish()


def decode_with_version(symbols: Iterable[str],
                        alphabet: Alphabet | None = None) -> tuple[bytes, Version | None]:
    """Decode symbols, returning the bytes and the inferred version.

    The version is None when every symbol is shared by V1 and V2.
    Raises a DecodeError subclass on malformed input; no partial output.
    """
    decoder = Decoder(alphabet)
    data = decoder.feed(symbols) + decoder.finish()
    logger.debug("Decoded %d symbols to %d bytes (version %s)",
                 decoder.position, len(data),
                 decoder.version.name if decoder.version else "any")
    return data, decoder.version


def decode(symbols: Iterable[str], alphabet: Alphabet | None = None) -> bytes:
    """Decode a string of base-1024 symbols back to bytes."""
    return decode_with_version(symbols, alphabet)[0]
