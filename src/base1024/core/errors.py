"""Exceptions raised by the alphabet tables and the block codec."""

from __future__ import annotations


class AlphabetError(ValueError):
    """Alphabet tables are inconsistent and cannot be used."""


class DecodeError(ValueError):
    """A symbol stream could not be decoded.

    Attributes:
        position: Zero-based index of the offending symbol, or the stream
            length when the error is detected at end of input.
        symbol: The offending symbol, or None at end of input.
    """

    def __init__(self, message: str, position: int | None = None,
                 symbol: str | None = None):
        super().__init__(message)
        self.position = position
        self.symbol = symbol


class UnknownSymbol(DecodeError):
    """Symbol is not part of either alphabet or the padding set."""


class VersionMismatch(DecodeError):
    """Symbol belongs to a different alphabet version than the stream."""


class TruncatedStream(DecodeError):
    """Stream ended inside a block."""


class TrailingDataAfterTerminator(DecodeError):
    """Symbols follow the final short block."""


class MisplacedPadding(DecodeError):
    """Fill or last-block marker at a position where it cannot occur."""
