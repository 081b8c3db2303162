"""Text framing and streaming over file objects.

Encoded output may be wrapped into lines of a fixed number of symbols.
Line breaks and other layout whitespace are dropped again before
decoding, so wrapped text decodes unchanged.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, TextIO

from .core.alphabet import Alphabet, Version
from .core.codec import Decoder, Encoder

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64000  # multiple of 5, so no bytes carry over between chunks

_LAYOUT = str.maketrans("", "", "\n\r\t ")


def strip_layout(text: str) -> str:
    """Remove line breaks, tabs and spaces."""
    return text.translate(_LAYOUT)


class LineWrapper:
    """Writes symbols to a text stream, breaking lines every `width` symbols.

    A width of 0 or less writes everything on one line.
    """

    def __init__(self, dst: TextIO, width: int = 0):
        self.dst = dst
        self.width = width
        self.column = 0
        self.written = 0

    def write(self, symbols: str) -> None:
        self.written += len(symbols)
        if self.width <= 0:
            self.dst.write(symbols)
            return
        i = 0
        while i < len(symbols):
            if self.column == self.width:
                self.dst.write("\n")
                self.column = 0
            take = min(self.width - self.column, len(symbols) - i)
            self.dst.write(symbols[i:i + take])
            self.column += take
            i += take

    def close(self) -> None:
        """Terminate the last line when wrapping."""
        if self.width > 0 and self.column:
            self.dst.write("\n")
            self.column = 0


def wrap(symbols: str, width: int) -> str:
    """Break a symbol string into lines of `width` symbols (no trailing newline)."""
    if width <= 0:
        return symbols
    return "\n".join(symbols[i:i + width] for i in range(0, len(symbols), width))


def encode_stream(src: BinaryIO, dst: TextIO, version: Version = Version.V2,
                  wrap: int = 0, chunk_size: int = DEFAULT_CHUNK_SIZE,
                  alphabet: Alphabet | None = None) -> int:
    """Encode a binary stream into a text stream.

    Args:
        src: Binary file object to read from.
        dst: Text file object to write symbols to.
        version: Alphabet version to encode with.
        wrap: Symbols per line; 0 writes a single line with no newline.
        chunk_size: Bytes read per call.

    Returns:
        Number of symbols written.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    encoder = Encoder(version, alphabet)
    out = LineWrapper(dst, wrap)
    total_in = 0
    while True:
        chunk = src.read(chunk_size)
        if not chunk:
            break
        total_in += len(chunk)
        out.write(encoder.feed(chunk))
    out.write(encoder.finish())
    out.close()

    logger.info("Encoded %d bytes to %d symbols (%s)",
                total_in, out.written, version.name)
    return out.written


def decode_stream(src: TextIO, dst: BinaryIO,
                  chunk_size: int = DEFAULT_CHUNK_SIZE,
                  alphabet: Alphabet | None = None) -> Version | None:
    """Decode a text stream into a binary stream.

    Output is written block by block; on a DecodeError the bytes of the
    blocks before the bad symbol have already been written to `dst`.
    Callers that need all-or-nothing output write to a scratch target
    and keep it only on success, as the CLI does.

    Returns:
        The alphabet version the stream uses, or None if every symbol is
        shared by both versions.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    decoder = Decoder(alphabet)
    total_out = 0
    while True:
        chunk = src.read(chunk_size)
        if not chunk:
            break
        data = decoder.feed(strip_layout(chunk))
        dst.write(data)
        total_out += len(data)
    data = decoder.finish()
    dst.write(data)
    total_out += len(data)

    logger.info("Decoded %d symbols to %d bytes (version %s)",
                decoder.position, total_out,
                decoder.version.name if decoder.version else "any")
    return decoder.version
