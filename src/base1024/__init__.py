"""
base1024 - binary data as base-1024 pictograph text.

Every 5 bytes become 4 symbols from a 1024-entry alphabet of Unicode
pictographs. Two alphabet versions exist; decoding detects which one a
stream uses.

Usage:
    from base1024 import encode, decode, Version

    text = encode(b"hello", Version.V2)
    assert decode(text) == b"hello"
"""

from .core import (
    Alphabet,
    AlphabetError,
    DecodeError,
    Decoder,
    Encoder,
    MisplacedPadding,
    TrailingDataAfterTerminator,
    TruncatedStream,
    UnknownSymbol,
    Version,
    VersionMismatch,
    decode,
    decode_with_version,
    encode,
    encoded_length,
)
from .textio import decode_stream, encode_stream, strip_layout, wrap

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "Alphabet",
    "AlphabetError",
    "DecodeError",
    "Decoder",
    "Encoder",
    "MisplacedPadding",
    "TrailingDataAfterTerminator",
    "TruncatedStream",
    "UnknownSymbol",
    "Version",
    "VersionMismatch",
    "decode",
    "decode_stream",
    "decode_with_version",
    "encode",
    "encode_stream",
    "encoded_length",
    "strip_layout",
    "wrap",
]
