"""Alphabet tables and the block codec."""

from .alphabet import (
    DEFAULT_ALPHABET,
    Alphabet,
    PaddingRole,
    SymbolInfo,
    Version,
    parse_symbol_list,
)
from .codec import (
    Decoder,
    Encoder,
    decode,
    decode_with_version,
    encode,
    encoded_length,
)
from .errors import (
    AlphabetError,
    DecodeError,
    MisplacedPadding,
    TrailingDataAfterTerminator,
    TruncatedStream,
    UnknownSymbol,
    VersionMismatch,
)

__all__ = [
    # Alphabet
    "DEFAULT_ALPHABET",
    "Alphabet",
    "PaddingRole",
    "SymbolInfo",
    "Version",
    "parse_symbol_list",
    # Codec
    "Decoder",
    "Encoder",
    "decode",
    "decode_with_version",
    "encode",
    "encoded_length",
    # Errors
    "AlphabetError",
    "DecodeError",
    "MisplacedPadding",
    "TrailingDataAfterTerminator",
    "TruncatedStream",
    "UnknownSymbol",
    "VersionMismatch",
]
