"""Command-line defaults from the environment.

Environment:
    BASE1024_VERSION    Alphabet version used for encoding, 1 or 2 (default: 2)
    BASE1024_WRAP       Symbols per output line, 0 for no wrapping (default: 0)
"""

import os

from .core.alphabet import Version

VERSION_ENV = "BASE1024_VERSION"
WRAP_ENV = "BASE1024_WRAP"

_VERSIONS = {"1": Version.V1, "2": Version.V2}


def parse_version(value: str) -> Version:
    """Parse "1"/"2" (or "v1"/"v2") into an alphabet version."""
    key = value.strip().lower().removeprefix("v")
    if key not in _VERSIONS:
        raise ValueError(f"Alphabet version must be 1 or 2, got {value!r}")
    return _VERSIONS[key]


def parse_wrap(value: str) -> int:
    try:
        width = int(value)
    except ValueError:
        raise ValueError(f"Wrap width must be an integer, got {value!r}") from None
    if width < 0:
        raise ValueError(f"Wrap width must be 0 or more, got {width}")
    return width


def default_version() -> Version:
    return parse_version(os.environ.get(VERSION_ENV, "2"))


def default_wrap() -> int:
    return parse_wrap(os.environ.get(WRAP_ENV, "0"))
