"""
Command-line interface for base1024.

Usage:
    base1024 encode [-w COLS] [--alphabet {1,2}] [INPUT] [-o OUTPUT]
    base1024 decode [INPUT] [-o OUTPUT]
    base1024 alphabet [--alphabet {1,2}]

INPUT and OUTPUT default to stdin/stdout ("-" also means stdin/stdout).
Defaults for --alphabet and -w come from BASE1024_VERSION and BASE1024_WRAP.
"""
from __future__ import annotations

import argparse
import io
import logging
import os
import sys
import tempfile

from .. import config
from ..core.alphabet import DEFAULT_ALPHABET, Version
from ..core.errors import DecodeError
from ..textio import decode_stream, encode_stream

logger = logging.getLogger("base1024")


def configure_logging(verbose: bool = False) -> None:
    """Send package logs to stderr; INFO with --verbose, WARNING otherwise."""
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(handler)


def _open_input(path: str | None, binary: bool):
    if path in (None, "-"):
        if binary:
            return open(sys.stdin.fileno(), "rb", closefd=False)
        return open(sys.stdin.fileno(), "r", encoding="utf-8", closefd=False)
    if binary:
        return open(path, "rb")
    return open(path, "r", encoding="utf-8")


def _open_output(path: str | None, binary: bool):
    if path in (None, "-"):
        if binary:
            return open(sys.stdout.fileno(), "wb", closefd=False)
        return open(sys.stdout.fileno(), "w", encoding="utf-8", closefd=False)
    if binary:
        return open(path, "wb")
    return open(path, "w", encoding="utf-8", newline="\n")


def _staged_output(path: str | None):
    """Binary scratch output for decode: a temp file beside `path`, or memory."""
    if path in (None, "-"):
        return io.BytesIO()
    parent = os.path.dirname(os.path.abspath(path))
    return tempfile.NamedTemporaryFile(
        dir=parent, prefix=".base1024-", suffix=".part", delete=False)


def _commit_output(staged, path: str | None) -> None:
    if path in (None, "-"):
        with _open_output(path, binary=True) as dst:
            dst.write(staged.getvalue())
        return
    staged.close()
    os.replace(staged.name, path)


def _discard_output(staged, path: str | None) -> None:
    if path in (None, "-"):
        return
    staged.close()
    try:
        os.unlink(staged.name)
    except FileNotFoundError:
        pass


def cmd_encode(args: argparse.Namespace) -> int:
    """Encode binary input as base-1024 text."""
    try:
        with _open_input(args.input, binary=True) as src, \
                _open_output(args.output, binary=False) as dst:
            encode_stream(src, dst, version=args.alphabet, wrap=args.wrap)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Decode base-1024 text back to binary.

    Nothing is written unless the whole input decodes: output goes to a
    temporary file that replaces OUTPUT on success (or to memory, for stdout).
    """
    try:
        staged = _staged_output(args.output)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        with _open_input(args.input, binary=False) as src:
            version = decode_stream(src, staged)
        _commit_output(staged, args.output)
    except DecodeError as e:
        _discard_output(staged, args.output)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        _discard_output(staged, args.output)
        print(f"ERROR: input is not UTF-8 text: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        _discard_output(staged, args.output)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    logger.info("Stream alphabet: %s", version.name if version else "V1/V2 (shared symbols only)")
    return 0


def cmd_alphabet(args: argparse.Namespace) -> int:
    """Print the symbol table and padding symbols of one version."""
    version = args.alphabet
    for ordinal, symbol in enumerate(DEFAULT_ALPHABET.table(version)):
        info = DEFAULT_ALPHABET.info_for(symbol)
        shared = "shared" if info.versions == Version.ALL else f"{version.name} only"
        print(f"{ordinal:4d}  U+{ord(symbol):05X}  {symbol}  {shared}")

    print(f"\n--- padding ({version.name}) ---")
    fill = DEFAULT_ALPHABET.fill
    print(f"fill  U+{ord(fill):05X}  {fill}")
    for subindex, symbol in enumerate(DEFAULT_ALPHABET.markers(version)):
        print(f"last{subindex}  U+{ord(symbol):05X}  {symbol}  "
              f"(4-byte block, last bits {subindex:02b})")
    return 0


def _version_arg(value: str) -> Version:
    try:
        return config.parse_version(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _wrap_arg(value: str) -> int:
    try:
        return config.parse_wrap(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    try:
        default_version = config.default_version()
    except ValueError as e:
        print(f"WARNING: ignoring {config.VERSION_ENV}: {e}", file=sys.stderr)
        default_version = Version.V2
    try:
        default_wrap = config.default_wrap()
    except ValueError as e:
        print(f"WARNING: ignoring {config.WRAP_ENV}: {e}", file=sys.stderr)
        default_wrap = 0

    parser = argparse.ArgumentParser(
        prog="base1024",
        description="Encode binary data as base-1024 pictograph text, and back",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress and the detected alphabet version to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Encode command
    encode_parser = subparsers.add_parser("encode", help="Encode binary data")
    encode_parser.add_argument("input", nargs="?", help="Input file (default: stdin)")
    encode_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    encode_parser.add_argument(
        "-w", "--wrap",
        type=_wrap_arg,
        default=default_wrap,
        metavar="COLS",
        help="Symbols per line, 0 to disable (default: %(default)s)",
    )
    encode_parser.add_argument(
        "--alphabet",
        type=_version_arg,
        default=default_version,
        metavar="{1,2}",
        help="Alphabet version (default: %(default)s)",
    )
    encode_parser.set_defaults(func=cmd_encode)

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="Decode base-1024 text")
    decode_parser.add_argument("input", nargs="?", help="Input file (default: stdin)")
    decode_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    decode_parser.set_defaults(func=cmd_decode)

    # Alphabet command
    alphabet_parser = subparsers.add_parser("alphabet", help="Show the symbol table")
    alphabet_parser.add_argument(
        "--alphabet",
        type=_version_arg,
        default=default_version,
        metavar="{1,2}",
        help="Alphabet version (default: %(default)s)",
    )
    alphabet_parser.set_defaults(func=cmd_alphabet)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 2

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
