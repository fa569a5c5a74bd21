#!/usr/bin/env python3
"""
kontrolleur

Command-line interface for inspecting what assumptions a WebAssembly binary
makes about its environment.

Usage:
    kontrolleur [--verbose] [--debug] <wasm-file>
    kontrolleur -h | --help
    kontrolleur --version

Arguments:
    wasm-file          Path to the WebAssembly module (.wasm)

Options:
    -h --help          Show this help message
    --version          Show version
    -v --verbose       List every import with the category it resolved to
    --debug            Log decoder and classifier activity to stderr
    --max-file-size N  Refuse files larger than N bytes (default 64 MiB)
"""

import sys
import argparse
import logging
from typing import List, Optional

from . import __version__
from .config import Config, DEFAULT_MAX_FILE_SIZE
from .errors import DecodeError
from .inspector import inspect
from .output.text_report import format_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kontrolleur",
        description="Inspecting what assumptions a wasm binary has about its environment",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('file', help='WebAssembly binary to inspect')
    parser.add_argument('-v', '--verbose', action='store_true', help='List every import and its category')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging on stderr')
    parser.add_argument('--max-file-size', type=int, default=DEFAULT_MAX_FILE_SIZE,
                        help='Refuse files larger than this many bytes')
    parser.add_argument('--version', action='version', version=f'kontrolleur {__version__}')
    return parser


def load_file(config: Config) -> bytes:
    """
    Read the module named in the configuration.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file exceeds the configured size limit
    """
    path = config.file_path
    size = path.stat().st_size
    if size > config.max_file_size:
        raise ValueError(f"{path} is {size} bytes, larger than the {config.max_file_size} byte limit")
    logger.debug("Reading %s (%d bytes)", path, size)
    return path.read_bytes()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = Config.from_args(args)

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        data = load_file(config)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        report = inspect(data)
    except DecodeError as e:
        print(f"ERROR: {config.file_path} is not a valid WebAssembly module: {e}", file=sys.stderr)
        return 1

    print(format_report(report, verbose=config.verbose), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
