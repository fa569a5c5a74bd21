"""
Configuration handling for the kontrolleur CLI.
"""

from dataclasses import dataclass
from pathlib import Path
import argparse

# Files above this size are refused before being read into memory.
DEFAULT_MAX_FILE_SIZE = 64 * 1024 * 1024


@dataclass(frozen=True)
class Config:
    """Options for a single inspection run."""

    file_path: Path

    # Output options
    verbose: bool = False
    debug: bool = False

    # Input limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'Config':
        """Build a configuration from parsed command-line arguments."""
        return cls(
            file_path=Path(args.file),
            verbose=args.verbose,
            debug=args.debug,
            max_file_size=args.max_file_size,
        )
