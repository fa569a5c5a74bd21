"""
Errors raised while decoding a WebAssembly binary.

Every decode failure is fatal to the current inspection: the decoder raises
one of these and no partial report is produced.
"""

from typing import Optional


class DecodeError(Exception):
    """Base class for all WebAssembly decoding errors."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} at offset 0x{offset:X}"
        super().__init__(message)


class BadMagicError(DecodeError):
    """The file does not start with the WebAssembly magic bytes."""


class BadVersionError(DecodeError):
    """The binary format version is not supported."""


class UnknownSectionIdError(DecodeError):
    """A section id lies outside the range defined by the binary format."""


class UnknownImportKindError(DecodeError):
    """An import or export carries an unrecognized external kind tag."""


class TruncatedError(DecodeError):
    """The buffer ended before a value or section was complete."""


class IntegerOverflowError(DecodeError):
    """A LEB128 value does not fit the permitted bit width."""


class InvalidEncodingError(DecodeError):
    """Malformed UTF-8 in a name, or a malformed type descriptor."""


__all__ = [
    'DecodeError',
    'BadMagicError',
    'BadVersionError',
    'UnknownSectionIdError',
    'UnknownImportKindError',
    'TruncatedError',
    'IntegerOverflowError',
    'InvalidEncodingError',
]
