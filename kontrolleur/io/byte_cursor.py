"""
Bounded byte cursor for reading WebAssembly binaries.

This module provides a ByteCursor class that reads fixed-width values,
LEB128 variable-length integers and length-prefixed UTF-8 names from an
in-memory buffer. Every read is bounds checked: running past the end of
the buffer raises TruncatedError instead of returning a short read.
"""

import struct
from typing import Union

from ..errors import TruncatedError, IntegerOverflowError, InvalidEncodingError

BytesLike = Union[bytes, bytearray, memoryview]


class ByteCursor:
    """
    Forward-only reader over an in-memory byte buffer.

    Attributes:
        base_offset: Absolute file offset of the first byte of this buffer.
            Sub-cursors created for section payloads carry the offset of
            the payload so that errors report file positions.
    """

    def __init__(self, data: BytesLike, base_offset: int = 0):
        """
        Initialize a ByteCursor.

        Args:
            data: Raw bytes to read from
            base_offset: File offset of ``data[0]``
        """
        self._data = memoryview(data).cast('B')
        self._position = 0
        self.base_offset = base_offset

    # ========== Position and Length ==========

    @property
    def position(self) -> int:
        """Get current position relative to the start of this buffer."""
        return self._position

    @property
    def offset(self) -> int:
        """Get current absolute file offset."""
        return self.base_offset + self._position

    @property
    def length(self) -> int:
        """Get buffer length."""
        return len(self._data)

    def remaining(self) -> int:
        """Number of bytes left to read."""
        return len(self._data) - self._position

    def at_end(self) -> bool:
        return self._position >= len(self._data)

    def skip(self, count: int) -> None:
        """Advance the cursor by ``count`` bytes."""
        self._require(count)
        self._position += count

    def _require(self, count: int) -> None:
        if count < 0 or count > self.remaining():
            raise TruncatedError(
                f"Needed {count} bytes but only {self.remaining()} remain",
                self.offset,
            )

    # ========== Primitive Readers ==========

    def read_fixed_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` raw bytes."""
        self._require(count)
        start = self._position
        self._position += count
        return self._data[start:self._position].tobytes()

    def read_u8(self) -> int:
        """Read an unsigned byte."""
        self._require(1)
        value = self._data[self._position]
        self._position += 1
        return value

    def read_uint32(self) -> int:
        """Read a little-endian unsigned 32-bit integer."""
        return struct.unpack('<I', self.read_fixed_bytes(4))[0]

    def read_sub_cursor(self, count: int) -> 'ByteCursor':
        """
        Consume ``count`` bytes and return a cursor bounded to them.

        The returned cursor shares the underlying buffer; nothing is copied.
        """
        self._require(count)
        start = self._position
        self._position += count
        return ByteCursor(self._data[start:self._position], self.base_offset + start)

    # ========== LEB128 Readers ==========

    def read_uvarint(self, max_bits: int = 32) -> int:
        """
        Read an unsigned LEB128 encoded integer.

        The encoding may use at most ceil(max_bits / 7) bytes, and the unused
        high bits of the final byte must be zero.

        Raises:
            TruncatedError: If the buffer ends before the terminating byte
            IntegerOverflowError: If the value does not fit in ``max_bits``
        """
        start = self.offset
        max_bytes = (max_bits + 6) // 7
        result = 0
        shift = 0
        for index in range(max_bytes):
            byte = self.read_u8()
            if index == max_bytes - 1:
                used = max_bits - 7 * index
                if byte & 0x80 or byte & (0x7F & ~((1 << used) - 1)):
                    raise IntegerOverflowError(
                        f"Unsigned LEB128 value exceeds {max_bits} bits", start
                    )
            result |= (byte & 0x7F) << shift
            if (byte & 0x80) == 0:
                return result
            shift += 7
        # Unreachable: the final iteration either returns or raises.
        raise IntegerOverflowError(f"Unsigned LEB128 value exceeds {max_bits} bits", start)

    def read_svarint(self, max_bits: int = 32) -> int:
        """
        Read a signed LEB128 encoded integer.

        The unused high bits of the final permitted byte must be a sign
        extension of the value's top bit.
        """
        start = self.offset
        max_bytes = (max_bits + 6) // 7
        result = 0
        shift = 0
        for index in range(max_bytes):
            byte = self.read_u8()
            if index == max_bytes - 1:
                used = max_bits - 7 * index
                unused_mask = 0x7F & ~((1 << used) - 1)
                sign = (byte >> (used - 1)) & 1
                if byte & 0x80 or (byte & unused_mask) != (unused_mask if sign else 0):
                    raise IntegerOverflowError(
                        f"Signed LEB128 value exceeds {max_bits} bits", start
                    )
            result |= (byte & 0x7F) << shift
            shift += 7
            if (byte & 0x80) == 0:
                if byte & 0x40:
                    result -= 1 << shift
                return result
        raise IntegerOverflowError(f"Signed LEB128 value exceeds {max_bits} bits", start)

    # ========== String Readers ==========

    def read_utf8_string(self) -> str:
        """
        Read a length-prefixed UTF-8 name.

        Raises:
            TruncatedError: If fewer bytes remain than the prefix declares
            InvalidEncodingError: If the bytes are not well-formed UTF-8
        """
        length = self.read_uvarint(32)
        start = self.offset
        raw = self.read_fixed_bytes(length)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(f"Malformed UTF-8 name ({e.reason})", start + e.start) from e
