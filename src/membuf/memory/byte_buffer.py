"""ByteMemBuffer: a read-only memory buffer over a fixed byte snapshot."""

from __future__ import annotations

import io
from typing import NoReturn

from ..util.converter import DataConverter, get_converter
from .errors import MemoryAccessError, UnsupportedOperationError


class ByteMemBuffer:
    """Memory buffer over bytes supplied at construction.

    No memory system backs the buffer, so get_memory() always raises and
    every read is limited to the bytes given to the constructor. The
    address is carried for reporting only; all reads take offsets
    relative to the first byte.
    """

    __slots__ = ("_address", "_data", "_converter")

    def __init__(self, address: int, data: bytes | bytearray | memoryview,
                 big_endian: bool = False) -> None:
        """Create a buffer over a copy of `data`.

        Args:
            address: Address to associate with offset 0.
            data: The bytes that would normally come from memory.
            big_endian: True for big-endian decoding, False for little-endian.
        """
        self._address = address
        self._data = bytes(data)
        self._converter: DataConverter = get_converter(big_endian)

    @classmethod
    def from_values(cls, address: int, big_endian: bool,
                    *values: int) -> ByteMemBuffer:
        """Build a buffer from integers, keeping the low 8 bits of each."""
        return cls(address, bytes(v & 0xFF for v in values), big_endian)

    @property
    def address(self) -> int:
        return self._address

    @property
    def length(self) -> int:
        """Number of bytes held."""
        return len(self._data)

    @property
    def is_big_endian(self) -> bool:
        return self._converter.is_big_endian

    @property
    def data(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        order = "big" if self.is_big_endian else "little"
        return (f"ByteMemBuffer(address=0x{self._address:08X}, "
                f"length={len(self._data)}, byteorder={order!r})")

    def get_memory(self) -> NoReturn:
        raise UnsupportedOperationError("Can't get memory from ByteMemBuffer")

    def get_byte(self, offset: int) -> int:
        """Read the unsigned byte at offset."""
        if offset < 0 or offset >= len(self._data):
            raise MemoryAccessError(f"Offset {offset} is not in range")
        return self._data[offset]

    def get_bytes(self, dest: bytearray | memoryview, offset: int) -> int:
        """Copy bytes starting at offset into the start of dest.

        Copies min(len(dest), length - offset) bytes. An offset outside
        the buffer copies nothing.

        Returns:
            The number of bytes copied.
        """
        if offset < 0 or offset >= len(self._data):
            return 0
        count = min(len(dest), len(self._data) - offset)
        dest[:count] = self._data[offset:offset + count]
        return count

    def get_short(self, offset: int) -> int:
        return self._converter.get_short(self, offset)

    def get_int(self, offset: int) -> int:
        return self._converter.get_int(self, offset)

    def get_long(self, offset: int) -> int:
        return self._converter.get_long(self, offset)

    def get_big_integer(self, offset: int, size: int, signed: bool) -> int:
        """Read `size` bytes at offset as an arbitrary-width integer.

        Raises:
            ValueError: If size is negative.
            MemoryAccessError: If the bytes extend past either end.
        """
        return self._converter.get_big_integer(self, offset, size, signed)

    def get_unsigned_short(self, offset: int) -> int:
        return self._converter.get_value(self, offset, 2, False)

    def get_unsigned_int(self, offset: int) -> int:
        return self._converter.get_value(self, offset, 4, False)

    def get_var_length_int(self, offset: int, length: int,
                           signed: bool = True) -> int:
        """Read a 1 to 8 byte integer at offset."""
        if not 1 <= length <= 8:
            raise ValueError(f"Length must be between 1 and 8, got {length}")
        return self._converter.get_value(self, offset, length, signed)

    def stream(self, offset: int = 0) -> io.BytesIO:
        """Return a binary stream over the bytes from offset to the end."""
        if offset < 0 or offset >= len(self._data):
            return io.BytesIO(b"")
        return io.BytesIO(self._data[offset:])
