"""Endian data converters: decode integers from a byte source."""

from __future__ import annotations

from typing import Literal, Protocol

from ..memory.errors import MemoryAccessError


class ByteSource(Protocol):
    """Anything with bounds-checked single-byte reads."""

    def get_byte(self, offset: int) -> int:
        ...


class DataConverter:
    """Decodes integers of any width in a fixed byte order.

    Instances hold no per-read state and are shared through the
    BIG_ENDIAN and LITTLE_ENDIAN singletons. When the source provides
    get_bytes, the whole window is fetched with one bulk copy; otherwise
    it is composed from get_byte calls at offset, offset+1, ...
    """

    __slots__ = ("byteorder",)

    def __init__(self, byteorder: Literal["big", "little"]) -> None:
        self.byteorder: Literal["big", "little"] = byteorder

    @property
    def is_big_endian(self) -> bool:
        return self.byteorder == "big"

    def _read(self, source: ByteSource, offset: int, size: int) -> bytes:
        """Fetch exactly `size` bytes starting at offset.

        Raises:
            MemoryAccessError: If any byte of [offset, offset+size) is
                outside the source.
        """
        if size == 0:
            return b""
        get_bytes = getattr(source, "get_bytes", None)
        if get_bytes is None:
            return bytes(source.get_byte(offset + i) for i in range(size))
        buf = bytearray(size)
        if offset < 0 or get_bytes(buf, offset) != size:
            raise MemoryAccessError(
                f"Couldn't get {size} bytes at offset {offset}"
            )
        return bytes(buf)

    def get_value(self, source: ByteSource, offset: int, size: int,
                  signed: bool) -> int:
        """Decode `size` bytes at offset as an integer.

        Args:
            source: Buffer to read from.
            offset: Offset of the first byte.
            size: Number of bytes; 0 yields 0.
            signed: Interpret as two's complement over size*8 bits.

        Raises:
            ValueError: If size is negative.
            MemoryAccessError: If the bytes are not all available.
        """
        if size < 0:
            raise ValueError(f"Negative size: {size}")
        return int.from_bytes(self._read(source, offset, size),
                              self.byteorder, signed=signed)

    def get_short(self, source: ByteSource, offset: int) -> int:
        """Read a signed 16-bit value."""
        return self.get_value(source, offset, 2, True)

    def get_int(self, source: ByteSource, offset: int) -> int:
        """Read a signed 32-bit value."""
        return self.get_value(source, offset, 4, True)

    def get_long(self, source: ByteSource, offset: int) -> int:
        """Read a signed 64-bit value."""
        return self.get_value(source, offset, 8, True)

    def get_big_integer(self, source: ByteSource, offset: int, size: int,
                        signed: bool) -> int:
        return self.get_value(source, offset, size, signed)

    def __repr__(self) -> str:
        return f"DataConverter({self.byteorder!r})"


BIG_ENDIAN = DataConverter("big")
LITTLE_ENDIAN = DataConverter("little")


def get_converter(big_endian: bool) -> DataConverter:
    """Return the shared converter for the given byte order."""
    return BIG_ENDIAN if big_endian else LITTLE_ENDIAN
