"""Base protocol for memory buffers."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MemBuffer(Protocol):
    """Protocol for read access to a run of bytes starting at an address.

    Offsets are relative to the buffer start, never absolute addresses.
    Implementations backed by a live memory system return it from
    get_memory(); snapshot buffers raise UnsupportedOperationError there.
    """

    @property
    def address(self) -> int:
        """Address associated with offset 0."""
        ...

    @property
    def is_big_endian(self) -> bool:
        """True if multi-byte values are decoded most significant byte first."""
        ...

    def get_byte(self, offset: int) -> int:
        """Read a single unsigned byte at offset."""
        ...

    def get_bytes(self, dest: bytearray | memoryview, offset: int) -> int:
        """Copy as many bytes as fit into dest, return the count copied."""
        ...

    def get_short(self, offset: int) -> int:
        ...

    def get_int(self, offset: int) -> int:
        ...

    def get_long(self, offset: int) -> int:
        ...

    def get_big_integer(self, offset: int, size: int, signed: bool) -> int:
        ...

    def get_memory(self) -> Any:
        """Return the backing memory system."""
        ...
