"""Exceptions raised by memory buffers."""


class MemoryAccessError(MemoryError):
    """A read touched an offset outside the buffer."""


class UnsupportedOperationError(Exception):
    """The buffer does not provide the requested capability."""
