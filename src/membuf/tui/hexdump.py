"""Hex dump formatting for memory buffers."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from ..memory.buffer import MemBuffer
from ..memory.errors import MemoryAccessError

BYTES_PER_ROW = 16
DEFAULT_ROWS = 16


def format_hex_dump(buffer: MemBuffer, start_offset: int = 0,
                    num_rows: int = DEFAULT_ROWS) -> str:
    """Format a buffer region as a hex dump with offsets, hex bytes, and ASCII.

    Each row displays 16 bytes in the format:
        OFFSET: HH HH HH HH HH HH HH HH  HH HH HH HH HH HH HH HH  |ASCII...........|

    Offsets outside the buffer show '??' for each byte and '.' in the
    ASCII column.

    Args:
        buffer: The buffer to read from.
        start_offset: The starting offset of the hex dump (will be aligned
            down to a 16-byte boundary).
        num_rows: Number of 16-byte rows to display.

    Returns:
        A multi-line string suitable for display in a Rich Panel.
    """
    aligned = start_offset & ~0xF
    lines: list[str] = []

    for row in range(num_rows):
        row_offset = aligned + row * BYTES_PER_ROW
        hex_parts: list[str] = []
        ascii_parts: list[str] = []

        for col in range(BYTES_PER_ROW):
            try:
                byte_val = buffer.get_byte(row_offset + col)
                hex_parts.append(f"{byte_val:02X}")
                # Printable ASCII range: 0x20-0x7E
                if 0x20 <= byte_val <= 0x7E:
                    ascii_parts.append(chr(byte_val))
                else:
                    ascii_parts.append(".")
            except MemoryAccessError:
                hex_parts.append("??")
                ascii_parts.append(".")

            # Add extra space between groups of 8
            if col == 7:
                hex_parts.append("")

        hex_str = " ".join(hex_parts)
        ascii_str = "".join(ascii_parts)
        lines.append(f"0x{row_offset:08X}: {hex_str}  |{ascii_str}|")

    return "\n".join(lines)


def hex_dump_panel(buffer: MemBuffer, start_offset: int = 0,
                   num_rows: int = DEFAULT_ROWS) -> Panel:
    """Wrap format_hex_dump in a panel titled with the buffer's address."""
    order = "big-endian" if buffer.is_big_endian else "little-endian"
    length = len(buffer) if hasattr(buffer, "__len__") else None
    title = f"0x{buffer.address:08X}"
    if length is not None:
        title += f" ({length} bytes, {order})"
    else:
        title += f" ({order})"
    body = Text(format_hex_dump(buffer, start_offset, num_rows))
    return Panel(body, title=title, title_align="left", expand=False)
