"""Command-line interface for inspecting files as memory buffers."""

import argparse
import sys

from rich.console import Console

from .loader.elf import parse_elf
from .memory.byte_buffer import ByteMemBuffer
from .memory.errors import MemoryAccessError
from .tui.hexdump import DEFAULT_ROWS, hex_dump_panel

READ_TYPES = ("byte", "short", "ushort", "int", "uint", "long", "bigint")


def _parse_int(value: str) -> int:
    """Parse a decimal or 0x-prefixed integer argument.

    Raises:
        argparse.ArgumentTypeError: If the value is not an integer.
    """
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer '{value}'") from None


def _parse_count(value: str) -> int:
    """Parse a non-negative integer argument."""
    number = _parse_int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: '{value}'")
    return number


def _add_window_args(parser: argparse.ArgumentParser) -> None:
    """Add the options that select which bytes of FILE form the buffer."""
    parser.add_argument("file", help="Path to the file to inspect")
    parser.add_argument(
        "--skip", type=_parse_count, default=0, metavar="N",
        help="Start the window N bytes into the file",
    )
    parser.add_argument(
        "--length", type=_parse_count, default=None, metavar="N",
        help="Limit the window to N bytes (default: to end of file)",
    )
    parser.add_argument(
        "--address", type=_parse_int, default=0, metavar="ADDR",
        help="Address to associate with the first byte of the window",
    )
    parser.add_argument(
        "--big-endian", action="store_true",
        help="Decode multi-byte values most significant byte first",
    )
    parser.add_argument(
        "--segment", type=_parse_count, default=None, metavar="I",
        help="Use PT_LOAD segment I of an ELF file as the window",
    )


def open_window(args: argparse.Namespace) -> ByteMemBuffer:
    """Build the buffer selected by the window options.

    With --segment, the segment's own address and byte order are used and
    --skip/--length/--address/--big-endian are ignored.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If --segment is given and the file is not a valid ELF
            or has no such segment.
    """
    with open(args.file, "rb") as f:
        data = f.read()

    if args.segment is not None:
        segments = parse_elf(data).segments
        if args.segment >= len(segments):
            raise ValueError(
                f"segment {args.segment} not found "
                f"({len(segments)} loadable segments)"
            )
        return segments[args.segment].to_buffer()

    end = None if args.length is None else args.skip + args.length
    return ByteMemBuffer(args.address, data[args.skip:end], args.big_endian)


def read_value(buffer: ByteMemBuffer, offset: int, kind: str,
               size: int | None = None, unsigned: bool = False) -> tuple[int, int]:
    """Decode one value from the buffer.

    Args:
        buffer: Buffer to read from.
        offset: Offset of the first byte.
        kind: One of READ_TYPES.
        size: Byte count, required for "bigint".
        unsigned: Read "bigint" as unsigned.

    Returns:
        Tuple of (value, width in bytes).

    Raises:
        MemoryAccessError: If the value does not fit in the buffer.
        ValueError: If the type or size is invalid.
    """
    if kind == "bigint":
        if size is None:
            raise ValueError("--size is required for bigint reads")
        return buffer.get_big_integer(offset, size, not unsigned), size
    if kind == "byte":
        return buffer.get_byte(offset), 1
    if kind == "short":
        return buffer.get_short(offset), 2
    if kind == "ushort":
        return buffer.get_unsigned_short(offset), 2
    if kind == "int":
        return buffer.get_int(offset), 4
    if kind == "uint":
        return buffer.get_unsigned_int(offset), 4
    if kind == "long":
        return buffer.get_long(offset), 8
    raise ValueError(f"unknown read type '{kind}'")


def format_value(value: int, width: int) -> str:
    """Render a value as decimal plus its two's complement bit pattern in hex."""
    if width == 0:
        return "0"
    mask = (1 << (width * 8)) - 1
    return f"{value} (0x{value & mask:0{width * 2}X})"


def cmd_dump(args: argparse.Namespace, console: Console) -> None:
    buffer = open_window(args)
    console.print(hex_dump_panel(buffer, 0, args.rows))


def cmd_read(args: argparse.Namespace, console: Console) -> None:
    buffer = open_window(args)
    value, width = read_value(buffer, args.offset, args.type, args.size,
                              args.unsigned)
    console.print(format_value(value, width), highlight=False)


def cmd_segments(args: argparse.Namespace, console: Console) -> None:
    with open(args.file, "rb") as f:
        prog = parse_elf(f.read())
    order = "big-endian" if prog.big_endian else "little-endian"
    console.print(
        f"entry 0x{prog.entry:08X}, machine 0x{prog.machine:04X}, {order}",
        highlight=False, markup=False,
    )
    for i, seg in enumerate(prog.segments):
        console.print(
            f"  [{i}] vaddr 0x{seg.vaddr:08X}  filesz {len(seg.data)}  "
            f"memsz {seg.memsz}",
            highlight=False, markup=False,
        )


def main(argv: list[str] | None = None) -> None:
    """Entry point for the membuf CLI."""
    parser = argparse.ArgumentParser(
        description="Inspect a file as a read-only memory buffer",
    )
    sub = parser.add_subparsers(dest="command")

    dump_parser = sub.add_parser("dump", help="Hex dump a window of a file")
    _add_window_args(dump_parser)
    dump_parser.add_argument(
        "--rows", type=_parse_count, default=DEFAULT_ROWS,
        help=f"Number of 16-byte rows to show (default: {DEFAULT_ROWS})",
    )

    read_parser = sub.add_parser("read", help="Decode one value from a file")
    _add_window_args(read_parser)
    read_parser.add_argument(
        "offset", type=_parse_int, help="Offset within the window",
    )
    read_parser.add_argument(
        "--type", choices=READ_TYPES, default="int",
        help="Value type to decode (default: int)",
    )
    read_parser.add_argument(
        "--size", type=_parse_int, default=None, metavar="N",
        help="Byte count for bigint reads",
    )
    read_parser.add_argument(
        "--unsigned", action="store_true",
        help="Decode bigint reads as unsigned",
    )

    segments_parser = sub.add_parser(
        "segments", help="List the loadable segments of an ELF file",
    )
    segments_parser.add_argument("file", help="Path to ELF file")

    args = parser.parse_args(argv)

    commands = {"dump": cmd_dump, "read": cmd_read, "segments": cmd_segments}
    if args.command not in commands:
        parser.print_help()
        sys.exit(1)

    console = Console()
    try:
        commands[args.command](args, console)
    except (MemoryAccessError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: cannot read '{args.file}': {e}", file=sys.stderr)
        sys.exit(1)
