"""Tests for the hex dump formatter."""

import io

from rich.console import Console
from rich.panel import Panel

from membuf.memory.byte_buffer import ByteMemBuffer
from membuf.tui.hexdump import format_hex_dump, hex_dump_panel

BASE = 0x80000000


def _make_buffer(data: bytes = bytes(256), big_endian: bool = False) -> ByteMemBuffer:
    """Create a ByteMemBuffer at BASE over the given bytes."""
    return ByteMemBuffer(BASE, data, big_endian)


class TestFormatHexDump:
    """Tests for format_hex_dump function."""

    def test_single_row_all_zeros(self) -> None:
        output = format_hex_dump(_make_buffer(), 0, num_rows=1)
        assert "0x00000000:" in output
        assert "00 00 00 00 00 00 00 00" in output

    def test_hex_byte_values(self) -> None:
        buf = _make_buffer(b"\xDE\xAD\xBE\xEF" + bytes(12))
        output = format_hex_dump(buf, 0, num_rows=1)
        assert "DE AD BE EF" in output

    def test_rows_labelled_by_offset_not_address(self) -> None:
        output = format_hex_dump(_make_buffer(), 0x20, num_rows=1)
        assert output.startswith("0x00000020:")
        assert "80000000" not in output

    def test_ascii_printable_characters(self) -> None:
        buf = _make_buffer(b"Hello" + bytes(11))
        output = format_hex_dump(buf, 0, num_rows=1)
        assert "Hello" in output

    def test_ascii_non_printable_as_dot(self) -> None:
        buf = _make_buffer(b"\x01\x7F" + bytes(14))
        output = format_hex_dump(buf, 0, num_rows=1)
        ascii_section = output.split("|")[1]
        assert ascii_section.startswith("..")

    def test_offset_alignment(self) -> None:
        output = format_hex_dump(_make_buffer(), 0x15, num_rows=1)
        assert output.startswith("0x00000010:")

    def test_multiple_rows(self) -> None:
        output = format_hex_dump(_make_buffer(), 0, num_rows=3)
        lines = output.strip().split("\n")
        assert len(lines) == 3
        assert "0x00000000:" in lines[0]
        assert "0x00000010:" in lines[1]
        assert "0x00000020:" in lines[2]

    def test_past_end_shows_question_marks(self) -> None:
        buf = _make_buffer(b"\x41\x42\x43")
        output = format_hex_dump(buf, 0, num_rows=1)
        assert "41 42 43 ??" in output
        assert output.count("??") == 13
        assert "|ABC.............|" in output

    def test_empty_buffer(self) -> None:
        output = format_hex_dump(_make_buffer(b""), 0, num_rows=2)
        assert output.count("??") == 32

    def test_group_separation_between_byte_8_and_9(self) -> None:
        buf = _make_buffer(b"\xAA" * 16)
        output = format_hex_dump(buf, 0, num_rows=1)
        hex_section = output.split(": ", 1)[1].split("  |")[0]
        assert "AA AA AA AA AA AA AA AA  AA AA AA AA AA AA AA AA" in hex_section

    def test_default_num_rows(self) -> None:
        output = format_hex_dump(_make_buffer(bytes(1024)))
        assert len(output.strip().split("\n")) == 16


class TestHexDumpPanel:
    def test_returns_panel(self) -> None:
        assert isinstance(hex_dump_panel(_make_buffer()), Panel)

    def test_title_names_address_length_and_order(self) -> None:
        panel = hex_dump_panel(_make_buffer(bytes(32), big_endian=True))
        assert panel.title == "0x80000000 (32 bytes, big-endian)"

    def test_renders(self) -> None:
        console = Console(file=io.StringIO(), width=120)
        console.print(hex_dump_panel(_make_buffer(b"Hi" + bytes(14)), num_rows=1))
        text = console.file.getvalue()
        assert "0x80000000" in text
        assert "48 69 00" in text
        assert "little-endian" in text
