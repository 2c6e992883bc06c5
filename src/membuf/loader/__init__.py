"""ELF loader module."""

from .elf import ElfProgram, ElfSegment, load_segments, parse_elf

__all__ = ["ElfProgram", "ElfSegment", "load_segments", "parse_elf"]
