"""ELF segment loader: turns ELF32 PT_LOAD segments into byte buffers."""

from __future__ import annotations

from dataclasses import dataclass

from ..memory.byte_buffer import ByteMemBuffer

# ELF constants
_ELF_MAGIC = b"\x7fELF"
_ELFCLASS32 = 1
_ELFDATA2LSB = 1  # Little-endian
_ELFDATA2MSB = 2  # Big-endian
_PT_LOAD = 1

# ELF32 header size and program header entry size
_ELF32_EHDR_SIZE = 52
_ELF32_PHDR_SIZE = 32


@dataclass(frozen=True)
class ElfSegment:
    """A loadable segment from an ELF file."""

    vaddr: int
    data: bytes
    memsz: int
    big_endian: bool = False

    def to_buffer(self) -> ByteMemBuffer:
        """Wrap the segment in a buffer at its virtual address.

        The file data is zero-padded to memsz (handles .bss sections).
        """
        padded = self.data + b"\x00" * max(0, self.memsz - len(self.data))
        return ByteMemBuffer(self.vaddr, padded, self.big_endian)


@dataclass(frozen=True)
class ElfProgram:
    """Parsed ELF program: header summary and loadable segments."""

    entry: int
    machine: int
    big_endian: bool
    segments: list[ElfSegment]


def parse_elf(data: bytes) -> ElfProgram:
    """Parse a 32-bit ELF binary of either byte order.

    Validates the identification bytes, then decodes the header and
    program headers through a ByteMemBuffer using the byte order the
    file declares, and extracts all PT_LOAD segments.

    Args:
        data: Raw bytes of the ELF file.

    Returns:
        An ElfProgram with the entry point, machine and loadable segments.

    Raises:
        ValueError: If the ELF header is invalid or unsupported.
    """
    if len(data) < _ELF32_EHDR_SIZE:
        raise ValueError(
            f"File too small for ELF header: {len(data)} bytes "
            f"(need at least {_ELF32_EHDR_SIZE})"
        )

    magic = data[0:4]
    if magic != _ELF_MAGIC:
        raise ValueError(f"Bad ELF magic: {magic!r} (expected {_ELF_MAGIC!r})")

    ei_class = data[4]
    if ei_class != _ELFCLASS32:
        raise ValueError(
            f"Unsupported ELF class: {ei_class} (expected {_ELFCLASS32} for 32-bit)"
        )

    ei_data = data[5]
    if ei_data not in (_ELFDATA2LSB, _ELFDATA2MSB):
        raise ValueError(
            f"Unsupported ELF endianness: {ei_data} "
            f"(expected {_ELFDATA2LSB} or {_ELFDATA2MSB})"
        )
    big_endian = ei_data == _ELFDATA2MSB

    image = ByteMemBuffer(0, data, big_endian)
    e_machine = image.get_unsigned_short(18)
    e_entry = image.get_unsigned_int(24)
    e_phoff = image.get_unsigned_int(28)
    e_phentsize = image.get_unsigned_short(42)
    e_phnum = image.get_unsigned_short(44)

    segments: list[ElfSegment] = []

    for i in range(e_phnum):
        ph_offset = e_phoff + i * e_phentsize

        if ph_offset + _ELF32_PHDR_SIZE > len(data):
            raise ValueError(
                f"Program header {i} extends beyond file "
                f"(offset {ph_offset}, file size {len(data)})"
            )

        # p_type, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz
        p_type = image.get_unsigned_int(ph_offset)
        if p_type != _PT_LOAD:
            continue
        p_offset = image.get_unsigned_int(ph_offset + 4)
        p_vaddr = image.get_unsigned_int(ph_offset + 8)
        p_filesz = image.get_unsigned_int(ph_offset + 16)
        p_memsz = image.get_unsigned_int(ph_offset + 20)

        if p_offset + p_filesz > len(data):
            raise ValueError(
                f"Segment {i} data extends beyond file "
                f"(offset {p_offset}, filesz {p_filesz}, file size {len(data)})"
            )

        seg_data = bytes(data[p_offset : p_offset + p_filesz])
        segments.append(ElfSegment(vaddr=p_vaddr, data=seg_data,
                                   memsz=p_memsz, big_endian=big_endian))

    return ElfProgram(entry=e_entry, machine=e_machine,
                      big_endian=big_endian, segments=segments)


def load_segments(path: str) -> list[ByteMemBuffer]:
    """Read an ELF file and return one buffer per PT_LOAD segment.

    Raises:
        ValueError: If the ELF file is invalid.
        OSError: If the file cannot be read.
    """
    with open(path, "rb") as f:
        data = f.read()

    return [seg.to_buffer() for seg in parse_elf(data).segments]
