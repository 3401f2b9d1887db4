"""
Intcode Machine — Flat Memory Access + Program Loading

Memory is a plain Python list of non-negative integers owned by the
caller. It holds instructions and data at once:

  [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50]
   └─ ADD ──────┘ └─ MUL ──────┘ └HALT  └─ data ─┘

Every operand is an address into the same list (positional mode). The
helpers below are the only way the machine touches memory, so an
address outside 0..len-1 always fails as AddressOutOfRange instead of
wrapping through Python's negative indexing or raising a bare
IndexError.

Loading: programs arrive as one comma-separated line of text
("1,0,0,3,99"). parse_program() / load_program() turn that into the
list the machine runs on.
"""

from pathlib import Path
from typing import List, Sequence, Union


class IntcodeError(Exception):
    """Base class for every failure the machine or loader reports."""
    pass


class AddressOutOfRange(IntcodeError):
    """Raised when an instruction or operand address falls outside memory."""

    def __init__(self, address: int, size: int):
        self.address = address
        self.size = size
        super().__init__(
            f"Address {address} outside memory of {size} cells")


class ProgramFormatError(IntcodeError):
    """Raised when program text is not a comma-separated list of unsigned ints."""
    pass


# --- Core read/write ---

def check_address(memory: Sequence[int], addr: int) -> int:
    """Return addr unchanged if it is a valid index into memory."""
    if addr < 0 or addr >= len(memory):
        raise AddressOutOfRange(addr, len(memory))
    return addr


def read(memory: Sequence[int], addr: int) -> int:
    """Read the cell at addr."""
    return memory[check_address(memory, addr)]


def write(memory: List[int], addr: int, value: int):
    """Write value into the cell at addr, in place."""
    memory[check_address(memory, addr)] = value


def check_span(memory: Sequence[int], start: int, width: int):
    """Ensure cells start..start+width-1 all exist.

    Used before decoding an instruction so a program truncated in the
    middle of an ADD/MUL fails cleanly rather than reading past the end.
    """
    check_address(memory, start)
    check_address(memory, start + width - 1)


# --- Loading ---

def parse_program(text: str) -> List[int]:
    """Parse one comma-separated program line into a memory list.

    Only the first non-blank line is used. Whitespace around fields and a
    single trailing comma are tolerated.
    """
    line = next((ln.strip() for ln in text.splitlines() if ln.strip()), '')
    if not line:
        raise ProgramFormatError("Empty program")

    fields = line.split(',')
    if fields[-1].strip() == '':
        fields.pop()

    program = []
    for index, field in enumerate(fields):
        field = field.strip()
        try:
            value = int(field)
        except ValueError:
            raise ProgramFormatError(
                f"Field {index}: {field!r} is not an integer") from None
        if value < 0:
            raise ProgramFormatError(
                f"Field {index}: {value} is negative")
        program.append(value)
    return program


def load_program(path: Union[str, Path]) -> List[int]:
    """Read and parse a program file."""
    return parse_program(Path(path).read_text(encoding='utf-8'))
