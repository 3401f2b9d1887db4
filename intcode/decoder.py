"""
Intcode Machine — Opcode Decoder / Disassembler

Maps the opcode cell at the program counter to (mnemonic, width):

  Opcode  Mnemonic  Width  Cells
  ------  --------  -----  ------------------------------
     1    ADD         4    [1, srcA, srcB, dest]
     2    MUL         4    [2, srcA, srcB, dest]
    99    HALT        1    [99]

Operands are always addresses (positional mode). Any other opcode value
raises UnknownOpcode; an instruction whose cells run past the end of
memory raises AddressOutOfRange before any operand is used.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .config import OP_ADD, OP_MUL, OP_HALT, ARITH_WIDTH, HALT_WIDTH
from .memory import IntcodeError, check_span, read


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: opcode -> (mnemonic, width)

OPCODES = {
    OP_ADD:  ('ADD',  ARITH_WIDTH),
    OP_MUL:  ('MUL',  ARITH_WIDTH),
    OP_HALT: ('HALT', HALT_WIDTH),
}


class UnknownOpcode(IntcodeError):
    """Raised when the cell at the program counter is not 1, 2 or 99."""

    def __init__(self, opcode: int, position: int):
        self.opcode = opcode
        self.position = position
        super().__init__(
            f"Encountered unknown opcode {opcode} at position {position}.")


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction.

    operands holds the raw address cells that follow the opcode
    (empty for HALT).
    """
    position: int
    opcode: int
    mnemonic: str
    operands: Tuple[int, ...]

    @property
    def width(self) -> int:
        return 1 + len(self.operands)

    @property
    def next_position(self) -> int:
        return self.position + self.width


def decode_instruction(memory: Sequence[int], pc: int) -> Instruction:
    """Fetch and decode the instruction at pc."""
    opcode = read(memory, pc)
    if opcode not in OPCODES:
        raise UnknownOpcode(opcode, pc)

    mnem, width = OPCODES[opcode]
    check_span(memory, pc, width)
    operands = tuple(memory[pc + 1:pc + width])
    return Instruction(pc, opcode, mnem, operands)


def format_instruction(ins: Instruction) -> str:
    """Render an instruction as one listing line."""
    if ins.opcode == OP_HALT:
        return f"{ins.position:04d}: HALT"
    src_a, src_b, dest = ins.operands
    return f"{ins.position:04d}: {ins.mnemonic:<4s} [{src_a}] [{src_b}] -> [{dest}]"


def disassemble(memory: Sequence[int], start: int = 0) -> List[str]:
    """Static listing of memory from start to the end.

    Cells that do not decode (unknown opcode, or an ADD/MUL cut short by
    the end of memory) are listed as DATA and skipped one at a time.
    """
    lines = []
    pc = start
    while pc < len(memory):
        try:
            ins = decode_instruction(memory, pc)
        except IntcodeError:
            lines.append(f"{pc:04d}: DATA {memory[pc]}")
            pc += 1
            continue
        lines.append(format_instruction(ins))
        pc = ins.next_position
    return lines
