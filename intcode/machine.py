"""
Intcode Machine — Stepper / Interpreter

Execution model:
  1. Decode opcode at position
  2. ADD / MUL: read both source cells, write the result to dest
  3. Advance position by 4 (only when continuing)
  4. HALT: stop, memory returned as-is

Two ways in:

  step(position, memory, cont) / run(memory)
      Plain functions over a caller-owned list. Failures raise
      (UnknownOpcode, AddressOutOfRange); writes that already landed
      stay in memory.

  IntcodeMachine
      Owns a program counter over a memory list and reports why it
      stopped instead of raising, with breakpoints and an instruction
      trace for debugging.

Termination reasons (IntcodeMachine):
  - HALT:     opcode 99
  - BREAK:    breakpoint address hit
  - ILLEGAL:  unknown opcode
  - ERROR:    instruction or operand address outside memory
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Set

from .config import OP_ADD, OP_MUL, OP_HALT
from .decoder import (
    Instruction, UnknownOpcode, decode_instruction, format_instruction,
)
from .memory import IntcodeError, read, write

log = logging.getLogger(__name__)


def execute(ins: Instruction, memory: List[int]):
    """Apply a decoded ADD or MUL to memory. HALT is a no-op."""
    if ins.opcode == OP_HALT:
        return
    src_a, src_b, dest = ins.operands
    a = read(memory, src_a)
    b = read(memory, src_b)
    if ins.opcode == OP_ADD:
        write(memory, dest, a + b)
    elif ins.opcode == OP_MUL:
        write(memory, dest, a * b)


def step(position: int, memory: List[int], cont: bool = False) -> List[int]:
    """Execute the instruction at position, in place.

    With cont=False exactly one instruction runs and the caller is
    responsible for advancing the position. With cont=True execution
    carries on 4 cells further after every ADD/MUL until HALT.

    Returns the same memory list. Raises UnknownOpcode or
    AddressOutOfRange on failure.
    """
    while True:
        ins = decode_instruction(memory, position)
        if ins.opcode == OP_HALT:
            return memory
        execute(ins, memory)
        if not cont:
            return memory
        position = ins.next_position


def run(memory: List[int]) -> List[int]:
    """Run from position 0 until HALT."""
    return step(0, memory, True)


class StopReason(Enum):
    HALT = 'HALT'
    BREAK = 'BREAK'
    ILLEGAL = 'ILLEGAL'
    ERROR = 'ERROR'


class IntcodeMachine:
    """Single-stepping Intcode machine.

    Usage:
        machine = IntcodeMachine([1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50])
        reason = machine.run()
        machine.memory[0]   # 3500

    The memory list passed in is used directly, not copied, so the caller
    sees every write.
    """

    def __init__(self, memory: List[int]):
        self.memory = memory
        self.pc = 0
        self.steps = 0
        self.stop_reason: Optional[StopReason] = None
        self.last_error: Optional[IntcodeError] = None

        # Breakpoints: set of pc addresses that trigger BREAK
        self._breakpoints: Set[int] = set()
        self._resume_from_break = False

        self._trace = False
        self._trace_output: List[str] = []

    @property
    def halted(self) -> bool:
        return self.stop_reason is StopReason.HALT

    @property
    def failed(self) -> bool:
        return self.stop_reason in (StopReason.ILLEGAL, StopReason.ERROR)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason if stopped, else None.

        HALT and failures are terminal: stepping again returns the same
        reason without touching memory.
        """
        if self.halted or self.failed:
            return self.stop_reason

        pc = self.pc
        if pc in self._breakpoints and not self._resume_from_break:
            self._resume_from_break = True
            self.stop_reason = StopReason.BREAK
            if self._trace:
                self._trace_output.append(f"  BREAK at {pc}")
            log.debug("Breakpoint at %d", pc)
            return StopReason.BREAK
        self._resume_from_break = False
        self.stop_reason = None

        try:
            ins = decode_instruction(self.memory, pc)
            if self._trace:
                self._trace_output.append(format_instruction(ins))
            execute(ins, self.memory)
        except UnknownOpcode as e:
            return self._fail(StopReason.ILLEGAL, e)
        except IntcodeError as e:
            return self._fail(StopReason.ERROR, e)

        if ins.opcode == OP_HALT:
            self.stop_reason = StopReason.HALT
            log.debug("Halted at %d after %d steps", pc, self.steps)
            return StopReason.HALT

        self.steps += 1
        self.pc = ins.next_position
        return None

    def run(self) -> StopReason:
        """Step until HALT, BREAK or failure."""
        while True:
            reason = self.step()
            if reason is not None:
                return reason

    def _fail(self, reason: StopReason, error: IntcodeError) -> StopReason:
        self.stop_reason = reason
        self.last_error = error
        if self._trace:
            self._trace_output.append(f"  ERROR: {error}")
        log.debug("Stopped at %d: %s", self.pc, error)
        return reason

    # ══════════════════════════════════════════════
    # Breakpoint API
    # ══════════════════════════════════════════════

    def add_breakpoint(self, addr: int):
        """Stop before the instruction at addr executes."""
        self._breakpoints.add(addr)

    def remove_breakpoint(self, addr: int):
        self._breakpoints.discard(addr)

    def clear_breakpoints(self):
        self._breakpoints.clear()

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Record one listing line per decoded instruction."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def reset(self, memory: Iterable[int]):
        """Load a fresh copy of memory and start over at position 0."""
        self.memory = list(memory)
        self.pc = 0
        self.steps = 0
        self.stop_reason = None
        self.last_error = None
        self._resume_from_break = False
        self._trace_output.clear()
