"""
Intcode Machine Toolkit
=======================
A stored-program interpreter over a flat integer memory that holds
instructions and data at once, plus a brute-force search for the
(noun, verb) inputs that make a program produce a given output.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐
    │ Program  │───>│  Memory  │───>│ Decoder  │───>│ Machine  │
    │ (text)   │    │ (list)   │    │ (opcode) │    │ (step)   │
    └──────────┘    └──────────┘    └──────────┘    └────┬─────┘
                                                         │
                                                    ┌────┴─────┐
                                                    │  Search  │
                                                    │ (n, v)   │
                                                    └──────────┘

    - memory.py:   bounds-checked cell access, program parsing/loading
    - decoder.py:  opcode table (ADD 1, MUL 2, HALT 99), disassembly
    - machine.py:  step()/run() over a caller-owned list, IntcodeMachine stepper
    - search.py:   exhaustive noun/verb search, first match wins
    - fuel.py:     rocket-equation fuel counter (independent of the machine)
"""

__version__ = "0.1.0"

from .memory import (
    IntcodeError, AddressOutOfRange, ProgramFormatError,
    parse_program, load_program,
)
from .decoder import UnknownOpcode, Instruction, decode_instruction, disassemble
from .machine import step, run, IntcodeMachine, StopReason
from .search import search_for_inputs, run_with_inputs, encode_answer
