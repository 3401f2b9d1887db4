"""
Opcode decoder and disassembler tests.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from intcode.decoder import (
    OPCODES, Instruction, UnknownOpcode, decode_instruction, disassemble,
    format_instruction,
)
from intcode.memory import AddressOutOfRange


EXAMPLE = [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50]


class TestOpcodeTable:
    def test_only_three_opcodes(self):
        assert sorted(OPCODES) == [1, 2, 99]

    def test_widths(self):
        assert OPCODES[1] == ('ADD', 4)
        assert OPCODES[2] == ('MUL', 4)
        assert OPCODES[99] == ('HALT', 1)


class TestDecode:
    def test_add(self):
        ins = decode_instruction(EXAMPLE, 0)
        assert ins == Instruction(0, 1, 'ADD', (9, 10, 3))
        assert ins.width == 4
        assert ins.next_position == 4

    def test_mul(self):
        ins = decode_instruction(EXAMPLE, 4)
        assert ins.mnemonic == 'MUL'
        assert ins.operands == (3, 11, 0)

    def test_halt(self):
        ins = decode_instruction(EXAMPLE, 8)
        assert ins.mnemonic == 'HALT'
        assert ins.operands == ()
        assert ins.width == 1

    def test_halt_at_last_cell(self):
        assert decode_instruction([1, 0, 0, 0, 99], 4).mnemonic == 'HALT'

    def test_unknown(self):
        with pytest.raises(UnknownOpcode) as exc:
            decode_instruction(EXAMPLE, 9)
        assert exc.value.opcode == 30
        assert exc.value.position == 9
        assert str(exc.value) == "Encountered unknown opcode 30 at position 9."

    def test_zero_is_unknown(self):
        with pytest.raises(UnknownOpcode):
            decode_instruction([0, 0, 0, 0], 0)

    def test_truncated_add(self):
        with pytest.raises(AddressOutOfRange) as exc:
            decode_instruction([1, 0, 0], 0)
        assert exc.value.address == 3

    def test_decode_does_not_mutate(self):
        memory = list(EXAMPLE)
        decode_instruction(memory, 0)
        assert memory == EXAMPLE


class TestDisassemble:
    def test_format(self):
        assert format_instruction(Instruction(4, 2, 'MUL', (3, 11, 0))) == "0004: MUL  [3] [11] -> [0]"
        assert format_instruction(Instruction(8, 99, 'HALT', ())) == "0008: HALT"

    def test_example_listing(self):
        assert disassemble(EXAMPLE) == [
            "0000: ADD  [9] [10] -> [3]",
            "0004: MUL  [3] [11] -> [0]",
            "0008: HALT",
            "0009: DATA 30",
            "0010: DATA 40",
            "0011: DATA 50",
        ]

    def test_truncated_tail_is_data(self):
        assert disassemble([99, 1, 2]) == [
            "0000: HALT",
            "0001: DATA 1",
            "0002: DATA 2",
        ]

    def test_start_offset(self):
        assert disassemble(EXAMPLE, start=8)[0] == "0008: HALT"

    def test_empty(self):
        assert disassemble([]) == []
