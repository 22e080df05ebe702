"""Tests for the bytecode container, opcode encoding and disassembler."""

from __future__ import annotations

import pytest

from stackcalc.bytecode import (
    MAX_CONSTANTS,
    Bytecode,
    ConstantPoolFullError,
    InvalidOpcodeError,
    Opcode,
    disassemble,
)
from tests.helpers import assemble


class TestOpcode:
    def test_stable_encoding(self):
        assert [op.value for op in Opcode] == list(range(9))
        assert Opcode.CONSTANT == 0
        assert Opcode.RETURN == 2
        assert Opcode.NEGATE == 8

    def test_decode_round_trip(self):
        for op in Opcode:
            assert Opcode.decode(op.value) is op

    def test_decode_invalid(self):
        with pytest.raises(InvalidOpcodeError) as exc:
            Opcode.decode(0xFF)
        assert exc.value.byte == 0xFF
        assert "0xff" in str(exc.value)

    def test_operand_counts(self):
        assert Opcode.CONSTANT.operand_count == 1
        for op in Opcode:
            if op is not Opcode.CONSTANT:
                assert op.operand_count == 0


class TestBytecode:
    def test_write(self):
        bc = Bytecode()
        bc.write_opcode(Opcode.CONSTANT)
        bc.write_byte(0)
        bc.write_opcode(Opcode.RETURN)
        assert bc.code == bytes([0x00, 0x00, 0x02])
        assert len(bc) == 3

    def test_add_constant_returns_index(self):
        bc = Bytecode()
        assert bc.add_constant(1.5) == 0
        assert bc.add_constant(-2.0) == 1
        assert bc.constant(1) == -2.0
        assert bc.constants == (1.5, -2.0)

    def test_constant_out_of_range(self):
        with pytest.raises(IndexError):
            Bytecode().constant(0)

    def test_constant_pool_limit(self):
        bc = Bytecode()
        for i in range(MAX_CONSTANTS):
            assert bc.add_constant(float(i)) == i
        with pytest.raises(ConstantPoolFullError):
            bc.add_constant(0.0)
        assert len(bc.constants) == MAX_CONSTANTS

    def test_code_view_is_immutable_copy(self):
        bc = assemble(Opcode.RETURN)
        view = bc.code
        bc.write_opcode(Opcode.POP)
        assert view == bytes([Opcode.RETURN])


class TestDisassemble:
    def test_listing(self):
        bc = assemble(
            Opcode.CONSTANT, 0, Opcode.CONSTANT, 1, Opcode.ADD, Opcode.RETURN,
            constants=(1.0, 2.5),
        )
        assert disassemble(bc).splitlines() == [
            "0000 CONSTANT   0 (1.0)",
            "0002 CONSTANT   1 (2.5)",
            "0004 ADD",
            "0005 RETURN",
        ]

    def test_invalid_byte_does_not_fail(self):
        bc = assemble(0xEE, Opcode.RETURN)
        assert disassemble(bc).splitlines() == ["0000 <invalid 0xee>", "0001 RETURN"]

    def test_truncated_constant(self):
        bc = assemble(Opcode.CONSTANT)
        assert "missing operand" in disassemble(bc)

    def test_bad_constant_index(self):
        bc = assemble(Opcode.CONSTANT, 3)
        assert disassemble(bc) == "0000 CONSTANT   3 (?)"
