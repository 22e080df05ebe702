"""Bytecode program representation: instruction stream plus constant pool.

Layout: each instruction is one opcode byte followed by ``operand_count``
operand bytes. The only instruction with an operand is ``CONSTANT``, whose
operand byte indexes the constant pool.
"""

from __future__ import annotations

from enum import IntEnum

MAX_CONSTANTS = 256  # constant indexes are a single byte


class BytecodeError(Exception):
    """Base class for malformed bytecode."""


class InvalidOpcodeError(BytecodeError):
    def __init__(self, byte: int) -> None:
        self.byte = byte
        super().__init__(f"invalid opcode 0x{byte:02x}")


class ConstantPoolFullError(BytecodeError):
    def __init__(self) -> None:
        super().__init__(f"too many constants in one program (limit {MAX_CONSTANTS})")


class Opcode(IntEnum):
    """Instruction opcodes. The numeric values are the encoding."""

    CONSTANT = 0x00
    POP = 0x01
    RETURN = 0x02
    ADD = 0x03
    SUBTRACT = 0x04
    MULTIPLY = 0x05
    DIVIDE = 0x06
    REMAINDER = 0x07
    NEGATE = 0x08

    @property
    def operand_count(self) -> int:
        return 1 if self is Opcode.CONSTANT else 0

    @classmethod
    def decode(cls, byte: int) -> Opcode:
        try:
            return cls(byte)
        except ValueError:
            raise InvalidOpcodeError(byte) from None


class Bytecode:
    """A compiled program."""

    def __init__(self) -> None:
        self._code = bytearray()
        self._constants: list[float] = []

    @property
    def code(self) -> bytes:
        return bytes(self._code)

    @property
    def constants(self) -> tuple[float, ...]:
        return tuple(self._constants)

    def __len__(self) -> int:
        return len(self._code)

    def write_byte(self, byte: int) -> None:
        self._code.append(byte)

    def write_opcode(self, opcode: Opcode) -> None:
        self._code.append(opcode.value)

    def add_constant(self, value: float) -> int:
        """Append *value* to the constant pool and return its index."""
        if len(self._constants) >= MAX_CONSTANTS:
            raise ConstantPoolFullError()
        self._constants.append(value)
        return len(self._constants) - 1

    def constant(self, index: int) -> float:
        return self._constants[index]

    def byte_at(self, offset: int) -> int:
        return self._code[offset]


def disassemble(bytecode: Bytecode) -> str:
    """Render one instruction per line: offset, opcode name, operands."""
    lines: list[str] = []
    code = bytecode.code
    offset = 0
    while offset < len(code):
        byte = code[offset]
        try:
            op = Opcode.decode(byte)
        except InvalidOpcodeError:
            lines.append(f"{offset:04d} <invalid 0x{byte:02x}>")
            offset += 1
            continue

        if op is Opcode.CONSTANT:
            if offset + 1 >= len(code):
                lines.append(f"{offset:04d} {op.name} <missing operand>")
                break
            index = code[offset + 1]
            if index < len(bytecode.constants):
                value = repr(bytecode.constant(index))
            else:
                value = "?"
            lines.append(f"{offset:04d} {op.name:<10} {index} ({value})")
        else:
            lines.append(f"{offset:04d} {op.name}")
        offset += 1 + op.operand_count
    return "\n".join(lines)
