"""Stack-based virtual machine that executes Bytecode."""

from __future__ import annotations

import logging
import math
import operator
from enum import Enum

from stackcalc.bytecode import Bytecode, InvalidOpcodeError, Opcode

logger = logging.getLogger(__name__)


class VmErrorKind(Enum):
    MISSING_OPERAND = "missing operand"
    INVALID_OPCODE = "invalid opcode"


class VmError(Exception):
    """A runtime failure. Execution of the program stops."""

    def __init__(self, kind: VmErrorKind, message: str, offset: int) -> None:
        self.kind = kind
        self.message = message
        self.offset = offset
        super().__init__(f"{message} (at offset {offset})")


def _divide(a: float, b: float) -> float:
    # IEEE-754 division; Python raises on a zero divisor instead.
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _remainder(a: float, b: float) -> float:
    # Truncated remainder (C fmod): the result has the sign of the dividend.
    if b == 0.0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


_BINARY_OPS = {
    Opcode.ADD: operator.add,
    Opcode.SUBTRACT: operator.sub,
    Opcode.MULTIPLY: operator.mul,
    Opcode.DIVIDE: _divide,
    Opcode.REMAINDER: _remainder,
}


class VM:
    """Executes one Bytecode program on an operand stack."""

    def __init__(self, bytecode: Bytecode) -> None:
        self.bytecode = bytecode
        self.ip = 0
        self.stack: list[float] = []

    def run(self) -> float:
        """Execute until RETURN and return the popped result.

        Raises :class:`VmError` on an invalid opcode or an empty stack.
        """
        while True:
            offset = self.ip
            byte = self._read_byte()
            try:
                op = Opcode.decode(byte)
            except InvalidOpcodeError as e:
                raise VmError(VmErrorKind.INVALID_OPCODE, str(e), offset) from e

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%04d %-10s stack=%r", offset, op.name, self.stack)

            match op:
                case Opcode.CONSTANT:
                    index = self._read_byte()
                    self.stack.append(self.bytecode.constant(index))
                case Opcode.NEGATE:
                    a = self._pop(offset)
                    self.stack.append(-a)
                case Opcode.POP:
                    self._pop(offset)
                case Opcode.RETURN:
                    return self._pop(offset)
                case _:
                    b = self._pop(offset)
                    a = self._pop(offset)
                    self.stack.append(_BINARY_OPS[op](a, b))

    def _read_byte(self) -> int:
        if self.ip >= len(self.bytecode):
            # The code generator always ends a program with RETURN
            raise RuntimeError(f"instruction pointer {self.ip} ran past end of code")
        byte = self.bytecode.byte_at(self.ip)
        self.ip += 1
        return byte

    def _pop(self, offset: int) -> float:
        if not self.stack:
            raise VmError(
                VmErrorKind.MISSING_OPERAND,
                "missing operand: the stack is empty",
                offset,
            )
        return self.stack.pop()


def run(bytecode: Bytecode) -> float:
    """Execute *bytecode* on a fresh VM and return its result."""
    return VM(bytecode).run()
