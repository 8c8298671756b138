"""Register-based virtual machine that executes assembled bytecode."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Iterable

from orusvm.instruction import InstructionSet

NUM_REGISTERS = 4
MAX_PROGRAM_SIZE = 256
MAX_ITERATIONS = 1_000_000

_I32_MIN = -(2**31)
_WORD_SPAN = 2**32
_INDEX_SPAN = 2**64


class VMError(RuntimeError):
    """Raised when the machine meets an error while loading or executing."""


def _wrap_i32(value: int) -> int:
    return (value - _I32_MIN) % _WORD_SPAN + _I32_MIN


def _as_index(word: int) -> int:
    """Reinterpret a signed word as an unsigned machine index."""
    return word % _INDEX_SPAN


def _check_overflow(dividend: int, divisor: int) -> None:
    if dividend == _I32_MIN and divisor == -1:
        raise VMError("Error: Arithmetic overflow")


def _truncated_div(dividend: int, divisor: int) -> int:
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


class VM:
    """A machine with a few integer registers and a fixed-size program memory."""

    def __init__(self, max_iterations: int = MAX_ITERATIONS) -> None:
        self.registers = [0] * NUM_REGISTERS
        self.pc = 0
        self.program = [0] * MAX_PROGRAM_SIZE
        self.running = True
        self.instruction_count = 0
        self.max_iterations = max_iterations
        self._handlers: dict[InstructionSet, Callable[[], None]] = {
            InstructionSet.LOAD_CONST: self._load_const,
            InstructionSet.MOV: self._mov,
            InstructionSet.ADD: self._add,
            InstructionSet.SUB: self._sub,
            InstructionSet.MUL: self._mul,
            InstructionSet.MOD: self._mod,
            InstructionSet.DIV: self._div,
            InstructionSet.PRINT_REG: self._print_reg,
            InstructionSet.HALT: self._halt,
            InstructionSet.JUMP: self._jump,
            InstructionSet.JUMP_IF_NOT_ZERO: self._jump_if_not_zero,
        }

    def _fail(self, message: str) -> VMError:
        self.running = False
        return VMError(message)

    def load_program(self, program: Iterable[int]) -> None:
        """Copy program words into memory, starting at address zero."""
        words = [int(word) for word in program]
        if len(words) > MAX_PROGRAM_SIZE:
            raise self._fail(
                f"Error: Program size {len(words)} exceeds maximum memory "
                f"{MAX_PROGRAM_SIZE}"
            )
        self.program[: len(words)] = words

    def _next_word(self) -> int:
        if self.pc >= MAX_PROGRAM_SIZE:
            raise self._fail(f"Error: Program counter out of bounds: {self.pc}")
        word = self.program[self.pc]
        self.pc += 1
        return word

    def _next_register(self) -> int:
        return _as_index(self._next_word())

    def _check_registers(self, *indices: int) -> None:
        if any(index >= NUM_REGISTERS for index in indices):
            raise self._fail("Error: Invalid register index")

    def _register_pair(self, mnemonic: str) -> tuple[int, int]:
        first = self._next_register()
        second = self._next_register()
        print(f"{mnemonic} R{first}, R{second}")
        self._check_registers(first, second)
        return first, second

    def _load_const(self) -> None:
        register = self._next_register()
        value = self._next_word()
        print(f"LOAD_CONST R{register}, {value}")
        if register >= NUM_REGISTERS:
            raise self._fail(f"Error: Invalid register index {register}")
        self.registers[register] = value

    def _mov(self) -> None:
        dest, src = self._register_pair("MOV")
        self.registers[dest] = self.registers[src]

    def _add(self) -> None:
        first, second = self._register_pair("ADD")
        self.registers[first] = _wrap_i32(
            self.registers[first] + self.registers[second]
        )

    def _sub(self) -> None:
        first, second = self._register_pair("SUB")
        self.registers[first] = _wrap_i32(
            self.registers[first] - self.registers[second]
        )

    def _mul(self) -> None:
        first, second = self._register_pair("MUL")
        self.registers[first] = _wrap_i32(
            self.registers[first] * self.registers[second]
        )

    def _div(self) -> None:
        first, second = self._register_pair("DIV")
        dividend, divisor = self.registers[first], self.registers[second]
        if divisor == 0:
            raise self._fail("Error: Division by zero")
        if dividend == _I32_MIN and divisor == -1:
            raise self._fail("Error: Arithmetic overflow")
        self.registers[first] = _truncated_div(dividend, divisor)

    def _mod(self) -> None:
        first, second = self._register_pair("MOD")
        dividend, divisor = self.registers[first], self.registers[second]
        if divisor == 0:
            raise self._fail("Error: Modulo by zero")
        if dividend == _I32_MIN and divisor == -1:
            raise self._fail("Error: Arithmetic overflow")
        self.registers[first] = dividend - divisor * _truncated_div(dividend, divisor)

    def _print_reg(self) -> None:
        register = self._next_register()
        print(f"PRINT_REG R{register}")
        self._check_registers(register)
        print(f"Register R{register} = {self.registers[register]}")

    def _jump(self) -> None:
        address = _as_index(self._next_word())
        print(f"JMP to address {address}")
        if address >= MAX_PROGRAM_SIZE:
            raise self._fail("Error: Jump address out of bounds")
        self.pc = address

    def _jump_if_not_zero(self) -> None:
        register = self._next_register()
        address = _as_index(self._next_word())
        print(f"JUMP_IF_NOT_ZERO R{register}, {address}")
        self._check_registers(register)
        if self.registers[register] != 0:
            self.pc = address

    def _halt(self) -> None:
        self.running = False
        print("HALT instruction encountered. Shutting down VM.")

    def step(self) -> None:
        """Fetch, decode and execute one instruction."""
        if self.pc >= MAX_PROGRAM_SIZE:
            raise self._fail(f"Error: Program counter out of bounds: {self.pc}")
        opcode = self.program[self.pc]
        instruction = InstructionSet.from_value(opcode)
        if instruction is None:
            raise self._fail(f"Error: Unknown instruction {opcode} at PC={self.pc}")
        self.pc += 1
        self.instruction_count += 1
        self._handlers[instruction]()

    def run(self) -> None:
        """Execute until halt, the end of memory or the iteration limit."""
        print("--- VM Start ---")
        start = time.perf_counter()
        try:
            while (
                self.running
                and self.pc < MAX_PROGRAM_SIZE
                and self.instruction_count < self.max_iterations
            ):
                self.step()
            if self.instruction_count >= self.max_iterations:
                print("VM stopped: Reached maximum iteration limit", file=sys.stderr)
        finally:
            elapsed = time.perf_counter() - start
            print("--- VM End ---")
            print(f"Execution time: {elapsed:.6f} seconds")
            print(f"Total instructions executed: {self.instruction_count}")
            if elapsed > 0.0:
                print(f"Instructions per second: {self.instruction_count / elapsed:.0f}")
            else:
                print("Execution time too short to calculate instructions per second")