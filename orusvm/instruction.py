"""Opcodes understood by the virtual machine."""

from __future__ import annotations

from enum import IntEnum


class InstructionSet(IntEnum):
    """Numeric opcodes of the virtual machine's instruction set."""

    LOAD_CONST = 0  # LOAD_CONST <reg> <value>
    MOV = 1  # MOV <dest_reg> <src_reg>
    ADD = 2  # ADD <reg1> <reg2>
    SUB = 3  # SUB <reg1> <reg2>
    MUL = 4  # MUL <reg1> <reg2>
    MOD = 5  # MOD <reg1> <reg2>
    DIV = 6  # DIV <reg1> <reg2>
    PRINT_REG = 7  # PRINT_REG <reg>
    HALT = 8  # HALT
    JUMP = 9  # JMP <addr>
    JUMP_IF_NOT_ZERO = 10  # JMP_IF_NOT_ZERO <reg> <addr>

    @classmethod
    def from_value(cls, value: int) -> InstructionSet | None:
        """Return the instruction with this opcode, or None if there is none."""
        try:
            return cls(value)
        except ValueError:
            return None