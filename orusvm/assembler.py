"""Two-pass assembler from text mnemonics to VM bytecode."""

from __future__ import annotations

import re

from orusvm.instruction import InstructionSet

_INSTRUCTION_WIDTHS = {
    "LOAD_CONST": 3,
    "ADD": 3,
    "SUB": 3,
    "MUL": 3,
    "DIV": 3,
    "MOD": 3,
    "MOV": 3,
    "JMP_IF_NOT_ZERO": 3,
    "PRINT_REG": 2,
    "JMP": 2,
    "HALT": 1,
}

_REGISTER_PAIR_OPS = {
    "ADD": InstructionSet.ADD,
    "SUB": InstructionSet.SUB,
    "MUL": InstructionSet.MUL,
}

_INTEGER = re.compile(r"[+-]?[0-9]+")
_OPERAND_SEPARATORS = re.compile(r"[ ,]")
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1


class AssemblyError(ValueError):
    """Raised when assembly text cannot be assembled."""


def _code_lines(asm: str):
    for raw in asm.split("\n"):
        line = raw.strip()
        if line and not line.startswith("//"):
            yield line


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise AssemblyError(f"Invalid integer: {text!r}")
    value = int(text)
    if not _I32_MIN <= value <= _I32_MAX:
        raise AssemblyError(f"Integer out of range: {text}")
    return value


def _operand(parts: list[str], index: int) -> str:
    try:
        return parts[index]
    except IndexError:
        raise AssemblyError(f"Missing operand in: {' '.join(parts)}") from None


def _register(parts: list[str], index: int) -> int:
    return _parse_int(_operand(parts, index).lstrip("R"))


def _find_labels(asm: str) -> dict[str, int]:
    labels: dict[str, int] = {}
    address = 0
    for line in _code_lines(asm):
        if line.endswith(":"):
            labels[line.rstrip(":").strip()] = address
            continue
        mnemonic = line.split()[0]
        try:
            address += _INSTRUCTION_WIDTHS[mnemonic]
        except KeyError:
            raise AssemblyError(f"Unknown instruction: {mnemonic}") from None
    return labels


def assemble(asm: str) -> list[int]:
    """Assemble text into a list of integer words."""
    labels = _find_labels(asm)
    program: list[int] = []
    for line in _code_lines(asm):
        if line.endswith(":"):
            continue
        parts = [part for part in _OPERAND_SEPARATORS.split(line) if part]
        mnemonic = parts[0]
        if mnemonic == "LOAD_CONST":
            register = _register(parts, 1)
            value = _parse_int(_operand(parts, 2))
            program += [InstructionSet.LOAD_CONST, register, value]
        elif mnemonic in _REGISTER_PAIR_OPS:
            first = _register(parts, 1)
            second = _register(parts, 2)
            program += [_REGISTER_PAIR_OPS[mnemonic], first, second]
        elif mnemonic == "JMP_IF_NOT_ZERO":
            register = _register(parts, 1)
            label = _operand(parts, 2)
            try:
                address = labels[label]
            except KeyError:
                raise AssemblyError(f"Unknown label: {label}") from None
            program += [InstructionSet.JUMP_IF_NOT_ZERO, register, address]
        elif mnemonic == "PRINT_REG":
            program += [InstructionSet.PRINT_REG, _register(parts, 1)]
        elif mnemonic == "HALT":
            program.append(InstructionSet.HALT)
        else:
            raise AssemblyError(f"Unknown instruction: {mnemonic}")
    return [int(word) for word in program]