import pytest

from orusvm.assembler import AssemblyError, assemble
from orusvm.instruction import InstructionSet as I


def test_load_print_halt():
    program = assemble("LOAD_CONST R1, 5\nPRINT_REG R1\nHALT")
    assert program == [I.LOAD_CONST, 1, 5, I.PRINT_REG, 1, I.HALT]


@pytest.mark.parametrize(
    "mnemonic, opcode",
    [("ADD", I.ADD), ("SUB", I.SUB), ("MUL", I.MUL)],
)
def test_register_pair_operations(mnemonic, opcode):
    assert assemble(f"{mnemonic} R0, R3") == [opcode, 0, 3]


def test_negative_and_signed_constants():
    assert assemble("LOAD_CONST R2, -7") == [I.LOAD_CONST, 2, -7]
    assert assemble("LOAD_CONST R2, +7") == [I.LOAD_CONST, 2, 7]


def test_comments_blank_lines_and_whitespace_ignored():
    asm = "// header\n\n   LOAD_CONST R0, 1   \n\n// trailer\nHALT\n"
    assert assemble(asm) == [I.LOAD_CONST, 0, 1, I.HALT]


def test_backward_label_at_start():
    asm = "top:\nLOAD_CONST R0, 1\nJMP_IF_NOT_ZERO R0, top\nHALT"
    program = assemble(asm)
    assert program[3:6] == [I.JUMP_IF_NOT_ZERO, 0, 0]


def test_forward_label_points_to_next_instruction():
    asm = "JMP_IF_NOT_ZERO R1, end\nend:\nHALT"
    program = assemble(asm)
    assert program[-1] == I.HALT
    assert program[2] == len(program) - 1


def test_output_words_are_plain_ints():
    program = assemble("HALT")
    assert program == [I.HALT]
    assert type(program[0]) is int


def test_unknown_instruction():
    with pytest.raises(AssemblyError, match="Unknown instruction"):
        assemble("NOP")


def test_unknown_label():
    with pytest.raises(AssemblyError, match="Unknown label"):
        assemble("JMP_IF_NOT_ZERO R0, nowhere")


@pytest.mark.parametrize("line", ["DIV R0, R1", "MOD R0, R1", "MOV R0, R1", "JMP 0"])
def test_instructions_without_encoding_are_rejected(line):
    with pytest.raises(AssemblyError, match="Unknown instruction"):
        assemble(line)


def test_missing_operand():
    with pytest.raises(AssemblyError, match="Missing operand"):
        assemble("LOAD_CONST R0")


def test_bad_number():
    with pytest.raises(AssemblyError):
        assemble("LOAD_CONST R0, x")


def test_constant_out_of_range():
    with pytest.raises(AssemblyError):
        assemble("LOAD_CONST R0, 99999999999")


def test_error_is_value_error():
    with pytest.raises(ValueError):
        assemble("BOGUS R0")