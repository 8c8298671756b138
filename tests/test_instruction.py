import pytest

from orusvm.instruction import InstructionSet


@pytest.mark.parametrize("member", list(InstructionSet))
def test_from_value_round_trip(member):
    assert InstructionSet.from_value(int(member)) is member


@pytest.mark.parametrize("value", [-1, 11, 255, 1_000_000])
def test_from_value_unknown_returns_none(value):
    assert InstructionSet.from_value(value) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, InstructionSet.LOAD_CONST),
        (7, InstructionSet.PRINT_REG),
        (8, InstructionSet.HALT),
        (10, InstructionSet.JUMP_IF_NOT_ZERO),
    ],
)
def test_documented_opcodes(value, expected):
    assert InstructionSet.from_value(value) is expected


def test_opcodes_are_contiguous_from_zero():
    decoded = [InstructionSet.from_value(value) for value in range(len(InstructionSet))]
    assert all(member is not None for member in decoded)
    assert [int(member) for member in decoded] == list(range(len(InstructionSet)))


def test_opcodes_are_unique():
    decoded = [InstructionSet.from_value(value) for value in range(len(InstructionSet))]
    assert set(decoded) == set(InstructionSet)
    assert len(set(decoded)) == len(decoded)