# orusvm

A small register-based virtual machine and the pieces around it:

- `orusvm.lexer` turns Orus source text into tokens. It produces
  indentation-aware `INDENT` / `DEDENT` tokens, ranges (`..` and `..=`),
  keywords (`mut`, `for`, `in`, `print`), and skips `//` line comments.
- `orusvm.assembler` turns a textual assembly listing into a flat list of
  integers (the program image), resolving labels.
- `orusvm.machine` runs a program image on a four-register machine with
  256 words of program memory.
- `orusvm.instruction` defines the opcodes shared by the assembler and the
  machine.

## Installing

```
pip install .
```

## Tokenizing source

```python
from orusvm.lexer import tokenize

for token in tokenize("mut sum = 5\nprint(sum)"):
    print(token.kind, token.value)
```

Each `Token` has a `kind` (a `TokenKind` member) and a `value`: the text of
keywords, identifiers and operators, the integer of a number, and `None` for
every other kind. The list always ends with an `EOF` token, preceded by any
`DEDENT` tokens needed to close open indentation blocks. Blank lines give a
`NEWLINE` token, unrecognised characters are skipped, and a number literal
larger than a signed 32-bit integer ends the token stream at that point.

A `Lexer` object can also be used directly:

```python
from orusvm.lexer import Lexer

tokens = Lexer("for i in 1..3:\n    print(i)\n").tokenize()
```

## Assembling

The assembler takes one instruction per line. Blank lines and lines starting
with `//` are ignored, and a line ending in `:` defines a label at the
address of the next instruction. Operands are separated by spaces and/or
commas, and registers are written with an `R` prefix (`R0` to `R3`).

```python
from orusvm.assembler import assemble

program = assemble("""
LOAD_CONST R0, 5
LOAD_CONST R1, 7
ADD R0, R1
PRINT_REG R0
HALT
""")
```

The assembler encodes `LOAD_CONST`, `ADD`, `SUB`, `MUL`, `PRINT_REG`,
`JMP_IF_NOT_ZERO` (whose second operand is a label) and `HALT`. The
mnemonics `DIV`, `MOD`, `MOV` and `JMP` are known when label addresses are
worked out, but are not encoded: a listing that uses them raises
`AssemblyError`. Unknown instructions, missing or malformed operands,
integers outside the signed 32-bit range and unknown labels raise
`AssemblyError` too (a subclass of `ValueError`).

## Running

```python
from orusvm.assembler import assemble
from orusvm.machine import VM

vm = VM()
vm.load_program(assemble("LOAD_CONST R0, 6\nLOAD_CONST R1, 7\nMUL R0, R1\nPRINT_REG R0\nHALT"))
vm.run()
print(vm.registers)  # [42, 7, 0, 0]
```

`run` prints `--- VM Start ---`, then executes until a `HALT`, the end of
program memory or the iteration limit, printing a trace line for each
instruction and a `Register Rn = value` line for each `PRINT_REG`. At the end
it prints `--- VM End ---` with the execution time, the number of
instructions executed and the instruction rate. The limit defaults to one
million instructions and can be set with `VM(max_iterations=...)`; reaching
it prints a notice on standard error.

`step` executes a single instruction, which is handy for inspecting
`registers`, `pc`, `running` and `instruction_count` between instructions.
`load_program` copies words into memory from address zero; the rest of
memory stays zero, and zero is the `LOAD_CONST` opcode.

Faults raise `VMError` (a subclass of `RuntimeError`) and set `running` to
`False`: an oversized program, an unknown opcode, an invalid register index,
division or modulo by zero, an overflowing division, a jump out of bounds,
or the program counter running past memory while reading operands. When
`run` stops on a fault, the end-of-run statistics are still printed before
the error propagates.

Register arithmetic wraps around as signed 32-bit integers; division and
modulo truncate towards zero.

## Instruction set

| Opcode | Mnemonic          | Operands          |
|-------:|-------------------|-------------------|
| 0      | `LOAD_CONST`      | register, value   |
| 1      | `MOV`             | dest, src         |
| 2      | `ADD`             | reg1, reg2        |
| 3      | `SUB`             | reg1, reg2        |
| 4      | `MUL`             | reg1, reg2        |
| 5      | `MOD`             | reg1, reg2        |
| 6      | `DIV`             | reg1, reg2        |
| 7      | `PRINT_REG`       | register          |
| 8      | `HALT`            |                   |
| 9      | `JMP`             | address           |
| 10     | `JMP_IF_NOT_ZERO` | register, address |

Arithmetic instructions store their result in the first register.
`InstructionSet.from_value` maps an opcode number back to its instruction,
or returns `None` for an unknown one.

## What the package does not do

There is no parser or code generator: tokens from `orusvm.lexer` are not
turned into assembly or a program image, so Orus source cannot be run
directly. There is also no command-line program; everything is used from
Python.

## Running the tests

```
pip install ".[test]"
pytest
```