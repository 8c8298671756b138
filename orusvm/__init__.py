"""A small register virtual machine with an assembler and an Orus lexer."""

__version__ = "0.1.0"

__all__ = ["assembler", "instruction", "lexer", "machine"]