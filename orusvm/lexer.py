"""Indentation-aware tokenizer for the source language."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto

_KEYWORDS = frozenset({"mut", "for", "in", "print"})
_IDENT_START = frozenset(string.ascii_letters + "_")
_DIGITS = frozenset(string.digits)
_IDENT_CHARS = _IDENT_START | _DIGITS
_SINGLE_OPERATORS = frozenset("+-*=()")
_BLANKS = frozenset(" \t")
_I32_MAX = 2**31 - 1


class TokenKind(Enum):
    """Kinds of token produced by the lexer."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    COLON = auto()
    RANGE_EXCLUSIVE = auto()
    RANGE_INCLUSIVE = auto()
    OPERATOR = auto()
    NEWLINE = auto()
    INDENT = auto()
    DEDENT = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A token; keywords, identifiers, operators and numbers carry a value."""

    kind: TokenKind
    value: str | int | None = None


class Lexer:
    """Turns source text into a list of tokens, tracking indentation."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._indent_stack = [0]
        self._pending_dedents = 0
        self._at_line_start = True

    def tokenize(self) -> list[Token]:
        """Return every token of the source, ending with EOF."""
        tokens = []
        while (token := self._next_token()) is not None:
            tokens.append(token)
        tokens.extend(Token(TokenKind.DEDENT) for _ in self._indent_stack[1:])
        tokens.append(Token(TokenKind.EOF))
        return tokens

    def _peek(self) -> str | None:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return None

    def _advance(self) -> str | None:
        char = self._peek()
        if char is not None:
            self._pos += 1
        return char

    def _skip_blanks(self) -> int:
        """Skip spaces and tabs, returning how many were skipped."""
        start = self._pos
        while self._peek() in _BLANKS:
            self._pos += 1
        return self._pos - start

    def _take_while(self, first: str, allowed: frozenset[str]) -> str:
        start = self._pos - 1
        while self._peek() in allowed:
            self._pos += 1
        return self._source[start : self._pos]

    def _skip_comment(self) -> None:
        self._pos += 1
        while (char := self._peek()) is not None and char != "\n":
            self._pos += 1

    def _next_token(self) -> Token | None:
        if self._pending_dedents:
            self._pending_dedents -= 1
            return Token(TokenKind.DEDENT)

        if self._at_line_start:
            self._at_line_start = False
            indent = self._skip_blanks()
            upcoming = self._peek()
            if upcoming is None:
                return None
            if upcoming == "\n":
                self._pos += 1
                self._at_line_start = True
                return Token(TokenKind.NEWLINE)
            top = self._indent_stack[-1]
            if indent > top:
                self._indent_stack.append(indent)
                return Token(TokenKind.INDENT)
            if indent < top:
                while indent < self._indent_stack[-1]:
                    self._indent_stack.pop()
                    self._pending_dedents += 1
                return Token(TokenKind.DEDENT)
        else:
            self._skip_blanks()

        while True:
            char = self._advance()
            if char is None:
                return None
            if char == "\n":
                self._at_line_start = True
                return Token(TokenKind.NEWLINE)
            if char == ":":
                return Token(TokenKind.COLON)
            if char == ".":
                if self._peek() != ".":
                    return Token(TokenKind.OPERATOR, ".")
                self._pos += 1
                if self._peek() == "=":
                    self._pos += 1
                    return Token(TokenKind.RANGE_INCLUSIVE)
                return Token(TokenKind.RANGE_EXCLUSIVE)
            if char in _IDENT_START:
                word = self._take_while(char, _IDENT_CHARS)
                kind = TokenKind.KEYWORD if word in _KEYWORDS else TokenKind.IDENTIFIER
                return Token(kind, word)
            if char in _DIGITS:
                number = int(self._take_while(char, _DIGITS))
                if number > _I32_MAX:
                    # An out-of-range literal ends the token stream.
                    return None
                return Token(TokenKind.NUMBER, number)
            if char in _SINGLE_OPERATORS:
                return Token(TokenKind.OPERATOR, char)
            if char == "/":
                if self._peek() != "/":
                    return Token(TokenKind.OPERATOR, "/")
                self._skip_comment()
            # Comments and unknown characters are skipped.
            self._skip_blanks()


def tokenize(source: str) -> list[Token]:
    """Tokenize source text."""
    return Lexer(source).tokenize()