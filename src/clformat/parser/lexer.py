# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for CL command statements.

Converts one logical statement (continuations already resolved) into a
sequence of tokens for subsequent parsing.
"""

import enum
import re
from collections.abc import Callable
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the CL lexer."""

    COMMAND = "command"
    KEYWORD = "keyword"
    VARIABLE = "variable"
    SYMBOLIC_VALUE = "symbolic_value"
    FUNCTION = "function"
    STRING = "string"
    VALUE = "value"
    PAREN_OPEN = "("
    PAREN_CLOSE = ")"
    SPACE = " "


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token, case preserved. STRING tokens keep
            their surrounding and doubled quotes.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    column: int = 0


class LexerError(Exception):
    """Raised in strict mode when the scanner encounters an unterminated string literal.

    Attributes:
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, column: int) -> None:
        super().__init__(f"Column {column}: {message}")
        self.column = column


IDENTIFIER_RE = re.compile(r"^[A-Z][A-Z0-9]*$", re.IGNORECASE)


def is_identifier(text: str) -> bool:
    """Return True if *text* has CL identifier shape (a letter followed by letters or digits)."""
    return IDENTIFIER_RE.match(text) is not None


def tokenize(source: str, *, strict: bool = False) -> list[Token]:
    """Tokenize a CL statement into a sequence of tokens.

    The first non-blank, non-special token is always the command name. An
    unterminated quoted string runs to the end of the input.

    Args:
        source: One logical CL statement, without a label.
        strict: Raise instead of accepting an unterminated string literal.

    Returns:
        A list of Token objects in source order.

    Raises:
        LexerError: Only when *strict* is set and a string literal is unterminated.
    """
    return _Lexer(source, strict).tokenize()


# ################
# Implementation
# ################

_BLANKS = " \t"


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str, strict: bool) -> None:
        self._source = source
        self._strict = strict
        self._pos = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens."""
        while self._pos < len(self._source):
            self._scan_token()
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _emit(self, token_type: TokenType, start: int) -> None:
        self._tokens.append(Token(token_type, self._source[start : self._pos], start + 1))

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        start = self._pos

        if ch in _BLANKS:
            while self._current() and self._current() in _BLANKS:
                self._advance()
            self._tokens.append(Token(TokenType.SPACE, " ", start + 1))
        elif ch == "(":
            self._advance()
            self._emit(TokenType.PAREN_OPEN, start)
        elif ch == ")":
            self._advance()
            self._emit(TokenType.PAREN_CLOSE, start)
        elif ch == "'":
            self._scan_string(start)
        elif self._at_command_position():
            self._scan_word(start)
        elif ch == "&":
            self._advance()
            self._consume_while(str.isalnum)
            self._emit(TokenType.VARIABLE, start)
        elif ch == "*":
            self._advance()
            self._consume_while(str.isalpha)
            self._emit(TokenType.SYMBOLIC_VALUE, start)
        elif ch == "%":
            self._advance()
            self._consume_while(str.isalpha)
            self._emit(TokenType.FUNCTION, start)
        else:
            self._scan_word(start)

    def _at_command_position(self) -> bool:
        """Return True if no token other than blanks has been emitted yet."""
        return all(tok.type == TokenType.SPACE for tok in self._tokens)

    def _consume_while(self, predicate: Callable[[str], bool]) -> None:
        while self._current() and self._current().isascii() and predicate(self._current()):
            self._advance()

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, start: int) -> None:
        """Scan a single-quoted string; a doubled quote is an embedded quote."""
        self._advance()  # opening '
        while self._pos < len(self._source):
            ch = self._advance()
            if ch == "'":
                if self._current() == "'":
                    self._advance()
                    continue
                self._emit(TokenType.STRING, start)
                return
        if self._strict:
            raise LexerError("Unterminated string literal", start + 1)
        self._emit(TokenType.STRING, start)

    def _scan_word(self, start: int) -> None:
        """Scan a run of non-blank, non-paren characters and classify it."""
        while self._current() and self._current() not in _BLANKS and self._current() not in "()":
            self._advance()
        text = self._source[start : self._pos]
        if self._at_command_position():
            self._emit(TokenType.COMMAND, start)
        elif is_identifier(text):
            self._emit(TokenType.KEYWORD, start)
        else:
            self._emit(TokenType.VALUE, start)
