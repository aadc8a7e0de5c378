# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural parser for CL command statements.

Converts a token stream produced by the lexer into a CLNode. The grammar is
``command_name (keyword '(' value ')')*``; parameter values are captured as a
balanced token span and are not interpreted beyond the single-token case.
"""

import re

from clformat.model.ast import (
    CLNode,
    CLParameter,
    CLValue,
    CommandCall,
    Expression,
    FunctionCall,
    NestedArray,
    ScalarString,
)
from clformat.parser.lexer import Token, TokenType, is_identifier, tokenize

# ###############
# Public Interface
# ###############


def parse(tokens: list[Token]) -> CLNode:
    """Parse a token stream into a command node.

    The parser is tolerant: tokens that cannot start a ``KEYWORD(`` parameter
    are skipped, an unbalanced value runs to the end of the input, and an
    empty stream yields a node with an empty name.

    Args:
        tokens: Tokens produced by :func:`~clformat.parser.lexer.tokenize`.

    Returns:
        The command name and its parameters in source order.
    """
    return _Parser(tokens).parse()


def parse_command(statement: str) -> CLNode:
    """Tokenize and parse a statement that carries no label."""
    return parse(tokenize(statement))


_LABEL_RE = re.compile(r"^\s*([A-Z$#@][A-Z0-9$#@_]*)\s*:\s*", re.IGNORECASE)


def split_label(statement: str) -> tuple[str | None, str]:
    """Separate a leading ``LABEL:`` from a statement.

    Returns:
        A ``(label, rest)`` tuple; *label* is None when the statement has none.
    """
    match = _LABEL_RE.match(statement)
    if match is None:
        return None, statement.strip()
    return match.group(1), statement[match.end() :].strip()


def value_text(value: CLValue) -> str:
    """Render a parameter value back to CL source text on a single line."""
    if isinstance(value, ScalarString):
        return value.text
    if isinstance(value, Expression):
        return join_tokens(value.tokens)
    if isinstance(value, NestedArray):
        return "(" + " ".join(value_text(item) for item in value.items) + ")"
    if isinstance(value, FunctionCall):
        return f"{value.name}(" + " ".join(value_text(arg) for arg in value.args) + ")"
    if isinstance(value, CommandCall):
        return command_text(value.command)
    return ""


def command_text(node: CLNode) -> str:
    """Render a command node as ``NAME KWD(value) ...`` on a single line."""
    parts = [node.name]
    parts.extend(f"{param.name}({value_text(param.value)})" for param in node.parameters)
    return " ".join(parts)


def join_tokens(tokens: list[Token]) -> str:
    """Concatenate token texts; blank runs were already collapsed by the lexer."""
    return "".join(tok.value for tok in tokens).strip()


# ################
# Implementation
# ################

_SCALAR_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.STRING,
        TokenType.VALUE,
        TokenType.SYMBOLIC_VALUE,
        TokenType.VARIABLE,
    }
)


class _Parser:
    """Single-pass parser for CL token streams."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> CLNode:
        """Parse the full token stream and return a CLNode."""
        self._skip_spaces()
        if self._at_end():
            return CLNode(name="")
        node = CLNode(name=self._advance().value)
        while not self._at_end():
            self._skip_spaces()
            if self._at_end():
                break
            if self._at_keyword() and self._peek_type(1) == TokenType.PAREN_OPEN:
                name = self._advance().value
                self._advance()  # consume '('
                node.parameters.append(CLParameter(name=name, value=self._parse_value()))
            else:
                # Positional parameters are not supported; drop the token.
                self._advance()
        return node

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _peek_type(self, offset: int) -> TokenType | None:
        """Return the type of the token *offset* positions ahead, or None past the end."""
        index = self._pos + offset
        if index < len(self._tokens):
            return self._tokens[index].type
        return None

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _skip_spaces(self) -> None:
        while not self._at_end() and self._current().type == TokenType.SPACE:
            self._advance()

    def _at_keyword(self) -> bool:
        """Return True if the current token can name a parameter.

        A VALUE token with identifier shape is accepted as well as a KEYWORD,
        so hand-built token streams with loose classification still parse.
        """
        tok = self._current()
        if tok.type == TokenType.KEYWORD:
            return True
        return tok.type == TokenType.VALUE and is_identifier(tok.value)

    # ------------------------------------------------------------------
    # Parameter values
    # ------------------------------------------------------------------

    def _parse_value(self) -> CLValue:
        """Capture tokens up to the matching ')' and consume it."""
        span: list[Token] = []
        depth = 0
        while not self._at_end():
            tok = self._current()
            if tok.type == TokenType.PAREN_CLOSE:
                if depth == 0:
                    self._advance()
                    break
                depth -= 1
            elif tok.type == TokenType.PAREN_OPEN:
                depth += 1
            span.append(self._advance())

        if len(span) == 1 and span[0].type in _SCALAR_TYPES:
            return ScalarString(span[0].value)
        return Expression(tokens=span)
