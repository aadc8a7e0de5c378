# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for CL command statements."""

from clformat.parser.continuation import join_continuations
from clformat.parser.lexer import LexerError, Token, TokenType, tokenize
from clformat.parser.parameters import ParsedParameterMap, interpret_value, parse_parameters
from clformat.parser.parser import parse, parse_command, split_label, value_text

__all__ = [
    "LexerError",
    "ParsedParameterMap",
    "Token",
    "TokenType",
    "interpret_value",
    "join_continuations",
    "parse",
    "parse_command",
    "parse_parameters",
    "split_label",
    "tokenize",
    "value_text",
]
