# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Abstract syntax tree for a single CL command statement."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clformat.parser.lexer import Token

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ScalarString:
    """A single value kept as its raw source text (quotes included)."""

    text: str


@dataclass
class NestedArray:
    """A parenthesized list of values, rendered as ``(a b c)``."""

    items: list[CLValue] = field(default_factory=list)


@dataclass
class FunctionCall:
    """A built-in function call such as ``%SST(&VAR 1 5)``.

    Attributes:
        name: The function name including the leading ``%``.
        args: The argument values in call order.
    """

    name: str
    args: list[CLValue] = field(default_factory=list)


@dataclass
class Expression:
    """An opaque run of tokens that was not interpreted further."""

    tokens: list[Token] = field(default_factory=list)


@dataclass
class CommandCall:
    """A command nested inside a parameter value (e.g. the ``THEN`` of ``IF``)."""

    command: CLNode


# A parameter value. The parser only ever produces ScalarString and
# Expression; the remaining variants are built programmatically.
CLValue = ScalarString | NestedArray | FunctionCall | Expression | CommandCall


@dataclass
class CLParameter:
    """A ``KEYWORD(value)`` pair."""

    name: str
    value: CLValue


@dataclass
class CLNode:
    """A command invocation: the command name and its keyword parameters in source order."""

    name: str
    parameters: list[CLParameter] = field(default_factory=list)
