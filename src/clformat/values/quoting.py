# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonical surface form of a single parameter value, and CL name validation."""

import re
from collections.abc import Iterable

from clformat.model.metadata import is_name_type

# ###############
# Public Interface
# ###############

# Operators whose presence marks a value as a built-in expression.
EXPRESSION_OPERATORS: tuple[str, ...] = ("*CAT", "*TCAT", "*BCAT", "*EQ", "*NE", "*LT", "*LE", "*GT", "*GE")


def quote_or_format(value: str, allowed_values: Iterable[str] = (), declared_type: str = "") -> str:
    """Return the canonical CL surface form of *value*.

    The checks are applied in order and the first match wins:

    1. name-typed parameters, allowed values, bare names, ``&`` variables and
       ``*`` special values are upper-cased (an already-quoted value is kept);
    2. built-in expressions are emitted verbatim;
    3. already-quoted values pass through unchanged;
    4. integer and decimal literals pass through unquoted;
    5. anything else is wrapped in single quotes with embedded quotes doubled.

    A blank value (or an empty quoted string) yields ``""``.

    Args:
        value: The value as typed or parsed.
        allowed_values: Special values accepted by the parameter.
        declared_type: The parameter type from its metadata, e.g. ``NAME``.

    Returns:
        The value ready to be placed between the parameter's parentheses.
    """
    trimmed = value.strip()
    if trimmed in ("", "''"):
        return ""

    upper = trimmed.upper()
    allowed = {v.strip().upper() for v in allowed_values}
    quoted = is_quoted(trimmed)
    if (
        is_name_type(declared_type)
        or upper in allowed
        or (is_valid_name(trimmed) and not quoted)
        or trimmed.startswith("*")
    ):
        return trimmed if quoted else upper

    if is_cl_expression(trimmed):
        return trimmed

    if is_quoted(trimmed):
        return trimmed

    if _NUMBER_RE.match(trimmed):
        return trimmed

    return "'" + trimmed.replace("'", "''") + "'"


def is_valid_name(value: str) -> bool:
    """Return True if *value* is a valid CL name, ``&`` variable, or quoted literal name."""
    trimmed = value.strip()
    if trimmed.startswith("&"):
        return _VARIABLE_RE.match(trimmed) is not None
    if is_quoted(trimmed):
        return True
    return _BARE_NAME_RE.match(trimmed) is not None


def is_cl_expression(value: str) -> bool:
    """Return True if *value* looks like a built-in CL expression rather than literal text."""
    trimmed = value.strip().upper()
    if trimmed.startswith("(") and trimmed.endswith(")"):
        return True
    if any(op in trimmed for op in EXPRESSION_OPERATORS):
        return True
    if _FUNCTION_CALL_RE.search(trimmed):
        return True
    return _VARIABLE_OPERATOR_RE.search(trimmed) is not None


def is_quoted(value: str) -> bool:
    """Return True if *value* starts and ends with the same quote character."""
    return len(value) >= 2 and value[0] == value[-1] and value[0] in "'\""


def is_numeric_literal(value: str) -> bool:
    """Return True if *value* is an integer or decimal literal."""
    return _NUMBER_RE.match(value.strip()) is not None


# ################
# Implementation
# ################

_BARE_NAME_RE = re.compile(r"^[A-Z$#@][A-Z0-9$#@_.]{0,10}$", re.IGNORECASE)
_VARIABLE_RE = re.compile(r"^&[A-Z$#@][A-Z0-9$#@_.]{0,10}$", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^[-+]?(\d+([.,]\d*)?|[.,]\d+)$")
_FUNCTION_CALL_RE = re.compile(r"%[A-Z][A-Z0-9]*\s*\(")
_VARIABLE_OPERATOR_RE = re.compile(r"&[A-Z][A-Z0-9]*\s*[*%]")
