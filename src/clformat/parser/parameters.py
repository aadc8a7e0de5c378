# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Interpretation of parsed parameter values against parameter metadata.

The structural parser keeps each value as raw text. This module uses the
parameter metadata to split that text into qualifier parts, element parts and
occurrences, producing the flat map the command assembler consumes.

Qualifier parts are stored object-first: ``MYLIB/MYOBJ`` becomes
``["MYOBJ", "MYLIB"]``.
"""

from clformat.model.metadata import ElementDef, ParameterDef, find_parameter
from clformat.parser.lexer import tokenize
from clformat.parser.parser import parse, split_label, value_text
from clformat.values.splitter import split_multi_instance, split_qualified, unwrap_parens

# ###############
# Public Interface
# ###############

# A parsed value: a scalar, a list of parts or occurrences, or a list mixing
# scalars and part lists (element lists, multi-occurrence qualified names).
ParsedValue = str | list[str] | list[str | list[str]]
ParsedParameterMap = dict[str, ParsedValue]


def parse_parameters(statement: str, parameters: tuple[ParameterDef, ...] | list[ParameterDef]) -> ParsedParameterMap:
    """Parse a CL statement into a keyword → value map shaped by *parameters*.

    A leading label is ignored. Keywords are upper-cased; keywords without
    metadata keep their raw value text.

    Args:
        statement: One logical CL statement (continuations already resolved).
        parameters: The command's parameter metadata.

    Returns:
        The parameter values in source order.
    """
    _label, text = split_label(statement)
    node = parse(tokenize(text))
    result: ParsedParameterMap = {}
    for param in node.parameters:
        keyword = param.name.upper()
        raw = value_text(param.value)
        meta = find_parameter(parameters, keyword)
        result[keyword] = interpret_value(raw, meta) if meta is not None else raw
    return result


def interpret_value(raw: str, meta: ParameterDef) -> ParsedValue:
    """Split the raw text of one parameter value according to its metadata."""
    if meta.is_element_list:
        if meta.is_multi_instance:
            return [_interpret_elements(unwrap_parens(occ), meta.elements) for occ in split_multi_instance(raw)]
        return _interpret_elements(raw, meta.elements)

    if meta.is_qualified:
        if meta.is_multi_instance:
            return [_interpret_qualified(unwrap_parens(occ), len(meta.qualifiers)) for occ in split_multi_instance(raw)]
        return _interpret_qualified(raw, len(meta.qualifiers))

    if meta.is_multi_instance:
        return split_multi_instance(raw)

    return raw.strip()


# ################
# Implementation
# ################


def _interpret_qualified(raw: str, num_parts: int) -> list[str]:
    """Split a qualified name and reverse it to object-first order."""
    parts = split_qualified(raw, num_parts)
    parts.reverse()
    return parts


def _interpret_elements(raw: str, elements: tuple[ElementDef, ...]) -> list[str | list[str]]:
    result: list[str | list[str]] = []
    for index, part in enumerate(split_multi_instance(raw)):
        elem = elements[index] if index < len(elements) else None
        if elem is not None and elem.qualifiers:
            result.append(_interpret_qualified(part, len(elem.qualifiers)))
        elif elem is not None and elem.elements and part.startswith("("):
            result.append(split_multi_instance(unwrap_parens(part)))
        else:
            result.append(part)
    return result
