# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Fixed-column (SEU-style) formatting of CL statements.

The first line carries the optional label at the label column, the command
name at the command column and the first parameter at the parameter column.
Parameters then flow left to right; when a line is full it ends with the
continuation marker and the statement resumes at the continuation column.

Quoted strings, numeric literals and ``KEYWORD(`` sequences are atomic: a line
break never falls inside one of them, even when that makes a line overflow
the right margin.
"""

from __future__ import annotations

import logging
import re

from clformat.formatter.layout import DEFAULT_LAYOUT, LayoutConfig
from clformat.model.ast import (
    CLNode,
    CLValue,
    CommandCall,
    Expression,
    FunctionCall,
    NestedArray,
    ScalarString,
)
from clformat.parser.lexer import TokenType, tokenize
from clformat.parser.parser import join_tokens, parse, split_label
from clformat.values.quoting import is_numeric_literal

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Upper bound on wrap steps for one piece of text.
MAX_WRAP_ITERATIONS = 1000


def format_command(node: CLNode, layout: LayoutConfig | None = None, label: str | None = None) -> list[str]:
    """Format a parsed command into fixed-column source lines.

    Args:
        node: The command to format.
        layout: Column layout; the default SEU layout when None.
        label: Optional statement label (without the colon).

    Returns:
        The source lines in order. Every line but the last ends with the
        continuation character.
    """
    return _SeuFormatter(layout or DEFAULT_LAYOUT).format(node, label)


def format_statement(statement: str, layout: LayoutConfig | None = None) -> list[str]:
    """Split the label off, tokenize, parse and format one logical statement."""
    label, text = split_label(statement)
    return format_command(parse(tokenize(text)), layout, label)


def format_command_string(
    label: str | None,
    command_name: str,
    parameter_text: str,
    layout: LayoutConfig | None = None,
) -> list[str]:
    """Format a command name and its assembled parameter text.

    The command name is taken as given rather than re-read from the text, so
    qualified names such as ``QSYS/CALL`` are kept intact.
    """
    node = parse(tokenize(f"{command_name} {parameter_text}"))
    node.name = command_name
    return format_command(node, layout, label)


def collect_atomic_values(node: CLNode, keyword_case: str = "upper") -> set[str]:
    """Collect every substring of a formatted command that must not be split.

    These are quoted string literals, numeric literals and ``KEYWORD(``
    sequences, gathered from the whole tree including nested commands.
    """
    values: set[str] = set()

    def apply_case(word: str) -> str:
        return word.lower() if keyword_case == "lower" else word.upper()

    def walk_node(cmd: CLNode) -> None:
        for param in cmd.parameters:
            values.add(apply_case(param.name) + "(")
            walk_value(param.value)

    def walk_value(value: CLValue) -> None:
        if isinstance(value, ScalarString):
            _add_literals(value.text, values)
        elif isinstance(value, Expression):
            tokens = value.tokens
            for index, tok in enumerate(tokens):
                if tok.type == TokenType.STRING:
                    values.add(tok.value)
                elif tok.type == TokenType.VALUE and is_numeric_literal(tok.value):
                    values.add(tok.value)
                elif (
                    tok.type == TokenType.KEYWORD
                    and index + 1 < len(tokens)
                    and tokens[index + 1].type == TokenType.PAREN_OPEN
                ):
                    values.add(tok.value + "(")
        elif isinstance(value, NestedArray):
            for item in value.items:
                walk_value(item)
        elif isinstance(value, FunctionCall):
            for arg in value.args:
                walk_value(arg)
        elif isinstance(value, CommandCall):
            walk_node(value.command)

    walk_node(node)
    return values


# ################
# Implementation
# ################

_QUOTED_LITERAL_RE = re.compile(r"'(?:[^']|'')*'")


def _add_literals(text: str, values: set[str]) -> None:
    if is_numeric_literal(text):
        values.add(text.strip())
    values.update(_QUOTED_LITERAL_RE.findall(text))


def _atomic_spans(text: str, atomic_values: set[str]) -> list[tuple[int, int]]:
    """Return the ``(start, end)`` spans of every atomic value occurring in *text*."""
    spans: list[tuple[int, int]] = []
    for value in atomic_values:
        if len(value) < 2:
            continue
        start = text.find(value)
        while start != -1:
            spans.append((start, start + len(value)))
            start = text.find(value, start + 1)
    return spans


def _inside_span(index: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < index < end for start, end in spans)


def _last_safe_break(text: str, available: int, spans: list[tuple[int, int]]) -> int:
    """Return the index of the last blank usable as a line break, or -1.

    A blank is usable when it lies within *available*, is not inside an
    atomic value and does not directly follow an opening parenthesis.
    """
    for index in range(min(available, len(text) - 1), 0, -1):
        if text[index] != " ":
            continue
        if _inside_span(index, spans) or text[index - 1] == "(":
            continue
        return index
    return -1


def _safe_cut(text: str, limit: int, spans: list[tuple[int, int]]) -> int:
    """Return a cut position at or after *limit* that does not split an atomic value.

    Once an atomic value pushes the cut past *limit* the line overflows
    anyway, so the cut is carried on to the next blank.
    """
    cut = max(1, min(limit, len(text)))
    moved = True
    while moved:
        moved = False
        for start, end in spans:
            if start < cut < end:
                cut = end
                moved = True
        if cut > limit:
            while cut < len(text) and text[cut] != " ":
                cut += 1
                moved = True
    return cut


def _join_segments(left: list[str], right: list[str], separator: str) -> list[str]:
    """Concatenate two segment lists, gluing the last of *left* to the first of *right*."""
    if not left:
        return list(right)
    if not right:
        return list(left)
    return left[:-1] + [left[-1] + separator + right[0]] + right[1:]


class _SeuFormatter:
    """Accumulates formatted lines for one statement."""

    def __init__(self, layout: LayoutConfig) -> None:
        self._layout = layout
        self._lines: list[str] = []
        self._current = ""
        self._atomic: set[str] = set()
        self._continuation_indent = " " * (layout.continuation_column - 1)

    def format(self, node: CLNode, label: str | None) -> list[str]:
        self._atomic = collect_atomic_values(node, self._layout.keyword_case)
        self._start_first_line(node, label)

        for param in node.parameters:
            keyword = self._layout.apply_case(param.name)
            prefix = "" if self._at_line_start() else " "
            indent = len(self._current) + len(prefix) + len(keyword) + 1
            segments = self._format_value(param.value, indent)
            segments[0] = f"{keyword}({segments[0]}"
            segments[-1] += ")"

            self._append_wrapped(prefix + segments[0])
            for segment in segments[1:]:
                self._break_line()
                self._append_wrapped(segment)

        self._lines.append(self._current.rstrip())
        return self._lines

    # ------------------------------------------------------------------
    # Line state
    # ------------------------------------------------------------------

    def _start_first_line(self, node: CLNode, label: str | None) -> None:
        layout = self._layout
        command = layout.apply_case(node.name)
        command_indent = " " * (layout.command_column - 1)
        if label:
            lead = " " * (layout.label_column - 1) + layout.apply_case(label) + ":"
            if len(lead) >= layout.command_column - 1:
                self._current = lead
                self._break_line()
                line = command_indent + command
            else:
                line = lead.ljust(layout.command_column - 1) + command
        else:
            line = command_indent + command

        if node.parameters:
            if len(line) < layout.parameter_column - 1:
                line = line.ljust(layout.parameter_column - 1)
            else:
                line += " "
        self._current = line

    def _at_line_start(self) -> bool:
        return self._current.endswith(" ") or not self._current

    def _is_fresh_line(self) -> bool:
        return self._current.strip() == ""

    def _break_line(self, joined: bool = False) -> None:
        """Close the current line with the continuation marker and start a continuation line.

        A *joined* break splits a token in two; its marker follows the text
        directly so the continued token is reassembled without a blank.
        """
        separator = "" if joined else " "
        self._lines.append(self._current.rstrip() + separator + self._layout.continuation_char)
        self._current = self._continuation_indent

    # ------------------------------------------------------------------
    # Wrapping
    # ------------------------------------------------------------------

    def _append_wrapped(self, text: str) -> None:
        """Append *text* to the current line, breaking lines as needed."""
        remaining = text
        iterations = 0
        while remaining:
            iterations += 1
            if iterations > MAX_WRAP_ITERATIONS:
                logger.warning(
                    "Line wrapping gave up after %d steps; appending %r unwrapped",
                    MAX_WRAP_ITERATIONS,
                    remaining,
                )
                self._current += remaining
                return

            # Room for " +" is always kept free.
            available = self._layout.right_margin - len(self._current) - 2
            if len(remaining) <= available:
                self._current += remaining
                return

            spans = _atomic_spans(remaining, self._atomic)
            brk = _last_safe_break(remaining, available, spans)
            if brk > 0:
                self._current += remaining[:brk]
                self._break_line()
                remaining = remaining[brk + 1 :].lstrip(" ")
                continue

            if not self._is_fresh_line():
                self._break_line()
                remaining = remaining.lstrip(" ")
                continue

            cut = _safe_cut(remaining, available, spans)
            self._current += remaining[:cut]
            remaining = remaining[cut:]
            if remaining:
                joined = not remaining.startswith(" ")
                self._break_line(joined=joined)
                remaining = remaining.lstrip(" ")

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _format_value(self, value: CLValue, indent: int) -> list[str]:
        """Render a value as segments; each segment after the first starts a new line."""
        if isinstance(value, ScalarString):
            return [value.text]
        if isinstance(value, Expression):
            return [join_tokens(value.tokens)]
        if isinstance(value, NestedArray):
            segments: list[str] = ["("]
            for index, item in enumerate(value.items):
                separator = "" if index == 0 else " "
                segments = _join_segments(segments, self._format_value(item, indent + 1), separator)
            segments[-1] += ")"
            return segments
        if isinstance(value, FunctionCall):
            return self._format_function(value, indent)
        if isinstance(value, CommandCall):
            return [self._inline_command(value.command)]
        return [""]

    def _format_function(self, call: FunctionCall, indent: int) -> list[str]:
        """Render a call inline if it fits at *indent*, else one argument per line."""
        args = [self._format_value(arg, indent + len(call.name) + 1) for arg in call.args]
        if all(len(arg) == 1 for arg in args):
            inline = f"{call.name}(" + " ".join(arg[0] for arg in args) + ")"
            # The closing parenthesis and the " +" room of the wrap loop follow.
            if indent + len(inline) + 1 <= self._layout.right_margin - 2:
                return [inline]
        segments = [f"{call.name}("]
        for arg in args:
            segments.extend(arg)
        if len(segments) == 1:
            segments[0] += ")"
        else:
            segments[-1] += ")"
        return segments

    def _inline_command(self, node: CLNode) -> str:
        parts = [self._layout.apply_case(node.name)]
        for param in node.parameters:
            rendered = " ".join(self._format_value(param.value, 0))
            parts.append(f"{self._layout.apply_case(param.name)}({rendered})")
        return " ".join(parts)
