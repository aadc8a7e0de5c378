# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Quote- and parenthesis-aware splitting of parameter values.

A blank separates occurrences and elements; a ``/`` separates the parts of a
qualified name. Neither separator counts inside a quoted string or inside a
parenthesized group.
"""

# ###############
# Public Interface
# ###############


def split_multi_instance(value: str) -> list[str]:
    """Split a value into blank-separated parts at parenthesis depth 0.

    Parenthesized groups and quoted strings are kept whole; parts are trimmed
    and empty parts dropped.

    >>> split_multi_instance("ABC DEF 'G H'")
    ['ABC', 'DEF', "'G H'"]
    >>> split_multi_instance("(A B) (C D)")
    ['(A B)', '(C D)']
    """
    parts: list[str] = []
    current: list[str] = []
    scanner = _QuoteScanner()
    for ch in value:
        if scanner.feed(ch) and ch in " \t":
            _flush(parts, current)
            continue
        current.append(ch)
    _flush(parts, current)
    return parts


def split_qualified(value: str, num_parts: int) -> list[str]:
    """Split a qualified name on ``/`` into at most *num_parts* parts, left to right.

    Any further ``/`` characters stay embedded in the last part. Parts are
    trimmed and trailing empty parts removed.

    >>> split_qualified("MYLIB/MYOBJ", 2)
    ['MYLIB', 'MYOBJ']
    >>> split_qualified("'A/B'/LIB", 2)
    ["'A/B'", 'LIB']
    """
    parts: list[str] = []
    current: list[str] = []
    scanner = _QuoteScanner()
    for ch in value:
        if scanner.feed(ch) and ch == "/" and len(parts) < num_parts - 1:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    while parts and not parts[-1]:
        parts.pop()
    return parts


def unwrap_parens(value: str) -> str:
    """Strip one pair of parentheses that encloses the whole of *value*.

    ``(A B)`` becomes ``A B``; ``(A) (B)`` is returned unchanged because the
    first ``(`` closes before the end.
    """
    text = value.strip()
    if len(text) < 2 or text[0] != "(" or text[-1] != ")":
        return text
    scanner = _QuoteScanner()
    for index, ch in enumerate(text):
        scanner.feed(ch)
        if scanner.depth == 0 and index < len(text) - 1:
            return text
    return text[1:-1].strip()


def is_wrapped_in_parens(value: str) -> bool:
    """Return True if one pair of parentheses encloses the whole of *value*."""
    text = value.strip()
    return unwrap_parens(text) != text


# ################
# Implementation
# ################


class _QuoteScanner:
    """Tracks quote state and parenthesis depth one character at a time.

    A single quote toggles only outside a double-quoted run and vice versa, so
    ``"it's"`` does not open a single-quoted string.
    """

    def __init__(self) -> None:
        self.in_single = False
        self.in_double = False
        self.depth = 0

    def feed(self, ch: str) -> bool:
        """Consume *ch*; return True if it is a separator candidate (depth 0, outside quotes)."""
        if ch == "'" and not self.in_double:
            self.in_single = not self.in_single
            return False
        if ch == '"' and not self.in_single:
            self.in_double = not self.in_double
            return False
        if self.in_single or self.in_double:
            return False
        if ch == "(":
            self.depth += 1
            return False
        if ch == ")":
            self.depth -= 1
            return False
        return self.depth == 0


def _flush(parts: list[str], current: list[str]) -> None:
    text = "".join(current).strip()
    if text:
        parts.append(text)
    current.clear()
