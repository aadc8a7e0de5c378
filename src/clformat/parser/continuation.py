# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Folding of physical CL source lines into logical statements."""

# ###############
# Public Interface
# ###############


def join_continuations(lines: list[str]) -> list[str]:
    """Fold continued source lines into one string per statement.

    A line ending in ``+`` continues with the next line's text after its
    leading blanks; a line ending in ``-`` continues with the next line's text
    as is, after dropping the trailing blanks of the current fragment.
    Comment lines (``/* ... */``) are returned as their own entries, and blank
    lines are dropped. A continuation on the last line is simply removed.

    Args:
        lines: Physical source lines without sequence numbers or dates.

    Returns:
        The logical statements and comments in source order.
    """
    statements: list[str] = []
    pending: str | None = None
    pending_marker = ""

    for line in lines:
        text = line.rstrip("\r\n")
        if pending is None:
            stripped = text.strip()
            if not stripped:
                continue
            if stripped.startswith("/*"):
                statements.append(stripped)
                continue
            fragment = stripped
        elif pending_marker == "+":
            fragment = pending + text.lstrip()
        else:
            fragment = pending + text.rstrip()

        trimmed = fragment.rstrip()
        if trimmed.endswith(("+", "-")):
            pending_marker = trimmed[-1]
            pending = trimmed[:-1]
            if pending_marker == "-":
                pending = pending.rstrip()
            continue

        statements.append(trimmed.strip())
        pending = None

    if pending is not None and pending.strip():
        statements.append(pending.strip())
    return statements
