# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Fixed-column formatting of CL statements."""

from clformat.formatter.layout import DEFAULT_LAYOUT, LayoutConfig, LayoutConfigError, load_layout_config
from clformat.formatter.seu import (
    collect_atomic_values,
    format_command,
    format_command_string,
    format_statement,
)

__all__ = [
    "DEFAULT_LAYOUT",
    "LayoutConfig",
    "LayoutConfigError",
    "collect_atomic_values",
    "format_command",
    "format_command_string",
    "format_statement",
    "load_layout_config",
]
