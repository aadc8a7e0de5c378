# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Re-assembly of canonical CL statements from parameter values."""

from clformat.assembler.command import build_command, group_element_keys, values_equal

__all__ = [
    "build_command",
    "group_element_keys",
    "values_equal",
]
