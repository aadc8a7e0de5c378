# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""CLFormat: tokenizer, parser, assembler and fixed-column formatter for IBM i CL commands."""

from clformat.assembler import build_command
from clformat.formatter import LayoutConfig, format_command, format_statement
from clformat.model import CommandDef, ParameterDef
from clformat.parser import parse, parse_parameters, tokenize
from clformat.values import quote_or_format, split_multi_instance, split_qualified

__all__ = [
    "CommandDef",
    "LayoutConfig",
    "ParameterDef",
    "build_command",
    "format_command",
    "format_statement",
    "parse",
    "parse_parameters",
    "quote_or_format",
    "split_multi_instance",
    "split_qualified",
    "tokenize",
]
