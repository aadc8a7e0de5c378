# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model for CL statements: the syntax tree and parameter metadata."""

from clformat.model.ast import (
    CLNode,
    CLParameter,
    CLValue,
    CommandCall,
    Expression,
    FunctionCall,
    NestedArray,
    ScalarString,
)
from clformat.model.metadata import (
    CommandDef,
    ElementDef,
    MetadataError,
    ParameterDef,
    QualifierDef,
    find_parameter,
    is_name_type,
    load_command_def,
)

__all__ = [
    "CLNode",
    "CLParameter",
    "CLValue",
    "CommandCall",
    "CommandDef",
    "ElementDef",
    "Expression",
    "FunctionCall",
    "MetadataError",
    "NestedArray",
    "ParameterDef",
    "QualifierDef",
    "ScalarString",
    "find_parameter",
    "is_name_type",
    "load_command_def",
]
