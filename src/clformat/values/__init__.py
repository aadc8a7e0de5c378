# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Splitting, quoting and validation of individual parameter values."""

from clformat.values.quoting import is_cl_expression, is_valid_name, quote_or_format
from clformat.values.splitter import split_multi_instance, split_qualified, unwrap_parens

__all__ = [
    "is_cl_expression",
    "is_valid_name",
    "quote_or_format",
    "split_multi_instance",
    "split_qualified",
    "unwrap_parens",
]
