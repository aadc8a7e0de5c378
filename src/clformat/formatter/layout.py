# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Layout configuration for fixed-column (SEU-style) CL source lines."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

# ###############
# Public Interface
# ###############

LAYOUT_FILE_NAME = ".clformat.yaml"


class LayoutConfigError(Exception):
    """Raised when a layout configuration file cannot be loaded or is invalid."""


class LayoutConfig(BaseModel):
    """Column layout of formatted CL source.

    All columns are 1-based positions within the source data area.

    Attributes:
        label_column: Column where a statement label starts.
        command_column: Column where the command name starts.
        parameter_column: Column where the first parameter starts.
        continuation_column: Column where every continuation line starts.
        right_margin: Last usable column; no line is wider than this unless a
            single atomic value is.
        continuation_char: Marker ending every non-final line of a statement.
        keyword_case: Letter case applied to the command name and keywords.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    label_column: int = Field(alias="label-column", default=2, ge=1)
    command_column: int = Field(alias="command-column", default=14, ge=1)
    parameter_column: int = Field(alias="parameter-column", default=25, ge=1)
    continuation_column: int = Field(alias="continuation-column", default=27, ge=1)
    right_margin: int = Field(alias="right-margin", default=72, ge=20)
    continuation_char: Literal["+", "-"] = Field(alias="continuation-char", default="+")
    keyword_case: Literal["upper", "lower"] = Field(alias="keyword-case", default="upper")

    @model_validator(mode="after")
    def check_columns(self) -> LayoutConfig:
        if self.label_column >= self.command_column:
            raise ValueError("label-column must be left of command-column")
        if self.command_column > self.parameter_column:
            raise ValueError("command-column must not be right of parameter-column")
        if self.continuation_column + 10 > self.right_margin:
            raise ValueError("continuation-column must leave at least 10 columns before right-margin")
        if self.parameter_column >= self.right_margin:
            raise ValueError("parameter-column must be left of right-margin")
        return self

    def apply_case(self, word: str) -> str:
        """Return *word* in the configured keyword case."""
        return word.lower() if self.keyword_case == "lower" else word.upper()


DEFAULT_LAYOUT = LayoutConfig()


def load_layout_config(path: Path) -> LayoutConfig:
    """Load and validate a layout configuration file.

    An empty file yields the default layout.

    Args:
        path: Path to the YAML layout file.

    Returns:
        A validated LayoutConfig instance.

    Raises:
        LayoutConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LayoutConfigError(f"Layout config file not found: {path}") from None
    except OSError as exc:
        raise LayoutConfigError(f"Cannot read layout config '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise LayoutConfigError(f"Invalid YAML in layout config '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LayoutConfigError(f"{path}: layout config must be a YAML mapping")

    try:
        return LayoutConfig.model_validate(data)
    except ValidationError as exc:
        raise LayoutConfigError(f"Invalid layout config '{path}': {exc}") from exc
