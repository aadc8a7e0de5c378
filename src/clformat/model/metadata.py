# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parameter metadata describing the shape of a command's keyword parameters.

Metadata is normally derived from a command definition document by an external
collaborator. Here it is plain, immutable input: every operation that needs it
receives it as an argument.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

# Parameter types whose values are always object names and are emitted upper-cased.
NAME_TYPES: frozenset[str] = frozenset({"NAME", "SNAME", "CNAME"})

# Parameter type of a nested command string (SBMJOB CMD, IF THEN, MONMSG EXEC).
COMMAND_TYPE = "CMD"


class MetadataError(Exception):
    """Raised when a command definition file cannot be read or is invalid."""


class QualifierDef(BaseModel):
    """One part of a qualified name (e.g. the object or the library of ``LIB/OBJ``).

    Qualifier descriptors are listed object-first: index 0 describes the
    rightmost part of the surface syntax.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    type: str = ""
    prompt: str = ""
    default: str | None = None
    special_values: tuple[str, ...] = Field(alias="special-values", default=())


class ElementDef(BaseModel):
    """One positional element of an element-list parameter.

    An element may itself be qualified or be a nested element list.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    type: str = ""
    prompt: str = ""
    default: str | None = None
    special_values: tuple[str, ...] = Field(alias="special-values", default=())
    qualifiers: tuple[QualifierDef, ...] = ()
    elements: tuple[ElementDef, ...] = ()


class ParameterDef(BaseModel):
    """Metadata for one keyword parameter of a command."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    keyword: str
    type: str = ""
    min: int = 0
    max: int = 1
    default: str | list[str] | list[list[str]] | None = None
    allowed_values: tuple[str, ...] = Field(alias="allowed-values", default=())
    qualifiers: tuple[QualifierDef, ...] = ()
    elements: tuple[ElementDef, ...] = ()

    @property
    def is_multi_instance(self) -> bool:
        """True if the parameter may be specified more than once."""
        return self.max > 1

    @property
    def is_qualified(self) -> bool:
        """True if the parameter value is a ``/``-qualified name."""
        return len(self.qualifiers) > 0

    @property
    def is_element_list(self) -> bool:
        """True if the parameter value is a list of positional elements."""
        return len(self.elements) > 0


class CommandDef(BaseModel):
    """A command name together with its parameters in declaration order."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    command: str
    parameters: tuple[ParameterDef, ...] = ()

    def defaults(self) -> dict[str, str | list[str] | list[list[str]]]:
        """Return a keyword → declared default map for parameters that have one."""
        return {p.keyword.upper(): p.default for p in self.parameters if p.default is not None}

    def allowed_values(self) -> dict[str, list[str]]:
        """Return a keyword → upper-cased allowed values map."""
        return {p.keyword.upper(): [v.upper() for v in p.allowed_values] for p in self.parameters}

    def types(self) -> dict[str, str]:
        """Return a keyword → declared type map."""
        return {p.keyword.upper(): p.type for p in self.parameters}


def find_parameter(parameters: tuple[ParameterDef, ...] | list[ParameterDef], keyword: str) -> ParameterDef | None:
    """Return the parameter named *keyword* (case-insensitive) from *parameters*, or None."""
    wanted = keyword.upper()
    for param in parameters:
        if param.keyword.upper() == wanted:
            return param
    return None


def is_name_type(declared_type: str) -> bool:
    """Return True if *declared_type* (``NAME``, ``*NAME``, ...) is a pure name type."""
    return declared_type.upper().lstrip("*") in NAME_TYPES


def is_command_type(declared_type: str) -> bool:
    """Return True if *declared_type* marks a value that is itself a CL command (``CMD``)."""
    return declared_type.upper().lstrip("*") == COMMAND_TYPE


def load_command_def(path: Path) -> CommandDef:
    """Load a command definition from a YAML file.

    An example file::

        command: CRTDUPOBJ
        parameters:
          - keyword: OBJ
            type: NAME
          - keyword: FROMLIB
            type: NAME
            allowed-values: ["*LIBL", "*CURLIB"]

    Args:
        path: Path to the YAML command definition.

    Returns:
        The validated CommandDef.

    Raises:
        MetadataError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MetadataError(f"Cannot read command definition '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MetadataError(f"Invalid YAML in command definition '{path}': {exc}") from exc

    if not isinstance(data, dict):
        raise MetadataError(f"{path}: command definition must be a YAML mapping")

    try:
        return CommandDef.model_validate(data)
    except ValidationError as exc:
        raise MetadataError(f"Invalid command definition '{path}': {exc}") from exc


# Resolve the recursive element reference.
ElementDef.model_rebuild()
