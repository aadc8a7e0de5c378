# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Re-assembly of a canonical CL statement from a parameter value map.

Parameters are emitted in metadata declaration order, never in value-map
order, so the same values always produce the same statement.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from clformat.model.metadata import ElementDef, ParameterDef, QualifierDef, is_command_type
from clformat.values.quoting import quote_or_format
from clformat.values.splitter import is_wrapped_in_parens, split_multi_instance, split_qualified, unwrap_parens

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

LIBL_PREFIX = "*LIBL/"


def build_command(
    command_name: str,
    values: Mapping[str, Any],
    parameters: tuple[ParameterDef, ...] | list[ParameterDef],
    defaults: Mapping[str, Any] | None = None,
    allowed_values: Mapping[str, list[str]] | None = None,
    types: Mapping[str, str] | None = None,
    present: set[str] | frozenset[str] | None = None,
    label: str | None = None,
) -> str:
    """Build a single-line CL statement from parameter values.

    A parameter is omitted when its value is blank, or when it was not present
    in the statement as typed and its value equals the declared default. A
    parameter the user typed explicitly is kept even if it equals the default.

    Args:
        command_name: The command name; a leading ``*LIBL/`` is dropped.
        values: Keyword → value map. Values are strings, lists of parts or
            occurrences, or lists of part lists. Flat ``KWD_ELEMn`` keys are
            grouped into element lists first.
        parameters: Parameter metadata in declaration order.
        defaults: Keyword → declared default; derived from *parameters* when None.
        allowed_values: Keyword → allowed special values; derived when None.
        types: Keyword → declared type; derived when None.
        present: Keywords that appeared in the statement as typed.
        label: Optional statement label, emitted as ``LABEL:``.

    Returns:
        The assembled statement, e.g. ``CALL PGM(MYLIB/MYPGM) PARM('A')``.
    """
    if defaults is None:
        defaults = {p.keyword.upper(): p.default for p in parameters if p.default is not None}
    if allowed_values is None:
        allowed_values = {p.keyword.upper(): list(p.allowed_values) for p in parameters}
    if types is None:
        types = {p.keyword.upper(): p.type for p in parameters}
    present_keys = {k.upper() for k in present} if present else set()
    grouped = group_element_keys({k.upper(): v for k, v in values.items()})

    name = command_name.strip()
    if name.upper().startswith(LIBL_PREFIX):
        name = name[len(LIBL_PREFIX) :]

    out = f"{label.strip().upper()}: {name}" if label and label.strip() else name

    for meta in parameters:
        keyword = meta.keyword.upper()
        value = grouped.get(keyword)
        if _is_blank(value):
            continue
        if keyword not in present_keys and keyword in defaults and _matches_default(meta, value, defaults[keyword]):
            logger.debug("Skipping %s: unchanged default %r", keyword, value)
            continue

        renderer = _Renderer(
            allowed=[v.upper() for v in allowed_values.get(keyword, [])],
            declared_type=types.get(keyword, ""),
        )
        rendered = renderer.render_parameter(meta, value)
        if rendered:
            out += f" {meta.keyword}({rendered})"
    return out


def group_element_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    """Group flat prompter keys into element lists.

    ``LOG_ELEM0``, ``LOG_ELEM1`` become ``LOG: [v0, v1]``; nested keys such as
    ``TOPGMQ_ELEM1_0``, ``TOPGMQ_ELEM1_1`` become a sub-list at element 1.
    Keys that do not follow the pattern are copied unchanged.
    """
    grouped: dict[str, Any] = {}
    elem_params: list[str] = []
    for key, value in values.items():
        match = _ELEM_KEY_RE.match(key)
        if match is None:
            grouped[key] = value
        elif match.group(1) not in elem_params:
            elem_params.append(match.group(1))

    for base in elem_params:
        parts: list[Any] = []
        index = 0
        while True:
            simple_key = f"{base}_ELEM{index}"
            if simple_key in values:
                parts.append(values[simple_key])
            elif f"{simple_key}_0" in values:
                sub: list[Any] = []
                sub_index = 0
                while f"{simple_key}_{sub_index}" in values:
                    sub.append(values[f"{simple_key}_{sub_index}"])
                    sub_index += 1
                parts.append(sub)
            else:
                break
            index += 1
        if parts:
            grouped[base] = parts
    return grouped


def values_equal(value: Any, default: Any) -> bool:
    """Compare a value with a declared default.

    The comparison is array-aware and ignores case and surrounding blanks; a
    ``/``-delimited string equals its split form and a one-item list equals
    its item.
    """
    return _normalize(value) == _normalize(default)


# ################
# Implementation
# ################

_ELEM_KEY_RE = re.compile(r"^(.+?)_ELEM\d+(?:_\d+)?$")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return all(_is_blank(v) for v in value)
    return False


def _matches_default(meta: ParameterDef, value: Any, default: Any) -> bool:
    """Compare *value* with *default*, reading qualified strings object-first like parsed values."""
    if meta.is_qualified:
        num_parts = len(meta.qualifiers)
        if meta.is_multi_instance:
            value = _qualified_occurrences(value, num_parts)
            default = _qualified_occurrences(default, num_parts)
        else:
            value = _object_first(value, num_parts)
            default = _object_first(default, num_parts)
    return values_equal(value, default)


def _object_first(value: Any, num_parts: int) -> Any:
    if isinstance(value, str):
        parts = split_qualified(value, num_parts)
        parts.reverse()
        return parts
    return value


def _qualified_occurrences(value: Any, num_parts: int) -> Any:
    """Bring a multi-occurrence qualified value into a list of object-first part lists."""
    if isinstance(value, str):
        return [_object_first(unwrap_parens(occ), num_parts) for occ in split_multi_instance(value)]
    if isinstance(value, (list, tuple)):
        if any(isinstance(v, (list, tuple)) for v in value):
            return [_object_first(occ, num_parts) for occ in value]
        # A flat list is the parts of a single occurrence.
        return [list(value)]
    return value


def _normalize(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().upper()
        if "/" in text:
            return [part.strip() for part in text.split("/")]
        return text
    if isinstance(value, (list, tuple)):
        items = [_normalize(v) for v in value]
        if len(items) == 1:
            return items[0]
        return items
    return str(value).strip().upper()


class _Renderer:
    """Renders one parameter value with that parameter's allowed values and type."""

    def __init__(self, allowed: list[str], declared_type: str) -> None:
        self._allowed = allowed
        self._type = declared_type

    def render_parameter(self, meta: ParameterDef, value: Any) -> str:
        if meta.is_element_list:
            if meta.is_multi_instance and isinstance(value, list):
                return " ".join(self._render_element_occurrence(meta.elements, occ) for occ in value)
            return self._render_elements(meta.elements, value)

        if meta.is_qualified:
            if meta.is_multi_instance and isinstance(value, list) and any(isinstance(v, list) for v in value):
                occurrences = [self._render_qualified(meta.qualifiers, occ) for occ in value]
                return " ".join(occ for occ in occurrences if occ)
            return self._render_qualified(meta.qualifiers, value)

        if isinstance(value, list):
            if meta.is_multi_instance or len(value) != 1:
                return self._join_scalars(value)
            value = value[0]

        if meta.is_multi_instance and isinstance(value, str):
            return self._join_scalars(split_multi_instance(value))
        return self._scalar(value)

    # ------------------------------------------------------------------
    # Qualified names
    # ------------------------------------------------------------------

    def _render_qualified(self, quals: tuple[QualifierDef, ...], value: Any) -> str:
        """Join object-first parts right to left with ``/``."""
        if isinstance(value, str):
            parts = split_qualified(value, len(quals))
            parts.reverse()
        else:
            parts = list(value)
        rendered: list[str] = []
        for index, part in enumerate(parts):
            if _is_blank(part):
                continue
            qual = quals[index] if index < len(quals) else None
            rendered.append(self._scalar(part, qual))
        rendered.reverse()
        return "/".join(rendered)

    # ------------------------------------------------------------------
    # Element lists
    # ------------------------------------------------------------------

    def _render_element_occurrence(self, elements: tuple[ElementDef, ...], value: Any) -> str:
        if isinstance(value, str):
            text = value.strip()
            return text if is_wrapped_in_parens(text) else f"({self._render_elements(elements, text)})"
        return f"({self._render_elements(elements, value)})"

    def _render_elements(self, elements: tuple[ElementDef, ...], value: Any) -> str:
        if isinstance(value, str):
            value = split_multi_instance(value)
        parts: list[str] = []
        for index, part in enumerate(value):
            elem = elements[index] if index < len(elements) else None
            if elem is not None and elem.qualifiers and not (isinstance(part, str) and is_wrapped_in_parens(part)):
                rendered = self._render_qualified(elem.qualifiers, part)
            elif isinstance(part, list):
                rendered = "(" + self._render_elements(elem.elements if elem else (), part) + ")"
            else:
                rendered = self._scalar(part, elem)
            parts.append(rendered)
        # Trailing omitted elements take their defaults.
        while parts and not parts[-1]:
            parts.pop()
        return " ".join(part if part else "*N" for part in parts)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _join_scalars(self, items: list[Any]) -> str:
        rendered = [self._scalar(item) for item in items if not _is_blank(item)]
        return " ".join(rendered)

    def _scalar(self, value: Any, part: QualifierDef | ElementDef | None = None) -> str:
        if isinstance(value, list):
            return " ".join(self._scalar(v, part) for v in value)
        text = "" if value is None else str(value)
        declared_type = (part.type if part is not None else "") or self._type
        # A nested command is emitted as typed.
        if is_command_type(declared_type):
            return text.strip()
        if part is None:
            return quote_or_format(text, self._allowed, declared_type)
        allowed = self._allowed + [v.upper() for v in part.special_values]
        return quote_or_format(text, allowed, declared_type)
