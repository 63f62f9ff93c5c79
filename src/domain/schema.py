"""
Schema descriptors and validator.

Schemas are declarative value objects: an ordered tuple of tagged field
descriptors. The same descriptors drive template checking (which markers are
legal), request validation, response validation, and the machine-readable
description handed to generative backends.

Validation Rules
================

- Required fields must be present and non-null.
- Optional fields may be absent or null (omitted from the result). An empty
  string in an optional media field counts as absent.
- Present fields are always type-checked, recursively for arrays/objects.
- Unknown keys are dropped; a failing instance never yields a partial result.
"""

import base64
import binascii
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import DefinitionError, SchemaValidationError

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


class FieldKind(str, Enum):
    """Kinds of value a field can hold."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"
    MEDIA = "media"


@dataclass(frozen=True)
class FieldSpec:
    """
    Tagged field descriptor.

    Only the attributes relevant to `kind` are meaningful: `choices` for ENUM,
    `items` for ARRAY, `fields` for OBJECT. Array element specs carry an
    empty name.
    """

    name: str
    kind: FieldKind
    required: bool = True
    description: str = ""
    choices: tuple[str, ...] = ()
    items: "FieldSpec | None" = None
    fields: "Schema | None" = None

    def __post_init__(self) -> None:
        if self.kind is FieldKind.ENUM and not self.choices:
            raise DefinitionError(f"enum field {self.name!r} declares no choices")
        if self.kind is FieldKind.ARRAY and self.items is None:
            raise DefinitionError(f"array field {self.name!r} declares no item spec")
        if self.kind is FieldKind.OBJECT and self.fields is None:
            raise DefinitionError(f"object field {self.name!r} declares no fields")

    def describe(self) -> dict[str, Any]:
        """JSON-schema-like description of this field."""
        out: dict[str, Any]
        if self.kind is FieldKind.ENUM:
            out = {"type": "string", "enum": list(self.choices)}
        elif self.kind is FieldKind.ARRAY:
            assert self.items is not None
            out = {"type": "array", "items": self.items.describe()}
        elif self.kind is FieldKind.OBJECT:
            assert self.fields is not None
            out = self.fields.describe()
        elif self.kind is FieldKind.MEDIA:
            out = {"type": "string", "contentEncoding": "base64", "format": "data-uri"}
        else:
            out = {"type": self.kind.value}
        if self.description:
            out["description"] = self.description
        return out


@dataclass(frozen=True)
class Schema:
    """Ordered set of uniquely named fields."""

    fields: tuple[FieldSpec, ...]

    def __init__(self, *fields: FieldSpec) -> None:
        object.__setattr__(self, "fields", tuple(fields))
        seen: set[str] = set()
        for spec in self.fields:
            if not spec.name:
                raise DefinitionError("schema fields must be named")
            if spec.name in seen:
                raise DefinitionError(f"duplicate field name {spec.name!r}")
            seen.add(spec.name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def field(self, name: str) -> FieldSpec | None:
        """Look up a field descriptor by name."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def describe(self) -> dict[str, Any]:
        """JSON-schema-like description of the whole schema."""
        return {
            "type": "object",
            "properties": {spec.name: spec.describe() for spec in self.fields},
            "required": [spec.name for spec in self.fields if spec.required],
        }


# Descriptor constructors


def string(name: str, description: str = "", *, required: bool = True) -> FieldSpec:
    return FieldSpec(name, FieldKind.STRING, required, description)


def number(name: str, description: str = "", *, required: bool = True) -> FieldSpec:
    return FieldSpec(name, FieldKind.NUMBER, required, description)


def boolean(name: str, description: str = "", *, required: bool = True) -> FieldSpec:
    return FieldSpec(name, FieldKind.BOOLEAN, required, description)


def enum(
    name: str, choices: tuple[str, ...], description: str = "", *, required: bool = True
) -> FieldSpec:
    return FieldSpec(name, FieldKind.ENUM, required, description, choices=tuple(choices))


def array(name: str, items: FieldSpec, description: str = "", *, required: bool = True) -> FieldSpec:
    return FieldSpec(name, FieldKind.ARRAY, required, description, items=items)


def obj(name: str, *fields: FieldSpec, description: str = "", required: bool = True) -> FieldSpec:
    return FieldSpec(name, FieldKind.OBJECT, required, description, fields=Schema(*fields))


def record(*fields: FieldSpec, description: str = "") -> FieldSpec:
    """Unnamed object spec, for array elements."""
    return obj("", *fields, description=description)


def media(name: str, description: str = "", *, required: bool = True) -> FieldSpec:
    return FieldSpec(name, FieldKind.MEDIA, required, description)


@dataclass(frozen=True)
class FieldIssue:
    """One validation failure: where, what was expected, what was found."""

    path: str
    expected: str
    actual: str

    def __str__(self) -> str:
        where = self.path or "<root>"
        return f"{where}: expected {self.expected}, got {self.actual}"


def split_data_uri(value: str) -> tuple[str, bytes] | None:
    """
    Decode a base64 data URI.

    Returns:
        (mime_type, data) or None if `value` is not a decodable data URI
    """
    match = _DATA_URI_RE.match(value)
    if match is None:
        return None
    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError):
        return None
    return match.group("mime"), data


def _kind_of(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _check_value(spec: FieldSpec, value: Any, path: str, issues: list[FieldIssue]) -> Any:
    kind = spec.kind

    if kind is FieldKind.STRING:
        if isinstance(value, str):
            return value
        issues.append(FieldIssue(path, "string", _kind_of(value)))
        return None

    if kind is FieldKind.NUMBER:
        if isinstance(value, bool):
            issues.append(FieldIssue(path, "number", "boolean"))
            return None
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                issues.append(FieldIssue(path, "finite number", repr(value)))
                return None
            return value
        if isinstance(value, str):
            try:
                parsed = float(value.strip())
            except ValueError:
                issues.append(FieldIssue(path, "number", f"string {value!r}"))
                return None
            if not math.isfinite(parsed):
                issues.append(FieldIssue(path, "finite number", f"string {value!r}"))
                return None
            return int(parsed) if parsed.is_integer() and "." not in value else parsed
        issues.append(FieldIssue(path, "number", _kind_of(value)))
        return None

    if kind is FieldKind.BOOLEAN:
        if isinstance(value, bool):
            return value
        issues.append(FieldIssue(path, "boolean", _kind_of(value)))
        return None

    if kind is FieldKind.ENUM:
        if isinstance(value, str) and value in spec.choices:
            return value
        expected = "one of " + "|".join(spec.choices)
        actual = repr(value) if isinstance(value, str) else _kind_of(value)
        issues.append(FieldIssue(path, expected, actual))
        return None

    if kind is FieldKind.MEDIA:
        if isinstance(value, str) and split_data_uri(value) is not None:
            return value
        actual = "malformed data URI" if isinstance(value, str) else _kind_of(value)
        issues.append(FieldIssue(path, "base64 data URI", actual))
        return None

    if kind is FieldKind.ARRAY:
        if not isinstance(value, (list, tuple)):
            issues.append(FieldIssue(path, "array", _kind_of(value)))
            return None
        assert spec.items is not None
        out = []
        for index, element in enumerate(value):
            element_path = f"{path}[{index}]"
            if element is None:
                issues.append(FieldIssue(element_path, spec.items.kind.value, "null"))
                continue
            out.append(_check_value(spec.items, element, element_path, issues))
        return out

    # FieldKind.OBJECT
    if not isinstance(value, Mapping):
        issues.append(FieldIssue(path, "object", _kind_of(value)))
        return None
    assert spec.fields is not None
    return _check_mapping(spec.fields, value, path, issues)


def _check_mapping(
    schema: Schema, data: Mapping[str, Any], path: str, issues: list[FieldIssue]
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for spec in schema.fields:
        field_path = _join(path, spec.name)
        value = data.get(spec.name)
        if value == "" and spec.kind is FieldKind.MEDIA and not spec.required:
            value = None
        if value is None:
            if spec.required:
                actual = "null" if spec.name in data else "missing"
                issues.append(FieldIssue(field_path, spec.kind.value, actual))
            continue
        out[spec.name] = _check_value(spec, value, field_path, issues)
    return out


def validate(schema: Schema, data: Any) -> dict[str, Any]:
    """
    Validate and coerce `data` against `schema`.

    Args:
        schema: Declared request or response schema
        data: Untrusted instance (caller payload or backend output)

    Returns:
        A new dict holding only declared fields, with numeric strings coerced

    Raises:
        SchemaValidationError: With every offending field path
    """
    if not isinstance(data, Mapping):
        raise SchemaValidationError([FieldIssue("", "object", _kind_of(data))])

    issues: list[FieldIssue] = []
    result = _check_mapping(schema, data, "", issues)
    if issues:
        raise SchemaValidationError(issues)
    return result
