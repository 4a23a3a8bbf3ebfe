"""
Documentation annotation builder.

Produces the arguments of the ``@ApiProperty`` decorator for a field.
"""

from __future__ import annotations

import json
import logging

from dtoforge.core.ir import AnnotationSpec, FieldSpec

from .classifiers import is_enum, is_scalar

logger = logging.getLogger(__name__)

# Hints taken from the schema comment, in output order. Only description and
# example are string literals; the rest are numbers.
API_HINTS = (
    "description",
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
    "minLength",
    "maxLength",
    "minItems",
    "maxItems",
    "example",
)
_LITERAL_HINTS = frozenset({"description", "example"})

# OpenAPI type/format for scalars the documentation library cannot infer.
SCALAR_FORMATS: dict[str, tuple[str, str]] = {
    "Int": ("integer", "int32"),
    "BigInt": ("integer", "int64"),
    "Float": ("number", "float"),
    "Decimal": ("number", "double"),
    "DateTime": ("string", "date-time"),
    "Bytes": ("string", "binary"),
}

# Scalars whose runtime constructor can be referenced directly as ``type``.
PLAIN_TYPE_NAMES: dict[str, str] = {
    "String": "String",
    "Boolean": "Boolean",
    "Json": "Object",
}


def build_api_properties(
    field: FieldSpec,
    *,
    is_required: bool,
    is_nullable: bool,
    is_list: bool | None = None,
    include_default: bool = True,
    include_type: bool = True,
) -> list[AnnotationSpec]:
    """
    Build documentation properties for one field.

    Args:
        field: Schema field
        is_required: Resolved requiredness in the artifact
        is_nullable: Resolved nullability in the artifact
        is_list: Resolved cardinality, defaults to the schema cardinality
        include_default: Document the schema default value
        include_type: Document the scalar type/format pair

    Returns:
        Ordered annotation specs, possibly empty
    """
    properties: list[AnnotationSpec] = []
    as_list = field.is_list if is_list is None else is_list

    for hint in API_HINTS:
        value = field.api_hints.get(hint)
        if value is not None:
            properties.append(
                AnnotationSpec(name=hint, value=value, no_encapsulation=hint not in _LITERAL_HINTS)
            )
    for hint in field.api_hints:
        if hint not in API_HINTS:
            logger.debug("Ignoring unknown documentation hint %r on %s", hint, field.name)

    if include_type and is_scalar(field) and field.type in SCALAR_FORMATS:
        type_name, type_format = SCALAR_FORMATS[field.type]
        properties.append(AnnotationSpec(name="type", value=type_name))
        properties.append(AnnotationSpec(name="format", value=type_format))

    if is_enum(field):
        properties.append(AnnotationSpec(name="enum", value=field.type, no_encapsulation=True))
        properties.append(AnnotationSpec(name="enumName", value=field.type))

    if as_list:
        properties.append(AnnotationSpec(name="isArray", value="true", no_encapsulation=True))

    if include_default:
        default = _default_value(field)
        if default is not None:
            properties.append(default)

    if not is_required:
        properties.append(AnnotationSpec(name="required", value="false", no_encapsulation=True))
    if is_nullable:
        properties.append(AnnotationSpec(name="nullable", value="true", no_encapsulation=True))

    return properties


def _default_value(field: FieldSpec) -> AnnotationSpec | None:
    # function defaults (autoincrement(), now(), uuid()) carry no literal value
    if not field.has_default_value or field.default is None:
        return None
    value = field.default
    if isinstance(value, bool):
        return AnnotationSpec(name="default", value=str(value).lower(), no_encapsulation=True)
    if isinstance(value, int | float):
        return AnnotationSpec(name="default", value=str(value), no_encapsulation=True)
    if isinstance(value, list):
        return AnnotationSpec(name="default", value=json.dumps(value), no_encapsulation=True)
    return AnnotationSpec(name="default", value=value)
