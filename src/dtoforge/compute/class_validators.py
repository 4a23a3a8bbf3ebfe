"""
Validation annotation builder.

Produces the ``class-validator`` decorators for a field of an input DTO.
"""

from __future__ import annotations

from dataclasses import dataclass

from dtoforge.core.ir import AnnotationSpec, FieldSpec
from dtoforge.core.naming import thunk

from .classifiers import is_enum, is_relation, is_scalar, is_type

EACH = "{ each: true }"


@dataclass(frozen=True)
class ScalarValidator:
    """Validator for a scalar type; ``options`` is the leading argument, if any."""

    name: str
    options: str | None = None


SCALAR_VALIDATORS: dict[str, ScalarValidator] = {
    "String": ScalarValidator("IsString"),
    "Boolean": ScalarValidator("IsBoolean"),
    "Int": ScalarValidator("IsInt"),
    "BigInt": ScalarValidator("IsInt"),
    "Float": ScalarValidator("IsNumber", "{}"),
    "Decimal": ScalarValidator("IsDecimal", "{}"),
    "DateTime": ScalarValidator("IsDateString", "{}"),
    "Json": ScalarValidator("IsJSON"),
}


def _args(*parts: str | None) -> str | None:
    present = [p for p in parts if p]
    return ", ".join(present) if present else None


def _spec(name: str, value: str | None = None) -> AnnotationSpec:
    return AnnotationSpec(name=name, value=value, no_encapsulation=value is not None)


def build_class_validators(
    field: FieldSpec,
    *,
    is_required: bool,
    is_list: bool,
    type_name: str,
    include_hints: bool = True,
) -> list[AnnotationSpec]:
    """
    Build validators for one DTO property.

    Args:
        field: Schema field
        is_required: Resolved requiredness in the DTO
        is_list: Resolved cardinality in the DTO
        type_name: Class referenced by ``@Type`` for relations and embedded types
        include_hints: Append the validators declared in the schema comment

    Returns:
        Ordered validators, unique by name
    """
    each = EACH if is_list else None
    validators = [_spec("IsNotEmpty") if is_required else _spec("IsOptional")]

    if is_list:
        validators.append(_spec("IsArray"))

    if is_scalar(field):
        scalar = SCALAR_VALIDATORS.get(field.type)
        if scalar is not None:
            validators.append(_spec(scalar.name, _args(scalar.options, each)))
    elif is_enum(field):
        validators.append(_spec("IsEnum", _args(field.type, each)))
    elif is_relation(field) or is_type(field):
        validators.append(_spec("ValidateNested", each))
        validators.append(_spec("Type", thunk(type_name)))

    if include_hints:
        seen = {v.name for v in validators}
        for name, value in field.validator_hints.items():
            if name not in seen:
                validators.append(_spec(name, value))
                seen.add(name)

    return validators
