"""
Field classifiers.

Total predicates over a field descriptor and its directives. Absence of a
directive is a normal ``False``, never an error.
"""

from __future__ import annotations

from collections.abc import Iterable

from dtoforge.core.ir import Directive, FieldKind, FieldSpec


def is_annotated_with(field: FieldSpec, directive: Directive) -> bool:
    return field.annotations.has(directive)


def is_annotated_with_one_of(field: FieldSpec, directives: Iterable[Directive]) -> bool:
    return field.annotations.has_any(directives)


def is_scalar(field: FieldSpec) -> bool:
    return field.kind == FieldKind.SCALAR


def is_enum(field: FieldSpec) -> bool:
    return field.kind == FieldKind.ENUM


def is_relation(field: FieldSpec) -> bool:
    return field.kind == FieldKind.RELATION


def is_type(field: FieldSpec) -> bool:
    """Embedded structured (composite) type, not a reference to another entity."""
    return field.kind == FieldKind.TYPE


def is_id(field: FieldSpec) -> bool:
    return field.is_id


def is_required(field: FieldSpec) -> bool:
    return field.is_required


def has_default_value(field: FieldSpec) -> bool:
    return field.has_default_value


def is_id_with_default_value(field: FieldSpec) -> bool:
    return is_id(field) and has_default_value(field)


def is_read_only(field: FieldSpec) -> bool:
    return field.is_read_only or is_annotated_with(field, Directive.READ_ONLY)


def is_updated_at(field: FieldSpec) -> bool:
    return field.is_updated_at


def is_required_with_default_value(field: FieldSpec) -> bool:
    return is_required(field) and has_default_value(field)
