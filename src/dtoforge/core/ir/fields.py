"""
Field definitions for DTOFORGE IR.

A field descriptor is what the schema-introspection layer reports for one
field of one entity, with its directives already parsed.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .directives import AnnotationSet, Directive

DefaultValue = str | int | float | bool | list[str | int | float | bool]


class FieldKind(str, Enum):
    """Kind tag of a field."""

    SCALAR = "scalar"
    ENUM = "enum"
    RELATION = "relation"  # reference to another entity
    TYPE = "type"  # embedded structured type (composite type)


class FieldSpec(BaseModel):
    """
    Specification for a single field of an entity.

    Attributes:
        name: Field identifier
        type: Declared type name (scalar name, enum name or entity name)
        kind: Kind tag
        is_list: List cardinality
        is_required: Schema-level "must be present"
        is_read_only: Read-only in the schema (foreign-key scalars are)
        has_default_value: Whether the schema declares a default
        default: Literal default value, None for function defaults like now()
        is_id: Identifier field
        is_unique: Unique constraint
        is_updated_at: Automatically maintained timestamp
        relation_from_fields: Foreign-key scalars backing a relation field
        documentation: Free-text schema comment
        annotations: Parsed directives
        api_hints: Documentation hints from the schema comment (description, example, ...)
        validator_hints: Validator decorators declared in the schema comment
    """

    name: str
    type: str
    kind: FieldKind = FieldKind.SCALAR
    is_list: bool = False
    is_required: bool = False
    is_read_only: bool = False
    has_default_value: bool = False
    default: DefaultValue | None = None
    is_id: bool = False
    is_unique: bool = False
    is_updated_at: bool = False
    relation_from_fields: list[str] = Field(default_factory=list)
    documentation: str | None = None
    annotations: AnnotationSet = Field(default_factory=AnnotationSet)
    api_hints: dict[str, str] = Field(default_factory=dict)
    validator_hints: dict[str, str | None] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def has(self, directive: Directive) -> bool:
        """Check if the field carries a directive."""
        return self.annotations.has(directive)
