"""
Artifact parameter records for DTOFORGE IR.

These are the outputs of the derivation engine: one record per entity per
artifact kind, consumed by the template renderer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .entities import ArtifactKind, EntitySpec
from .fields import FieldKind, FieldSpec


class AnnotationSpec(BaseModel):
    """
    One argument of a decorator to attach to a generated property.

    Used for both documentation properties (``@ApiProperty({name: value})``)
    and validators (``@name(value)``).

    Attributes:
        name: Property or decorator name
        value: Argument value, None for bare decorators
        no_encapsulation: Insert the value verbatim instead of as a string literal
    """

    name: str
    value: str | None = None
    no_encapsulation: bool = False

    model_config = ConfigDict(frozen=True)


class ImportStatement(BaseModel):
    """
    Named imports from one module specifier.

    Attributes:
        source: Module specifier (package name or relative path)
        names: Imported names in order, without duplicates
    """

    source: str
    names: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_relative(self) -> bool:
        return self.source.startswith(".")


class ParsedField(BaseModel):
    """
    A field as it should be rendered into one artifact.

    The flags are already resolved: overrides win over the schema values.
    ``field`` keeps the untouched schema descriptor for the renderer.
    """

    name: str
    type: str
    kind: FieldKind
    is_list: bool
    is_required: bool
    is_nullable: bool
    is_id: bool = False
    is_unique: bool = False
    is_updated_at: bool = False
    has_default_value: bool = False
    documentation: str | None = None
    api_properties: list[AnnotationSpec] | None = None
    class_validators: list[AnnotationSpec] | None = None
    create_api_response: bool = False
    update_api_response: bool = False
    coercion_target: str | None = None
    field: FieldSpec

    model_config = ConfigDict(frozen=True)


class RelationInputField(BaseModel):
    """One sub-field (``create``, ``connect`` or ``update``) of a relation input type."""

    name: str
    type: str
    is_list: bool = False
    api_properties: list[AnnotationSpec] = Field(default_factory=list)
    class_validators: list[AnnotationSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class RelationInputType(BaseModel):
    """
    Auxiliary class synthesized for a relation offering several nesting modes.

    Example:
        class CreateAuthorBooksRelationInputDto {
          create?: CreateBookDto[];
          connect?: ConnectBookDto[];
        }
    """

    name: str
    fields: list[RelationInputField]

    model_config = ConfigDict(frozen=True)


class ArtifactParams(BaseModel):
    """
    Parameters for rendering one artifact of one entity.

    Attributes:
        kind: Artifact kind
        model: Entity the artifact is generated for
        fields: Included fields in declaration order
        imports: Canonical import list
        api_extra_models: Names to declare via ``@ApiExtraModels``
    """

    kind: ArtifactKind
    model: EntitySpec
    fields: list[ParsedField] = Field(default_factory=list)
    imports: list[ImportStatement] = Field(default_factory=list)
    api_extra_models: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> ParsedField | None:
        """Get an output field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None


class EntityParams(ArtifactParams):
    """Parameters for the read-model entity class."""

    kind: ArtifactKind = ArtifactKind.ENTITY


class InputDtoParams(ArtifactParams):
    """
    Parameters shared by the create and update DTOs.

    Attributes:
        extra_classes: Relation input types the renderer emits alongside the DTO
        class_validators: Validators used anywhere in the DTO, unique by name
    """

    extra_classes: list[RelationInputType] = Field(default_factory=list)
    class_validators: list[AnnotationSpec] = Field(default_factory=list)


class CreateDtoParams(InputDtoParams):
    """Parameters for the create DTO."""

    kind: ArtifactKind = ArtifactKind.CREATE


class UpdateDtoParams(InputDtoParams):
    """Parameters for the update DTO."""

    kind: ArtifactKind = ArtifactKind.UPDATE


class ModelParams(BaseModel):
    """All artifact records of one entity."""

    entity: EntityParams
    create: CreateDtoParams
    update: UpdateDtoParams

    model_config = ConfigDict(frozen=True)

