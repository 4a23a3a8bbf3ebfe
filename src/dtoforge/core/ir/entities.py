"""
Entity definitions for DTOFORGE IR.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .fields import FieldSpec


class ArtifactKind(str, Enum):
    """The three artifacts generated per entity."""

    ENTITY = "entity"
    CREATE = "create"
    UPDATE = "update"


class OutputLocations(BaseModel):
    """
    Output directories of an entity's generated artifacts.

    Only used to compute relative import specifiers, so the values are
    opaque POSIX path tokens.

    Attributes:
        entity: Directory of the read-model entity
        dto: Directory of the DTOs
        create: Directory of the create DTO, defaults to ``dto``
        update: Directory of the update DTO, defaults to ``dto``
    """

    entity: str = "."
    dto: str = "."
    create: str | None = None
    update: str | None = None

    model_config = ConfigDict(frozen=True)

    def for_kind(self, kind: ArtifactKind) -> str:
        """Directory the artifact of ``kind`` is written to."""
        if kind == ArtifactKind.ENTITY:
            return self.entity
        if kind == ArtifactKind.CREATE:
            return self.create or self.dto
        if kind == ArtifactKind.UPDATE:
            return self.update or self.dto
        return self.dto


class EntitySpec(BaseModel):
    """
    Specification for a schema entity (model or composite type).

    Attributes:
        name: Entity name (PascalCase)
        fields: Fields in declaration order
        output: Output directories
        documentation: Free-text schema comment
    """

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)
    output: OutputLocations = Field(default_factory=OutputLocations)
    documentation: str | None = None

    model_config = ConfigDict(frozen=True)

    def get_field(self, name: str) -> FieldSpec | None:
        """Get field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None


def find_entity(entities: list[EntitySpec], name: str) -> EntitySpec | None:
    """Look up an entity by name."""
    for entity in entities:
        if entity.name == name:
            return entity
    return None
