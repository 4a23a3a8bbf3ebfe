"""
DTOFORGE Intermediate Representation (IR) types.

Schema descriptors (entities, fields, directives) are the input of the
derivation engine; artifact parameter records are its output.
"""

# Directives
from .directives import (
    RELATION_MODIFIERS_ON_CREATE,
    RELATION_MODIFIERS_ON_UPDATE,
    AnnotationSet,
    Directive,
)

# Entities
from .entities import (
    ArtifactKind,
    EntitySpec,
    OutputLocations,
    find_entity,
)

# Fields
from .fields import (
    DefaultValue,
    FieldKind,
    FieldSpec,
)

# Artifact parameters
from .params import (
    AnnotationSpec,
    ArtifactParams,
    CreateDtoParams,
    EntityParams,
    ImportStatement,
    InputDtoParams,
    ModelParams,
    ParsedField,
    RelationInputField,
    RelationInputType,
    UpdateDtoParams,
)

__all__ = [
    # Directives
    "Directive",
    "AnnotationSet",
    "RELATION_MODIFIERS_ON_CREATE",
    "RELATION_MODIFIERS_ON_UPDATE",
    # Entities
    "ArtifactKind",
    "EntitySpec",
    "OutputLocations",
    "find_entity",
    # Fields
    "DefaultValue",
    "FieldKind",
    "FieldSpec",
    # Artifact parameters
    "AnnotationSpec",
    "ArtifactParams",
    "CreateDtoParams",
    "EntityParams",
    "ImportStatement",
    "InputDtoParams",
    "ModelParams",
    "ParsedField",
    "RelationInputField",
    "RelationInputType",
    "UpdateDtoParams",
]
