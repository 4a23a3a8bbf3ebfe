"""
Relation input synthesis.

Decides how a relation field is written in a create or update DTO. With a
single permitted nesting mode the field references the related DTO
directly; with several, an auxiliary ``...RelationInputDto`` class exposes
one optional property per mode.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from dtoforge.core.config import GeneratorConfig
from dtoforge.core.errors import RelationResolutionError
from dtoforge.core.ir import (
    AnnotationSpec,
    ArtifactKind,
    Directive,
    EntitySpec,
    FieldSpec,
    ImportStatement,
    RelationInputField,
    RelationInputType,
    find_entity,
)
from dtoforge.core.naming import NamingConventions, relative_import

from .class_validators import build_class_validators

logger = logging.getLogger(__name__)


class RelationMode(str, Enum):
    """Ways a related record can be supplied in an input DTO."""

    CREATE = "create"
    CONNECT = "connect"
    UPDATE = "update"


@dataclass(frozen=True)
class RelationPermissions:
    """Directives enabling each nesting mode for one artifact kind."""

    can_create: Directive | None
    can_connect: Directive | None
    can_update: Directive | None

    def enabled_modes(self, relation: FieldSpec) -> list[RelationMode]:
        pairs = (
            (RelationMode.CREATE, self.can_create),
            (RelationMode.CONNECT, self.can_connect),
            (RelationMode.UPDATE, self.can_update),
        )
        return [mode for mode, directive in pairs if directive and relation.has(directive)]


CREATE_PERMISSIONS = RelationPermissions(
    can_create=Directive.RELATION_CAN_CREATE_ON_CREATE,
    can_connect=Directive.RELATION_CAN_CONNECT_ON_CREATE,
    can_update=None,
)
UPDATE_PERMISSIONS = RelationPermissions(
    can_create=Directive.RELATION_CAN_CREATE_ON_UPDATE,
    can_connect=Directive.RELATION_CAN_CONNECT_ON_UPDATE,
    can_update=Directive.RELATION_CAN_UPDATE_ON_UPDATE,
)


@dataclass
class RelationInputResult:
    """
    Outcome of relation input synthesis.

    Attributes:
        type: Class name substituted for the field's type
        is_composite: Whether ``type`` is a synthesized relation input class
        imports: Imports of the related DTOs
        generated_classes: Relation input classes the renderer must emit
        api_extra_models: Classes to declare via ``@ApiExtraModels``
        class_validators: Validators used by the relation input class
    """

    type: str
    is_composite: bool
    imports: list[ImportStatement] = field(default_factory=list)
    generated_classes: list[RelationInputType] = field(default_factory=list)
    api_extra_models: list[str] = field(default_factory=list)
    class_validators: list[AnnotationSpec] = field(default_factory=list)

    def type_validator(self) -> AnnotationSpec | None:
        """The ``Type`` validator naming the nested class, present only with validation on."""
        for validator in self.class_validators:
            if validator.name == "Type" and validator.value:
                return validator
        return None


def resolve_related_entity(
    model: EntitySpec,
    relation: FieldSpec,
    all_models: Sequence[EntitySpec],
    *,
    is_relation: bool = True,
) -> EntitySpec:
    """
    Find the entity a relation or embedded type field points at.

    Raises:
        RelationResolutionError: If no entity has the field's type name
    """
    target = find_entity(list(all_models), relation.type)
    if target is None:
        raise RelationResolutionError(
            model.name, relation.name, relation.type, relation=is_relation
        )
    return target


def _verbatim(name: str, value: str) -> AnnotationSpec:
    return AnnotationSpec(name=name, value=value, no_encapsulation=True)


def _own_class_name(naming: NamingConventions, kind: ArtifactKind, model: str) -> str:
    if kind == ArtifactKind.CREATE:
        return naming.create_dto_name(model)
    return naming.update_dto_name(model)


def _mode_target(
    mode: RelationMode, naming: NamingConventions, target: EntitySpec
) -> tuple[str, str, str]:
    """Class name, file name and directory of the DTO a mode refers to."""
    if mode == RelationMode.CREATE:
        return (
            naming.create_dto_name(target.name),
            naming.create_dto_filename(target.name),
            target.output.for_kind(ArtifactKind.CREATE),
        )
    if mode == RelationMode.CONNECT:
        return (
            naming.connect_dto_name(target.name),
            naming.connect_dto_filename(target.name),
            target.output.dto,
        )
    return (
        naming.update_dto_name(target.name),
        naming.update_dto_filename(target.name),
        target.output.for_kind(ArtifactKind.UPDATE),
    )


def generate_relation_input(
    *,
    relation: FieldSpec,
    model: EntitySpec,
    all_models: Sequence[EntitySpec],
    config: GeneratorConfig,
    naming: NamingConventions,
    kind: ArtifactKind,
    permissions: RelationPermissions,
) -> RelationInputResult:
    """
    Synthesize the input shape of a relation field in a create or update DTO.

    Callers only invoke this for relations carrying at least one of the
    permission directives.

    Raises:
        RelationResolutionError: If the related entity does not exist
    """
    target = resolve_related_entity(model, relation, all_models)
    modes = permissions.enabled_modes(relation)
    from_dir = model.output.for_kind(kind)
    own_class = _own_class_name(naming, kind, model.name)

    props: list[RelationInputField] = []
    imports: list[ImportStatement] = []
    class_validators: list[AnnotationSpec] = []

    for mode in modes:
        type_name, filename, to_dir = _mode_target(mode, naming, target)
        if type_name != own_class:
            imports.append(
                ImportStatement(
                    source=relative_import(from_dir, to_dir, filename),
                    names=(type_name,),
                )
            )

        api_properties: list[AnnotationSpec] = []
        if config.api_properties_enabled:
            api_properties.append(_verbatim("type", type_name))
            if relation.is_list:
                api_properties.append(_verbatim("isArray", "true"))
            api_properties.append(_verbatim("required", "false"))

        validators: list[AnnotationSpec] = []
        if config.class_validators_enabled:
            validators = build_class_validators(
                relation,
                is_required=False,
                is_list=relation.is_list,
                type_name=type_name,
                include_hints=False,
            )
            for validator in validators:
                if all(v.name != validator.name for v in class_validators):
                    class_validators.append(validator)

        props.append(
            RelationInputField(
                name=mode.value,
                type=type_name,
                is_list=relation.is_list,
                api_properties=api_properties,
                class_validators=validators,
            )
        )

    if len(props) == 1:
        logger.debug(
            "%s.%s references %s directly", model.name, relation.name, props[0].type
        )
        return RelationInputResult(
            type=props[0].type,
            is_composite=False,
            imports=imports,
            class_validators=class_validators,
        )

    base_name = naming.relation_input_name(model.name, relation.name)
    if kind == ArtifactKind.CREATE:
        input_name = naming.create_dto_name(base_name)
    else:
        input_name = naming.update_dto_name(base_name)
    logger.debug(
        "%s.%s uses relation input %s (%s)",
        model.name,
        relation.name,
        input_name,
        ", ".join(p.name for p in props),
    )

    api_extra_models: list[str] = []
    if config.api_properties_enabled:
        api_extra_models = [p.type for p in props] + [input_name]

    return RelationInputResult(
        type=input_name,
        is_composite=True,
        imports=imports,
        generated_classes=[RelationInputType(name=input_name, fields=props)],
        api_extra_models=api_extra_models,
        class_validators=class_validators,
    )
