"""
Read-model entity parameters.

Relations are optional in an entity (they are only present when selected),
foreign keys are always present and nullable unless a required relation
owns them.
"""

from __future__ import annotations

from collections.abc import Sequence

from dtoforge.core.config import GeneratorConfig
from dtoforge.core.ir import (
    AnnotationSpec,
    ArtifactKind,
    Directive,
    EntityParams,
    EntitySpec,
    ImportStatement,
    ParsedField,
)
from dtoforge.core.naming import thunk

from .api_properties import PLAIN_TYPE_NAMES, SCALAR_FORMATS, build_api_properties
from .classifiers import is_enum, is_relation, is_type
from .imports import CLASS_TRANSFORMER, ClientImportResolver
from .pipeline import (
    ArtifactPolicy,
    FieldContext,
    FieldOverrides,
    make_parsed_field,
    run_pipeline,
)
from .relation_scalars import is_any_relation_required


def _entity_field(ctx: FieldContext) -> ParsedField | None:
    field, naming = ctx.field, ctx.naming
    overrides = FieldOverrides(is_required=True, is_nullable=not field.is_required)

    if is_type(field) and not ctx.is_self_reference:
        target = ctx.resolve_target(is_relation=False)
        ctx.import_artifact(
            naming.plain_dto_name(field.type),
            target.output.dto,
            naming.plain_dto_filename(field.type),
        )

    if is_relation(field):
        relation_required = field.has(Directive.RELATION_REQUIRED)
        overrides.is_required = relation_required
        if field.is_list or field.is_required:
            overrides.is_nullable = False
        else:
            overrides.is_nullable = not relation_required

        if not ctx.is_self_reference:
            target = ctx.resolve_target()
            ctx.import_artifact(
                naming.entity_name(field.type),
                target.output.entity,
                naming.entity_filename(field.type),
            )

    if ctx.is_relation_scalar:
        owners = ctx.relation_scalars[field.name]
        overrides.is_required = True
        overrides.is_nullable = not is_any_relation_required(ctx.model.fields, owners)

    api_properties = None
    if ctx.config.api_properties_enabled:
        api_properties = build_api_properties(
            field,
            is_required=field.is_required,
            is_nullable=not field.is_required,
            include_default=False,
        )
        if field.type not in SCALAR_FORMATS:
            plain = PLAIN_TYPE_NAMES.get(field.type)
            api_properties.append(
                AnnotationSpec(name="type", value=plain or thunk(field.type), no_encapsulation=True)
            )
            if plain is None and not is_enum(field):
                api_properties.append(
                    AnnotationSpec(name="type_decorator", value=field.type, no_encapsulation=True)
                )
                ctx.acc.needs_type_decorator = True
        ctx.acc.has_api_property = ctx.acc.has_api_property or bool(api_properties)

    return make_parsed_field(field, overrides, ctx.config, api_properties=api_properties)


ENTITY_POLICY = ArtifactPolicy(
    kind=ArtifactKind.ENTITY,
    hidden=Directive.ENTITY_HIDDEN,
    step=_entity_field,
    foundational_imports=(ImportStatement(source=CLASS_TRANSFORMER, names=("Expose",)),),
)


def compute_entity_params(
    model: EntitySpec,
    all_models: Sequence[EntitySpec],
    config: GeneratorConfig,
    client_imports: ClientImportResolver | None = None,
) -> EntityParams:
    """
    Compute the parameters of the read-model entity class for ``model``.

    Args:
        model: Entity to compute parameters for
        all_models: Every entity of the schema, used to resolve relations
        config: Generator configuration
        client_imports: Replacement for the database client import resolver

    Raises:
        RelationResolutionError: If a relation or embedded type cannot be resolved
    """
    result = run_pipeline(ENTITY_POLICY, model, all_models, config, client_imports)
    return EntityParams(
        model=model,
        fields=result.fields,
        imports=result.imports,
        api_extra_models=result.acc.api_extra_models,
    )
