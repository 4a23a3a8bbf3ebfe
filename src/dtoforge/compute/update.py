"""
Update DTO parameters.

Every property of an update DTO is optional. Embedded types are patched
through their own update DTO unless the field asks for a full update.
"""

from __future__ import annotations

from collections.abc import Sequence

from dtoforge.core.config import GeneratorConfig
from dtoforge.core.ir import (
    RELATION_MODIFIERS_ON_UPDATE,
    AnnotationSpec,
    ArtifactKind,
    Directive,
    EntitySpec,
    ParsedField,
    UpdateDtoParams,
)
from dtoforge.core.naming import strip_thunk

from .api_properties import build_api_properties
from .class_validators import build_class_validators
from .classifiers import (
    is_annotated_with_one_of,
    is_id,
    is_read_only,
    is_relation,
    is_required_with_default_value,
    is_type,
    is_updated_at,
)
from .imports import ClientImportResolver
from .pipeline import (
    ArtifactPolicy,
    FieldContext,
    FieldOverrides,
    make_parsed_field,
    resolved_list,
    run_pipeline,
)
from .relation_input import UPDATE_PERMISSIONS, generate_relation_input


def _update_field(ctx: FieldContext) -> ParsedField | None:
    field, naming, config, acc = ctx.field, ctx.naming, ctx.config, ctx.acc
    overrides = FieldOverrides(is_required=False, is_nullable=not field.is_required)

    # no re-inclusion path for read-only foreign keys when updating
    if is_read_only(field):
        return ctx.skip("read-only")

    if is_relation(field):
        if not is_annotated_with_one_of(field, RELATION_MODIFIERS_ON_UPDATE):
            return ctx.skip("relation without update modifiers")
        relation_input = generate_relation_input(
            relation=field,
            model=ctx.model,
            all_models=ctx.all_models,
            config=config,
            naming=naming,
            kind=ArtifactKind.UPDATE,
            permissions=UPDATE_PERMISSIONS,
        )
        overrides.type = relation_input.type
        overrides.is_list = False
        overrides.is_nullable = False
        acc.add_relation_input(relation_input, config)

    if ctx.is_relation_scalar and not field.has(Directive.RELATION_INCLUDE_ID):
        return ctx.skip("foreign key")

    is_dto_optional = field.has(Directive.UPDATE_OPTIONAL)
    full_update = is_type(field) and field.has(Directive.TYPE_FULL_UPDATE)

    if not is_dto_optional:
        if is_id(field):
            return ctx.skip("id")
        if is_updated_at(field):
            return ctx.skip("updated-at timestamp")
        if is_required_with_default_value(field):
            return ctx.skip("required with default")

    if is_type(field) and not ctx.is_self_reference:
        target = ctx.resolve_target(is_relation=False)
        if full_update:
            ctx.import_artifact(
                naming.create_dto_name(field.type),
                target.output.for_kind(ArtifactKind.CREATE),
                naming.create_dto_filename(field.type),
            )
        else:
            ctx.import_artifact(
                naming.update_dto_name(field.type),
                target.output.for_kind(ArtifactKind.UPDATE),
                naming.update_dto_filename(field.type),
            )

    is_list = resolved_list(field, overrides)

    class_validators = None
    if config.class_validators_enabled:
        if overrides.type:
            type_name = strip_thunk(overrides.type)
        elif full_update:
            type_name = naming.create_dto_name(field.type)
        else:
            type_name = naming.update_dto_name(field.type)
        class_validators = build_class_validators(
            field, is_required=False, is_list=is_list, type_name=type_name
        )
        acc.add_class_validators(class_validators)

    api_properties = None
    if config.api_properties_enabled:
        overrides.update_api_response = field.has(Directive.UPDATE_API_RESPONSE)
        acc.has_api_response_property = (
            acc.has_api_response_property or overrides.update_api_response
        )
        api_properties = build_api_properties(
            field,
            is_required=False,
            is_nullable=not field.is_required,
            is_list=is_list,
            include_type=overrides.type is None,
        )
        if overrides.type:
            api_properties.append(
                AnnotationSpec(name="type", value=overrides.type, no_encapsulation=True)
            )
        acc.has_api_property = acc.has_api_property or bool(api_properties)

    return make_parsed_field(
        field,
        overrides,
        config,
        api_properties=api_properties,
        class_validators=class_validators,
    )


UPDATE_POLICY = ArtifactPolicy(
    kind=ArtifactKind.UPDATE,
    hidden=Directive.UPDATE_HIDDEN,
    step=_update_field,
)


def compute_update_dto_params(
    model: EntitySpec,
    all_models: Sequence[EntitySpec],
    config: GeneratorConfig,
    client_imports: ClientImportResolver | None = None,
) -> UpdateDtoParams:
    """
    Compute the parameters of the update DTO for ``model``.

    Raises:
        RelationResolutionError: If a relation or embedded type cannot be resolved
    """
    result = run_pipeline(UPDATE_POLICY, model, all_models, config, client_imports)
    return UpdateDtoParams(
        model=model,
        fields=result.fields,
        imports=result.imports,
        api_extra_models=result.acc.api_extra_models,
        extra_classes=result.acc.extra_classes,
        class_validators=result.acc.class_validators,
    )
