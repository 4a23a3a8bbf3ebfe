"""
Create DTO parameters.
"""

from __future__ import annotations

from collections.abc import Sequence

from dtoforge.core.config import GeneratorConfig
from dtoforge.core.ir import (
    RELATION_MODIFIERS_ON_CREATE,
    AnnotationSpec,
    ArtifactKind,
    CreateDtoParams,
    Directive,
    EntitySpec,
    ParsedField,
)
from dtoforge.core.naming import strip_thunk, thunk

from .api_properties import build_api_properties
from .class_validators import build_class_validators
from .classifiers import (
    is_annotated_with_one_of,
    is_id_with_default_value,
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
    resolved_nullable,
    resolved_required,
    run_pipeline,
)
from .relation_input import CREATE_PERMISSIONS, generate_relation_input


def _create_field(ctx: FieldContext) -> ParsedField | None:
    field, naming, config, acc = ctx.field, ctx.naming, ctx.config, ctx.acc
    overrides = FieldOverrides()

    if ctx.is_read_only():
        return ctx.skip("read-only")

    if is_relation(field):
        if not is_annotated_with_one_of(field, RELATION_MODIFIERS_ON_CREATE):
            return ctx.skip("relation without create modifiers")
        relation_input = generate_relation_input(
            relation=field,
            model=ctx.model,
            all_models=ctx.all_models,
            config=config,
            naming=naming,
            kind=ArtifactKind.CREATE,
            permissions=CREATE_PERMISSIONS,
        )
        if relation_input.is_composite:
            if field.has(Directive.RELATION_REQUIRED):
                overrides.is_required = True
            # a list is supplied inside the nested create/connect properties
            if field.is_list:
                overrides.is_required = False
            overrides.is_list = False
            overrides.type = relation_input.type
            acc.add_relation_input(relation_input, config)
        else:
            overrides.type = relation_input.type
            type_validator = relation_input.type_validator()
            if type_validator is not None:
                overrides.coercion_target = strip_thunk(type_validator.value)
            acc.add_imports(relation_input.imports)

    if ctx.is_relation_scalar and not field.has(Directive.RELATION_INCLUDE_ID):
        return ctx.skip("foreign key")

    # read-only fields are gone by now, so this may make schema-required fields optional
    is_dto_optional = field.has(Directive.CREATE_OPTIONAL)
    if not is_dto_optional:
        if is_id_with_default_value(field):
            return ctx.skip("id with default")
        if is_updated_at(field):
            return ctx.skip("updated-at timestamp")
        if is_required_with_default_value(field):
            return ctx.skip("required with default")
    else:
        overrides.is_required = False

    if is_type(field) and not ctx.is_self_reference:
        target = ctx.resolve_target(is_relation=False)
        ctx.import_artifact(
            naming.create_dto_name(field.type),
            target.output.for_kind(ArtifactKind.CREATE),
            naming.create_dto_filename(field.type),
        )

    is_required = resolved_required(field, overrides)
    is_list = resolved_list(field, overrides)

    class_validators = None
    if config.class_validators_enabled:
        if overrides.type:
            type_name = strip_thunk(overrides.type)
        else:
            type_name = naming.create_dto_name(field.type)
        class_validators = build_class_validators(
            field, is_required=is_required, is_list=is_list, type_name=type_name
        )
        acc.add_class_validators(class_validators)

    api_properties = None
    if config.api_properties_enabled:
        overrides.create_api_response = field.has(Directive.CREATE_API_RESPONSE)
        acc.has_api_response_property = (
            acc.has_api_response_property or overrides.create_api_response
        )
        api_properties = build_api_properties(
            field,
            is_required=is_required,
            is_nullable=resolved_nullable(field, overrides),
            is_list=is_list,
            include_type=overrides.type is None,
        )
        if overrides.type:
            value = thunk(overrides.type) if overrides.coercion_target else overrides.type
            api_properties.append(AnnotationSpec(name="type", value=value, no_encapsulation=True))
        acc.has_api_property = acc.has_api_property or bool(api_properties)

    return make_parsed_field(
        field,
        overrides,
        config,
        api_properties=api_properties,
        class_validators=class_validators,
    )


CREATE_POLICY = ArtifactPolicy(
    kind=ArtifactKind.CREATE,
    hidden=Directive.CREATE_HIDDEN,
    step=_create_field,
)


def compute_create_dto_params(
    model: EntitySpec,
    all_models: Sequence[EntitySpec],
    config: GeneratorConfig,
    client_imports: ClientImportResolver | None = None,
) -> CreateDtoParams:
    """
    Compute the parameters of the create DTO for ``model``.

    Raises:
        RelationResolutionError: If a relation or embedded type cannot be resolved
    """
    result = run_pipeline(CREATE_POLICY, model, all_models, config, client_imports)
    return CreateDtoParams(
        model=model,
        fields=result.fields,
        imports=result.imports,
        api_extra_models=result.acc.api_extra_models,
        extra_classes=result.acc.extra_classes,
        class_validators=result.acc.class_validators,
    )
