"""
Shared artifact field pipeline.

The entity, create and update artifacts are computed by the same fold over
an entity's fields. Each artifact supplies an :class:`ArtifactPolicy` whose
field step decides inclusion and overrides for one field; the fold keeps
declaration order, collects side effects in an :class:`ArtifactAccumulator`
and canonicalizes imports at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from dtoforge.core.config import GeneratorConfig
from dtoforge.core.ir import (
    AnnotationSpec,
    ArtifactKind,
    Directive,
    EntitySpec,
    FieldSpec,
    ImportStatement,
    ParsedField,
    RelationInputType,
)
from dtoforge.core.naming import NamingConventions, relative_import

from .classifiers import is_read_only
from .imports import (
    CLASS_TRANSFORMER,
    CLASS_VALIDATOR,
    NESTJS_SWAGGER,
    ClientImportResolver,
    canonicalize_imports,
    imports_from_client,
)
from .relation_input import RelationInputResult, resolve_related_entity
from .relation_scalars import get_relation_scalars

logger = logging.getLogger(__name__)

# Scalar types replaced when generated code may not depend on the client library
NO_DEPENDENCY_TYPES = {"Json": "Object", "Decimal": "Float"}


@dataclass
class FieldOverrides:
    """Per-field values that win over the schema descriptor in the output."""

    is_required: bool | None = None
    is_nullable: bool | None = None
    is_list: bool | None = None
    type: str | None = None
    coercion_target: str | None = None
    create_api_response: bool = False
    update_api_response: bool = False


@dataclass
class ArtifactAccumulator:
    """Side collections gathered while folding over the fields of one entity."""

    imports: list[ImportStatement] = field(default_factory=list)
    extra_classes: list[RelationInputType] = field(default_factory=list)
    api_extra_models: list[str] = field(default_factory=list)
    class_validators: list[AnnotationSpec] = field(default_factory=list)
    has_api_property: bool = False
    has_api_response_property: bool = False
    needs_type_decorator: bool = False

    def add_imports(self, statements: Iterable[ImportStatement]) -> None:
        for statement in statements:
            if statement not in self.imports:
                self.imports.append(statement)

    def add_class_validators(self, validators: Iterable[AnnotationSpec]) -> None:
        """Record validators in use, unique by name."""
        for validator in validators:
            if all(v.name != validator.name for v in self.class_validators):
                self.class_validators.append(validator)

    def add_relation_input(self, result: RelationInputResult, config: GeneratorConfig) -> None:
        self.add_imports(result.imports)
        self.extra_classes.extend(result.generated_classes)
        if config.api_properties_enabled:
            for name in result.api_extra_models:
                if name not in self.api_extra_models:
                    self.api_extra_models.append(name)
        self.add_class_validators(result.class_validators)


@dataclass
class FieldContext:
    """Everything a field step may consult while processing one field."""

    field: FieldSpec
    model: EntitySpec
    all_models: Sequence[EntitySpec]
    config: GeneratorConfig
    naming: NamingConventions
    kind: ArtifactKind
    relation_scalars: dict[str, list[str]]
    acc: ArtifactAccumulator

    @property
    def is_relation_scalar(self) -> bool:
        """Whether the field is the foreign key of a relation on the same entity."""
        return self.field.name in self.relation_scalars

    @property
    def is_self_reference(self) -> bool:
        return self.field.type == self.model.name

    @property
    def includes_relation_id(self) -> bool:
        """Foreign-key scalar explicitly re-included in input DTOs."""
        return self.is_relation_scalar and self.field.has(Directive.RELATION_INCLUDE_ID)

    def is_read_only(self) -> bool:
        # foreign keys are read-only in the schema; the include directive lifts that
        if self.includes_relation_id:
            return self.field.has(Directive.READ_ONLY)
        return is_read_only(self.field)

    def resolve_target(self, *, is_relation: bool = True) -> EntitySpec:
        return resolve_related_entity(
            self.model, self.field, self.all_models, is_relation=is_relation
        )

    def import_artifact(self, name: str, to_dir: str, filename: str) -> None:
        """Import another entity's generated class into this artifact."""
        source = relative_import(self.model.output.for_kind(self.kind), to_dir, filename)
        self.acc.add_imports([ImportStatement(source=source, names=(name,))])

    def skip(self, reason: str) -> None:
        logger.debug(
            "%s %s: omitting %s (%s)", self.model.name, self.kind.value, self.field.name, reason
        )


FieldStep = Callable[[FieldContext], "ParsedField | None"]


@dataclass(frozen=True)
class ArtifactPolicy:
    """
    What distinguishes one artifact kind in the shared pipeline.

    Attributes:
        kind: Artifact kind
        hidden: Directive removing a field from this artifact
        step: Per-field processing; returns None to omit the field
        foundational_imports: Imports every artifact of this kind carries
    """

    kind: ArtifactKind
    hidden: Directive
    step: FieldStep
    foundational_imports: tuple[ImportStatement, ...] = ()


@dataclass
class PipelineResult:
    fields: list[ParsedField]
    imports: list[ImportStatement]
    acc: ArtifactAccumulator


def resolved_required(field_spec: FieldSpec, overrides: FieldOverrides) -> bool:
    if overrides.is_required is not None:
        return overrides.is_required
    return field_spec.is_required


def resolved_nullable(field_spec: FieldSpec, overrides: FieldOverrides) -> bool:
    if overrides.is_nullable is not None:
        return overrides.is_nullable
    return not field_spec.is_required


def resolved_list(field_spec: FieldSpec, overrides: FieldOverrides) -> bool:
    if overrides.is_list is not None:
        return overrides.is_list
    return field_spec.is_list


def make_parsed_field(
    field_spec: FieldSpec,
    overrides: FieldOverrides,
    config: GeneratorConfig,
    *,
    api_properties: list[AnnotationSpec] | None = None,
    class_validators: list[AnnotationSpec] | None = None,
) -> ParsedField:
    """Merge a schema field with its overrides into an output field."""
    type_name = overrides.type or field_spec.type
    if config.no_dependencies and overrides.type is None:
        type_name = NO_DEPENDENCY_TYPES.get(type_name, type_name)

    return ParsedField(
        name=field_spec.name,
        type=type_name,
        kind=field_spec.kind,
        is_list=resolved_list(field_spec, overrides),
        is_required=resolved_required(field_spec, overrides),
        is_nullable=resolved_nullable(field_spec, overrides),
        is_id=field_spec.is_id,
        is_unique=field_spec.is_unique,
        is_updated_at=field_spec.is_updated_at,
        has_default_value=field_spec.has_default_value,
        documentation=field_spec.documentation,
        api_properties=api_properties,
        class_validators=class_validators,
        create_api_response=overrides.create_api_response,
        update_api_response=overrides.update_api_response,
        coercion_target=overrides.coercion_target,
        field=field_spec,
    )


def run_pipeline(
    policy: ArtifactPolicy,
    model: EntitySpec,
    all_models: Sequence[EntitySpec],
    config: GeneratorConfig,
    client_imports: ClientImportResolver | None = None,
) -> PipelineResult:
    """
    Fold over ``model.fields`` with the policy's field step.

    Raises:
        RelationResolutionError: If a relation or embedded type cannot be resolved
    """
    naming = NamingConventions(config)
    acc = ArtifactAccumulator()
    relation_scalars = get_relation_scalars(model.fields)

    fields: list[ParsedField] = []
    for field_spec in model.fields:
        if field_spec.has(policy.hidden):
            logger.debug(
                "%s %s: omitting %s (%s)",
                model.name,
                policy.kind.value,
                field_spec.name,
                policy.hidden.value,
            )
            continue
        ctx = FieldContext(
            field=field_spec,
            model=model,
            all_models=all_models,
            config=config,
            naming=naming,
            kind=policy.kind,
            relation_scalars=relation_scalars,
            acc=acc,
        )
        parsed = policy.step(ctx)
        if parsed is not None:
            fields.append(parsed)

    resolver = client_imports or imports_from_client
    imports = [
        *resolver(fields, config.prisma_client_import_path),
        *policy.foundational_imports,
        *_library_imports(acc),
        *acc.imports,
    ]
    return PipelineResult(fields=fields, imports=canonicalize_imports(imports), acc=acc)


def _library_imports(acc: ArtifactAccumulator) -> list[ImportStatement]:
    """Validation, transformation and documentation library imports, in that order."""
    statements: list[ImportStatement] = []

    validator_names = sorted({v.name for v in acc.class_validators if v.name != "Type"})
    if validator_names:
        statements.append(ImportStatement(source=CLASS_VALIDATOR, names=tuple(validator_names)))

    if acc.needs_type_decorator or any(v.name == "Type" for v in acc.class_validators):
        statements.append(ImportStatement(source=CLASS_TRANSFORMER, names=("Type",)))

    swagger: list[str] = []
    if acc.api_extra_models:
        swagger.append("ApiExtraModels")
    if acc.has_api_property:
        swagger.append("ApiProperty")
    if acc.has_api_response_property:
        swagger.append("ApiResponseProperty")
    if swagger:
        statements.append(ImportStatement(source=NESTJS_SWAGGER, names=tuple(swagger)))

    return statements
