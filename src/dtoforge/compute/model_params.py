"""
Per-entity orchestration of the artifact pipelines.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from dtoforge.core.config import GeneratorConfig
from dtoforge.core.ir import ArtifactKind, ArtifactParams, EntitySpec, ModelParams

from .create import compute_create_dto_params
from .entity import compute_entity_params
from .imports import ClientImportResolver
from .update import compute_update_dto_params

logger = logging.getLogger(__name__)

_COMPUTE = {
    ArtifactKind.ENTITY: compute_entity_params,
    ArtifactKind.CREATE: compute_create_dto_params,
    ArtifactKind.UPDATE: compute_update_dto_params,
}


def compute_params(
    kind: ArtifactKind,
    model: EntitySpec,
    all_models: Sequence[EntitySpec],
    config: GeneratorConfig,
    client_imports: ClientImportResolver | None = None,
) -> ArtifactParams:
    """Compute the parameter record of one artifact kind for ``model``."""
    return _COMPUTE[kind](model, all_models, config, client_imports)


def compute_model_params(
    model: EntitySpec,
    all_models: Sequence[EntitySpec],
    config: GeneratorConfig,
    client_imports: ClientImportResolver | None = None,
) -> ModelParams:
    """
    Compute all artifact records for ``model``.

    Raises:
        RelationResolutionError: If a relation or embedded type cannot be resolved
    """
    logger.debug("Computing artifact parameters for %s", model.name)
    return ModelParams(
        entity=compute_entity_params(model, all_models, config, client_imports),
        create=compute_create_dto_params(model, all_models, config, client_imports),
        update=compute_update_dto_params(model, all_models, config, client_imports),
    )
