"""
Artifact parameter derivation.

Computes, per entity, the parameter records of the read-model entity, the
create DTO and the update DTO.

Usage:
    from dtoforge.compute import compute_model_params

    params = compute_model_params(author, all_entities, GeneratorConfig())
    params.create.fields  # included fields with resolved overrides
"""

from .create import compute_create_dto_params
from .entity import compute_entity_params
from .imports import canonicalize_imports, imports_from_client
from .model_params import compute_model_params, compute_params
from .update import compute_update_dto_params

__all__ = [
    "compute_entity_params",
    "compute_create_dto_params",
    "compute_update_dto_params",
    "compute_params",
    "compute_model_params",
    "canonicalize_imports",
    "imports_from_client",
]
