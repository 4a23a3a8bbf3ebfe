"""
Relation scalar index.

Maps each foreign-key scalar of an entity to the relation fields it backs.
"""

from __future__ import annotations

from collections.abc import Sequence

from dtoforge.core.ir import Directive, FieldSpec

from .classifiers import is_annotated_with, is_relation, is_required


def get_relation_scalars(fields: Sequence[FieldSpec]) -> dict[str, list[str]]:
    """
    Build ``{scalar_name: [relation_field_name, ...]}`` for one entity.

    Keys follow the order in which relations reference them; each list is in
    field declaration order without duplicates.
    """
    scalars: dict[str, list[str]] = {}
    for field in fields:
        if not is_relation(field):
            continue
        for scalar in field.relation_from_fields:
            owners = scalars.setdefault(scalar, [])
            if field.name not in owners:
                owners.append(field.name)
    return scalars


def is_any_relation_required(
    fields: Sequence[FieldSpec], relation_names: Sequence[str]
) -> bool:
    """Whether any of the named relations is required in the schema or via directive."""
    by_name = {f.name: f for f in fields}
    for name in relation_names:
        relation = by_name.get(name)
        if relation is None:
            continue
        if is_required(relation) or is_annotated_with(relation, Directive.RELATION_REQUIRED):
            return True
    return False
