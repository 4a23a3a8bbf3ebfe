"""
Directive definitions for DTOFORGE IR.

Directives are the structured form of the ``@Dto...`` annotations found in
schema comments. The annotation parser hands each field a mapping from
:class:`Directive` to an optional argument.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Directive(str, Enum):
    """Closed set of directives understood by the derivation engine."""

    READ_ONLY = "read-only"
    ENTITY_HIDDEN = "hide-from-entity"
    CREATE_HIDDEN = "hide-from-create"
    UPDATE_HIDDEN = "hide-from-update"
    CREATE_OPTIONAL = "create-optional"
    UPDATE_OPTIONAL = "update-optional"
    TYPE_FULL_UPDATE = "full-update-on-update"
    RELATION_REQUIRED = "relation-required"
    RELATION_INCLUDE_ID = "relation-include-identifier"
    RELATION_CAN_CREATE_ON_CREATE = "relation-can-create-on-create"
    RELATION_CAN_CONNECT_ON_CREATE = "relation-can-connect-on-create"
    RELATION_CAN_CREATE_ON_UPDATE = "relation-can-create-on-update"
    RELATION_CAN_CONNECT_ON_UPDATE = "relation-can-connect-on-update"
    RELATION_CAN_UPDATE_ON_UPDATE = "relation-can-update-on-update"
    CREATE_API_RESPONSE = "create-api-response-only"
    UPDATE_API_RESPONSE = "update-api-response-only"


# Directive groups: a relation takes part in an input artifact only when it
# carries at least one of these.
RELATION_MODIFIERS_ON_CREATE: tuple[Directive, ...] = (
    Directive.RELATION_CAN_CREATE_ON_CREATE,
    Directive.RELATION_CAN_CONNECT_ON_CREATE,
)
RELATION_MODIFIERS_ON_UPDATE: tuple[Directive, ...] = (
    Directive.RELATION_CAN_CREATE_ON_UPDATE,
    Directive.RELATION_CAN_CONNECT_ON_UPDATE,
    Directive.RELATION_CAN_UPDATE_ON_UPDATE,
)


class AnnotationSet(BaseModel):
    """
    Directives attached to a field, each with an optional argument.

    Examples:
        - AnnotationSet.of(Directive.CREATE_OPTIONAL)
        - AnnotationSet(directives={Directive.ENTITY_HIDDEN: None})
    """

    directives: dict[Directive, str | None] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, *directives: Directive, **arguments: str) -> AnnotationSet:
        """Build a set from bare directives plus ``name=argument`` pairs."""
        mapping: dict[Directive, str | None] = {d: None for d in directives}
        for key, value in arguments.items():
            mapping[Directive(key.replace("_", "-"))] = value
        return cls(directives=mapping)

    def has(self, directive: Directive) -> bool:
        return directive in self.directives

    def has_any(self, directives: Iterable[Directive]) -> bool:
        return any(d in self.directives for d in directives)

    def argument(self, directive: Directive) -> str | None:
        """Argument of a directive, ``None`` when absent or bare."""
        return self.directives.get(directive)
