"""
Error types for DTOFORGE parameter derivation and configuration.
"""

from dataclasses import dataclass


class DtoForgeError(Exception):
    """Base exception for all DTOFORGE errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ConfigError(DtoForgeError):
    """
    Raised when generator options cannot be turned into a configuration.

    Examples:
    - Unknown file naming style
    - Boolean option that is neither "true" nor "false"
    """

    pass


class RelationResolutionError(DtoForgeError):
    """
    Raised when a relation or embedded type references an unknown entity.

    This indicates a structurally invalid schema and aborts the artifact
    computation it occurred in.
    """

    def __init__(self, entity: str, field: str, target: str, *, relation: bool = True):
        self.entity = entity
        self.field = field
        self.target = target
        label = "related model" if relation else "related type"
        super().__init__(
            f"{label} '{target}' not found",
            ErrorContext(entity=entity, field=field),
        )


@dataclass
class ErrorContext:
    """
    Location of an error inside the schema.

    Attributes:
        entity: Name of the entity being processed
        field: Optional field name within that entity
    """

    entity: str
    field: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "for 'Author.books'"
        """
        if self.field:
            return f"for '{self.entity}.{self.field}'"
        return f"for '{self.entity}'"
