"""
Generator configuration models.

Parses the option block a schema generator receives and provides typed
configuration for the derivation engine and the naming conventions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)


class FileNamingStyle(str, Enum):
    """Supported casing for generated file names."""

    CAMEL = "camel"
    KEBAB = "kebab"
    PASCAL = "pascal"
    SNAKE = "snake"


class GeneratorConfig(BaseModel):
    """
    Complete generator configuration.

    Field names are snake_case; the camelCase option names used in schema
    generator blocks are accepted as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    no_dependencies: bool = Field(default=False, alias="noDependencies")
    class_validation: bool = Field(default=False, alias="classValidation")
    prisma_client_import_path: str = Field(
        default="@prisma/client", alias="prismaClientImportPath"
    )
    file_naming_style: FileNamingStyle = Field(
        default=FileNamingStyle.KEBAB, alias="fileNamingStyle"
    )
    entity_prefix: str = Field(default="", alias="entityPrefix")
    entity_suffix: str = Field(default="", alias="entitySuffix")
    dto_suffix: str = Field(default="Dto", alias="dtoSuffix")
    create_dto_prefix: str = Field(default="Create", alias="createDtoPrefix")
    update_dto_prefix: str = Field(default="Update", alias="updateDtoPrefix")
    connect_dto_prefix: str = Field(default="Connect", alias="connectDtoPrefix")

    @model_validator(mode="after")
    def _resolve_conflicts(self) -> GeneratorConfig:
        if self.no_dependencies and self.class_validation:
            logger.warning(
                "classValidation requires the class-validator dependency; "
                "disabled because noDependencies is set"
            )
            object.__setattr__(self, "class_validation", False)
        return self

    @property
    def api_properties_enabled(self) -> bool:
        """Whether documentation (``@nestjs/swagger``) decorators are derived."""
        return not self.no_dependencies

    @property
    def class_validators_enabled(self) -> bool:
        """Whether validation (``class-validator``) decorators are derived."""
        return self.class_validation and not self.no_dependencies

    @classmethod
    def from_generator_options(cls, options: Mapping[str, Any]) -> GeneratorConfig:
        """
        Build a config from a generator option block.

        Option values arrive as strings; boolean options must be
        ``"true"`` or ``"false"``. Unknown options are ignored.

        Raises:
            ConfigError: If an option value is invalid
        """
        values: dict[str, Any] = {}
        for key, raw in options.items():
            info = _OPTION_FIELDS.get(key)
            if info is None:
                logger.debug("Ignoring unknown generator option %r", key)
                continue
            name, is_bool = info
            values[name] = _parse_bool(key, raw) if is_bool else raw

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid generator options: {e}") from e


def _parse_bool(key: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise ConfigError(f"Option '{key}' must be 'true' or 'false', got {raw!r}")


def _build_option_fields() -> dict[str, tuple[str, bool]]:
    fields: dict[str, tuple[str, bool]] = {}
    for name, info in GeneratorConfig.model_fields.items():
        is_bool = info.annotation in (bool, "bool")
        fields[name] = (name, is_bool)
        if info.alias:
            fields[info.alias] = (name, is_bool)
    return fields


_OPTION_FIELDS = _build_option_fields()
