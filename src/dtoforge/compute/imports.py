"""
Import canonicalization.

Merges import statements gathered by the pipeline stages into one statement
per module specifier, keeping first-seen order so generated output stays
stable between runs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from dtoforge.core.ir import FieldKind, ImportStatement, ParsedField

CLASS_VALIDATOR = "class-validator"
CLASS_TRANSFORMER = "class-transformer"
NESTJS_SWAGGER = "@nestjs/swagger"

# Scalars rendered through the client's ``Prisma`` namespace (Prisma.Decimal, Prisma.JsonValue)
PRISMA_NAMESPACE_SCALARS = frozenset({"Decimal", "Json"})

ClientImportResolver = Callable[[Sequence[ParsedField], str], list[ImportStatement]]


def canonicalize_imports(imports: Iterable[ImportStatement]) -> list[ImportStatement]:
    """
    Collapse statements sharing a source into one.

    The result keeps the position of each source's first occurrence, and each
    statement keeps its names in first-seen order without duplicates.
    Applying it to an already canonical list returns an equal list.
    """
    merged: dict[str, list[str]] = {}
    for statement in imports:
        names = merged.setdefault(statement.source, [])
        for name in statement.names:
            if name not in names:
                names.append(name)
    return [ImportStatement(source=source, names=tuple(names)) for source, names in merged.items()]


def imports_from_client(
    fields: Sequence[ParsedField], import_path: str
) -> list[ImportStatement]:
    """
    Imports from the database client module required by output field types.

    Enums are referenced by name; Decimal and Json scalars need the
    ``Prisma`` namespace.
    """
    enums: list[str] = []
    for field in fields:
        if field.kind == FieldKind.ENUM and field.type not in enums:
            enums.append(field.type)
    needs_namespace = any(
        f.kind == FieldKind.SCALAR and f.type in PRISMA_NAMESPACE_SCALARS for f in fields
    )
    if not enums and not needs_namespace:
        return []
    names = (["Prisma"] if needs_namespace else []) + enums
    return [ImportStatement(source=import_path, names=tuple(names))]
