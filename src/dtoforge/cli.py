"""
DTOFORGE CLI.

Debugging surface for the derivation engine: loads entity descriptors from
a JSON file and shows the parameter records computed for them. It renders
no target source code and writes no files.

Usage:
    dtoforge inspect schema.json
    dtoforge inspect schema.json --entity Author --kind create --json
    dtoforge inspect schema.json -o classValidation=true -o fileNamingStyle=snake
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from dtoforge import __version__
from dtoforge.compute import compute_params
from dtoforge.core.config import GeneratorConfig
from dtoforge.core.errors import ConfigError, DtoForgeError
from dtoforge.core.ir import ArtifactKind, ArtifactParams, EntitySpec

app = typer.Typer(
    help="Inspect DTO parameters derived from annotated schema entities",
    no_args_is_help=True,
)

console = Console()

_ENTITIES = TypeAdapter(list[EntitySpec])


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dtoforge {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Inspect DTO parameters derived from annotated schema entities."""


def load_entities(path: Path) -> list[EntitySpec]:
    """
    Load entity descriptors from JSON.

    Accepts either a list of entities or an object with an ``entities`` key.
    """
    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = data.get("entities", [])
    return _ENTITIES.validate_python(data)


def parse_options(pairs: list[str]) -> dict[str, str]:
    """Turn ``key=value`` pairs into a generator option mapping."""
    options: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Option '{pair}' must have the form key=value")
        options[key.strip()] = value.strip()
    return options


def _params_to_dict(params: ArtifactParams) -> dict[str, object]:
    data = params.model_dump(
        mode="json",
        exclude={"model": True, "fields": {"__all__": {"field"}}},
    )
    data["model"] = params.model.name
    return data


def _print_table(params: ArtifactParams) -> None:
    table = Table(title=f"{params.model.name} ({params.kind.value})")
    table.add_column("Field", style="cyan")
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Nullable")
    table.add_column("List")
    for field in params.fields:
        table.add_row(
            field.name,
            field.type,
            "yes" if field.is_required else "no",
            "yes" if field.is_nullable else "no",
            "yes" if field.is_list else "no",
        )
    console.print(table)
    for statement in params.imports:
        names = ", ".join(statement.names)
        console.print(f"  [dim]import {{ {names} }} from '{statement.source}'[/dim]")
    extra_classes = getattr(params, "extra_classes", [])
    for extra in extra_classes:
        console.print(f"  [yellow]extra class[/yellow] {extra.name}")


@app.command()
def inspect(
    schema: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="JSON file with entity descriptors"),
    ],
    entity: Annotated[
        str | None, typer.Option("--entity", "-e", help="Only this entity")
    ] = None,
    kind: Annotated[
        ArtifactKind | None, typer.Option("--kind", "-k", help="Only this artifact kind")
    ] = None,
    option: Annotated[
        list[str] | None,
        typer.Option("--option", "-o", help="Generator option as key=value (repeatable)"),
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Show the artifact parameters computed for the entities of SCHEMA."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        entities = load_entities(schema)
        config = GeneratorConfig.from_generator_options(parse_options(option or []))
    except (json.JSONDecodeError, ValidationError, DtoForgeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    selected = [e for e in entities if entity is None or e.name == entity]
    if not selected:
        typer.echo(f"Entity not found: {entity}", err=True)
        raise typer.Exit(code=1)

    kinds = [kind] if kind else list(ArtifactKind)
    results: list[ArtifactParams] = []
    try:
        for model in selected:
            for artifact_kind in kinds:
                results.append(compute_params(artifact_kind, model, entities, config))
    except DtoForgeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_json:
        console.print_json(json.dumps([_params_to_dict(p) for p in results]))
        return

    for params in results:
        _print_table(params)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
