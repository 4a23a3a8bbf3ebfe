"""Shared pytest fixtures for DTOFORGE tests."""

import pytest

from dtoforge.core import ir
from dtoforge.core.config import GeneratorConfig


def scalar(name: str, type: str = "String", **kwargs) -> ir.FieldSpec:
    """Build a scalar field."""
    return ir.FieldSpec(name=name, type=type, kind=ir.FieldKind.SCALAR, **kwargs)


def relation(name: str, target: str, *directives: ir.Directive, **kwargs) -> ir.FieldSpec:
    """Build a relation field carrying ``directives``."""
    return ir.FieldSpec(
        name=name,
        type=target,
        kind=ir.FieldKind.RELATION,
        annotations=ir.AnnotationSet.of(*directives),
        **kwargs,
    )


def int_id(name: str = "id") -> ir.FieldSpec:
    """Autoincrement integer identifier."""
    return scalar(name, "Int", is_id=True, is_required=True, has_default_value=True)


@pytest.fixture
def config() -> GeneratorConfig:
    """Default generator configuration."""
    return GeneratorConfig()


@pytest.fixture
def validating_config() -> GeneratorConfig:
    """Configuration with class validation enabled."""
    return GeneratorConfig(class_validation=True)


@pytest.fixture
def author() -> ir.EntitySpec:
    """Author with a list relation offering create and connect on create."""
    return ir.EntitySpec(
        name="Author",
        fields=[
            int_id(),
            scalar("name", is_required=True),
            relation(
                "books",
                "Book",
                ir.Directive.RELATION_CAN_CREATE_ON_CREATE,
                ir.Directive.RELATION_CAN_CONNECT_ON_CREATE,
                is_list=True,
            ),
        ],
    )


@pytest.fixture
def book() -> ir.EntitySpec:
    """Book owning a required relation to Author through ``authorId``."""
    return ir.EntitySpec(
        name="Book",
        fields=[
            int_id(),
            scalar("title", is_required=True),
            relation("author", "Author", is_required=True, relation_from_fields=["authorId"]),
            scalar("authorId", "Int", is_required=True, is_read_only=True),
        ],
    )


@pytest.fixture
def post() -> ir.EntitySpec:
    """Post with an automatically maintained timestamp."""
    return ir.EntitySpec(
        name="Post",
        fields=[
            scalar("id", is_id=True, is_required=True, has_default_value=True),
            scalar("title", is_required=True),
            scalar("publishedAt", "DateTime", is_required=True, is_updated_at=True),
        ],
    )


@pytest.fixture
def address() -> ir.EntitySpec:
    """Embedded structured type."""
    return ir.EntitySpec(
        name="Address",
        fields=[
            scalar("street", is_required=True),
            scalar("city"),
        ],
    )


@pytest.fixture
def customer() -> ir.EntitySpec:
    """Customer embedding an Address."""
    return ir.EntitySpec(
        name="Customer",
        fields=[
            int_id(),
            ir.FieldSpec(name="address", type="Address", kind=ir.FieldKind.TYPE, is_required=True),
        ],
    )


@pytest.fixture
def schema(
    author: ir.EntitySpec,
    book: ir.EntitySpec,
    post: ir.EntitySpec,
    address: ir.EntitySpec,
    customer: ir.EntitySpec,
) -> list[ir.EntitySpec]:
    """Every fixture entity."""
    return [author, book, post, address, customer]
