"""Tests for relation input synthesis."""

from __future__ import annotations

import pytest
from conftest import relation

from dtoforge.compute.relation_input import (
    CREATE_PERMISSIONS,
    UPDATE_PERMISSIONS,
    RelationMode,
    generate_relation_input,
)
from dtoforge.core import ir
from dtoforge.core.config import GeneratorConfig
from dtoforge.core.errors import RelationResolutionError
from dtoforge.core.naming import NamingConventions

D = ir.Directive


def _generate(
    field: ir.FieldSpec,
    model: ir.EntitySpec,
    all_models: list[ir.EntitySpec],
    kind: ir.ArtifactKind = ir.ArtifactKind.CREATE,
    config: GeneratorConfig | None = None,
):
    config = config or GeneratorConfig()
    return generate_relation_input(
        relation=field,
        model=model,
        all_models=all_models,
        config=config,
        naming=NamingConventions(config),
        kind=kind,
        permissions=CREATE_PERMISSIONS if kind == ir.ArtifactKind.CREATE else UPDATE_PERMISSIONS,
    )


class TestPermissions:
    def test_create_ignores_update_mode(self):
        field = relation(
            "books", "Book", D.RELATION_CAN_CREATE_ON_CREATE, D.RELATION_CAN_UPDATE_ON_UPDATE
        )
        assert CREATE_PERMISSIONS.enabled_modes(field) == [RelationMode.CREATE]

    def test_update_modes_in_fixed_order(self):
        field = relation(
            "books",
            "Book",
            D.RELATION_CAN_UPDATE_ON_UPDATE,
            D.RELATION_CAN_CONNECT_ON_UPDATE,
            D.RELATION_CAN_CREATE_ON_UPDATE,
        )
        assert UPDATE_PERMISSIONS.enabled_modes(field) == [
            RelationMode.CREATE,
            RelationMode.CONNECT,
            RelationMode.UPDATE,
        ]


class TestSingleMode:
    """One permitted mode references the related DTO directly."""

    def test_connect_only(self, author: ir.EntitySpec, book: ir.EntitySpec):
        field = relation("author", "Author", D.RELATION_CAN_CONNECT_ON_CREATE)
        result = _generate(field, book, [author, book])

        assert result.type == "ConnectAuthorDto"
        assert not result.is_composite
        assert result.generated_classes == []
        assert result.imports == [
            ir.ImportStatement(source="./connect-author.dto", names=("ConnectAuthorDto",))
        ]

    def test_self_reference_has_no_self_import(self):
        field = relation("children", "Category", D.RELATION_CAN_CREATE_ON_CREATE, is_list=True)
        category = ir.EntitySpec(name="Category", fields=[field])
        result = _generate(field, category, [category])

        assert result.type == "CreateCategoryDto"
        assert result.imports == []


class TestComposite:
    def test_create_and_connect(self, author: ir.EntitySpec, book: ir.EntitySpec):
        books = author.get_field("books")
        result = _generate(books, author, [author, book])

        assert result.is_composite
        assert result.type == "CreateAuthorBooksRelationInputDto"
        assert len(result.generated_classes) == 1
        generated = result.generated_classes[0]
        assert generated.name == "CreateAuthorBooksRelationInputDto"
        assert [(f.name, f.type, f.is_list) for f in generated.fields] == [
            ("create", "CreateBookDto", True),
            ("connect", "ConnectBookDto", True),
        ]
        assert result.api_extra_models == [
            "CreateBookDto",
            "ConnectBookDto",
            "CreateAuthorBooksRelationInputDto",
        ]
        assert [s.source for s in result.imports] == ["./create-book.dto", "./connect-book.dto"]

    def test_sub_field_documentation(self, author: ir.EntitySpec, book: ir.EntitySpec):
        result = _generate(author.get_field("books"), author, [author, book])
        create = result.generated_classes[0].fields[0]
        assert [(p.name, p.value) for p in create.api_properties] == [
            ("type", "CreateBookDto"),
            ("isArray", "true"),
            ("required", "false"),
        ]
        assert all(p.no_encapsulation for p in create.api_properties)
        assert create.class_validators == []

    def test_update_three_modes(self, author: ir.EntitySpec, book: ir.EntitySpec):
        field = relation(
            "author",
            "Author",
            D.RELATION_CAN_CREATE_ON_UPDATE,
            D.RELATION_CAN_CONNECT_ON_UPDATE,
            D.RELATION_CAN_UPDATE_ON_UPDATE,
        )
        result = _generate(field, book, [author, book], kind=ir.ArtifactKind.UPDATE)

        assert result.type == "UpdateBookAuthorRelationInputDto"
        assert [f.type for f in result.generated_classes[0].fields] == [
            "CreateAuthorDto",
            "ConnectAuthorDto",
            "UpdateAuthorDto",
        ]
        assert [f.is_list for f in result.generated_classes[0].fields] == [False, False, False]

    def test_class_validation(self, author: ir.EntitySpec, book: ir.EntitySpec):
        config = GeneratorConfig(class_validation=True)
        result = _generate(author.get_field("books"), author, [author, book], config=config)

        connect = result.generated_classes[0].fields[1]
        assert [(v.name, v.value) for v in connect.class_validators] == [
            ("IsOptional", None),
            ("IsArray", None),
            ("ValidateNested", "{ each: true }"),
            ("Type", "() => ConnectBookDto"),
        ]
        assert [v.name for v in result.class_validators] == [
            "IsOptional",
            "IsArray",
            "ValidateNested",
            "Type",
        ]

    def test_no_dependencies(self, author: ir.EntitySpec, book: ir.EntitySpec):
        config = GeneratorConfig(no_dependencies=True)
        result = _generate(author.get_field("books"), author, [author, book], config=config)

        assert result.api_extra_models == []
        assert all(f.api_properties == [] for f in result.generated_classes[0].fields)

    def test_output_locations(self, author: ir.EntitySpec, book: ir.EntitySpec):
        author = author.model_copy(update={"output": ir.OutputLocations(dto="author/dto")})
        book = book.model_copy(update={"output": ir.OutputLocations(dto="book/dto")})
        result = _generate(author.get_field("books"), author, [author, book])

        assert [s.source for s in result.imports] == [
            "../../book/dto/create-book.dto",
            "../../book/dto/connect-book.dto",
        ]


class TestResolution:
    def test_unknown_target(self, author: ir.EntitySpec):
        with pytest.raises(RelationResolutionError) as exc_info:
            _generate(author.get_field("books"), author, [author])

        error = exc_info.value
        assert error.entity == "Author"
        assert error.field == "books"
        assert error.target == "Book"
        assert str(error) == "for 'Author.books': related model 'Book' not found"
