"""Tests for update DTO parameters."""

from __future__ import annotations

from conftest import relation, scalar

from dtoforge.compute import compute_update_dto_params
from dtoforge.core import ir

D = ir.Directive


def _stmt(source: str, *names: str) -> ir.ImportStatement:
    return ir.ImportStatement(source=source, names=names)


def _annotated(field: ir.FieldSpec, *directives: ir.Directive) -> ir.FieldSpec:
    return field.model_copy(update={"annotations": ir.AnnotationSet.of(*directives)})


def _with_annotations(model: ir.EntitySpec, name: str, *directives: ir.Directive):
    fields = [_annotated(f, *directives) if f.name == name else f for f in model.fields]
    return model.model_copy(update={"fields": fields})


class TestPostUpdate:
    def test_timestamp_dropped(self, post, config):
        params = compute_update_dto_params(post, [post], config)

        assert params.kind == ir.ArtifactKind.UPDATE
        assert params.field_names() == ["title"]

        title = params.get_field("title")
        assert not title.is_required
        assert not title.is_nullable

    def test_update_optional_timestamp(self, post, config):
        model = _with_annotations(post, "publishedAt", D.UPDATE_OPTIONAL)
        params = compute_update_dto_params(model, [model], config)

        published_at = params.get_field("publishedAt")
        assert params.field_names() == ["title", "publishedAt"]
        assert not published_at.is_required
        assert [(p.name, p.value) for p in published_at.api_properties] == [
            ("type", "string"),
            ("format", "date-time"),
            ("required", "false"),
        ]

    def test_update_optional_id(self, post, config):
        model = _with_annotations(post, "id", D.UPDATE_OPTIONAL)
        params = compute_update_dto_params(model, [model], config)
        assert params.field_names() == ["id", "title"]

    def test_hidden(self, post, config):
        model = _with_annotations(post, "title", D.UPDATE_HIDDEN)
        assert compute_update_dto_params(model, [model], config).fields == []

    def test_empty_entity(self, config):
        model = ir.EntitySpec(name="Empty")
        params = compute_update_dto_params(model, [model], config)
        assert params.fields == []
        assert params.imports == []


class TestForeignKeys:
    def test_reincluded_foreign_key_stays_out(self, author, book, config):
        model = _with_annotations(book, "authorId", D.RELATION_INCLUDE_ID)
        params = compute_update_dto_params(model, [author, model], config)
        assert params.field_names() == ["title"]


class TestRelations:
    def test_create_modifiers_do_not_apply(self, author, schema, config):
        params = compute_update_dto_params(author, schema, config)
        assert params.field_names() == ["name"]
        assert params.imports == [_stmt("@nestjs/swagger", "ApiProperty")]

    def test_composite(self, author, book, config):
        model = _with_annotations(
            author, "books", D.RELATION_CAN_CREATE_ON_UPDATE, D.RELATION_CAN_CONNECT_ON_UPDATE
        )
        params = compute_update_dto_params(model, [model, book], config)

        books = params.get_field("books")
        assert books.type == "UpdateAuthorBooksRelationInputDto"
        assert not books.is_list
        assert not books.is_required
        assert not books.is_nullable
        assert [c.name for c in params.extra_classes] == ["UpdateAuthorBooksRelationInputDto"]
        assert params.api_extra_models[-1] == "UpdateAuthorBooksRelationInputDto"

    def test_single_mode(self, author, config):
        model = ir.EntitySpec(
            name="Book",
            fields=[relation("author", "Author", D.RELATION_CAN_UPDATE_ON_UPDATE)],
        )
        params = compute_update_dto_params(model, [author, model], config)

        field = params.get_field("author")
        assert field.type == "UpdateAuthorDto"
        assert field.coercion_target is None
        assert field.api_properties[-1] == ir.AnnotationSpec(
            name="type", value="UpdateAuthorDto", no_encapsulation=True
        )
        assert params.imports[-1] == _stmt("./update-author.dto", "UpdateAuthorDto")


class TestEmbeddedTypes:
    def test_patched_through_update_dto(self, customer, address, validating_config):
        params = compute_update_dto_params(customer, [customer, address], validating_config)

        field = params.get_field("address")
        assert [(v.name, v.value) for v in field.class_validators] == [
            ("IsOptional", None),
            ("ValidateNested", None),
            ("Type", "() => UpdateAddressDto"),
        ]
        assert params.imports[-1] == _stmt("./update-address.dto", "UpdateAddressDto")

    def test_full_update(self, customer, address, validating_config):
        model = _with_annotations(customer, "address", D.TYPE_FULL_UPDATE)
        params = compute_update_dto_params(model, [model, address], validating_config)

        field = params.get_field("address")
        assert field.class_validators[-1].value == "() => CreateAddressDto"
        assert params.imports[-1] == _stmt("./create-address.dto", "CreateAddressDto")


class TestImports:
    def test_api_response_property(self, config):
        model = ir.EntitySpec(
            name="Post",
            fields=[_annotated(scalar("title", is_required=True), D.UPDATE_API_RESPONSE)],
        )
        params = compute_update_dto_params(model, [model], config)
        assert params.get_field("title").update_api_response
        assert params.imports == [_stmt("@nestjs/swagger", "ApiProperty", "ApiResponseProperty")]

    def test_client_import_path(self, config):
        config = config.model_copy(update={"prisma_client_import_path": "../generated/client"})
        model = ir.EntitySpec(name="Invoice", fields=[scalar("total", "Decimal")])
        params = compute_update_dto_params(model, [model], config)
        assert params.imports[0] == _stmt("../generated/client", "Prisma")
