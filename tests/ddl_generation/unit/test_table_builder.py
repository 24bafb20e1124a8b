"""DDL generator tests."""

from __future__ import annotations

import pytest
from simple_schema_builder.ddl_generation import (
    ColumnDefinition,
    DDLGenerator,
    Dialect,
    ForeignKeyConstraint,
    RelationComment,
    generate_ddl,
)
from simple_schema_builder.field_modeling import FieldNode, FieldType
from simple_schema_builder.schema_management import (
    DepthExceededError,
    SchemaDocument,
    UnknownTypeWarning,
    generate_schema,
    read_schema_document,
)


def _document(properties: dict, title: str | None = None) -> SchemaDocument:
    raw: dict = {"type": "object", "properties": properties}
    if title is not None:
        raw["title"] = title
    return read_schema_document(raw)


def _address_document() -> SchemaDocument:
    return _document(
        {
            "name": {"type": "string"},
            "address": {"type": "object", "properties": {"city": {"type": "string"}}},
        },
        title="person",
    )


def _orders_document() -> SchemaDocument:
    return _document(
        {
            "id": {"type": "integer"},
            "orders": {
                "type": "array",
                "items": {"type": "object", "properties": {"total": {"type": "number"}}},
            },
        },
        title="customer",
    )


def test_flat_table_has_no_foreign_key_section() -> None:
    document = _document(
        {"name": {"type": "string"}, "age": {"type": "integer"}},
        title="person",
    )

    ddl = generate_ddl(document, Dialect.POSTGRESQL)

    assert ddl == "CREATE TABLE person (\nname TEXT,\nage INTEGER,\n\n);"


def test_missing_title_uses_placeholder_table_name() -> None:
    ddl = generate_ddl(_document({"flag": {"type": "boolean"}}), Dialect.SQLITE)

    assert ddl == "CREATE TABLE table_name (\nflag INTEGER,\n\n);"


def test_nested_object_becomes_foreign_key_and_embedded_table() -> None:
    ddl = generate_ddl(_address_document(), Dialect.POSTGRESQL)

    assert ddl == (
        "CREATE TABLE person (\n"
        "name TEXT,\n"
        "address_id INTEGER,\n"
        "\n-- Nested table for address\n"
        "CREATE TABLE address (\ncity TEXT,\n\n);\n"
        "FOREIGN KEY (address_id) REFERENCES address(id)\n"
        ");"
    )


def test_array_of_objects_becomes_items_table_with_parent_id() -> None:
    ddl = generate_ddl(_orders_document(), Dialect.POSTGRESQL)

    assert ddl == (
        "CREATE TABLE customer (\n"
        "id INTEGER,\n"
        "\n-- Items table for orders\n"
        "CREATE TABLE orders_items (\ntotal NUMERIC,\nparent_id INTEGER,\n\n);\n"
        "-- One-to-Many relationship: Create a separate table for orders "
        "with a foreign key to this table\n"
        ");"
    )


def test_array_of_scalars_is_a_plain_column_without_subordinate_table() -> None:
    document = _document({"tags": {"type": "array", "items": {"type": "string"}}}, title="post")

    table = DDLGenerator(Dialect.POSTGRESQL).build(document)

    assert table.columns == (ColumnDefinition("tags", "TEXT"),)
    assert table.constraints == ()
    assert [child.name for child in table.iter_tables()] == ["post"]


def test_constraints_follow_declaration_order_and_join_with_commas() -> None:
    document = _document(
        {
            "billing": {"type": "object", "properties": {"iban": {"type": "string"}}},
            "lines": {"type": "array", "items": {"type": "object", "properties": {}}},
            "shipping": {"type": "object", "properties": {"city": {"type": "string"}}},
        },
        title="invoice",
    )

    table = DDLGenerator(Dialect.MYSQL).build(document)
    ddl = DDLGenerator(Dialect.MYSQL).generate(document)

    assert table.constraints == (
        ForeignKeyConstraint("billing_id", "billing"),
        RelationComment("lines"),
        ForeignKeyConstraint("shipping_id", "shipping"),
    )
    assert ddl.endswith(
        "FOREIGN KEY (billing_id) REFERENCES billing(id),\n"
        "-- One-to-Many relationship: Create a separate table for lines "
        "with a foreign key to this table,\n"
        "FOREIGN KEY (shipping_id) REFERENCES shipping(id)\n);"
    )


def test_iter_tables_lists_every_table_depth_first() -> None:
    document = _document(
        {
            "address": {
                "type": "object",
                "properties": {
                    "geo": {"type": "object", "properties": {"lat": {"type": "number"}}},
                },
            },
            "orders": {
                "type": "array",
                "items": {"type": "object", "properties": {"sku": {"type": "string"}}},
            },
        },
        title="customer",
    )

    table = DDLGenerator(Dialect.POSTGRESQL).build(document)

    assert [child.name for child in table.iter_tables()] == [
        "customer",
        "address",
        "geo",
        "orders_items",
    ]
    assert all(child.dialect is Dialect.POSTGRESQL for child in table.iter_tables())


def test_items_table_keeps_existing_parent_id_position() -> None:
    document = _document(
        {
            "rows": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {"parent_id": {"type": "string"}, "value": {"type": "number"}},
                },
            }
        }
    )

    (items_table,) = DDLGenerator(Dialect.POSTGRESQL).build(document).embedded_tables

    assert items_table.columns == (
        ColumnDefinition("parent_id", "INTEGER"),
        ColumnDefinition("value", "NUMERIC"),
    )


def test_object_without_properties_is_a_plain_column() -> None:
    table = DDLGenerator(Dialect.MYSQL).build(_document({"meta": {"type": "object"}}))

    assert table.columns == (ColumnDefinition("meta", "TEXT"),)
    assert table.embedded_tables == ()


def test_mysql_and_sqlite_share_structure_with_dialect_specific_types() -> None:
    fields = [
        FieldNode(name="name", type=FieldType.STRING, required=True),
        FieldNode(
            name="address",
            type=FieldType.OBJECT,
            children=(FieldNode(name="city", type=FieldType.STRING),),
        ),
        FieldNode(
            name="orders",
            type=FieldType.ARRAY,
            children=(
                FieldNode(
                    name="order",
                    type=FieldType.OBJECT,
                    children=(FieldNode(name="total", type=FieldType.NUMBER),),
                ),
            ),
        ),
    ]
    document = generate_schema(fields, title="customer")

    mysql = DDLGenerator(Dialect.MYSQL).build(document)
    sqlite = DDLGenerator(Dialect.SQLITE).build(document)

    def structure(table):
        return [
            (child.name, [column.name for column in child.columns], child.constraints)
            for child in table.iter_tables()
        ]

    assert structure(mysql) == structure(sqlite)
    assert mysql.columns == (
        ColumnDefinition("name", "VARCHAR(255)"),
        ColumnDefinition("address_id", "INT"),
    )
    assert sqlite.columns == (
        ColumnDefinition("name", "TEXT"),
        ColumnDefinition("address_id", "INTEGER"),
    )
    mysql_items = list(mysql.iter_tables())[-1]
    sqlite_items = list(sqlite.iter_tables())[-1]
    assert mysql_items.columns[-1] == ColumnDefinition("parent_id", "INT")
    assert sqlite_items.columns[-1] == ColumnDefinition("parent_id", "NUMERIC")


def test_validation_attributes_never_become_sql_constraints() -> None:
    document = _document(
        {
            "code": {"type": "string", "pattern": "^[A-Z]+$", "format": "uuid"},
            "tags": {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
        },
        title="item",
    )

    ddl = generate_ddl(document, Dialect.POSTGRESQL)

    assert "UNIQUE" not in ddl
    assert "CHECK" not in ddl
    assert ddl == "CREATE TABLE item (\ncode TEXT,\ntags TEXT,\n\n);"


def test_unknown_property_type_warns_but_still_generates() -> None:
    document = _document({"payload": {"type": "binary"}}, title="blob")

    with pytest.warns(UnknownTypeWarning):
        ddl = generate_ddl(document, Dialect.POSTGRESQL)

    assert ddl == "CREATE TABLE blob (\npayload TEXT,\n\n);"


def test_depth_guard_applies_to_table_building() -> None:
    document = _address_document()

    with pytest.raises(DepthExceededError, match="address.city"):
        DDLGenerator(Dialect.POSTGRESQL, max_depth=1).build(document)


def test_generator_accepts_dialect_text() -> None:
    assert DDLGenerator("sqlite").dialect is Dialect.SQLITE  # type: ignore[arg-type]
    assert generate_ddl(_document({"n": {"type": "number"}}), "mysql").startswith(
        "CREATE TABLE table_name (\nn DECIMAL,"
    )


def test_items_table_columns_count_the_items_level_for_depth() -> None:
    document = _orders_document()

    with pytest.raises(DepthExceededError, match="orders.items.total"):
        DDLGenerator(Dialect.POSTGRESQL, max_depth=2).build(document)
    table = DDLGenerator(Dialect.POSTGRESQL, max_depth=3).build(document)

    assert [child.name for child in table.iter_tables()] == ["customer", "orders_items"]
