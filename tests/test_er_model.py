from ddl_to_er.src import Cardinality, Column, Table, Relation, Schema


def test_column_to_dict_omits_missing_reference():
    column = Column("name", "TEXT")

    assert column.to_dict() == {
        "name": "name",
        "type": "TEXT",
        "isPrimaryKey": False,
        "isForeignKey": False,
        "isNullable": True,
    }


def test_column_reference_sets_foreign_key_flag():
    column = Column("user_id", "UUID", is_nullable=False)
    column.set_reference("users", "id")

    assert column.is_foreign_key is True
    assert column.to_dict()["references"] == {"table": "users", "column": "id"}


def test_table_lookup_by_name():
    table = Table("users")
    table.add_column(Column("id", "UUID", is_primary_key=True, is_nullable=False))
    table.add_column(Column("email", "TEXT"))

    assert table.get_column("email").data_type == "TEXT"
    assert table.get_column("missing") is None
    assert [c["name"] for c in table.to_dict()["columns"]] == ["id", "email"]


def test_relation_defaults_to_one_to_many():
    relation = Relation("orders", "user_id", "users", "id")

    assert relation.cardinality is Cardinality.ONE_TO_MANY
    assert relation.to_dict()["type"] == "one-to-many"


def test_schema_helpers():
    users = Table("users")
    users.add_column(Column("id", "INT"))
    schema = Schema([users], [Relation("orders", "user_id", "users", "id")])

    assert schema.get_table("users") is users
    assert schema.get_table("orders") is None
    assert schema.has_column("users", "id")
    assert not schema.has_column("orders", "user_id")
    assert not schema.is_empty()
    assert Schema().is_empty()
    assert Schema().to_dict() == {"tables": [], "relations": []}
