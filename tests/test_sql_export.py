"""Tests for the SQL exporter."""

import logging

import pytest

from json_table_converter.columns import add_custom_column, init_from_schema, update_column
from json_table_converter.errors import (
    DuplicateColumnError,
    DuplicateValueError,
    EmptyDataError,
    EmptyTableNameError,
    NoColumnsError,
)
from json_table_converter.sql_export import (
    export_sql,
    render_sql_value,
    sql_file_name,
    table_identifier,
)


def typed(fields, **types):
    configs = init_from_schema(fields)
    for index, field in enumerate(fields):
        if field in types:
            configs = update_column(configs, index, "sql_type", types[field])
    return configs


# ---------------------------------------------------------------------------
# Statement layout
# ---------------------------------------------------------------------------

class TestExportSql:

    def test_create_and_insert(self):
        sql = export_sql([{"id": 1, "name": "O'Brien"}], typed(["id", "name"], id="integer"), "people")
        assert sql == (
            "CREATE TABLE IF NOT EXISTS people (\n"
            "  id INT NOT NULL,\n"
            "  name VARCHAR(255) NOT NULL\n"
            ");\n"
            "INSERT INTO people (id, name) VALUES (1, 'O''Brien');\n"
        )

    def test_column_clauses(self):
        configs = typed(["a", "b", "c", "d"], b="bigint", c="float", d="integer")
        configs = update_column(configs, 0, "nullable", True)
        configs = update_column(configs, 3, "unique", True)
        sql = export_sql([], configs, "t", definition_only=True)
        assert "  a VARCHAR(255),\n" in sql
        assert "  b BIGINT NOT NULL,\n" in sql
        assert "  c FLOAT NOT NULL,\n" in sql
        assert "  d INT NOT NULL UNIQUE\n" in sql

    def test_identifiers_are_sanitized(self):
        configs = update_column(init_from_schema(["first name"]), 0, "output_name", "first-name")
        sql = export_sql([{"first name": "Ann"}], configs, " my table! ")
        assert sql.startswith("CREATE TABLE IF NOT EXISTS my_table_ (\n  first_name VARCHAR(255)")
        assert "INSERT INTO my_table_ (first_name) VALUES ('Ann');" in sql

    def test_one_insert_per_record(self):
        records = [{"id": i} for i in range(3)]
        sql = export_sql(records, typed(["id"], id="integer"), "t")
        assert sql.count("INSERT INTO") == 3
        assert "VALUES (2);" in sql

    def test_definition_only_with_no_records(self):
        sql = export_sql([], init_from_schema(["id"]), "t", definition_only=True)
        assert sql.count("CREATE TABLE") == 1
        assert "INSERT" not in sql

    def test_default_substitution(self):
        configs = update_column(typed(["name", "age"], age="integer"), 1, "default_value", "0")
        sql = export_sql([{"name": "Ann"}], configs, "t")
        assert "VALUES ('Ann', 0);" in sql

    def test_missing_value_without_default_is_null(self):
        sql = export_sql([{"name": "Ann"}, {"age": 3}], typed(["name", "age"], age="integer"), "t")
        assert "VALUES ('Ann', NULL);" in sql
        assert "VALUES (NULL, 3);" in sql

    def test_unnamed_custom_column_uses_placeholder(self, caplog):
        configs = add_custom_column(init_from_schema(["id"]))
        with caplog.at_level(logging.WARNING, logger="json_table_converter.csv_export"):
            sql = export_sql([{"id": "x"}], configs, "t")
        assert "  custom_2 VARCHAR(255) NOT NULL\n" in sql
        assert "INSERT INTO t (id, custom_2) VALUES ('x', NULL);" in sql
        assert "Custom column(s) exported without a name: custom_2" in caplog.text

    def test_custom_column_uses_default(self):
        configs = add_custom_column(init_from_schema(["id"]))
        configs = update_column(configs, 1, "output_name", "origin")
        configs = update_column(configs, 1, "default_value", "api")
        sql = export_sql([{"id": "x"}], configs, "t")
        assert "INSERT INTO t (id, origin) VALUES ('x', 'api');" in sql


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:

    def test_duplicate_values_in_unique_column(self):
        configs = update_column(typed(["id"], id="integer"), 0, "unique", True)
        with pytest.raises(DuplicateValueError, match="id"):
            export_sql([{"id": 1}, {"id": 1}], configs, "t")

    def test_duplicates_compare_string_forms(self):
        configs = update_column(init_from_schema(["id"]), 0, "unique", True)
        with pytest.raises(DuplicateValueError):
            export_sql([{"id": 1}, {"id": "1"}], configs, "t")

    def test_duplicate_objects_ignore_key_order(self):
        configs = update_column(init_from_schema(["geo"]), 0, "unique", True)
        with pytest.raises(DuplicateValueError):
            export_sql([{"geo": {"a": 1, "b": 2}}, {"geo": {"b": 2, "a": 1}}], configs, "t")

    def test_duplicate_defaults_are_caught(self):
        configs = update_column(init_from_schema(["code"]), 0, "unique", True)
        configs = update_column(configs, 0, "default_value", "n/a")
        with pytest.raises(DuplicateValueError, match="n/a"):
            export_sql([{}, {}], configs, "t")

    def test_nulls_do_not_violate_unique(self):
        configs = update_column(init_from_schema(["code"]), 0, "unique", True)
        configs = update_column(configs, 0, "nullable", True)
        sql = export_sql([{}, {"code": None}], configs, "t")
        assert sql.count("VALUES (NULL);") == 2

    def test_definition_only_skips_unique_check(self):
        configs = update_column(init_from_schema(["id"]), 0, "unique", True)
        sql = export_sql([{"id": 1}, {"id": 1}], configs, "t", definition_only=True)
        assert "UNIQUE" in sql

    def test_identifier_collision(self):
        configs = init_from_schema(["user-name", "user name"])
        with pytest.raises(DuplicateColumnError) as excinfo:
            export_sql([{"user-name": 1, "user name": 2}], configs, "t")
        assert "user-name" in str(excinfo.value)
        assert "user name" in str(excinfo.value)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_table_name(self, name):
        with pytest.raises(EmptyTableNameError):
            export_sql([{"a": 1}], init_from_schema(["a"]), name)

    def test_no_records(self):
        with pytest.raises(EmptyDataError):
            export_sql([], init_from_schema(["a"]), "t")

    def test_no_columns(self):
        with pytest.raises(NoColumnsError):
            export_sql([{"a": 1}], [], "t")


# ---------------------------------------------------------------------------
# Value rendering
# ---------------------------------------------------------------------------

class TestRenderSqlValue:

    @pytest.mark.parametrize("value,expected", [
        ("42", "42"),
        (42, "42"),
        (3.0, "3"),
        (3.5, "0"),
        ("-5", "0"),
        ("12abc", "0"),
        (True, "0"),
        ({"a": 1}, "0"),
        (None, "NULL"),
    ])
    def test_integer(self, value, expected):
        assert render_sql_value(value, "integer") == expected
        assert render_sql_value(value, "bigint") == expected

    @pytest.mark.parametrize("value,expected", [
        ("1.5", "1.5"),
        (2, "2.0"),
        ("-3e2", "-300.0"),
        ("abc", "0.0"),
        ("inf", "0.0"),
        ("", "0.0"),
        (None, "NULL"),
    ])
    def test_float(self, value, expected):
        assert render_sql_value(value, "float") == expected

    def test_varchar_lat_lng(self):
        assert render_sql_value({"lat": 40.7, "lng": -74}, "varchar") == "'40.7,-74'"

    def test_varchar_other_objects_are_json(self):
        assert render_sql_value({"lat": 1, "lng": 2, "alt": 3}, "varchar") == "'{\"lat\":1,\"lng\":2,\"alt\":3}'"
        assert render_sql_value(["it's"], "varchar") == "'[\"it''s\"]'"

    def test_varchar_scalars(self):
        assert render_sql_value("it's", "varchar") == "'it''s'"
        assert render_sql_value(False, "varchar") == "'false'"
        assert render_sql_value(None, "varchar") == "NULL"


class TestNames:

    def test_table_identifier(self):
        assert table_identifier("  sales.2024 ") == "sales_2024"

    def test_sql_file_name(self):
        assert sql_file_name("my table") == "my_table_data.sql"
