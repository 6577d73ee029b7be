"""SQL rendering: one ``CREATE TABLE IF NOT EXISTS`` plus one ``INSERT`` per record.

Type vocabulary is fixed to ``varchar``, ``integer``, ``bigint`` and
``float``. Values are coerced per declared column type rather than per
JSON type, so a column declared ``integer`` never emits a quoted string.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List, Sequence

from .accessors import resolve_value, stable_key, to_text
from .columns import ColumnConfig
from .csv_export import warn_placeholder_names
from .errors import DuplicateValueError, EmptyDataError, EmptyTableNameError, NoColumnsError
from .identifiers import sanitize_identifier, unique_identifiers

logger = logging.getLogger(__name__)

TYPE_MAP = {
    'varchar': 'VARCHAR(255)',
    'integer': 'INT',
    'bigint': 'BIGINT',
    'float': 'FLOAT',
}

_DIGITS = re.compile(r'[0-9]+')
_NUMBER = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def quote_sql_string(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def table_identifier(table_name: str) -> str:
    name = (table_name or '').strip()
    if not name:
        raise EmptyTableNameError()
    return sanitize_identifier(name)


def sql_file_name(table_name: str) -> str:
    return f"{table_identifier(table_name)}_data.sql"


def column_clause(identifier: str, column: ColumnConfig) -> str:
    clause = f"{identifier} {TYPE_MAP[column.sql_type]}"
    if not column.nullable:
        clause += " NOT NULL"
    if column.unique:
        clause += " UNIQUE"
    return clause


def build_create_table(table: str, identifiers: Sequence[str], columns: Sequence[ColumnConfig]) -> str:
    clauses = ",\n".join(f"  {column_clause(i, c)}" for i, c in zip(identifiers, columns))
    return f"CREATE TABLE IF NOT EXISTS {table} (\n{clauses}\n);"


def _is_lat_lng(value: Any) -> bool:
    return isinstance(value, dict) and set(value) == {'lat', 'lng'}


def _parse_float(text: str):
    text = text.strip()
    if not _NUMBER.fullmatch(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def render_sql_value(value: Any, sql_type: str) -> str:
    """Render a resolved value as a SQL literal for a column of ``sql_type``."""
    if value is None:
        return 'NULL'

    if sql_type in ('integer', 'bigint'):
        text = to_text(value)
        return text if _DIGITS.fullmatch(text) else '0'

    if sql_type == 'float':
        number = _parse_float(to_text(value))
        return repr(number) if number is not None else '0.0'

    if _is_lat_lng(value):
        return quote_sql_string(f"{to_text(value['lat'])},{to_text(value['lng'])}")
    return quote_sql_string(to_text(value))


def check_unique_values(records: Sequence[Dict[str, Any]], columns: Sequence[ColumnConfig]) -> None:
    """Raise :class:`DuplicateValueError` if a unique column repeats a value.

    Values are compared after default substitution. Absent values with no
    default become ``NULL``, which a UNIQUE constraint does not compare.
    """
    for column in columns:
        if not column.unique:
            continue
        seen = set()
        for record in records:
            value = resolve_value(record, column)
            if value is None:
                continue
            key = stable_key(value)
            if key in seen:
                raise DuplicateValueError(column.header, key)
            seen.add(key)


def build_insert(table: str, identifiers: Sequence[str], columns: Sequence[ColumnConfig], record: Dict[str, Any]) -> str:
    values = ", ".join(render_sql_value(resolve_value(record, c), c.sql_type) for c in columns)
    return f"INSERT INTO {table} ({', '.join(identifiers)}) VALUES ({values});"


def export_sql(
    records: Sequence[Dict[str, Any]],
    columns: Sequence[ColumnConfig],
    table_name: str,
    definition_only: bool = False,
) -> str:
    """Render the table definition and, unless ``definition_only``, its rows.

    All validation happens before any statement is built, so a failure
    yields no partial output.
    """
    table = table_identifier(table_name)
    if not columns:
        raise NoColumnsError()
    identifiers = unique_identifiers([c.header for c in columns])
    if not definition_only:
        if not records:
            raise EmptyDataError()
        check_unique_values(records, columns)
    warn_placeholder_names(columns)

    statements: List[str] = [build_create_table(table, identifiers, columns)]
    if not definition_only:
        statements.extend(build_insert(table, identifiers, columns, rec) for rec in records)

    logger.info(
        "Rendered SQL for table %s: %d column(s), %d insert(s)",
        table, len(columns), len(statements) - 1,
    )
    return "\n".join(statements) + "\n"
