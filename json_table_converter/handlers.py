from __future__ import annotations

import logging
from typing import Any, List, Optional

import gradio as gr
import pandas as pd

from .columns import ColumnConfig, update_column
from .errors import ConversionError
from .io_utils import save_artifact
from .session import ConverterSession

logger = logging.getLogger(__name__)

COLUMN_TABLE_HEADERS = ["JSON Key", "Column Name", "Selected", "Default Value", "SQL Type", "Nullable", "Unique"]
COLUMN_TABLE_TYPES = ["str", "str", "bool", "str", "str", "bool", "bool"]

# Column table position -> ColumnConfig attribute, for the editable cells
_CELL_FIELDS = {
    1: 'output_name',
    2: 'selected',
    3: 'default_value',
    4: 'sql_type',
    5: 'nullable',
    6: 'unique',
}


def ensure_session(session: Optional[ConverterSession]) -> ConverterSession:
    return session if session is not None else ConverterSession()


def error_text(exc: Exception) -> str:
    return f"Error: {exc}"


def column_table_rows(columns: List[ColumnConfig]) -> List[List[Any]]:
    return [
        [
            'Custom' if c.is_custom else c.source_key,
            c.output_name,
            c.selected,
            c.default_value,
            c.sql_type,
            c.nullable,
            c.unique,
        ]
        for c in columns
    ]


def column_table(session: ConverterSession) -> pd.DataFrame:
    return pd.DataFrame(column_table_rows(session.columns), columns=COLUMN_TABLE_HEADERS)


def preview_table(session: ConverterSession) -> pd.DataFrame:
    headers, rows = session.preview()
    return pd.DataFrame(rows, columns=headers)


def _table_to_rows(table) -> List[List[Any]]:
    if table is None:
        return []
    if isinstance(table, pd.DataFrame):
        return table.values.tolist()
    if isinstance(table, dict):
        return list(table.get("data") or [])
    return [list(row) for row in table]


def _cell_value(field: str, cell):
    if field in ('selected', 'nullable', 'unique'):
        if isinstance(cell, str):
            return cell.strip().lower() in ('true', '1', 'yes', 'y')
        return bool(cell)
    if cell is None or (isinstance(cell, float) and pd.isna(cell)):
        return ''
    return str(cell)


def _refresh(session: ConverterSession, status: str):
    return session, status, column_table(session), preview_table(session)


def upload_handler(files, session):
    session = ensure_session(session)
    try:
        status = session.load_files(files or [])
    except ConversionError as exc:
        status = error_text(exc)
    return _refresh(session, status)


def toggle_custom_keys_handler(enabled, session):
    session = ensure_session(session)
    session.set_custom_keys(bool(enabled))
    return _refresh(session, session.message)


def apply_column_edits_handler(table, session):
    """Apply edited cells of the column table, all at once or not at all."""
    session = ensure_session(session)
    rows = _table_to_rows(table)
    if len(rows) != len(session.columns):
        return _refresh(session, "Error: The column table is out of date. Please re-apply your edits.")

    columns = list(session.columns)
    try:
        for index, row in enumerate(rows):
            current = columns[index]
            for position, field in _CELL_FIELDS.items():
                value = _cell_value(field, row[position] if position < len(row) else None)
                if value != getattr(current, field):
                    columns = update_column(columns, index, field, value)
    except (ConversionError, ValueError) as exc:
        return _refresh(session, error_text(exc))

    session.columns = columns
    return _refresh(session, 'Column settings updated.')


def add_custom_column_handler(session):
    session = ensure_session(session)
    return _refresh(session, session.add_custom_column())


def delete_column_handler(index, session):
    session = ensure_session(session)
    try:
        status = session.delete_column(int(index))
    except (ConversionError, TypeError, ValueError) as exc:
        status = error_text(exc)
    return _refresh(session, status)


def move_column_handler(from_index, to_index, session):
    session = ensure_session(session)
    try:
        status = session.move_column(int(from_index), int(to_index))
    except (ConversionError, TypeError, ValueError) as exc:
        status = error_text(exc)
    return _refresh(session, status)


def export_csv_handler(session):
    session = ensure_session(session)
    try:
        artifact = session.export_csv()
        path = save_artifact(artifact.content, artifact.file_name, session.config.output_dir)
    except ConversionError as exc:
        logger.warning("CSV export rejected: %s", exc)
        return None, error_text(exc)
    except OSError as exc:
        logger.warning("Could not write export file: %s", exc)
        return None, f"Error during export: {exc}"
    return path, session.message


def export_sql_handler(table_name, definition_only, session):
    session = ensure_session(session)
    try:
        artifact = session.export_sql(table_name or '', definition_only=bool(definition_only))
        path = save_artifact(artifact.content, artifact.file_name, session.config.output_dir)
    except ConversionError as exc:
        logger.warning("SQL export rejected: %s", exc)
        return None, error_text(exc)
    except OSError as exc:
        logger.warning("Could not write export file: %s", exc)
        return None, f"Error during export: {exc}"
    return path, session.message


def clear_handler(session):
    session = ensure_session(session)
    status = session.clear()
    return (*_refresh(session, status), gr.update(value=False))
