from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from . import columns as cols
from .accessors import resolve_value, to_text
from .columns import ColumnConfig
from .config import ConverterConfig, get_config
from .csv_export import export_csv
from .errors import ConversionError
from .io_utils import read_json_batch
from .schema_utils import unify_batches
from .sql_export import export_sql, sql_file_name

logger = logging.getLogger(__name__)

CSV_MIME = 'text/csv;charset=utf-8'
SQL_MIME = 'text/sql;charset=utf-8'
DEFAULT_CSV_NAME = 'Converted_Data.csv'
CUSTOM_CSV_NAME = 'Custom_Keys_Data.csv'


@dataclass(frozen=True)
class ExportArtifact:
    content: str
    mime_type: str
    file_name: str


@dataclass
class ConverterSession:
    """Active converter state: ingested records, their fields and the column configuration.

    Holds no algorithms of its own; every method delegates to the core
    modules and swaps state only after the delegate succeeded.
    """

    config: ConverterConfig = field(default_factory=get_config)
    records: List[Dict[str, Any]] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)
    columns: List[ColumnConfig] = field(default_factory=list)
    use_custom_keys: bool = False
    message: str = ''

    # --- Ingestion ---

    def load_parsed(self, named_batches: Sequence[Tuple[str, Any]]) -> str:
        """Replace the current state with the given ``(name, data)`` batches."""
        if not named_batches:
            self.message = 'Upload canceled. Previous data retained.'
            return self.message
        try:
            records, fields = unify_batches(named_batches)
        except ConversionError:
            logger.warning("Rejected batch of %d file(s)", len(named_batches))
            raise
        self.records = records
        self.fields = fields
        self.columns = cols.init_from_schema(fields)
        self.message = (
            f"Successfully loaded {len(named_batches)} file(s) with "
            f"{len(records)} items and {len(fields)} unique keys."
        )
        logger.info(self.message)
        return self.message

    def load_files(self, files: Sequence[Any]) -> str:
        return self.load_parsed(read_json_batch(files or []))

    def clear(self) -> str:
        self.records = []
        self.fields = []
        self.columns = []
        self.use_custom_keys = False
        self.message = 'All JSON data cleared.'
        return self.message

    # --- Column configuration ---

    def set_custom_keys(self, enabled: bool) -> None:
        if bool(enabled) != self.use_custom_keys:
            self.use_custom_keys = bool(enabled)
            self.message = ''

    def update_column(self, index: int, field_name: str, value) -> None:
        self.columns = cols.update_column(self.columns, index, field_name, value)

    def add_custom_column(self) -> str:
        self.columns = cols.add_custom_column(self.columns)
        self.message = 'Custom column added. Enter a column name and default value to include it in the export.'
        return self.message

    def delete_column(self, index: int) -> str:
        self.columns = cols.delete_column(self.columns, index)
        self.message = 'Row deleted successfully.'
        return self.message

    def move_column(self, from_index: int, to_index: int) -> str:
        self.columns = cols.move_column(self.columns, from_index, to_index)
        if from_index != to_index:
            self.message = 'Columns reordered successfully.'
        return self.message

    def active_columns(self) -> List[ColumnConfig]:
        if self.use_custom_keys:
            return cols.selected_columns(self.columns)
        return cols.raw_columns(self.fields)

    # --- Export ---

    def export_csv(self) -> ExportArtifact:
        content = export_csv(
            self.records,
            self.active_columns(),
            delimiter=self.config.delimiter,
            check_identifiers=self.use_custom_keys,
        )
        name = CUSTOM_CSV_NAME if self.use_custom_keys else DEFAULT_CSV_NAME
        self.message = 'CSV file generated successfully.'
        return ExportArtifact(content, CSV_MIME, name)

    def export_sql(self, table_name: Optional[str] = None, definition_only: bool = False) -> ExportArtifact:
        if table_name is None:
            table_name = self.config.default_table_name
        content = export_sql(
            self.records,
            cols.selected_columns(self.columns),
            table_name,
            definition_only=definition_only,
        )
        self.message = 'SQL file generated successfully.'
        return ExportArtifact(content, SQL_MIME, sql_file_name(table_name))

    # --- Preview ---

    def preview(self) -> Tuple[List[str], List[List[str]]]:
        """Header and truncated cell text for the first few records."""
        columns = self.active_columns()
        limit = max(0, self.config.preview_chars)
        rows = []
        for record in self.records[: self.config.preview_rows]:
            row = []
            for column in columns:
                text = to_text(resolve_value(record, column))
                row.append(text[:limit] + '...' if len(text) > limit else text)
            rows.append(row)
        return [c.header for c in columns], rows
