"""Column configuration model.

A configuration is a plain ``list`` of :class:`ColumnConfig` entries whose
order is the export column order. Every operation below returns a new list
and leaves its argument untouched; invalid positions raise
:class:`ColumnIndexError` before anything is copied.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence

from .errors import ColumnIndexError

SQL_TYPES = ('varchar', 'integer', 'bigint', 'float')

EDITABLE_FIELDS = ('output_name', 'selected', 'default_value', 'sql_type', 'nullable', 'unique')
_BOOL_FIELDS = ('selected', 'nullable', 'unique')

CUSTOM_PREFIX = 'custom_'


@dataclass(frozen=True)
class ColumnConfig:
    source_key: str
    output_name: str = ''
    selected: bool = True
    is_custom: bool = False
    default_value: str = ''
    sql_type: str = 'varchar'
    nullable: bool = False
    unique: bool = False

    @property
    def header(self) -> str:
        """Output name, falling back to the source key when blank."""
        return self.output_name if self.output_name.strip() else self.source_key

    @property
    def has_placeholder_name(self) -> bool:
        return self.is_custom and not self.output_name.strip()


def _check_index(configs: Sequence[ColumnConfig], index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(configs):
        raise ColumnIndexError(index, len(configs))


def init_from_schema(fields: Sequence[str]) -> List[ColumnConfig]:
    return [ColumnConfig(source_key=f, output_name=f) for f in fields]


def raw_columns(fields: Sequence[str]) -> List[ColumnConfig]:
    """Columns used when no custom configuration is active: every field, blank defaults."""
    return init_from_schema(fields)


def selected_columns(configs: Sequence[ColumnConfig]) -> List[ColumnConfig]:
    return [c for c in configs if c.selected]


def _coerce(field: str, value):
    if field in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(f"'{field}' expects a boolean, got {value!r}.")
        return value
    if field == 'sql_type':
        value = str(value).strip().lower()
        if value not in SQL_TYPES:
            raise ValueError(f"Unknown SQL type {value!r}; expected one of {', '.join(SQL_TYPES)}.")
        return value
    return '' if value is None else str(value)


def update_column(configs: Sequence[ColumnConfig], index: int, field: str, value) -> List[ColumnConfig]:
    """Replace one attribute of the entry at ``index``."""
    _check_index(configs, index)
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown column attribute '{field}'.")
    updated = list(configs)
    updated[index] = replace(updated[index], **{field: _coerce(field, value)})
    return updated


def next_custom_key(configs: Sequence[ColumnConfig]) -> str:
    taken = {c.source_key for c in configs}
    n = len(configs) + 1
    while f"{CUSTOM_PREFIX}{n}" in taken:
        n += 1
    return f"{CUSTOM_PREFIX}{n}"


def add_custom_column(configs: Sequence[ColumnConfig]) -> List[ColumnConfig]:
    """Append a selected custom column with a placeholder key and a blank name."""
    entry = ColumnConfig(source_key=next_custom_key(configs), output_name='', is_custom=True)
    return [*configs, entry]


def delete_column(configs: Sequence[ColumnConfig], index: int) -> List[ColumnConfig]:
    _check_index(configs, index)
    return [c for i, c in enumerate(configs) if i != index]


def move_column(configs: Sequence[ColumnConfig], from_index: int, to_index: int) -> List[ColumnConfig]:
    """Move the entry at ``from_index`` so that it ends up at ``to_index``."""
    _check_index(configs, from_index)
    _check_index(configs, to_index)
    updated = list(configs)
    if from_index == to_index:
        return updated
    moved = updated.pop(from_index)
    updated.insert(to_index, moved)
    return updated
