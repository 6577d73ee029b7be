from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from .accessors import resolve_value, to_text
from .columns import ColumnConfig
from .errors import EmptyDataError, NoColumnsError
from .identifiers import unique_identifiers

logger = logging.getLogger(__name__)


def escape_field(text: str, delimiter: str = ',') -> str:
    """Quote a field that contains the delimiter, a double quote or a newline."""
    if delimiter in text or '"' in text or '\n' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def warn_placeholder_names(columns: Sequence[ColumnConfig]) -> List[str]:
    placeholders = [c.source_key for c in columns if c.has_placeholder_name]
    if placeholders:
        logger.warning("Custom column(s) exported without a name: %s", ", ".join(placeholders))
    return placeholders


def export_csv(
    records: Sequence[Dict[str, Any]],
    columns: Sequence[ColumnConfig],
    delimiter: str = ',',
    check_identifiers: bool = True,
) -> str:
    """Render ``records`` as delimited text using ``columns`` in order.

    ``columns`` should already be filtered to the selected entries. With
    ``check_identifiers`` the output names must stay distinct after
    identifier sanitization.
    """
    if not records:
        raise EmptyDataError()
    if not columns:
        raise NoColumnsError()

    headers = [c.header for c in columns]
    if check_identifiers:
        unique_identifiers(headers)
    warn_placeholder_names(columns)

    lines = [delimiter.join(escape_field(h, delimiter) for h in headers)]
    for record in records:
        cells = []
        for column in columns:
            value = resolve_value(record, column)
            cells.append(escape_field(to_text(value), delimiter))
        lines.append(delimiter.join(cells))

    logger.info("Rendered delimited text: %d rows x %d columns", len(records), len(columns))
    return '\n'.join(lines)
