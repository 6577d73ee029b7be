from __future__ import annotations

import json
import math
from typing import Any, Dict, NamedTuple


class Lookup(NamedTuple):
    present: bool
    value: Any = None


ABSENT = Lookup(False)


def lookup_field(record: Dict[str, Any], key: str) -> Lookup:
    """Look up ``key`` in a record.

    A key holding JSON ``null`` counts as absent, so callers handle both
    cases through the same default substitution.
    """
    if not isinstance(record, dict):
        return ABSENT
    value = record.get(key)
    if value is None:
        return ABSENT
    return Lookup(True, value)


def resolve_value(record: Dict[str, Any], column) -> Any:
    """Return the value a column takes for a record after default substitution.

    Custom columns have no backing field and always resolve to their default.
    ``None`` means absent with no usable default.
    """
    found = ABSENT if column.is_custom else lookup_field(record, column.source_key)
    if found.present:
        return found.value
    return column.default_value or None


def to_text(value: Any) -> str:
    """Coerce a JSON value to its display string.

    Objects and arrays render as JSON, booleans as ``true``/``false`` and
    integral floats without a fractional part.
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
        except TypeError:
            return str(value)
    return str(value)


def stable_key(value: Any) -> str:
    """String form used to compare values; key order inside objects is ignored."""
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, sort_keys=True, ensure_ascii=False, separators=(',', ':'))
        except TypeError:
            return str(value)
    return to_text(value)
