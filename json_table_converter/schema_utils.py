from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence, Tuple

from .errors import FormatError

logger = logging.getLogger(__name__)


def extract_record_keys(records: Sequence[Dict[str, Any]]) -> List[str]:
    """Collect top-level keys of ``records`` in first-seen order."""
    # dict keeps insertion order, so it doubles as an ordered set
    seen: Dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def validate_batch(name: str, data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise FormatError(name)
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise FormatError(name, f"has a non-object item at position {position}.")
    return data


def unify_batches(named_batches: Sequence[Tuple[str, Any]]) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Merge parsed JSON arrays into one record list plus their unified field order.

    ``named_batches`` is a sequence of ``(name, parsed_json)`` pairs. Every
    batch is validated before anything is merged, so one bad input rejects
    the whole set. Inputs are not mutated.
    """
    batches = [validate_batch(name, data) for name, data in named_batches]

    records: List[Dict[str, Any]] = [rec for batch in batches for rec in batch]
    fields = extract_record_keys(records)
    logger.debug("Unified %d batch(es): %d records, %d fields", len(batches), len(records), len(fields))
    return records, fields
