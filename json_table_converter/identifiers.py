from __future__ import annotations

import re
from typing import Dict, List, Sequence

from .errors import DuplicateColumnError

_INVALID_CHARS = re.compile(r'[^A-Za-z0-9_]')


def sanitize_identifier(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_]`` with ``_``."""
    return _INVALID_CHARS.sub('_', name)


def unique_identifiers(names: Sequence[str]) -> List[str]:
    """Sanitize ``names`` and reject any two that end up identical."""
    seen: Dict[str, str] = {}
    identifiers: List[str] = []
    for name in names:
        ident = sanitize_identifier(name)
        if ident in seen:
            raise DuplicateColumnError(ident, seen[ident], name)
        seen[ident] = name
        identifiers.append(ident)
    return identifiers
