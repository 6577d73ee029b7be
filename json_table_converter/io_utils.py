from __future__ import annotations

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Sequence, Tuple

from .errors import ReadError

logger = logging.getLogger(__name__)


def display_name(file_obj) -> str:
    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    return os.path.basename(str(path))


def _reject_constant(name):
    raise ValueError(f"Invalid JSON constant {name}")


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8-sig')
        elif content.startswith('\ufeff'):
            content = content[1:]
        return json.loads(content, parse_constant=_reject_constant)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8-sig') as f:
        return json.load(f, parse_constant=_reject_constant)


def _read_one(file_obj) -> Tuple[str, Any]:
    name = display_name(file_obj)
    try:
        return name, read_json_content(file_obj)
    except (OSError, ValueError) as exc:
        raise ReadError(name, str(exc)) from exc


def read_json_batch(files: Sequence[Any], max_workers: int = 4) -> List[Tuple[str, Any]]:
    """Read and parse every file, returning ``(name, data)`` pairs in input order.

    Files are read concurrently. Any failure aborts the whole batch.
    """
    if not files:
        return []
    workers = max(1, min(max_workers, len(files)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in submission order and re-raises the first failure
        results = list(pool.map(_read_one, files))
    logger.debug("Read %d JSON file(s)", len(results))
    return results


def save_artifact(content: str, file_name: str, output_dir: str) -> str:
    """Write an export blob to ``output_dir`` and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, file_name)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        f.write(content)
    logger.info("Saved %s (%d chars)", path, len(content))
    return path
