"""
Record Sanitizer - Turn decoded spreadsheet rows into clean records.

Parsers hand back rows with untrimmed headers, numbers, blanks and None
cells. Everything downstream assumes a record only holds trimmed,
non-empty strings, so that guarantee is established here once.
"""

import logging
from typing import Any, Iterable, Mapping

from .models import Record

logger = logging.getLogger(__name__)


def sanitize_record(row: Mapping[Any, Any]) -> Record:
    """
    Clean a single raw row.

    Values that are None or blank after trimming are dropped. Keys are
    trimmed but keep their original casing and order.
    """
    sanitized: Record = {}
    for key, value in row.items():
        if value is None:
            continue
        trimmed = str(value).strip()
        if not trimmed:
            continue
        sanitized[str(key).strip()] = trimmed
    return sanitized


def sanitize_records(rows: Iterable[Mapping[Any, Any]]) -> list[Record]:
    """
    Clean a sequence of raw rows, discarding rows left with no fields.

    Args:
        rows: Decoded rows (header -> cell value) in file order

    Returns:
        List of Records in the same order
    """
    records = []
    dropped = 0
    for row in rows:
        record = sanitize_record(row)
        if record:
            records.append(record)
        else:
            dropped += 1

    if dropped:
        logger.debug(f"Dropped {dropped} empty row(s) during sanitization")
    return records
