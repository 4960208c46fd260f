"""
Record Sources - Bridge to uploaded catalog and request files.

The adapter pattern lets us swap implementations (files from disk for
the CLI, uploaded bytes for the API, in-memory rows for tests) without
changing matcher logic. Decoding is delegated to csv, json and openpyxl;
a source only maps their rows to header -> value dicts.
"""

import csv
import io
import json
import logging
import zipfile
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .models import Record
from .sanitizer import sanitize_records

logger = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv"}
JSON_SUFFIXES = {".json"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
SUPPORTED_SUFFIXES = CSV_SUFFIXES | JSON_SUFFIXES | EXCEL_SUFFIXES

UNSUPPORTED_MESSAGE = "Unsupported file format. Upload CSV or Excel."


class RecordSource(ABC):
    """
    Abstract interface for raw row access.

    Implementations return rows exactly as decoded; sanitizing is done by
    records().
    """

    name: str = ""

    @abstractmethod
    def read_rows(self) -> list[dict[str, Any]]:
        """
        Decode the source into rows.

        Returns:
            List of header -> cell value dicts in source order
        """
        pass

    def records(self) -> list[Record]:
        """Decoded rows, sanitized."""
        records = sanitize_records(self.read_rows())
        logger.info(f"Loaded {len(records)} record(s) from {self.name or 'source'}")
        return records


def _suffix(name: str) -> str:
    return Path(name).suffix.lower()


def _cell_to_text(value: Any) -> Any:
    """Render a spreadsheet cell the way it reads in the sheet."""
    if value is None:
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return value


def _unique_headers(headers: list[str], name: str) -> list[str]:
    """
    Suffix repeated headers ("Brand", "Brand_1", ...) so no column is lost.
    """
    seen: dict[str, int] = {}
    unique = []
    for header in headers:
        if header in seen:
            seen[header] += 1
            candidate = f"{header}_{seen[header]}"
            while candidate in seen:
                seen[header] += 1
                candidate = f"{header}_{seen[header]}"
            seen[candidate] = 0
            unique.append(candidate)
        else:
            seen[header] = 0
            unique.append(header)

    renamed = [u for h, u in zip(headers, unique) if h != u]
    if renamed:
        logger.warning(f"{name}: repeated column header(s) renamed to {', '.join(renamed)}")
    return unique


def _rows_from_csv(text: str, name: str) -> list[dict[str, Any]]:
    reader = csv.reader(io.StringIO(text))
    header_row = next(reader, None)
    if header_row is None:
        return []
    headers = _unique_headers(header_row, name)

    rows = []
    for values in reader:
        if not values:
            continue
        # Cells beyond the header row are dropped; short rows leave None
        padded = values[:len(headers)] + [None] * (len(headers) - len(values))
        rows.append(dict(zip(headers, padded)))
    return rows


def _rows_from_json(text: str, name: str) -> list[dict[str, Any]]:
    data = json.loads(text)
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise ValueError(f"Expected a JSON list of objects in {name}")
    return data


def _rows_from_workbook(handle, name: str) -> list[dict[str, Any]]:
    workbook = load_workbook(handle, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        rows_iter = sheet.iter_rows(values_only=True)
        header_row = next(rows_iter, None)
        if header_row is None:
            return []

        headers = []
        for position, header in enumerate(header_row, start=1):
            text = str(header).strip() if header is not None else ""
            headers.append(text or f"Column {position}")
        headers = _unique_headers(headers, name)

        rows = []
        for values in rows_iter:
            if values is None or all(v is None or str(v).strip() == "" for v in values):
                continue
            rows.append({
                header: _cell_to_text(value)
                for header, value in zip(headers, values)
            })
        return rows
    finally:
        workbook.close()


def _decode(name: str, data: bytes) -> list[dict[str, Any]]:
    suffix = _suffix(name)
    if suffix in CSV_SUFFIXES:
        try:
            return _rows_from_csv(data.decode("utf-8-sig"), name)
        except csv.Error as e:
            raise ValueError(f"Unable to read {name}: {e}") from e
    if suffix in JSON_SUFFIXES:
        return _rows_from_json(data.decode("utf-8-sig"), name)
    if suffix in EXCEL_SUFFIXES:
        try:
            return _rows_from_workbook(io.BytesIO(data), name)
        except (zipfile.BadZipFile, InvalidFileException, KeyError) as e:
            raise ValueError(f"Unable to read workbook {name}: {e}") from e
    raise ValueError(UNSUPPORTED_MESSAGE)


class FileRecordSource(RecordSource):
    """
    Loads rows from a CSV, JSON or Excel file on disk.

    CSV format expected:
        Part Number,Manufacturer,Family
        ABC-1,Acme,Circular

    JSON format expected:
        [{"Part Number": "ABC-1", "Manufacturer": "Acme"}, ...]
    """

    def __init__(self, data_path: str | Path):
        self._data_path = Path(data_path)
        self.name = self._data_path.name

    def read_rows(self) -> list[dict[str, Any]]:
        if not self._data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self._data_path}")
        if _suffix(self.name) not in SUPPORTED_SUFFIXES:
            raise ValueError(UNSUPPORTED_MESSAGE)
        return _decode(self.name, self._data_path.read_bytes())


class BytesRecordSource(RecordSource):
    """Loads rows from uploaded file content; the filename picks the decoder."""

    def __init__(self, name: str, data: bytes):
        self.name = name
        self._data = data

    def read_rows(self) -> list[dict[str, Any]]:
        try:
            return _decode(self.name, self._data)
        except UnicodeDecodeError as e:
            raise ValueError(f"Unable to read {self.name}: {e}") from e


class InMemoryRecordSource(RecordSource):
    """
    In-memory source for programmatic setup.

    Useful for unit tests and for rows already decoded by a client.
    """

    def __init__(self, rows: Iterable[dict[str, Any]] | None = None, name: str = "memory"):
        self.name = name
        self._rows = list(rows or [])

    def add_row(self, row: dict[str, Any]):
        self._rows.append(row)

    def read_rows(self) -> list[dict[str, Any]]:
        return list(self._rows)


def load_records(path: str | Path) -> list[Record]:
    """Read and sanitize the records of a single file."""
    return FileRecordSource(path).records()


def load_many(paths: Iterable[str | Path]) -> list[Record]:
    """Concatenate the records of several files in the given order."""
    combined: list[Record] = []
    for path in paths:
        combined.extend(load_records(path))
    return combined
