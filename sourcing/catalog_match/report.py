"""
Report Generator - Format match results for human consumption.

Produces console output and the CSV export offered for download.
"""

import csv
import io
import json
from datetime import datetime
from typing import Optional, Sequence, TextIO

from .config import FieldConfig
from .identifiers import extract_identifier
from .insights import coverage_stats, request_insights, top_families, top_manufacturers
from .matcher import filter_matches, missing_by_reason
from .models import MatchResult, MissReason, Record, ReportRow, ReportStatus

REPORT_HEADER = ["Requested Part", "Status", "Catalog Match"]
REPORT_BASENAME = "product-search-report"


def serialize_record(record: Record) -> str:
    """Compact JSON rendering of a record, key order preserved."""
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def build_report_rows(
    client_records: Sequence[Record],
    result: MatchResult,
    config: Optional[FieldConfig] = None,
) -> list[ReportRow]:
    """
    Build one export row per requested record.

    A row is Available when any found match carries the same identifier;
    the first such match supplies the catalog column.
    """
    matched: dict[str, Record] = {}
    for match in result.found:
        identifier = extract_identifier(match.requested, config)
        matched.setdefault(identifier, match.catalog)

    rows = []
    for record in client_records:
        identifier = extract_identifier(record, config)
        catalog_record = matched.get(identifier) if identifier else None
        if catalog_record is not None:
            rows.append(ReportRow(identifier, ReportStatus.AVAILABLE, serialize_record(catalog_record)))
        else:
            rows.append(ReportRow(identifier, ReportStatus.MISSING))
    return rows


def export_csv(rows: Sequence[ReportRow], output: TextIO | None = None) -> str:
    """
    Export report rows to CSV format.

    Every cell is double-quoted and rows are separated by a bare newline.

    Args:
        rows: Report rows to export
        output: Optional file handle to write to

    Returns:
        CSV string (also writes to output if provided)
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    writer.writerow(REPORT_HEADER)
    for row in rows:
        writer.writerow(row.as_cells())

    # No trailing newline after the last row
    csv_content = buffer.getvalue().rstrip("\n")

    if output:
        output.write(csv_content)

    return csv_content


def format_console(
    client_records: Sequence[Record],
    result: MatchResult,
    config: Optional[FieldConfig] = None,
    show_found: bool = False,
    query: str = "",
) -> str:
    """
    Format a match run for console display.

    Args:
        client_records: The request set that was matched
        result: Match result for that request set
        config: Field configuration
        show_found: Whether to list found matches (default False)
        query: Optional filter applied to the found listing

    Returns:
        Formatted string for console output
    """
    if not client_records:
        return "No requested parts to report.\n"

    lines = []
    grouped = missing_by_reason(result)

    not_in_catalog = grouped[MissReason.NOT_IN_CATALOG]
    if not_in_catalog:
        lines.append(f"\nNOT IN CATALOG ({len(not_in_catalog)})")
        lines.append("-" * 70)
        for item in not_in_catalog:
            lines.append(f"  {extract_identifier(item.record, config)}")

    unidentified = grouped[MissReason.NO_IDENTIFIER]
    if unidentified:
        lines.append(f"\nNO IDENTIFIER ({len(unidentified)})")
        lines.append("-" * 70)
        for item in unidentified:
            lines.append(f"  {serialize_record(item.record)[:66]}")

    if show_found:
        found = filter_matches(result.found, query, config)
        title = f"FOUND ({len(found)})" if not query else f"FOUND matching '{query}' ({len(found)})"
        lines.append(f"\n{title}")
        lines.append("-" * 70)
        for match in found:
            identifier = extract_identifier(match.requested, config)
            lines.append(f"  {identifier:<24} {serialize_record(match.catalog)[:44]}")

    insights = request_insights(client_records, config)
    if insights.duplicates:
        lines.append(f"\nDUPLICATES ({len(insights.duplicates)})")
        lines.append("-" * 70)
        for entry in insights.duplicates:
            lines.append(f"  {entry.identifier:<40} x{entry.occurrences}")

    for title, entries in (
        ("TOP MANUFACTURERS", top_manufacturers(result.found, config)),
        ("TOP FAMILIES", top_families(result.found, config)),
    ):
        if entries:
            lines.append(f"\n{title}")
            lines.append("-" * 70)
            for entry in entries:
                lines.append(f"  {entry.name:<40} {entry.count:>5} {entry.percentage:>4}%")

    # Summary
    stats = coverage_stats(client_records, result)
    lines.append("\n" + "=" * 70)
    lines.append("SUMMARY")
    lines.append(f"  Requested:      {stats.total}")
    lines.append(f"  Found:          {stats.found}")
    lines.append(f"  Missing:        {stats.missing}")
    lines.append(f"  Coverage:       {stats.coverage}%")
    lines.append(f"  Unique parts:   {insights.unique_count}")
    lines.append(f"  Duplicates:     {insights.duplicate_count}")
    lines.append(f"  Unidentified:   {insights.unidentified_count}")
    lines.append("=" * 70)

    return "\n".join(lines)


def generate_report_filename(dated: bool = False, extension: str = "csv") -> str:
    """
    Generate a filename for the report.

    Returns:
        "product-search-report.csv", or with a date suffix when dated
    """
    if dated:
        date_str = datetime.now().strftime("%Y-%m-%d")
        return f"{REPORT_BASENAME}_{date_str}.{extension}"
    return f"{REPORT_BASENAME}.{extension}"
