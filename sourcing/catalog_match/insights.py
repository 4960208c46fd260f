"""
Insights - Aggregate views over a match run.

Every function here is a pure computation over the current request set
and MatchResult. Nothing is cached; callers recompute after any upload,
replace, delete or activation.
"""

import math
from typing import Optional, Sequence

from .config import FieldConfig, default_config
from .identifiers import extract_identifier, resolve_field
from .models import (
    BriefPayload,
    Catalog,
    CoverageStats,
    DistributionEntry,
    DuplicateEntry,
    FoundMatch,
    MatchResult,
    Record,
    RequestInsights,
)


def percent(part: int, whole: int) -> int:
    """
    Whole-number percentage with halves rounded up.

    Returns 0 when whole is 0.
    """
    if not whole:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def coverage_stats(client_records: Sequence[Record], result: MatchResult) -> CoverageStats:
    """Generate coverage statistics for a match run."""
    total = len(client_records)
    found = len(result.found)
    return CoverageStats(
        total=total,
        found=found,
        missing=len(result.missing),
        coverage=percent(found, total),
    )


def request_insights(client_records: Sequence[Record], config: Optional[FieldConfig] = None) -> RequestInsights:
    """
    Detect repeated identifiers in the request set.

    Rows without an identifier are keyed by their position so they never
    count as duplicates of each other.
    """
    if not client_records:
        return RequestInsights()

    counts: dict[str, int] = {}
    duplicates: dict[str, DuplicateEntry] = {}
    unidentified = 0

    for position, record in enumerate(client_records):
        identifier = extract_identifier(record, config)
        key = identifier or f"row-{position}"
        if not identifier:
            unidentified += 1

        current = counts.get(key, 0)
        counts[key] = current + 1
        if current >= 1:
            duplicates[key] = DuplicateEntry(
                identifier=identifier or f"Unidentified row {position + 1}",
                occurrences=current + 1,
            )

    ordered = sorted(duplicates.values(), key=lambda d: d.occurrences, reverse=True)

    return RequestInsights(
        unique_count=len(counts),
        duplicate_count=len(client_records) - len(counts),
        unidentified_count=unidentified,
        duplicates=ordered,
    )


def top_distribution(
    found: Sequence[FoundMatch],
    field_names: Sequence[str],
    fallback: str,
    limit: int = 3,
) -> list[DistributionEntry]:
    """
    Tally a descriptive catalog field over found matches.

    Args:
        found: Found matches; the field is read from the catalog side
        field_names: Candidate headers, highest priority first
        fallback: Label used when no candidate has a value
        limit: Number of entries to keep

    Returns:
        Entries sorted by count, highest first (first seen wins ties)
    """
    if not found:
        return []

    counts: dict[str, int] = {}
    for match in found:
        name = resolve_field(match.catalog, field_names) or fallback
        counts[name] = counts.get(name, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        DistributionEntry(name=name, count=count, percentage=percent(count, len(found)))
        for name, count in ranked
    ]


def top_manufacturers(found: Sequence[FoundMatch], config: Optional[FieldConfig] = None) -> list[DistributionEntry]:
    config = config or default_config()
    return top_distribution(
        found,
        config.fields.manufacturer,
        config.labels.unspecified_manufacturer,
        limit=config.settings.top_n,
    )


def top_families(found: Sequence[FoundMatch], config: Optional[FieldConfig] = None) -> list[DistributionEntry]:
    config = config or default_config()
    return top_distribution(
        found,
        config.fields.family,
        config.labels.unspecified_family,
        limit=config.settings.top_n,
    )


def build_brief_payload(
    catalog: Catalog,
    client_records: Sequence[Record],
    result: MatchResult,
    config: Optional[FieldConfig] = None,
) -> BriefPayload:
    """Collect the samples and figures handed to the brief writer."""
    config = config or default_config()
    size = config.settings.brief_sample_size
    stats = coverage_stats(client_records, result)

    missing_ids = [
        extract_identifier(item.record, config) or config.labels.unidentified
        for item in result.missing[:size]
    ]

    return BriefPayload(
        catalog_sample=list(catalog.records[:size]),
        client_sample=list(client_records[:size]),
        coverage=stats.coverage,
        found=stats.found,
        total=stats.total,
        missing_identifiers=missing_ids,
        catalog_name=catalog.name,
    )
