"""
JSON shapes for catalog match objects returned by the API.
"""
from dataclasses import asdict
from typing import Optional, Sequence

from sourcing.catalog_match import (
    Catalog,
    CoverageStats,
    DistributionEntry,
    FieldConfig,
    FoundMatch,
    MissingRecord,
    RequestInsights,
    extract_identifier,
)


def catalog_summary(catalog: Catalog, active_id: Optional[str]) -> dict:
    return {
        "id": catalog.id,
        "name": catalog.name,
        "record_count": catalog.record_count,
        "uploaded_at": catalog.uploaded_at.isoformat(),
        "active": catalog.id == active_id,
    }


def found_item(match: FoundMatch, config: FieldConfig) -> dict:
    return {
        "identifier": extract_identifier(match.requested, config),
        "requested": match.requested,
        "catalog": match.catalog,
    }


def missing_item(item: MissingRecord, config: FieldConfig) -> dict:
    return {
        "identifier": extract_identifier(item.record, config),
        "record": item.record,
        "reason": item.reason.value,
    }


def stats_dict(stats: CoverageStats) -> dict:
    return asdict(stats)


def insights_dict(insights: RequestInsights) -> dict:
    return asdict(insights)


def distribution_list(entries: Sequence[DistributionEntry]) -> list[dict]:
    return [asdict(entry) for entry in entries]
