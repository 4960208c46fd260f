"""
Catalog Matcher - Core comparison engine.

Classifies every requested record against the active catalog:

| Identifier? | In catalog? | Result |
|-------------|-------------|--------|
| ✗           | -           | MISSING (No identifier detected) |
| ✓           | ✓           | FOUND, paired with the catalog record |
| ✓           | ✗           | MISSING (Not present in catalog) |
"""

import logging
from typing import Iterable, Optional

from .config import FieldConfig
from .identifiers import extract_identifier
from .index import CatalogIndex, build_index
from .models import Catalog, FoundMatch, MatchResult, MissingRecord, MissReason, Record

logger = logging.getLogger(__name__)


def match_records(
    index: CatalogIndex,
    client_records: Iterable[Record],
    config: Optional[FieldConfig] = None,
) -> MatchResult:
    """
    Match requested records against an indexed catalog.

    Every record lands in exactly one of found/missing, and each list keeps
    the request order. Inputs are not modified.

    Args:
        index: Indexed catalog
        client_records: Requested records in upload order
        config: Field configuration (defaults to the packaged config)

    Returns:
        MatchResult partitioning the requested records
    """
    result = MatchResult()

    for record in client_records:
        identifier = extract_identifier(record, config)
        if not identifier:
            result.missing.append(MissingRecord(record=record, reason=MissReason.NO_IDENTIFIER))
            continue

        catalog_record = index.lookup(identifier)
        if catalog_record is not None:
            result.found.append(FoundMatch(requested=record, catalog=catalog_record))
        else:
            result.missing.append(MissingRecord(record=record, reason=MissReason.NOT_IN_CATALOG))

    return result


def match_catalog(
    catalog: Optional[Catalog],
    client_records: list[Record],
    config: Optional[FieldConfig] = None,
) -> MatchResult:
    """
    Build the index for a catalog and match the request set against it.

    No active catalog or an empty request set are valid states and produce
    an empty result rather than an error. An active catalog with no records
    still classifies every request, all as not present in the catalog.
    """
    if catalog is None or not client_records:
        return MatchResult()

    index = build_index(catalog.records, config)
    result = match_records(index, client_records, config)
    logger.info(
        f"Matched {len(client_records)} requested record(s) against '{catalog.name}': "
        f"{len(result.found)} found, {len(result.missing)} missing"
    )
    return result


def filter_matches(
    found: list[FoundMatch],
    query: str,
    config: Optional[FieldConfig] = None,
) -> list[FoundMatch]:
    """
    Filter found matches by a free-text query.

    A match is kept when the query appears (case-insensitively) in the
    requested identifier or in any value of the matched catalog record.
    An empty query returns every match.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(found)

    filtered = []
    for match in found:
        identifier = extract_identifier(match.requested, config).lower()
        if needle in identifier:
            filtered.append(match)
            continue
        values = [str(v).lower() for v in match.catalog.values() if v is not None]
        if any(needle in value for value in values):
            filtered.append(match)
    return filtered


def missing_by_reason(result: MatchResult) -> dict[MissReason, list[MissingRecord]]:
    """Group missing records by reason for reporting."""
    grouped: dict[MissReason, list[MissingRecord]] = {reason: [] for reason in MissReason}
    for item in result.missing:
        grouped[item.reason].append(item)
    return grouped
