"""
Data models for Catalog Match.

All structured data uses dataclasses for type hints, __eq__, and __repr__.
Records themselves stay plain dicts so that field order from the source
file is preserved exactly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

# A sanitized row: trimmed field name -> trimmed, non-empty string value
Record = dict[str, str]


class MissReason(Enum):
    """Why a requested record has no catalog counterpart."""
    NO_IDENTIFIER = "No identifier detected"
    NOT_IN_CATALOG = "Not present in catalog"


class ReportStatus(Enum):
    AVAILABLE = "Available"
    MISSING = "Missing"


@dataclass
class Catalog:
    """
    A manufacturer catalog uploaded into the workspace.

    The id is assigned once on upload and survives a replace; name,
    records and uploaded_at are overwritten when a new revision arrives.
    """
    id: str
    name: str
    records: list[Record] = field(default_factory=list)
    uploaded_at: datetime = field(default_factory=datetime.now)

    @property
    def record_count(self) -> int:
        return len(self.records)


@dataclass
class FoundMatch:
    """A requested record paired with the catalog record it resolved to."""
    requested: Record
    catalog: Record


@dataclass
class MissingRecord:
    """A requested record that could not be matched."""
    record: Record
    reason: MissReason


@dataclass
class MatchResult:
    """
    Partition of the client request set into found and missing rows.

    Always derived from the current catalog and request set, never stored.
    """
    found: list[FoundMatch] = field(default_factory=list)
    missing: list[MissingRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.found) + len(self.missing)


@dataclass
class CoverageStats:
    total: int = 0
    found: int = 0
    missing: int = 0
    coverage: int = 0  # Whole-number percentage


@dataclass
class DuplicateEntry:
    identifier: str   # Display label ("Unidentified row N" for blank keys)
    occurrences: int


@dataclass
class RequestInsights:
    """Duplicate and identification statistics over the request set."""
    unique_count: int = 0
    duplicate_count: int = 0
    unidentified_count: int = 0
    duplicates: list[DuplicateEntry] = field(default_factory=list)


@dataclass
class DistributionEntry:
    name: str
    count: int
    percentage: int


@dataclass
class ReportRow:
    """One exported row per requested record."""
    identifier: str
    status: ReportStatus
    match: str = ""   # Matched catalog record serialized as JSON

    def as_cells(self) -> list[str]:
        return [self.identifier, self.status.value, self.match]


@dataclass
class BriefPayload:
    """
    Context handed to the narrative brief collaborator.

    Samples are truncated copies of the inputs; the collaborator never
    sees the full catalog.
    """
    catalog_sample: list[Record]
    client_sample: list[Record]
    coverage: int
    found: int
    total: int
    missing_identifiers: list[str]
    catalog_name: Optional[str] = None
