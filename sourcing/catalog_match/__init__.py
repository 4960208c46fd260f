# Catalog Match: reconcile a client's requested parts against a catalog
# Siloed module - no imports from the API backend

from .models import (
    Record, Catalog, MatchResult, FoundMatch, MissingRecord, MissReason,
    CoverageStats, RequestInsights, DuplicateEntry, DistributionEntry,
    ReportRow, ReportStatus, BriefPayload,
)
from .config import load_config, default_config, FieldConfig
from .sanitizer import sanitize_records
from .identifiers import extract_identifier, resolve_field
from .index import build_index, CatalogIndex
from .matcher import match_records, match_catalog, filter_matches
from .insights import (
    coverage_stats, request_insights, top_distribution,
    top_manufacturers, top_families, build_brief_payload,
)
from .report import build_report_rows, export_csv, format_console
from .sources import RecordSource, FileRecordSource, BytesRecordSource, InMemoryRecordSource, load_records
from .workspace import Workspace

__version__ = "1.0.0"

__all__ = [
    # Models
    "Record",
    "Catalog",
    "MatchResult",
    "FoundMatch",
    "MissingRecord",
    "MissReason",
    "CoverageStats",
    "RequestInsights",
    "DuplicateEntry",
    "DistributionEntry",
    "ReportRow",
    "ReportStatus",
    "BriefPayload",
    # Config
    "FieldConfig",
    "load_config",
    "default_config",
    # Records
    "sanitize_records",
    "extract_identifier",
    "resolve_field",
    # Index
    "build_index",
    "CatalogIndex",
    # Matcher
    "match_records",
    "match_catalog",
    "filter_matches",
    # Insights
    "coverage_stats",
    "request_insights",
    "top_distribution",
    "top_manufacturers",
    "top_families",
    "build_brief_payload",
    # Report
    "build_report_rows",
    "export_csv",
    "format_console",
    # Sources
    "RecordSource",
    "FileRecordSource",
    "BytesRecordSource",
    "InMemoryRecordSource",
    "load_records",
    # Workspace
    "Workspace",
]
