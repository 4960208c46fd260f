"""
Catalog Index - Fast lookup structure for catalog matching.

Instead of scanning the whole catalog for every requested part, we build
a dictionary once keyed by canonical identifier. The index is rebuilt
from scratch whenever the active catalog changes.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .config import FieldConfig
from .identifiers import extract_identifier
from .models import Record

logger = logging.getLogger(__name__)


@dataclass
class CatalogIndex:
    """
    Indexed catalog for identifier lookups.

    Attributes:
        by_identifier: Dict mapping identifier -> Record (last write wins for dupes)
        record_count: Total number of records offered to the index
        skipped_count: Records with no usable identifier (never matchable)
        duplicate_identifiers: Identifiers that appeared on more than one record
    """
    by_identifier: dict[str, Record] = field(default_factory=dict)
    record_count: int = 0
    skipped_count: int = 0
    duplicate_identifiers: list[str] = field(default_factory=list)

    def lookup(self, identifier: str) -> Optional[Record]:
        """Look up a catalog record by exact canonical identifier."""
        if not identifier:
            return None
        return self.by_identifier.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.by_identifier

    def __len__(self) -> int:
        return len(self.by_identifier)


def build_index(records: Iterable[Record], config: Optional[FieldConfig] = None) -> CatalogIndex:
    """
    Build lookup index from catalog records.

    Args:
        records: Sanitized catalog records in file order
        config: Field configuration (defaults to the packaged config)

    Returns:
        CatalogIndex keyed by canonical identifier
    """
    index = CatalogIndex()
    seen_duplicates: set[str] = set()

    for record in records:
        index.record_count += 1
        identifier = extract_identifier(record, config)
        if not identifier:
            index.skipped_count += 1
            continue

        # Simple dict, last write wins for duplicates; remember them for reporting
        if identifier in index.by_identifier and identifier not in seen_duplicates:
            seen_duplicates.add(identifier)
            index.duplicate_identifiers.append(identifier)
        index.by_identifier[identifier] = record

    if index.duplicate_identifiers:
        logger.warning(
            f"Catalog contains {len(index.duplicate_identifiers)} duplicated identifier(s); "
            f"later rows replace earlier ones"
        )
    if index.skipped_count:
        logger.warning(f"Skipped {index.skipped_count} catalog row(s) without an identifier")
    logger.debug(f"Indexed {len(index)} of {index.record_count} catalog records")
    return index
