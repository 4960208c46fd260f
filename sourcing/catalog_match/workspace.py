"""
Workspace - Session state for catalog matching.

Holds the uploaded catalogs, the id of the active one, and the current
client request set. Mutations come from discrete upload/replace/delete
actions, so there is a single writer; readers resolve the active catalog
explicitly and pass it to the matcher.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from .config import FieldConfig, default_config
from .insights import build_brief_payload, coverage_stats, request_insights, top_families, top_manufacturers
from .matcher import match_catalog
from .models import BriefPayload, Catalog, CoverageStats, MatchResult, Record

logger = logging.getLogger(__name__)


class Workspace:
    """In-memory catalogs and request set for one session."""

    def __init__(self, config: Optional[FieldConfig] = None):
        self.config = config or default_config()
        self._catalogs: list[Catalog] = []
        self.active_catalog_id: Optional[str] = None
        self.client_records: list[Record] = []

    # ------------------------------------------------------------------
    # Catalog lifecycle
    # ------------------------------------------------------------------

    @property
    def catalogs(self) -> list[Catalog]:
        """Catalogs newest first."""
        return list(self._catalogs)

    def get_catalog(self, catalog_id: str) -> Catalog:
        """
        Look up a catalog by id.

        Raises:
            KeyError: If no catalog has that id
        """
        for catalog in self._catalogs:
            if catalog.id == catalog_id:
                return catalog
        raise KeyError(catalog_id)

    def add_catalogs(self, uploads: list[tuple[str, list[Record]]]) -> list[Catalog]:
        """
        Register uploaded catalogs.

        The batch is placed ahead of existing catalogs in upload order. When
        nothing is active, the first catalog of the batch becomes active.

        Args:
            uploads: (name, records) pairs

        Returns:
            The created catalogs
        """
        created = [
            Catalog(id=uuid.uuid4().hex, name=name, records=records, uploaded_at=datetime.now())
            for name, records in uploads
        ]
        self._catalogs = created + self._catalogs
        if self.active_catalog_id is None and created:
            self.active_catalog_id = created[0].id

        for catalog in created:
            logger.info(f"Added catalog '{catalog.name}' with {catalog.record_count} record(s)")
        return created

    def add_catalog(self, name: str, records: list[Record]) -> Catalog:
        return self.add_catalogs([(name, records)])[0]

    def replace_catalog(self, catalog_id: str, name: str, records: list[Record]) -> Catalog:
        """Overwrite a catalog's revision in place, keeping its id."""
        catalog = self.get_catalog(catalog_id)
        catalog.name = name
        catalog.records = records
        catalog.uploaded_at = datetime.now()
        logger.info(f"Replaced catalog {catalog_id} with '{name}' ({len(records)} record(s))")
        return catalog

    def delete_catalog(self, catalog_id: str) -> None:
        """Remove a catalog, clearing the active selection if it pointed there."""
        catalog = self.get_catalog(catalog_id)
        self._catalogs = [c for c in self._catalogs if c.id != catalog_id]
        if self.active_catalog_id == catalog_id:
            self.active_catalog_id = None
        logger.info(f"Deleted catalog '{catalog.name}'")

    def activate(self, catalog_id: str) -> Catalog:
        catalog = self.get_catalog(catalog_id)
        self.active_catalog_id = catalog.id
        return catalog

    @property
    def active_catalog(self) -> Optional[Catalog]:
        if self.active_catalog_id is None:
            return None
        for catalog in self._catalogs:
            if catalog.id == self.active_catalog_id:
                return catalog
        return None

    # ------------------------------------------------------------------
    # Client request set
    # ------------------------------------------------------------------

    def set_client_records(self, record_sets: list[list[Record]]) -> list[Record]:
        """Replace the request set with the concatenation of one upload's files."""
        combined: list[Record] = []
        for records in record_sets:
            combined.extend(records)
        self.client_records = combined
        logger.info(f"Client request set now holds {len(combined)} record(s)")
        return combined

    # ------------------------------------------------------------------
    # Derived views (recomputed on every call)
    # ------------------------------------------------------------------

    def match(self) -> MatchResult:
        return match_catalog(self.active_catalog, self.client_records, self.config)

    def stats(self, result: Optional[MatchResult] = None) -> CoverageStats:
        result = result if result is not None else self.match()
        return coverage_stats(self.client_records, result)

    def insights(self) -> dict:
        """Everything the insights panel shows, from one match run."""
        result = self.match()
        return {
            "stats": coverage_stats(self.client_records, result),
            "requests": request_insights(self.client_records, self.config),
            "manufacturers": top_manufacturers(result.found, self.config),
            "families": top_families(result.found, self.config),
        }

    def brief_payload(self) -> Optional[BriefPayload]:
        """Payload for the brief writer, or None without an active catalog."""
        catalog = self.active_catalog
        if catalog is None:
            return None
        return build_brief_payload(catalog, self.client_records, self.match(), self.config)
