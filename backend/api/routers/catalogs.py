"""
Catalog management API router.

Upload, replace, activate, preview and delete manufacturer catalogs.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from sourcing.catalog_match import BytesRecordSource, InMemoryRecordSource, Workspace

from backend.api.models import CatalogRecordsRequest
from backend.api.security import require_api_key
from backend.api.serializers import catalog_summary
from backend.core.session import get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalogs", tags=["Catalogs"])


def _read_upload(file: UploadFile) -> list:
    """Decode an uploaded file into sanitized records."""
    name = file.filename or "upload"
    try:
        return BytesRecordSource(name, file.file.read()).records()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"{name}: {e}")


def _get_or_404(workspace: Workspace, catalog_id: str):
    try:
        return workspace.get_catalog(catalog_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Catalog not found")


@router.get("")
def list_catalogs(workspace: Workspace = Depends(get_workspace)):
    """List catalogs, newest first."""
    active_id = workspace.active_catalog_id
    catalogs = [catalog_summary(c, active_id) for c in workspace.catalogs]
    return {
        "catalogs": catalogs,
        "active_catalog_id": active_id,
        "count": len(catalogs),
    }


@router.post("")
def upload_catalogs(
    files: List[UploadFile] = File(...),
    workspace: Workspace = Depends(get_workspace),
):
    """
    Upload one or more catalog files (CSV, JSON or Excel).

    Every file is decoded before any catalog is added, so a bad file
    rejects the whole batch.
    """
    uploads = [(file.filename or "upload", _read_upload(file)) for file in files]
    created = workspace.add_catalogs(uploads)
    active_id = workspace.active_catalog_id
    return {
        "success": True,
        "catalogs": [catalog_summary(c, active_id) for c in created],
        "active_catalog_id": active_id,
    }


@router.post("/records")
def create_catalog_from_records(
    request: CatalogRecordsRequest,
    workspace: Workspace = Depends(get_workspace),
):
    """Create a catalog from rows the client already decoded."""
    records = InMemoryRecordSource(request.records, name=request.name).records()
    catalog = workspace.add_catalog(request.name, records)
    return {
        "success": True,
        "catalog": catalog_summary(catalog, workspace.active_catalog_id),
    }


@router.put("/{catalog_id}")
def replace_catalog(
    catalog_id: str,
    file: UploadFile = File(...),
    workspace: Workspace = Depends(get_workspace),
):
    """Replace a catalog with a new revision, keeping its id."""
    _get_or_404(workspace, catalog_id)
    records = _read_upload(file)
    catalog = workspace.replace_catalog(catalog_id, file.filename or "upload", records)
    return {
        "success": True,
        "catalog": catalog_summary(catalog, workspace.active_catalog_id),
    }


@router.delete("/{catalog_id}", dependencies=[Depends(require_api_key)])
def delete_catalog(catalog_id: str, workspace: Workspace = Depends(get_workspace)):
    """Delete a catalog. Deleting the active catalog leaves none active."""
    catalog = _get_or_404(workspace, catalog_id)
    workspace.delete_catalog(catalog_id)
    return {
        "success": True,
        "message": f"Deleted {catalog.name}",
        "active_catalog_id": workspace.active_catalog_id,
    }


@router.post("/{catalog_id}/activate")
def activate_catalog(catalog_id: str, workspace: Workspace = Depends(get_workspace)):
    """Make a catalog the one requests are matched against."""
    _get_or_404(workspace, catalog_id)
    catalog = workspace.activate(catalog_id)
    return {
        "success": True,
        "catalog": catalog_summary(catalog, workspace.active_catalog_id),
    }


@router.get("/{catalog_id}/preview")
def preview_catalog(
    catalog_id: str,
    limit: int = Query(5, ge=1, le=100),
    workspace: Workspace = Depends(get_workspace),
):
    """First few records of a catalog."""
    catalog = _get_or_404(workspace, catalog_id)
    return {
        "catalog": catalog_summary(catalog, workspace.active_catalog_id),
        "records": catalog.records[:limit],
    }
