"""
Client request API router.

The request set is the list of parts a client asked for. Each upload
replaces the set with the concatenation of its files.
"""
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from sourcing.catalog_match import BytesRecordSource, InMemoryRecordSource, Workspace

from backend.api.models import ClientRecordsRequest
from backend.core.session import get_workspace

router = APIRouter(prefix="/api/requests", tags=["Client Requests"])


@router.get("")
def get_requests(workspace: Workspace = Depends(get_workspace)):
    return {
        "records": workspace.client_records,
        "count": len(workspace.client_records),
    }


@router.post("")
def upload_requests(
    files: List[UploadFile] = File(...),
    workspace: Workspace = Depends(get_workspace),
):
    """Replace the request set with the uploaded files, in upload order."""
    record_sets = []
    for file in files:
        name = file.filename or "upload"
        try:
            record_sets.append(BytesRecordSource(name, file.file.read()).records())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"{name}: {e}")

    records = workspace.set_client_records(record_sets)
    return {
        "success": True,
        "count": len(records),
        "files": len(record_sets),
    }


@router.post("/records")
def set_request_records(
    request: ClientRecordsRequest,
    workspace: Workspace = Depends(get_workspace),
):
    """Replace the request set with rows the client already decoded."""
    record_sets = [InMemoryRecordSource(rows).records() for rows in request.files]
    records = workspace.set_client_records(record_sets)
    return {
        "success": True,
        "count": len(records),
        "files": len(record_sets),
    }
