"""
Pydantic request models for the API.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List


# ============== Catalogs ==============

class CatalogRecordsRequest(BaseModel):
    """Catalog rows already decoded by the client (header -> cell value)."""
    name: str = Field(..., min_length=1)
    records: List[Dict[str, Any]]


# ============== Client Requests ==============

class ClientRecordsRequest(BaseModel):
    """
    Requested parts already decoded by the client.

    Each inner list is one file; files are concatenated in order.
    """
    files: List[List[Dict[str, Any]]]
