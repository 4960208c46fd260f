"""
AI sourcing brief endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from sourcing.catalog_match import Workspace

from backend.core import llm
from backend.core.brief import write_brief
from backend.core.config import settings
from backend.core.session import get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.get("/status")
def ai_status():
    """Report whether the brief writer is configured server-side."""
    return {
        "available": llm.is_configured(),
        "model": settings.CLAUDE_BRIEF_MODEL
    }


@router.post("/brief")
def generate_brief(workspace: Workspace = Depends(get_workspace)):
    """
    Write a sourcing brief for the active catalog and current request set.

    Preconditions are checked in order: an active catalog, a non-empty
    request set, then a configured API key.
    """
    payload = workspace.brief_payload()
    if payload is None:
        raise HTTPException(
            status_code=400,
            detail="Select an active catalog before requesting an AI brief."
        )
    if not workspace.client_records:
        raise HTTPException(
            status_code=400,
            detail="Upload a client component list before requesting an AI brief."
        )
    if not llm.is_configured():
        raise HTTPException(
            status_code=503,
            detail="Set CLAUDE_API_KEY in your environment to enable AI analysis."
        )

    try:
        brief = write_brief(payload)
    except llm.LLMError as e:
        logger.error(f"Brief generation failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return {"brief": brief}
