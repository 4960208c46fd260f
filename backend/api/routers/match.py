"""
Match results API router.

Everything here is recomputed from the active catalog and the current
request set on each call.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from sourcing.catalog_match import Workspace, build_report_rows, export_csv, filter_matches
from sourcing.catalog_match.report import generate_report_filename

from backend.api.serializers import (
    distribution_list,
    found_item,
    insights_dict,
    missing_item,
    stats_dict,
)
from backend.core.session import get_workspace

router = APIRouter(prefix="/api/match", tags=["Match"])


@router.get("")
def get_matches(
    q: str = Query("", description="Filter found matches by identifier or catalog text"),
    workspace: Workspace = Depends(get_workspace),
):
    """
    Match the request set against the active catalog.

    Found matches are narrowed by the search query; missing records and the
    coverage stats always reflect the full request set.
    """
    config = workspace.config
    result = workspace.match()
    found = filter_matches(result.found, q, config)
    return {
        "active_catalog_id": workspace.active_catalog_id,
        "stats": stats_dict(workspace.stats(result)),
        "query": q,
        "found": [found_item(m, config) for m in found],
        "missing": [missing_item(m, config) for m in result.missing],
    }


@router.get("/insights")
def get_insights(workspace: Workspace = Depends(get_workspace)):
    """Coverage, request quality and top manufacturer/family breakdowns."""
    insights = workspace.insights()
    return {
        "stats": stats_dict(insights["stats"]),
        "requests": insights_dict(insights["requests"]),
        "manufacturers": distribution_list(insights["manufacturers"]),
        "families": distribution_list(insights["families"]),
    }


@router.get("/report")
def download_report(workspace: Workspace = Depends(get_workspace)):
    """Download the availability report as CSV."""
    rows = build_report_rows(workspace.client_records, workspace.match(), workspace.config)
    filename = generate_report_filename()
    return Response(
        content=export_csv(rows),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename=\"{filename}\""
        }
    )
