"""
Sourcing brief - hand the match summary to the LLM for a short proposal.

The catalog_match package builds the payload; this module only renders it
into a prompt and returns whatever text comes back.
"""
import json
import logging

from sourcing.catalog_match.models import BriefPayload

from . import llm

logger = logging.getLogger(__name__)

NO_RESPONSE = "No AI response generated."

SYSTEM_PROMPT = (
    "You are an AI sourcing specialist for an electronics connector manufacturer.\n"
    "Combine catalog intelligence with the requested part list to produce a short, actionable brief.\n"
    "Highlight coverage percentage, list top available matches with advantages, "
    "and recommend next actions for missing parts."
)


def build_prompt(payload: BriefPayload) -> str:
    """Render the brief payload as the user message."""
    missing = ", ".join(payload.missing_identifiers)
    return (
        f"Catalog sample: {json.dumps(payload.catalog_sample, ensure_ascii=False)}.\n"
        f"Client request sample: {json.dumps(payload.client_sample, ensure_ascii=False)}.\n"
        f"Coverage: {payload.coverage}% with {payload.found} of {payload.total} components matched.\n"
        f"Missing identifiers: {missing}"
    )


def write_brief(payload: BriefPayload) -> str:
    """
    Generate the sourcing brief.

    Returns:
        Brief text, or a placeholder when the model returned nothing

    Raises:
        llm.LLMError: Passed through unchanged for the caller to display
    """
    logger.info(
        f"Requesting sourcing brief for '{payload.catalog_name}' "
        f"({payload.found}/{payload.total} matched)"
    )
    text = llm.generate(build_prompt(payload), system=SYSTEM_PROMPT)
    return text.strip() or NO_RESPONSE
