"""
Tests for the AI sourcing brief: prompt building, the Claude client, and
the /api/ai endpoints.

The Claude HTTP call is patched at requests.post; nothing leaves the process.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from sourcing.catalog_match import BriefPayload

from backend.core import llm
from backend.core.brief import NO_RESPONSE, build_prompt, write_brief
from backend.core.config import settings


def _response(status: int = 200, body=None, text: str = ""):
    resp = MagicMock()
    resp.ok = 200 <= status < 300
    resp.status_code = status
    resp.text = text
    if body is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


def _payload() -> BriefPayload:
    return BriefPayload(
        catalog_sample=[{"Part Number": "ABC-1", "Manufacturer": "Acme"}],
        client_sample=[{"PN": "abc-1"}, {"PN": "Q0"}],
        coverage=50,
        found=1,
        total=2,
        missing_identifiers=["Q0"],
        catalog_name="acme.csv",
    )


@pytest.fixture()
def api_key():
    with patch.object(settings, "CLAUDE_API_KEY", "test-key"):
        yield "test-key"


@pytest.fixture()
def briefed_client(client):
    """Client with a catalog and a request list that half matches it."""
    client.post(
        "/api/catalogs/records",
        json={"name": "acme.csv", "records": [{"Part Number": "ABC-1", "Manufacturer": "Acme"}]},
    )
    client.post("/api/requests/records", json={"files": [[{"PN": "abc-1"}, {"PN": "Q0"}]]})
    return client


class TestBuildPrompt:

    def test_prompt_lines(self):
        prompt = build_prompt(_payload())
        lines = prompt.split("\n")
        assert lines[0] == 'Catalog sample: [{"Part Number": "ABC-1", "Manufacturer": "Acme"}].'
        assert lines[1].startswith("Client request sample: [")
        assert lines[2] == "Coverage: 50% with 1 of 2 components matched."
        assert lines[3] == "Missing identifiers: Q0"

    def test_no_missing_identifiers(self):
        payload = _payload()
        payload.missing_identifiers = []
        assert build_prompt(payload).endswith("Missing identifiers: ")


class TestGenerate:
    """Tests for the Claude client."""

    def test_sends_prompt_and_system(self, api_key):
        body = {"content": [{"type": "text", "text": "Brief "}, {"type": "text", "text": "body"}]}
        with patch("backend.core.llm.requests.post", return_value=_response(body=body)) as post:
            text = llm.generate("hello", system="be brief")

        assert text == "Brief body"
        kwargs = post.call_args.kwargs
        assert kwargs["headers"]["x-api-key"] == "test-key"
        assert kwargs["json"]["system"] == "be brief"
        assert kwargs["json"]["messages"] == [{"role": "user", "content": "hello"}]
        assert kwargs["json"]["model"] == settings.CLAUDE_BRIEF_MODEL

    def test_provider_error_message(self, api_key):
        body = {"error": {"type": "rate_limit_error", "message": "Rate limited"}}
        with patch("backend.core.llm.requests.post", return_value=_response(429, body=body)):
            with pytest.raises(llm.LLMError, match="Rate limited"):
                llm.generate("hello")

    def test_error_without_message_uses_default(self, api_key):
        with patch("backend.core.llm.requests.post", return_value=_response(500, body={"error": {}})):
            with pytest.raises(llm.LLMError) as exc_info:
                llm.generate("hello")
        assert str(exc_info.value) == llm.DEFAULT_FAILURE

    def test_network_failure(self, api_key):
        with patch("backend.core.llm.requests.post", side_effect=requests.ConnectionError("down")):
            with pytest.raises(llm.LLMError):
                llm.generate("hello")


class TestWriteBrief:

    def test_strips_text(self):
        with patch("backend.core.brief.llm.generate", return_value="  Coverage is 50%.\n"):
            assert write_brief(_payload()) == "Coverage is 50%."

    def test_empty_response_placeholder(self):
        with patch("backend.core.brief.llm.generate", return_value="   "):
            assert write_brief(_payload()) == NO_RESPONSE


class TestBriefEndpoint:
    """Tests for POST /api/ai/brief."""

    def test_status(self, client, api_key):
        data = client.get("/api/ai/status").json()
        assert data["available"] is True

    def test_requires_active_catalog(self, client, api_key):
        resp = client.post("/api/ai/brief")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Select an active catalog before requesting an AI brief."

    def test_requires_client_records(self, client, api_key):
        client.post("/api/catalogs/records", json={"name": "c", "records": [{"SKU": "A"}]})
        resp = client.post("/api/ai/brief")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Upload a client component list before requesting an AI brief."

    def test_requires_api_key(self, briefed_client):
        with patch.object(settings, "CLAUDE_API_KEY", ""):
            resp = briefed_client.post("/api/ai/brief")
        assert resp.status_code == 503
        assert "CLAUDE_API_KEY" in resp.json()["detail"]

    def test_provider_error_surfaces(self, briefed_client, api_key):
        body = {"error": {"message": "Overloaded"}}
        with patch("backend.core.llm.requests.post", return_value=_response(529, body=body)):
            resp = briefed_client.post("/api/ai/brief")
        assert resp.status_code == 502
        assert resp.json()["detail"] == "Overloaded"

    def test_returns_brief(self, briefed_client, api_key):
        body = {"content": [{"type": "text", "text": "Half the list is covered."}]}
        with patch("backend.core.llm.requests.post", return_value=_response(body=body)) as post:
            resp = briefed_client.post("/api/ai/brief")

        assert resp.status_code == 200
        assert resp.json() == {"brief": "Half the list is covered."}
        prompt = post.call_args.kwargs["json"]["messages"][0]["content"]
        assert "Coverage: 50% with 1 of 2 components matched." in prompt
        assert prompt.endswith("Missing identifiers: Q0")
