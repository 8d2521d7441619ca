import json

import pytest
from fastmcp import Client, FastMCP

from conftest import FakeClient, page
from core.api_client import OpenFDAClient
from core.config import Settings
from core.entities import LABEL_SECTIONS
from core.errors import RateLimitError
from tools.mcp_server import create_server, serve

SEARCH_TOOLS = {
    "search_drug_adverse_events",
    "search_drug_labels",
    "search_drug_ndc",
    "search_drug_recalls",
    "search_drugs_fda",
    "search_drug_shortages",
    "search_device_510k",
    "search_device_classifications",
    "search_device_adverse_events",
    "search_device_recalls",
    "search_food_adverse_events",
    "search_food_recalls",
}

LABEL_TOOLS = {
    "get_drug_indications",
    "get_drug_dosage",
    "get_specific_populations",
    "get_storage_handling",
    "get_warnings_precautions",
    "get_clinical_pharmacology",
    "get_drug_description",
}


async def call(fda_client, tool, arguments, **kwargs):
    async with Client(create_server(fda_client)) as client:
        return await client.call_tool(tool, arguments, **kwargs)


def test_every_tool_is_registered(run):
    async def list_names():
        async with Client(create_server(FakeClient())) as client:
            return {tool.name for tool in await client.list_tools()}

    assert run(list_names()) == SEARCH_TOOLS | LABEL_TOOLS


def test_search_tool_returns_envelope_json(run):
    fda = FakeClient(page([{"recall_number": "D-1", "classification": "Class I"}]))

    result = run(call(fda, "search_drug_recalls", {"classification": "Class I", "limit": 5}))

    envelope = json.loads(result.content[0].text)
    assert envelope["total_results"] == 1
    assert envelope["drug_recalls"] == [{"recall_number": "D-1", "classification": "Class I"}]
    assert envelope["search_criteria"] == {"classification": "Class I", "limit": 5, "skip": 0}
    assert fda.calls[0][1]["search"] == 'classification:"Class I"'


def test_ndc_tool_normalizes_identifier(run):
    fda = FakeClient()
    run(call(fda, "search_drug_ndc", {"product_ndc": "12345678901"}))
    assert fda.calls[0][1]["search"] == '(product_ndc:"12345678901" OR product_ndc:"12345-6789-01")'


def test_upstream_failure_is_a_tool_error(run):
    fda = FakeClient(error=RateLimitError("Rate limit exceeded. Consider using an API key for higher limits", 429))

    result = run(call(fda, "search_drug_adverse_events", {"drug_name": "aspirin"}, raise_on_error=False))

    assert result.is_error
    assert "Drug adverse events search error: Rate limit exceeded" in result.content[0].text


@pytest.mark.parametrize("section_name", sorted(LABEL_SECTIONS))
def test_label_tools_answer_no_match_with_placeholder(run, section_name):
    tool = {
        "indications": "get_drug_indications",
        "dosage": "get_drug_dosage",
        "specific_populations": "get_specific_populations",
        "storage_handling": "get_storage_handling",
        "warnings_precautions": "get_warnings_precautions",
        "clinical_pharmacology": "get_clinical_pharmacology",
        "description": "get_drug_description",
    }[section_name]

    result = run(call(FakeClient(), tool, {"drug_name": "notadrug"}))

    assert result.content[0].text == LABEL_SECTIONS[section_name].empty_message


def test_label_tool_returns_section_texts(run):
    fda = FakeClient(page([{"warnings_and_precautions": ["5.1 Hepatotoxicity"]}]))

    result = run(call(fda, "get_warnings_precautions", {"drug_name": "acetaminophen", "exact_match": True}))

    assert json.loads(result.content[0].text) == ["5.1 Hepatotoxicity"]
    assert ".exact" in fda.calls[0][1]["search"]


def test_search_tool_ignores_unknown_arguments(run):
    fda = FakeClient(page([{"recall_number": "D-1"}]))

    result = run(call(fda, "search_drug_recalls", {"classification": "Class I", "colour": "blue"}))

    assert not result.is_error
    envelope = json.loads(result.content[0].text)
    assert "colour" not in envelope["search_criteria"]
    assert fda.calls[0][1]["search"] == 'classification:"Class I"'


def test_label_tool_ignores_unknown_arguments(run):
    result = run(call(FakeClient(), "get_drug_description", {"drug_name": "x", "foo": 1}))

    assert not result.is_error
    assert result.content[0].text == LABEL_SECTIONS["description"].empty_message


def test_serve_closes_client_when_server_stops(run, monkeypatch):
    closed = []

    async def stopped(self, *args, **kwargs):
        raise RuntimeError("transport closed")

    async def record_close(self):
        closed.append(self)

    monkeypatch.setattr(FastMCP, "run_async", stopped)
    monkeypatch.setattr(OpenFDAClient, "aclose", record_close)

    with pytest.raises(RuntimeError, match="transport closed"):
        run(serve(Settings()))

    assert len(closed) == 1
