import pytest

from conftest import FakeClient, page
from core.entities import DRUG_ADVERSE_EVENT, DRUG_RECALL, FOOD_RECALL
from core.errors import ServerError
from core.search import clamp_limit, lookup_label_section, search_criteria, search_records

RECALLS = [
    {
        "recall_number": "D-0001-2023",
        "classification": "Class I",
        "recalling_firm": "Acme Pharma",
        "recall_initiation_date": "20230315",
        "reason_for_recall": "r" * 400,
    },
    {
        "recall_number": "D-0002-2023",
        "classification": "Class I",
        "recalling_firm": "Beta Labs",
        "recall_initiation_date": "20231102",
    },
]


def test_recall_search_end_to_end(run):
    client = FakeClient(page(RECALLS))

    envelope = run(search_records(client, DRUG_RECALL, {
        "classification": "Class I",
        "date_from": "20230101",
        "date_to": "20231231",
        "limit": 5,
    }))

    path, params = client.calls[0]
    assert path == "/drug/enforcement.json"
    assert params["search"] == (
        'classification:"Class I" AND recall_initiation_date:[20230101 TO 20231231]'
    )
    assert params["limit"] == 5
    assert params["skip"] is None

    assert envelope["total_results"] == 2
    assert envelope["results_shown"] == 2
    assert [r["recall_number"] for r in envelope["drug_recalls"]] == ["D-0001-2023", "D-0002-2023"]
    assert envelope["search_criteria"]["classification"] == "Class I"
    assert envelope["api_usage"]["has_api_key"] is False
    assert "count_field" not in envelope


def test_total_comes_from_meta(run):
    client = FakeClient(page(RECALLS[:1], total=57))
    envelope = run(search_records(client, FOOD_RECALL, {}))
    assert envelope["total_results"] == 57
    assert envelope["results_shown"] == 1
    assert envelope["food_recalls"][0]["recalling_firm"] == "Acme Pharma"


def test_zero_matches_give_empty_envelope(run, fake_client):
    envelope = run(search_records(fake_client, DRUG_RECALL, {"recalling_firm": "Nobody"}))
    assert envelope["total_results"] == 0
    assert envelope["results_shown"] == 0
    assert envelope["drug_recalls"] == []


def test_wildcard_query_omits_search(run, fake_client):
    run(search_records(fake_client, DRUG_RECALL, {}))
    _, params = fake_client.calls[0]
    assert params["search"] is None
    assert params["limit"] == 10


def test_count_buckets_pass_through(run):
    buckets = [{"term": "NAUSEA", "count": 120}, {"term": "HEADACHE", "count": 80}]
    client = FakeClient({"meta": {}, "results": buckets})

    envelope = run(search_records(client, DRUG_ADVERSE_EVENT, {
        "drug_name": "aspirin",
        "count": "patient.reaction.reactionmeddrapt.exact",
    }))

    assert client.calls[0][1]["count"] == "patient.reaction.reactionmeddrapt.exact"
    assert envelope["count_field"] == "patient.reaction.reactionmeddrapt.exact"
    assert envelope["adverse_events"] == buckets
    assert envelope["total_results"] == 2


def test_errors_propagate(run):
    client = FakeClient(error=ServerError("FDA API server error. Please try again later", 500))
    with pytest.raises(ServerError):
        run(search_records(client, DRUG_RECALL, {}))


def test_clamp_limit():
    assert clamp_limit(None, 10, 100) == 10
    assert clamp_limit(0, 10, 100) == 1
    assert clamp_limit(1000, 10, 100) == 100
    assert clamp_limit("7", 10, 100) == 7
    assert clamp_limit("lots", 3, 10) == 3


def test_search_criteria_keeps_known_and_set_arguments():
    criteria = search_criteria(DRUG_RECALL, {
        "classification": "Class II",
        "status": None,
        "state": "",
        "colour": "blue",
        "limit": 10,
    })
    assert criteria == {"classification": "Class II", "limit": 10}


def test_label_section_texts_are_flattened(run):
    client = FakeClient(page([
        {"dosage_and_administration": ["Take one tablet daily."]},
        {"dosage_and_administration": ["Adults: 200 mg.", "Children: see table."]},
        {"description": ["no dosage here"]},
    ]))

    texts = run(lookup_label_section(client, "dosage", {"drug_name": "ibuprofen"}))

    assert texts == ["Take one tablet daily.", "Adults: 200 mg.", "Children: see table."]
    path, params = client.calls[0]
    assert path == "/drug/label.json"
    assert params["limit"] == 3
    assert "openfda.generic_name" in params["search"]


def test_label_section_limit_is_capped(run, fake_client):
    run(lookup_label_section(fake_client, "description", {"drug_name": "x", "limit": 50}))
    assert fake_client.calls[0][1]["limit"] == 10


def test_label_section_without_matches_is_none(run, fake_client):
    assert run(lookup_label_section(fake_client, "warnings_precautions", {"drug_name": "x"})) is None


def test_label_section_missing_in_every_label_is_none(run):
    client = FakeClient(page([{"description": ["text"]}]))
    assert run(lookup_label_section(client, "storage_handling", {"drug_name": "x"})) is None


def test_indications_return_label_identity(run):
    client = FakeClient(page([{
        "openfda": {
            "brand_name": ["ADVIL"],
            "generic_name": ["IBUPROFEN"],
            "manufacturer_name": ["Haleon"],
            "product_ndc": ["0573-0150"],
        },
        "indications_and_usage": ["temporarily relieves minor aches and pains"],
    }]))

    labels = run(lookup_label_section(client, "indications", {"ndc": "0573-0150"}))

    assert labels == [{
        "brand_names": ["ADVIL"],
        "generic_names": ["IBUPROFEN"],
        "manufacturer": ["Haleon"],
        "indications": ["temporarily relieves minor aches and pains"],
        "ndc_codes": ["0573-0150"],
    }]
    assert client.calls[0][1]["search"] == 'openfda.product_ndc:"0573-0150"'


def test_criteria_echo_the_paging_sent_upstream(run, fake_client):
    envelope = run(search_records(fake_client, DRUG_RECALL, {
        "status": "Ongoing",
        "limit": 1000,
        "skip": -5,
    }))

    _, params = fake_client.calls[0]
    assert params["limit"] == 100
    assert params["skip"] is None
    assert envelope["search_criteria"] == {"status": "Ongoing", "limit": 100, "skip": 0}
