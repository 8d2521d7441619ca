import pytest

from core.entities import (
    DEVICE_510K,
    DEVICE_ADVERSE_EVENT,
    DRUG_ADVERSE_EVENT,
    DRUG_LABEL,
    DRUG_NDC,
    DRUG_RECALL,
    ENTITIES,
    LABEL_LOOKUP,
)
from core.query_builder import WILDCARD, build_date_range, build_query, recognized_args


@pytest.mark.parametrize("entity", list(ENTITIES.values()) + [LABEL_LOOKUP], ids=lambda e: e.name)
def test_no_criteria_gives_wildcard(entity):
    assert build_query(entity, {}) == WILDCARD


@pytest.mark.parametrize("entity", list(ENTITIES.values()) + [LABEL_LOOKUP], ids=lambda e: e.name)
def test_blank_values_give_wildcard(entity):
    criteria = {name: "" for name in recognized_args(entity)}
    assert build_query(entity, criteria) == WILDCARD


def test_date_range_shapes():
    assert build_date_range("d", "20230101", "20231231") == "d:[20230101 TO 20231231]"
    assert build_date_range("d", "20230101", None) == "d:[20230101 TO *]"
    assert build_date_range("d", None, "20231231") == "d:[* TO 20231231]"
    assert build_date_range("d", None, None) is None
    assert build_date_range("d", "", "  ") is None


def test_recall_classification_and_date_range():
    query = build_query(DRUG_RECALL, {
        "classification": "Class I",
        "date_from": "20230101",
        "date_to": "20231231",
    })
    assert query == 'classification:"Class I" AND recall_initiation_date:[20230101 TO 20231231]'


def test_serious_flag_only_when_true():
    assert build_query(DRUG_ADVERSE_EVENT, {"serious_only": True}) == "serious:1"
    assert build_query(DRUG_ADVERSE_EVENT, {"serious_only": False}) == WILDCARD
    assert build_query(DRUG_ADVERSE_EVENT, {"serious_only": "yes"}) == WILDCARD


def test_drug_name_spans_all_name_fields():
    query = build_query(DRUG_ADVERSE_EVENT, {"drug_name": "aspirin", "serious_only": True})
    assert query == (
        '(patient.drug.medicinalproduct:"aspirin"'
        ' OR patient.drug.openfda.brand_name:"aspirin"'
        ' OR patient.drug.openfda.generic_name:"aspirin"'
        ' OR patient.drug.openfda.substance_name:"aspirin")'
        " AND serious:1"
    )


def test_exact_match_uses_exact_fields():
    query = build_query(LABEL_LOOKUP, {"drug_name": "Advil", "exact_match": True})
    assert query == (
        '(openfda.brand_name.exact:"Advil"'
        ' OR openfda.generic_name.exact:"Advil"'
        ' OR openfda.substance_name.exact:"Advil")'
    )
    loose = build_query(LABEL_LOOKUP, {"drug_name": "Advil", "exact_match": False})
    assert ".exact" not in loose


def test_lone_ndc_is_the_whole_query():
    assert build_query(DRUG_NDC, {"product_ndc": "12345678901"}) == (
        '(product_ndc:"12345678901" OR product_ndc:"12345-6789-01")'
    )


def test_single_candidate_ndc_has_no_parentheses():
    assert build_query(DRUG_NDC, {"product_ndc": "0002-3227"}) == 'product_ndc:"0002-3227"'


def test_ndc_leads_other_clauses():
    query = build_query(DRUG_LABEL, {"brand_name": "Lipitor", "ndc": "0071-0155"})
    assert query == 'openfda.product_ndc:"0071-0155" AND openfda.brand_name:"Lipitor"'


def test_unknown_arguments_are_ignored():
    assert build_query(DRUG_RECALL, {"colour": "blue", "limit": 5}) == WILDCARD


def test_device_event_product_code_and_name_group():
    query = build_query(DEVICE_ADVERSE_EVENT, {"device_name": "pump", "product_code": "FRN"})
    assert query == (
        '(device.brand_name:"pump" OR device.generic_name:"pump")'
        ' AND device.device_report_product_code:"FRN"'
    )


def test_510k_decision_date_open_range():
    query = build_query(DEVICE_510K, {"applicant": "Medtronic", "decision_date_from": "20200101"})
    assert query == 'applicant:"Medtronic" AND decision_date:[20200101 TO *]'


def test_recognized_args_include_date_bounds_and_exact_flag():
    assert "date_from" in recognized_args(DRUG_RECALL)
    assert "date_to" in recognized_args(DRUG_RECALL)
    assert recognized_args(LABEL_LOOKUP)[:3] == ["ndc", "drug_name", "exact_match"]
