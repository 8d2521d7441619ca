import pytest

from core.entities import (
    DEVICE_ADVERSE_EVENT,
    DRUG_ADVERSE_EVENT,
    DRUG_LABEL,
    DRUG_RECALL,
    ENTITIES,
    LABEL_LOOKUP,
)
from core.formatters import ELLIPSIS, TRUNCATION_LIMIT, format_record, truncate


@pytest.mark.parametrize("entity", list(ENTITIES.values()) + [LABEL_LOOKUP], ids=lambda e: e.name)
def test_empty_record_formats_without_error(entity):
    assert isinstance(format_record(entity, {}), dict)


@pytest.mark.parametrize("entity", list(ENTITIES.values()), ids=lambda e: e.name)
def test_non_dict_record_counts_as_empty(entity):
    assert format_record(entity, None) == format_record(entity, {})
    assert format_record(entity, "garbage") == format_record(entity, {})


def test_truncate_boundaries():
    exact = "x" * TRUNCATION_LIMIT
    assert truncate(exact) == exact
    long = "y" * (TRUNCATION_LIMIT + 50)
    assert truncate(long) == "y" * TRUNCATION_LIMIT + ELLIPSIS
    assert truncate(None) is None


def test_label_text_is_truncated_and_lists_capped():
    record = {
        "openfda": {"brand_name": ["LIPITOR", "OTHER"], "product_ndc": ["0071-0155"]},
        "indications_and_usage": ["i" * 500],
        "warnings": ["w1", "w2", "w3"],
        "active_ingredient": ["a1", "a2", "a3", "a4"],
    }
    formatted = format_record(DRUG_LABEL, record)
    assert formatted["brand_name"] == "LIPITOR"
    assert formatted["product_ndc"] == "0071-0155"
    assert formatted["indications_and_usage"] == "i" * 200 + "..."
    assert formatted["warnings"] == ["w1", "w2"]
    assert formatted["active_ingredients"] == ["a1", "a2", "a3"]
    assert "generic_name" not in formatted


def test_adverse_event_caps_drugs_and_reactions():
    record = {
        "safetyreportid": "100",
        "serious": "1",
        "patient": {
            "patientsex": "2",
            "drug": [{"medicinalproduct": f"DRUG{i}"} for i in range(10)],
            "reaction": [{"reactionmeddrapt": f"R{i}"} for i in range(5)],
        },
    }
    formatted = format_record(DRUG_ADVERSE_EVENT, record)
    assert formatted["serious"] == "Yes"
    assert formatted["patient"] == {"sex": "2"}
    assert [d["name"] for d in formatted["drugs"]] == ["DRUG0", "DRUG1", "DRUG2"]
    assert [r["term"] for r in formatted["reactions"]] == ["R0", "R1", "R2"]


def test_adverse_event_without_patient():
    formatted = format_record(DRUG_ADVERSE_EVENT, {"safetyreportid": "7", "serious": "2"})
    assert formatted["serious"] == "No"
    assert formatted["patient"] == {}
    assert formatted["drugs"] == []
    assert formatted["reactions"] == []


def test_device_event_uses_first_device_and_patient():
    record = {
        "report_number": "R-1",
        "device": [
            {"brand_name": "PUMP A", "device_report_product_code": "FRN"},
            {"brand_name": "PUMP B"},
        ],
        "patient": [{"patient_sex": "Female"}],
        "mdr_text": [{"text": "t" * 300}],
    }
    formatted = format_record(DEVICE_ADVERSE_EVENT, record)
    assert formatted["device"] == {"brand_name": "PUMP A", "product_code": "FRN"}
    assert formatted["patient"] == {"sex": "Female"}
    assert formatted["event_description"].endswith("...")


def test_recall_passes_scalars_through():
    record = {"recall_number": "D-1", "classification": "Class I", "unrelated": "x"}
    assert format_record(DRUG_RECALL, record) == {"recall_number": "D-1", "classification": "Class I"}


def test_label_lookup_keeps_full_lists():
    record = {"openfda": {"brand_name": "ADVIL"}, "indications_and_usage": ["long text " * 100]}
    formatted = format_record(LABEL_LOOKUP, record)
    assert formatted["brand_names"] == ["ADVIL"]
    assert formatted["indications"] == ["long text " * 100]
    assert formatted["ndc_codes"] == []


def test_missing_seriousness_is_omitted():
    formatted = format_record(DRUG_ADVERSE_EVENT, {"safetyreportid": "8"})
    assert "serious" not in formatted
    assert format_record(DRUG_ADVERSE_EVENT, {"serious": 1})["serious"] == "Yes"
