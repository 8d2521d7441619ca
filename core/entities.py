# =============================================================================
# core/entities.py  -  One table per searchable openFDA record kind
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares, for every record kind the tool server exposes:
#     - the openFDA endpoint
#     - the clause table  (caller argument -> query clause)
#     - the field table   (upstream record -> formatted summary)
#     - the envelope key the formatted list is returned under
#
#   core/query_builder.py and core/formatters.py are generic; everything
#   entity-specific lives here.
#
# FIELD NAMES:
#   Argument names are what the agent sees in the tool schema.  Upstream
#   field names follow the openFDA reference at https://open.fda.gov/apis/.
#   Where the friendly name and the upstream name differ (e.g. NDC
#   "proprietary_name" is indexed as "brand_name") the clause maps one onto
#   the other.
# =============================================================================

from core.models import (
    AnyOf,
    Capped,
    DateRange,
    Each,
    Entity,
    First,
    FirstOf,
    Flag,
    Group,
    Identifier,
    LabelSection,
    Mapped,
    Phrase,
    Truncated,
    Value,
)
from core.paths import as_list


def _yes_no(value) -> str | None:
    if value is None:
        return None
    return "Yes" if str(value) == "1" else "No"


# =============================================================================
# DRUG ENTITIES
# =============================================================================

DRUG_ADVERSE_EVENT = Entity(
    name="drug_adverse_event",
    label="Drug adverse events",
    endpoint="/drug/event.json",
    result_key="adverse_events",
    clauses=(
        AnyOf("drug_name", (
            "patient.drug.medicinalproduct",
            "patient.drug.openfda.brand_name",
            "patient.drug.openfda.generic_name",
            "patient.drug.openfda.substance_name",
        )),
        Phrase("brand_name", "patient.drug.openfda.brand_name"),
        Phrase("generic_name", "patient.drug.openfda.generic_name"),
        Phrase("reaction", "patient.reaction.reactionmeddrapt"),
        Phrase("manufacturer", "patient.drug.openfda.manufacturer_name"),
        Flag("serious_only", "serious:1"),
        Phrase("patient_sex", "patient.patientsex"),
        Phrase("country", "occurcountry"),
        DateRange("date_from", "date_to", "receivedate"),
    ),
    fields=(
        Value("safety_report_id", "safetyreportid"),
        Value("report_date", "receivedate"),
        Mapped("serious", "serious", _yes_no),
        Value("country", "occurcountry"),
        Group("patient", (
            Value("age", "patient.patientonsetage"),
            Value("age_unit", "patient.patientonsetageunit"),
            Value("sex", "patient.patientsex"),
        )),
        Each("drugs", "patient.drug", size=3, fields=(
            Value("name", "medicinalproduct"),
            First("brand_name", "openfda.brand_name"),
            First("generic_name", "openfda.generic_name"),
            First("manufacturer", "openfda.manufacturer_name"),
            Value("indication", "drugindication"),
            Value("dosage", "drugdosagetext"),
        )),
        Each("reactions", "patient.reaction", size=3, fields=(
            Value("term", "reactionmeddrapt"),
            Value("outcome", "reactionoutcome"),
        )),
    ),
)

DRUG_LABEL = Entity(
    name="drug_label",
    label="Drug labels",
    endpoint="/drug/label.json",
    result_key="drug_labels",
    clauses=(
        Identifier("ndc", "openfda.product_ndc"),
        Phrase("brand_name", "openfda.brand_name"),
        Phrase("generic_name", "openfda.generic_name"),
        Phrase("manufacturer", "openfda.manufacturer_name"),
        Phrase("indication", "indications_and_usage"),
        Phrase("active_ingredient", "active_ingredient"),
        Phrase("route", "openfda.route"),
        Phrase("product_type", "openfda.product_type"),
    ),
    fields=(
        Value("id", "id"),
        Value("set_id", "set_id"),
        Value("version", "version"),
        First("brand_name", "openfda.brand_name"),
        First("generic_name", "openfda.generic_name"),
        First("manufacturer", "openfda.manufacturer_name"),
        First("product_type", "openfda.product_type"),
        First("product_ndc", "openfda.product_ndc"),
        Capped("active_ingredients", "active_ingredient", 3),
        Truncated("indications_and_usage", "indications_and_usage"),
        Capped("warnings", "warnings", 2),
        Truncated("dosage_and_administration", "dosage_and_administration"),
        Capped("contraindications", "contraindications", 2),
    ),
)

DRUG_NDC = Entity(
    name="drug_ndc",
    label="NDC directory",
    endpoint="/drug/ndc.json",
    result_key="ndc_entries",
    clauses=(
        Identifier("product_ndc", "product_ndc"),
        Identifier("package_ndc", "packaging.package_ndc"),
        Phrase("proprietary_name", "brand_name"),
        Phrase("nonproprietary_name", "generic_name"),
        Phrase("labeler_name", "labeler_name"),
        Phrase("dosage_form", "dosage_form"),
        Phrase("route", "route"),
        Phrase("substance_name", "active_ingredients.name"),
    ),
    fields=(
        Value("product_ndc", "product_ndc"),
        Value("proprietary_name", "brand_name"),
        Value("nonproprietary_name", "generic_name"),
        Value("labeler_name", "labeler_name"),
        Value("dosage_form", "dosage_form"),
        Value("route", "route"),
        Value("marketing_category", "marketing_category"),
        Value("application_number", "application_number"),
        Value("marketing_start_date", "marketing_start_date"),
        Value("marketing_end_date", "marketing_end_date"),
        Capped("active_ingredients", "active_ingredients", 3),
        Each("packaging", "packaging", size=2, fields=(
            Value("package_ndc", "package_ndc"),
            Value("description", "description"),
        )),
    ),
)

# Enforcement reports share one schema across drug, device and food.
_RECALL_FIELDS = (
    Value("recall_number", "recall_number"),
    Value("product_description", "product_description"),
    Value("recalling_firm", "recalling_firm"),
    Value("classification", "classification"),
    Value("status", "status"),
    Value("reason_for_recall", "reason_for_recall"),
    Value("recall_initiation_date", "recall_initiation_date"),
    Value("distribution_pattern", "distribution_pattern"),
    Value("product_quantity", "product_quantity"),
    Value("state", "state"),
    Value("country", "country"),
    Value("voluntary_mandated", "voluntary_mandated"),
)

_RECALL_CLAUSES = (
    Phrase("product_description", "product_description"),
    Phrase("recalling_firm", "recalling_firm"),
    Phrase("classification", "classification"),
    Phrase("status", "status"),
    Phrase("state", "state"),
    Phrase("country", "country"),
    Phrase("reason_for_recall", "reason_for_recall"),
    DateRange("date_from", "date_to", "recall_initiation_date"),
)

DRUG_RECALL = Entity(
    name="drug_recall",
    label="Drug recalls",
    endpoint="/drug/enforcement.json",
    result_key="drug_recalls",
    clauses=_RECALL_CLAUSES,
    fields=_RECALL_FIELDS,
)

DRUGS_FDA = Entity(
    name="drugs_fda",
    label="Drugs@FDA",
    endpoint="/drug/drugsfda.json",
    result_key="fda_approved_drugs",
    clauses=(
        Phrase("sponsor_name", "sponsor_name"),
        Phrase("application_number", "application_number"),
        Phrase("brand_name", "products.brand_name"),
        Phrase("generic_name", "openfda.generic_name"),
        Phrase("active_ingredient", "products.active_ingredients.name"),
        Phrase("dosage_form", "products.dosage_form"),
        Phrase("marketing_status", "products.marketing_status"),
    ),
    fields=(
        Value("application_number", "application_number"),
        Value("sponsor_name", "sponsor_name"),
        First("brand_name", "openfda.brand_name"),
        First("generic_name", "openfda.generic_name"),
        First("manufacturer", "openfda.manufacturer_name"),
        Each("products", "products", size=2, fields=(
            Value("brand_name", "brand_name"),
            Value("dosage_form", "dosage_form"),
            Value("route", "route"),
            Value("marketing_status", "marketing_status"),
            Capped("active_ingredients", "active_ingredients", 2),
        )),
        Each("submissions", "submissions", size=2, fields=(
            Value("submission_type", "submission_type"),
            Value("submission_status", "submission_status"),
            Value("submission_status_date", "submission_status_date"),
        )),
    ),
)

DRUG_SHORTAGE = Entity(
    name="drug_shortage",
    label="Drug shortages",
    endpoint="/drug/shortages.json",
    result_key="drug_shortages",
    clauses=(
        Phrase("product_name", "proprietary_name"),
        Phrase("generic_name", "generic_name"),
        Phrase("brand_name", "openfda.brand_name"),
        Phrase("active_ingredient", "openfda.substance_name"),
        Phrase("shortage_status", "status"),
        Phrase("dosage_form", "dosage_form"),
        Phrase("company_name", "company_name"),
    ),
    fields=(
        Value("package_ndc", "package_ndc"),
        Value("product_name", "proprietary_name"),
        Value("generic_name", "generic_name"),
        First("brand_name", "openfda.brand_name"),
        Value("company_name", "company_name"),
        Value("dosage_form", "dosage_form"),
        Value("presentation", "presentation"),
        Value("shortage_status", "status"),
        Value("availability", "availability"),
        Truncated("shortage_reason", "shortage_reason"),
        Capped("therapeutic_category", "therapeutic_category", 2),
        Value("initial_posting_date", "initial_posting_date"),
        Value("last_updated_date", "update_date"),
        Capped("active_ingredients", "openfda.substance_name", 3),
    ),
)


# =============================================================================
# DEVICE ENTITIES
# =============================================================================

DEVICE_510K = Entity(
    name="device_510k",
    label="Device 510(k)",
    endpoint="/device/510k.json",
    result_key="device_510k_clearances",
    clauses=(
        Phrase("device_name", "device_name"),
        Phrase("applicant", "applicant"),
        Phrase("contact", "contact"),
        Phrase("product_code", "product_code"),
        Phrase("clearance_type", "clearance_type"),
        DateRange("decision_date_from", "decision_date_to", "decision_date"),
    ),
    fields=(
        Value("k_number", "k_number"),
        Value("device_name", "device_name"),
        Value("applicant", "applicant"),
        Value("contact", "contact"),
        Value("product_code", "product_code"),
        Value("clearance_type", "clearance_type"),
        Value("decision_date", "decision_date"),
        Value("decision_code", "decision_code"),
        Value("decision_description", "decision_description"),
        Value("statement_or_summary", "statement_or_summary"),
        Group("openfda", (
            First("device_name", "openfda.device_name"),
            First("device_class", "openfda.device_class"),
            First("regulation_number", "openfda.regulation_number"),
        )),
    ),
)

DEVICE_CLASSIFICATION = Entity(
    name="device_classification",
    label="Device classification",
    endpoint="/device/classification.json",
    result_key="device_classifications",
    clauses=(
        Phrase("device_name", "device_name"),
        Phrase("device_class", "device_class"),
        Phrase("medical_specialty", "medical_specialty"),
        Phrase("product_code", "product_code"),
        Phrase("regulation_number", "regulation_number"),
    ),
    fields=(
        Value("product_code", "product_code"),
        Value("device_name", "device_name"),
        Value("device_class", "device_class"),
        Value("medical_specialty", "medical_specialty"),
        Value("medical_specialty_description", "medical_specialty_description"),
        Value("regulation_number", "regulation_number"),
        Value("submission_type_id", "submission_type_id"),
        Truncated("definition", "definition"),
        Group("openfda", (
            First("device_name", "openfda.device_name"),
            First("device_class", "openfda.device_class"),
        )),
    ),
)

DEVICE_ADVERSE_EVENT = Entity(
    name="device_adverse_event",
    label="Device adverse events",
    endpoint="/device/event.json",
    result_key="device_adverse_events",
    clauses=(
        AnyOf("device_name", ("device.brand_name", "device.generic_name")),
        Phrase("brand_name", "device.brand_name"),
        Phrase("manufacturer", "device.manufacturer_d_name"),
        Phrase("product_code", "device.device_report_product_code"),
        Phrase("event_type", "event_type"),
        Phrase("patient_sex", "patient.patient_sex"),
        DateRange("date_from", "date_to", "date_received"),
    ),
    fields=(
        Value("report_number", "report_number"),
        Value("event_type", "event_type"),
        Value("date_received", "date_received"),
        FirstOf("device", "device", (
            Value("brand_name", "brand_name"),
            Value("generic_name", "generic_name"),
            Value("manufacturer_d_name", "manufacturer_d_name"),
            Value("model_number", "model_number"),
            Value("catalog_number", "catalog_number"),
            Value("product_code", "device_report_product_code"),
            First("device_class", "openfda.device_class"),
        )),
        FirstOf("patient", "patient", (
            Value("age", "patient_age"),
            Value("sex", "patient_sex"),
        )),
        Capped("product_problems", "product_problems", 3),
        Truncated("event_description", "mdr_text.0.text"),
    ),
)

DEVICE_RECALL = Entity(
    name="device_recall",
    label="Device recalls",
    endpoint="/device/enforcement.json",
    result_key="device_recalls",
    clauses=(
        Phrase("product_description", "product_description"),
        Phrase("recalling_firm", "recalling_firm"),
        Phrase("classification", "classification"),
        Phrase("status", "status"),
        Phrase("product_code", "product_code"),
        DateRange("date_from", "date_to", "recall_initiation_date"),
    ),
    fields=_RECALL_FIELDS + (
        Group("openfda", (
            First("device_name", "openfda.device_name"),
            First("device_class", "openfda.device_class"),
        )),
    ),
)


# =============================================================================
# FOOD ENTITIES
# =============================================================================

FOOD_ADVERSE_EVENT = Entity(
    name="food_adverse_event",
    label="Food adverse events",
    endpoint="/food/event.json",
    result_key="food_adverse_events",
    clauses=(
        Phrase("product_name", "products.name_brand"),
        Phrase("industry", "products.industry_name"),
        Phrase("reaction", "reactions"),
        Phrase("outcome", "outcomes"),
        DateRange("date_from", "date_to", "date_started"),
    ),
    fields=(
        Value("report_number", "report_number"),
        Value("date_started", "date_started"),
        Value("date_created", "date_created"),
        Capped("outcomes", "outcomes", 3),
        Capped("reactions", "reactions", 3),
        Group("consumer", (
            Value("age", "consumer.age"),
            Value("age_unit", "consumer.age_unit"),
            Value("gender", "consumer.gender"),
        )),
        Each("products", "products", size=3, fields=(
            Value("name", "name_brand"),
            Value("industry", "industry_name"),
            Value("role", "role"),
        )),
    ),
)

FOOD_RECALL = Entity(
    name="food_recall",
    label="Food recalls",
    endpoint="/food/enforcement.json",
    result_key="food_recalls",
    clauses=_RECALL_CLAUSES,
    fields=_RECALL_FIELDS,
)


# =============================================================================
# DRUG LABEL SECTIONS (the "getter" tool family)
# =============================================================================
# These tools search drug labels with a simpler, drug-centric parameter set
# and return one label section in full instead of a truncated summary.
# =============================================================================

LABEL_LOOKUP = Entity(
    name="label_lookup",
    label="Drug label lookup",
    endpoint="/drug/label.json",
    result_key="labels",
    clauses=(
        Identifier("ndc", "openfda.product_ndc"),
        AnyOf(
            "drug_name",
            ("openfda.brand_name", "openfda.generic_name", "openfda.substance_name"),
            exact_arg="exact_match",
        ),
        Phrase("manufacturer", "openfda.manufacturer_name"),
        Phrase("dosage_form", "openfda.dosage_form"),
        Phrase("route", "openfda.route"),
    ),
    # Used by the "indications" section, which returns per-label identity
    # alongside the text.
    fields=(
        Mapped("brand_names", "openfda.brand_name", as_list),
        Mapped("generic_names", "openfda.generic_name", as_list),
        Mapped("manufacturer", "openfda.manufacturer_name", as_list),
        Mapped("indications", "indications_and_usage", as_list),
        Mapped("ndc_codes", "openfda.product_ndc", as_list),
    ),
)

LABEL_SECTIONS: dict[str, LabelSection] = {
    section.name: section
    for section in (
        LabelSection(
            "indications", "indications_and_usage",
            "No FDA-approved indications found for the specified criteria.",
        ),
        LabelSection(
            "dosage", "dosage_and_administration",
            "No FDA-approved dosage information found for the specified criteria.",
        ),
        LabelSection(
            "specific_populations", "use_in_specific_populations",
            "No specific populations information found for the specified criteria.",
        ),
        LabelSection(
            "storage_handling", "how_supplied_storage_and_handling",
            "No storage and handling information found for the specified criteria.",
        ),
        LabelSection(
            "warnings_precautions", "warnings_and_precautions",
            "No warnings and precautions found for the specified criteria.",
        ),
        LabelSection(
            "clinical_pharmacology", "clinical_pharmacology",
            "No clinical pharmacology information found for the specified criteria.",
        ),
        LabelSection(
            "description", "description",
            "No drug description found for the specified criteria.",
        ),
    )
}


# -----------------------------------------------------------------------------
# Registry of the searchable entities, keyed by Entity.name
# -----------------------------------------------------------------------------
ENTITIES: dict[str, Entity] = {
    entity.name: entity
    for entity in (
        DRUG_ADVERSE_EVENT,
        DRUG_LABEL,
        DRUG_NDC,
        DRUG_RECALL,
        DRUGS_FDA,
        DRUG_SHORTAGE,
        DEVICE_510K,
        DEVICE_CLASSIFICATION,
        DEVICE_ADVERSE_EVENT,
        DEVICE_RECALL,
        FOOD_ADVERSE_EVENT,
        FOOD_RECALL,
    )
}
