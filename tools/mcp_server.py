# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the agent can call.  Each tool is a thin wrapper
#   around core/search.py: it collects its typed arguments, runs one
#   query -> fetch -> format pass, and returns the result as JSON text.
#
# HOW IT WORKS (the flow):
#   1. The agent decides it needs FDA data (e.g., recalls for a firm)
#   2. It calls a tool by name via MCP (e.g., "search_drug_recalls")
#   3. FastMCP routes the call to the decorated function below
#   4. The function calls core/search.py with the shared OpenFDAClient
#   5. The agent receives one text block of compact, bounded JSON
#
# TOOL FAMILIES:
#   search_*  One per openFDA record kind.  Full parameter set, pagination
#             (limit 1-100, skip), optional count aggregation.  Zero matches
#             -> an envelope with total_results=0 and an empty list.
#   get_*     Drug-label sections (dosage, warnings, ...) looked up by drug
#             name or NDC.  limit 1-10.  Zero matches -> a short
#             "No ... found" sentence.
#
# ERRORS:
#   openFDA failures (core/errors.py) are caught here and re-raised as
#   ToolError, which FastMCP sends back as an isError result carrying the
#   message.  One failed call never affects another.
#
# RUNNING THIS SERVER:
#   a) Standalone:   python -m tools.mcp_server   (or the openfda-mcp script)
#   b) As a subprocess of the ADK agent via stdio (agent/fda_agent.py)
# =============================================================================

import asyncio
import json
import logging
import sys

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext

from core.api_client import OpenFDAClient
from core.config import Settings, load_settings
from core.entities import (
    DEVICE_510K,
    DEVICE_ADVERSE_EVENT,
    DEVICE_CLASSIFICATION,
    DEVICE_RECALL,
    DRUG_ADVERSE_EVENT,
    DRUG_LABEL,
    DRUG_NDC,
    DRUG_RECALL,
    DRUG_SHORTAGE,
    DRUGS_FDA,
    FOOD_ADVERSE_EVENT,
    FOOD_RECALL,
    LABEL_SECTIONS,
)
from core.errors import FDAAPIError
from core.models import Entity
from core.search import lookup_label_section, search_records

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout is the MCP transport when running under stdio,
# and anything else written there corrupts the protocol stream.
#
# Colors:
#   CYAN    incoming tool calls with their parameters
#   GREEN   responses (abbreviated)
#   YELLOW  status lines (result counts, failures)
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

# Responses can be tens of KB; the log only needs a glimpse
_LOG_PREVIEW_CHARS = 300

SERVER_NAME = "openfda-tools"

SERVER_INSTRUCTIONS = (
    "Query U.S. FDA open data (openFDA) in real time: drug and device adverse "
    "events, drug labels, NDC directory, recalls, Drugs@FDA approvals, drug "
    "shortages, 510(k) clearances, device classifications, and food events "
    "and recalls. Results are summarized and truncated; page with limit/skip."
)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its (set) parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the start of the tool response in GREEN, then return it."""
    preview = text if len(text) <= _LOG_PREVIEW_CHARS else text[:_LOG_PREVIEW_CHARS] + "..."
    logging.info(f"{_GREEN}  ← {tool_name} response: {preview}{_RESET}")
    return text


def _to_text(payload) -> str:
    return json.dumps(payload, indent=2, default=str)


# =============================================================================
# Unknown-argument filter
# =============================================================================
# Agents sometimes send keys a tool does not declare ("colour", "query", ...).
# Such keys are dropped before FastMCP validates the call against the tool
# signature, so the rest of the call still runs.
# =============================================================================
class DropUnknownArguments(Middleware):
    """Remove call arguments that are not parameters of the called tool."""

    def __init__(self, server: FastMCP):
        self.server = server

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        params = context.message
        tools = await self.server.get_tools()
        tool = tools.get(params.name)

        if tool is not None and params.arguments:
            known = tool.parameters.get("properties", {})
            dropped = sorted(key for key in params.arguments if key not in known)
            if dropped:
                _log_status(f"{params.name}: ignoring unknown arguments {dropped}")
                params.arguments = {
                    key: value for key, value in params.arguments.items() if key in known
                }

        return await call_next(context)


# =============================================================================
# Server factory
# =============================================================================
# The client is passed in rather than created here so tests can hand the
# server a client backed by a mock transport.
# =============================================================================
def create_server(client: OpenFDAClient) -> FastMCP:
    """Build the FastMCP server with every openFDA tool bound to `client`."""

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)
    mcp.add_middleware(DropUnknownArguments(mcp))

    async def run_search(tool_name: str, entity: Entity, arguments: dict) -> str:
        _log_request(tool_name, **arguments)
        try:
            envelope = await search_records(client, entity, arguments)
        except FDAAPIError as exc:
            _log_status(f"{entity.label} search failed: {exc}")
            raise ToolError(f"{entity.label} search error: {exc}") from exc

        _log_status(f"{envelope['results_shown']} of {envelope['total_results']} results shown")
        return _log_response(tool_name, _to_text(envelope))

    async def run_lookup(tool_name: str, section_name: str, arguments: dict) -> str:
        _log_request(tool_name, **arguments)
        section = LABEL_SECTIONS[section_name]
        try:
            result = await lookup_label_section(client, section_name, arguments)
        except FDAAPIError as exc:
            _log_status(f"{section_name} lookup failed: {exc}")
            raise ToolError(f"Error fetching {section_name.replace('_', ' ')}: {exc}") from exc

        if result is None:
            _log_status("No matching labels")
            return _log_response(tool_name, section.empty_message)
        _log_status(f"{len(result)} {section_name} entries")
        return _log_response(tool_name, _to_text(result))

    # =========================================================================
    # DRUG SEARCH TOOLS
    # =========================================================================

    @mcp.tool()
    async def search_drug_adverse_events(
        drug_name: str | None = None,
        brand_name: str | None = None,
        generic_name: str | None = None,
        reaction: str | None = None,
        manufacturer: str | None = None,
        serious_only: bool | None = None,
        patient_sex: str | None = None,
        country: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search FDA Adverse Event Reporting System (FAERS) drug reports.

        WHEN TO CALL THIS: The user asks about side effects, adverse
        reactions, or safety reports for a medicine.

        Args:
            drug_name: Drug name, matched against the reported product name
                and the brand, generic and substance names.
            brand_name: Brand name only (e.g., "Advil").
            generic_name: Generic name only (e.g., "ibuprofen").
            reaction: MedDRA reaction term (e.g., "nausea").
            manufacturer: Manufacturer name.
            serious_only: True to return serious reports only.
            patient_sex: "0" unknown, "1" male, "2" female.
            country: Country where the event occurred (2-letter code, e.g., "US").
            date_from / date_to: Report receive date bounds, YYYYMMDD.
            count: Field to aggregate on instead of returning reports
                (e.g., "patient.reaction.reactionmeddrapt.exact").
            limit: Reports to return (1-100, default 10).
            skip: Reports to skip, for paging.

        Returns:
            JSON with search_criteria, total_results, results_shown,
            adverse_events (report id, date, seriousness, patient, up to 3
            drugs, up to 3 reactions) and api_usage.
        """
        arguments = dict(
            drug_name=drug_name,
            brand_name=brand_name,
            generic_name=generic_name,
            reaction=reaction,
            manufacturer=manufacturer,
            serious_only=serious_only,
            patient_sex=patient_sex,
            country=country,
            date_from=date_from,
            date_to=date_to,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_drug_adverse_events", DRUG_ADVERSE_EVENT, arguments)

    @mcp.tool()
    async def search_drug_labels(
        ndc: str | None = None,
        brand_name: str | None = None,
        generic_name: str | None = None,
        manufacturer: str | None = None,
        indication: str | None = None,
        active_ingredient: str | None = None,
        route: str | None = None,
        product_type: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search structured product labeling (package inserts).

        WHEN TO CALL THIS: You need an overview of labels for a drug: who
        makes it, what it is indicated for, key warnings.  For the FULL text
        of one section use the get_* label tools instead.

        Args:
            ndc: Product NDC in any common format ("0002-3227", "00023227").
            brand_name / generic_name / manufacturer: Name filters.
            indication: Words that appear in the indications section.
            active_ingredient: Active ingredient text.
            route: Route of administration (e.g., "ORAL").
            product_type: "HUMAN PRESCRIPTION DRUG" or "HUMAN OTC DRUG".
            count: Field to aggregate on instead of returning labels.
            limit: Labels to return (1-100, default 10).
            skip: Labels to skip, for paging.

        Returns:
            JSON envelope; drug_labels entries have identity fields, up to 3
            active ingredients, the first 200 characters of indications and
            dosage, and up to 2 warnings and contraindications.
        """
        arguments = dict(
            ndc=ndc,
            brand_name=brand_name,
            generic_name=generic_name,
            manufacturer=manufacturer,
            indication=indication,
            active_ingredient=active_ingredient,
            route=route,
            product_type=product_type,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_drug_labels", DRUG_LABEL, arguments)

    @mcp.tool()
    async def search_drug_ndc(
        product_ndc: str | None = None,
        package_ndc: str | None = None,
        proprietary_name: str | None = None,
        nonproprietary_name: str | None = None,
        labeler_name: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        substance_name: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search the National Drug Code (NDC) directory.

        WHEN TO CALL THIS: You have an NDC and need the product behind it,
        or need the NDCs/packages for a product.  NDCs are accepted with or
        without hyphens; alternate spellings are searched automatically.

        Args:
            product_ndc: Labeler-product code (e.g., "0002-3227").
            package_ndc: Full package code (e.g., "0002-3227-30").
            proprietary_name: Brand name.
            nonproprietary_name: Generic name.
            labeler_name: Company on the label.
            dosage_form: e.g., "TABLET", "INJECTION, SOLUTION".
            route: e.g., "ORAL".
            substance_name: Active ingredient name.
            count: Field to aggregate on instead of returning products.
            limit: Products to return (1-100, default 10).
            skip: Products to skip, for paging.

        Returns:
            JSON envelope; ndc_entries have product identity, marketing
            dates, up to 3 active ingredients and up to 2 packages.
        """
        arguments = dict(
            product_ndc=product_ndc,
            package_ndc=package_ndc,
            proprietary_name=proprietary_name,
            nonproprietary_name=nonproprietary_name,
            labeler_name=labeler_name,
            dosage_form=dosage_form,
            route=route,
            substance_name=substance_name,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_drug_ndc", DRUG_NDC, arguments)

    @mcp.tool()
    async def search_drug_recalls(
        product_description: str | None = None,
        recalling_firm: str | None = None,
        classification: str | None = None,
        status: str | None = None,
        state: str | None = None,
        country: str | None = None,
        reason_for_recall: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search drug recall enforcement reports.

        Args:
            product_description: Words from the recalled product description.
            recalling_firm: Company issuing the recall.
            classification: "Class I", "Class II" or "Class III".
            status: "Ongoing", "Completed" or "Terminated".
            state / country: Location of the recalling firm.
            reason_for_recall: Words from the recall reason.
            date_from / date_to: Recall initiation date bounds, YYYYMMDD.
            count: Field to aggregate on instead of returning recalls.
            limit: Recalls to return (1-100, default 10).
            skip: Recalls to skip, for paging.
        """
        arguments = dict(
            product_description=product_description,
            recalling_firm=recalling_firm,
            classification=classification,
            status=status,
            state=state,
            country=country,
            reason_for_recall=reason_for_recall,
            date_from=date_from,
            date_to=date_to,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_drug_recalls", DRUG_RECALL, arguments)

    @mcp.tool()
    async def search_drugs_fda(
        sponsor_name: str | None = None,
        application_number: str | None = None,
        brand_name: str | None = None,
        generic_name: str | None = None,
        active_ingredient: str | None = None,
        dosage_form: str | None = None,
        marketing_status: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search Drugs@FDA: approved drug applications, products and submissions.

        WHEN TO CALL THIS: Approval questions, i.e. who holds the
        application, when it was approved, which products it covers.

        Args:
            sponsor_name: Application holder.
            application_number: e.g., "NDA021436", "ANDA076543".
            brand_name / generic_name / active_ingredient: Name filters.
            dosage_form: Product dosage form.
            marketing_status: e.g., "Prescription", "Discontinued".
            count: Field to aggregate on instead of returning applications.
            limit: Applications to return (1-100, default 10).
            skip: Applications to skip, for paging.

        Returns:
            JSON envelope; fda_approved_drugs entries list up to 2 products
            and the 2 first submissions.
        """
        arguments = dict(
            sponsor_name=sponsor_name,
            application_number=application_number,
            brand_name=brand_name,
            generic_name=generic_name,
            active_ingredient=active_ingredient,
            dosage_form=dosage_form,
            marketing_status=marketing_status,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_drugs_fda", DRUGS_FDA, arguments)

    @mcp.tool()
    async def search_drug_shortages(
        product_name: str | None = None,
        generic_name: str | None = None,
        brand_name: str | None = None,
        active_ingredient: str | None = None,
        shortage_status: str | None = None,
        dosage_form: str | None = None,
        company_name: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search the FDA drug shortage list.

        Args:
            product_name: Proprietary product name.
            generic_name / brand_name / active_ingredient: Name filters.
            shortage_status: "Current", "Resolved" or "To Be Discontinued".
            dosage_form: Product dosage form.
            company_name: Manufacturer reporting the shortage.
            count: Field to aggregate on instead of returning shortages.
            limit: Shortage entries to return (1-100, default 10).
            skip: Entries to skip, for paging.
        """
        arguments = dict(
            product_name=product_name,
            generic_name=generic_name,
            brand_name=brand_name,
            active_ingredient=active_ingredient,
            shortage_status=shortage_status,
            dosage_form=dosage_form,
            company_name=company_name,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_drug_shortages", DRUG_SHORTAGE, arguments)

    # =========================================================================
    # DEVICE SEARCH TOOLS
    # =========================================================================

    @mcp.tool()
    async def search_device_510k(
        device_name: str | None = None,
        applicant: str | None = None,
        contact: str | None = None,
        product_code: str | None = None,
        clearance_type: str | None = None,
        decision_date_from: str | None = None,
        decision_date_to: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search 510(k) premarket notification clearances for medical devices.

        Args:
            device_name: Device trade or common name.
            applicant: Company that submitted the 510(k).
            contact: Contact person on the submission.
            product_code: Three-letter FDA product code (e.g., "DXN").
            clearance_type: "Traditional", "Special" or "Abbreviated".
            decision_date_from / decision_date_to: Decision date bounds, YYYYMMDD.
            count: Field to aggregate on instead of returning clearances.
            limit: Clearances to return (1-100, default 10).
            skip: Clearances to skip, for paging.
        """
        arguments = dict(
            device_name=device_name,
            applicant=applicant,
            contact=contact,
            product_code=product_code,
            clearance_type=clearance_type,
            decision_date_from=decision_date_from,
            decision_date_to=decision_date_to,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_device_510k", DEVICE_510K, arguments)

    @mcp.tool()
    async def search_device_classifications(
        device_name: str | None = None,
        device_class: str | None = None,
        medical_specialty: str | None = None,
        product_code: str | None = None,
        regulation_number: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search FDA medical device classifications (product codes, classes, panels).

        Args:
            device_name: Device type name.
            device_class: "1", "2", "3", "U", "N" or "F".
            medical_specialty: Two-letter review panel code (e.g., "CV").
            product_code: Three-letter product code.
            regulation_number: 21 CFR regulation (e.g., "870.1025").
            count: Field to aggregate on instead of returning classifications.
            limit: Classifications to return (1-100, default 10).
            skip: Classifications to skip, for paging.
        """
        arguments = dict(
            device_name=device_name,
            device_class=device_class,
            medical_specialty=medical_specialty,
            product_code=product_code,
            regulation_number=regulation_number,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_device_classifications", DEVICE_CLASSIFICATION, arguments)

    @mcp.tool()
    async def search_device_adverse_events(
        device_name: str | None = None,
        brand_name: str | None = None,
        manufacturer: str | None = None,
        product_code: str | None = None,
        event_type: str | None = None,
        patient_sex: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search MAUDE medical device adverse event reports.

        Args:
            device_name: Matched against device brand and generic names.
            brand_name: Device brand name only.
            manufacturer: Device manufacturer.
            product_code: Three-letter product code on the report.
            event_type: "Death", "Injury", "Malfunction" or "Other".
            patient_sex: "Male", "Female" or "Unknown".
            date_from / date_to: Date FDA received the report, YYYYMMDD.
            count: Field to aggregate on instead of returning reports.
            limit: Reports to return (1-100, default 10).
            skip: Reports to skip, for paging.

        Returns:
            JSON envelope; each report shows the first device, the first
            patient, up to 3 product problems and the first 200 characters
            of the event narrative.
        """
        arguments = dict(
            device_name=device_name,
            brand_name=brand_name,
            manufacturer=manufacturer,
            product_code=product_code,
            event_type=event_type,
            patient_sex=patient_sex,
            date_from=date_from,
            date_to=date_to,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_device_adverse_events", DEVICE_ADVERSE_EVENT, arguments)

    @mcp.tool()
    async def search_device_recalls(
        product_description: str | None = None,
        recalling_firm: str | None = None,
        classification: str | None = None,
        status: str | None = None,
        product_code: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search medical device recall enforcement reports.

        Args:
            product_description: Words from the recalled device description.
            recalling_firm: Company issuing the recall.
            classification: "Class I", "Class II" or "Class III".
            status: "Ongoing", "Completed" or "Terminated".
            product_code: Three-letter product code.
            date_from / date_to: Recall initiation date bounds, YYYYMMDD.
            count: Field to aggregate on instead of returning recalls.
            limit: Recalls to return (1-100, default 10).
            skip: Recalls to skip, for paging.
        """
        arguments = dict(
            product_description=product_description,
            recalling_firm=recalling_firm,
            classification=classification,
            status=status,
            product_code=product_code,
            date_from=date_from,
            date_to=date_to,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_device_recalls", DEVICE_RECALL, arguments)

    # =========================================================================
    # FOOD SEARCH TOOLS
    # =========================================================================

    @mcp.tool()
    async def search_food_adverse_events(
        product_name: str | None = None,
        industry: str | None = None,
        reaction: str | None = None,
        outcome: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search CAERS reports for foods, dietary supplements and cosmetics.

        Args:
            product_name: Brand name of the product involved.
            industry: Industry name (e.g., "Vit/Min/Prot/Unconv Diet(Human/Animal)").
            reaction: Reported reaction term.
            outcome: Reported outcome (e.g., "Hospitalization").
            date_from / date_to: Date the event started, YYYYMMDD.
            count: Field to aggregate on instead of returning reports.
            limit: Reports to return (1-100, default 10).
            skip: Reports to skip, for paging.
        """
        arguments = dict(
            product_name=product_name,
            industry=industry,
            reaction=reaction,
            outcome=outcome,
            date_from=date_from,
            date_to=date_to,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_food_adverse_events", FOOD_ADVERSE_EVENT, arguments)

    @mcp.tool()
    async def search_food_recalls(
        product_description: str | None = None,
        recalling_firm: str | None = None,
        classification: str | None = None,
        status: str | None = None,
        state: str | None = None,
        country: str | None = None,
        reason_for_recall: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        count: str | None = None,
        limit: int = 10,
        skip: int = 0,
    ) -> str:
        """Search food recall enforcement reports.  Same filters as drug recalls."""
        arguments = dict(
            product_description=product_description,
            recalling_firm=recalling_firm,
            classification=classification,
            status=status,
            state=state,
            country=country,
            reason_for_recall=reason_for_recall,
            date_from=date_from,
            date_to=date_to,
            count=count,
            limit=limit,
            skip=skip,
        )
        return await run_search("search_food_recalls", FOOD_RECALL, arguments)

    # =========================================================================
    # DRUG LABEL SECTION TOOLS (get_*)
    # =========================================================================
    # All seven share one parameter set: a drug identified by name and/or
    # NDC, optionally narrowed by manufacturer, dosage form and route.
    # They return the FULL section text, so limit is kept small (1-10).
    # =========================================================================

    @mcp.tool()
    async def get_drug_indications(
        drug_name: str | None = None,
        manufacturer: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        ndc: str | None = None,
        limit: int = 3,
        exact_match: bool = False,
    ) -> str:
        """Get FDA-approved indications (what the drug is used for).

        WHEN TO CALL THIS: "What is X used for?", "Is X approved for Y?"

        Args:
            drug_name: Brand, generic or substance name.
            manufacturer: Narrow to one manufacturer.
            dosage_form: e.g., "TABLET".
            route: e.g., "ORAL".
            ndc: Product NDC; takes precedence as the primary filter.
            limit: Labels to read (1-10, default 3).
            exact_match: Match drug_name exactly instead of by phrase.

        Returns:
            JSON list with brand_names, generic_names, manufacturer,
            indications and ndc_codes per label, or a "No ... found" message.
        """
        arguments = dict(
            drug_name=drug_name,
            manufacturer=manufacturer,
            dosage_form=dosage_form,
            route=route,
            ndc=ndc,
            limit=limit,
            exact_match=exact_match,
        )
        return await run_lookup("get_drug_indications", "indications", arguments)

    @mcp.tool()
    async def get_drug_dosage(
        drug_name: str | None = None,
        manufacturer: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        ndc: str | None = None,
        limit: int = 3,
        exact_match: bool = False,
    ) -> str:
        """Get the dosage and administration section of matching drug labels."""
        arguments = dict(
            drug_name=drug_name,
            manufacturer=manufacturer,
            dosage_form=dosage_form,
            route=route,
            ndc=ndc,
            limit=limit,
            exact_match=exact_match,
        )
        return await run_lookup("get_drug_dosage", "dosage", arguments)

    @mcp.tool()
    async def get_specific_populations(
        drug_name: str | None = None,
        manufacturer: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        ndc: str | None = None,
        limit: int = 3,
        exact_match: bool = False,
    ) -> str:
        """Get use in specific populations (pregnancy, lactation, pediatric, geriatric)."""
        arguments = dict(
            drug_name=drug_name,
            manufacturer=manufacturer,
            dosage_form=dosage_form,
            route=route,
            ndc=ndc,
            limit=limit,
            exact_match=exact_match,
        )
        return await run_lookup("get_specific_populations", "specific_populations", arguments)

    @mcp.tool()
    async def get_storage_handling(
        drug_name: str | None = None,
        manufacturer: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        ndc: str | None = None,
        limit: int = 3,
        exact_match: bool = False,
    ) -> str:
        """Get how-supplied, storage and handling information."""
        arguments = dict(
            drug_name=drug_name,
            manufacturer=manufacturer,
            dosage_form=dosage_form,
            route=route,
            ndc=ndc,
            limit=limit,
            exact_match=exact_match,
        )
        return await run_lookup("get_storage_handling", "storage_handling", arguments)

    @mcp.tool()
    async def get_warnings_precautions(
        drug_name: str | None = None,
        manufacturer: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        ndc: str | None = None,
        limit: int = 3,
        exact_match: bool = False,
    ) -> str:
        """Get the warnings and precautions section of matching drug labels."""
        arguments = dict(
            drug_name=drug_name,
            manufacturer=manufacturer,
            dosage_form=dosage_form,
            route=route,
            ndc=ndc,
            limit=limit,
            exact_match=exact_match,
        )
        return await run_lookup("get_warnings_precautions", "warnings_precautions", arguments)

    @mcp.tool()
    async def get_clinical_pharmacology(
        drug_name: str | None = None,
        manufacturer: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        ndc: str | None = None,
        limit: int = 3,
        exact_match: bool = False,
    ) -> str:
        """Get clinical pharmacology (mechanism of action, pharmacokinetics)."""
        arguments = dict(
            drug_name=drug_name,
            manufacturer=manufacturer,
            dosage_form=dosage_form,
            route=route,
            ndc=ndc,
            limit=limit,
            exact_match=exact_match,
        )
        return await run_lookup("get_clinical_pharmacology", "clinical_pharmacology", arguments)

    @mcp.tool()
    async def get_drug_description(
        drug_name: str | None = None,
        manufacturer: str | None = None,
        dosage_form: str | None = None,
        route: str | None = None,
        ndc: str | None = None,
        limit: int = 3,
        exact_match: bool = False,
    ) -> str:
        """Get the description section (chemistry, formulation, inactive ingredients)."""
        arguments = dict(
            drug_name=drug_name,
            manufacturer=manufacturer,
            dosage_form=dosage_form,
            route=route,
            ndc=ndc,
            limit=limit,
            exact_match=exact_match,
        )
        return await run_lookup("get_drug_description", "description", arguments)

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
# When run directly (python -m tools.mcp_server) or via the openfda-mcp
# script, load .env, build the client, and serve over stdio.  The client's
# HTTP connections are closed when the server stops, however it stops.
# =============================================================================
async def serve(settings: Settings, transport: str = "stdio") -> None:
    async with OpenFDAClient(settings) as client:
        await create_server(client).run_async(transport=transport)


def main() -> None:
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)
    logging.info(
        f"Starting {SERVER_NAME} against {settings.base_url} "
        f"(api key: {'yes' if settings.api_key else 'no'})"
    )
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
