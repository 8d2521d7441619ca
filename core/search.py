# =============================================================================
# core/search.py  -  One tool call: build query -> fetch -> format -> envelope
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Composes the pure pieces (query builder, formatter) with the openFDA
#   client for a single tool invocation.  Two families:
#
#   search_records()        full search tools, one per Entity.
#                           Always returns an envelope dict, even for zero
#                           matches (total_results=0, empty list).
#
#   lookup_label_section()  drug-label "getter" tools (dosage, warnings...).
#                           Returns None for zero matches so the tool layer
#                           can answer with the section's placeholder text.
#
# ENVELOPE SHAPE (search_records):
#   {
#     "search_criteria": {...},        # arguments the call was made with
#     "total_results":   1234,         # meta.results.total from openFDA
#     "results_shown":   10,           # records in this page
#     "<result_key>":    [...],        # formatted records (or count buckets)
#     "api_usage":       {...},        # quota info, informational
#   }
#
# Errors from the client propagate unchanged; converting them into a
# user-visible message is the tool layer's job.
# =============================================================================

from dataclasses import asdict
from typing import Any, Mapping

from core.api_client import OpenFDAClient
from core.entities import LABEL_LOOKUP, LABEL_SECTIONS
from core.formatters import format_record
from core.models import Entity
from core.paths import as_list, get_path
from core.query_builder import WILDCARD, build_query, recognized_args

SEARCH_DEFAULT_LIMIT = 10
SEARCH_MAX_LIMIT = 100

LOOKUP_DEFAULT_LIMIT = 3
LOOKUP_MAX_LIMIT = 10

_PAGINATION_ARGS = ("limit", "skip", "count")


def clamp_limit(value: Any, default: int, maximum: int) -> int:
    """Bound a caller-supplied limit to 1..maximum (default when unset)."""
    if value is None:
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))


def clamp_skip(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def search_criteria(entity: Entity, arguments: Mapping[str, Any]) -> dict[str, Any]:
    """The caller arguments the entity understands, minus unset ones.

    Unrecognized keys are dropped silently.
    """
    known = recognized_args(entity) + list(_PAGINATION_ARGS)
    return {
        name: arguments[name]
        for name in known
        if arguments.get(name) is not None and arguments.get(name) != ""
    }


def _search_param(query: str) -> str | None:
    # openFDA returns every record when `search` is absent
    return None if query == WILDCARD else query


async def search_records(
    client: OpenFDAClient,
    entity: Entity,
    arguments: Mapping[str, Any],
) -> dict[str, Any]:
    """Run one search tool call for `entity` and return its envelope."""
    criteria = search_criteria(entity, arguments)
    limit = clamp_limit(arguments.get("limit"), SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT)
    skip = clamp_skip(arguments.get("skip"))
    count_field = arguments.get("count") or None

    # Echo the paging actually sent upstream, not the raw request
    criteria["limit"] = limit
    criteria["skip"] = skip

    query = build_query(entity, criteria)
    response = await client.get(entity.endpoint, {
        "search": _search_param(query),
        "count": count_field,
        "limit": limit,
        "skip": skip or None,
    })

    records = as_list(get_path(response, "results"))
    if count_field:
        # Count buckets ({"term", "count"}) are already compact
        results = records
    else:
        results = [format_record(entity, record) for record in records]

    envelope: dict[str, Any] = {
        "search_criteria": criteria,
        "total_results": get_path(response, "meta.results.total", len(records)),
        "results_shown": len(records),
    }
    if count_field:
        envelope["count_field"] = count_field
    envelope[entity.result_key] = results
    envelope["api_usage"] = asdict(client.usage_info())
    return envelope


async def lookup_label_section(
    client: OpenFDAClient,
    section_name: str,
    arguments: Mapping[str, Any],
) -> list[Any] | None:
    """Fetch one drug-label section for the labels matching `arguments`.

    Returns None when no label (or no text for the section) matched.
    The "indications" section returns one object per label with brand,
    generic, manufacturer and NDC identity; every other section returns the
    section texts of all matched labels, flattened into one list.
    """
    section = LABEL_SECTIONS[section_name]
    limit = clamp_limit(arguments.get("limit"), LOOKUP_DEFAULT_LIMIT, LOOKUP_MAX_LIMIT)

    query = build_query(LABEL_LOOKUP, arguments)
    response = await client.get(LABEL_LOOKUP.endpoint, {
        "search": _search_param(query),
        "limit": limit,
    })

    records = as_list(get_path(response, "results"))
    if not records:
        return None

    if section.name == "indications":
        return [format_record(LABEL_LOOKUP, record) for record in records]

    texts = [text for record in records for text in as_list(get_path(record, section.field))]
    return texts or None
