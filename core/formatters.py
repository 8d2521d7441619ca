# =============================================================================
# core/formatters.py  -  Upstream record -> compact, bounded summary
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   openFDA records are large: a single drug label can run to tens of
#   kilobytes, an adverse event can cite dozens of drugs.  The agent calling
#   these tools has a finite context window, so every record is projected
#   through the Entity's field table (core/entities.py) into a small dict.
#
# THE BOUNDS:
#   - Narrative text    -> first 200 characters + "..."
#   - List fields       -> first 2 or 3 items (per field)
#   - "open" arrays     -> first element only (openfda.brand_name etc.)
#
#   These cuts are lossy on purpose.  Callers that need everything should
#   paginate with skip/limit or query openFDA directly.
#
# TOTALITY:
#   format_record() never raises on a dict, however sparse.  All reads go
#   through core.paths.get_path, so a missing level just means a missing
#   output field.
# =============================================================================

from typing import Any, Mapping

from core.models import (
    Capped,
    Each,
    Entity,
    First,
    FirstOf,
    Group,
    Mapped,
    Truncated,
    Value,
)
from core.paths import as_list, first, get_path

TRUNCATION_LIMIT = 200
ELLIPSIS = "..."

# Sentinel for "leave this key out of the output"
_OMIT = object()


def truncate(text: Any, limit: int = TRUNCATION_LIMIT) -> Any:
    """Cut text longer than `limit` characters and mark the cut with "..."."""
    if isinstance(text, str) and len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def _field_value(spec, record: Mapping[str, Any]) -> Any:
    if isinstance(spec, Value):
        value = get_path(record, spec.path)
        return _OMIT if value is None else value

    if isinstance(spec, First):
        value = first(get_path(record, spec.path))
        return _OMIT if value is None else value

    if isinstance(spec, Truncated):
        value = first(get_path(record, spec.path))
        return _OMIT if value is None else truncate(value, spec.limit)

    if isinstance(spec, Capped):
        return as_list(get_path(record, spec.path))[: spec.size]

    if isinstance(spec, Each):
        items = as_list(get_path(record, spec.path))
        if spec.size is not None:
            items = items[: spec.size]
        return [format_fields(spec.fields, item) for item in items]

    if isinstance(spec, FirstOf):
        items = as_list(get_path(record, spec.path))
        return format_fields(spec.fields, items[0]) if items else {}

    if isinstance(spec, Group):
        return format_fields(spec.fields, record)

    if isinstance(spec, Mapped):
        value = spec.transform(get_path(record, spec.path))
        return _OMIT if value is None else value

    return _OMIT


def format_fields(fields, record: Any) -> dict[str, Any]:
    """Project `record` through a field table.  Non-dict input counts as empty."""
    if not isinstance(record, dict):
        record = {}

    formatted: dict[str, Any] = {}
    for spec in fields:
        value = _field_value(spec, record)
        if value is not _OMIT:
            formatted[spec.name] = value
    return formatted


def format_record(entity: Entity, record: Any) -> dict[str, Any]:
    """Format one upstream record of `entity` into its summary dict."""
    return format_fields(entity.fields, record)
