# =============================================================================
# core/query_builder.py  -  Search arguments -> openFDA query string
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a caller's argument bag into openFDA's Lucene-style `search`
#   parameter, driven entirely by the Entity's clause table
#   (core/entities.py).  One function serves every record kind.
#
# QUERY SHAPE:
#   clause AND clause AND clause ...
#
#     Phrase      recalling_firm:"Pfizer"
#     AnyOf       (openfda.brand_name:"advil" OR openfda.generic_name:"advil")
#     Flag        serious:1                       (only when True)
#     DateRange   receivedate:[20230101 TO *]
#     Identifier  (product_ndc:"0002-3227" OR product_ndc:"00023227")
#
#   No clauses at all -> WILDCARD ("*"), never "".
#
# IDENTIFIER PRECEDENCE:
#   NDC lookups are expected to be exact, so an identifier clause always
#   leads the query, and when it is the only clause it IS the query.
#
# QUOTING:
#   Values are wrapped in double quotes and otherwise passed through as-is.
#   Embedded quote characters are NOT escaped (see DESIGN.md, open items).
# =============================================================================

from typing import Any, Mapping

from core.models import AnyOf, DateRange, Entity, Flag, Identifier, Phrase
from core.ndc import normalize_ndc

WILDCARD = "*"


def _present(value: Any) -> bool:
    """True for values that should produce a clause (not None / "" / blank)."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def build_date_range(field: str, date_from: str | None, date_to: str | None) -> str | None:
    """Build a ranged clause for `field`, or None when neither bound is given.

    Both bounds -> closed range, one bound -> the other end is "*".
    """
    has_from = _present(date_from)
    has_to = _present(date_to)

    if has_from and has_to:
        return f"{field}:[{date_from} TO {date_to}]"
    if has_from:
        return f"{field}:[{date_from} TO *]"
    if has_to:
        return f"{field}:[* TO {date_to}]"
    return None


def _or_group(terms: list[str]) -> str:
    if len(terms) == 1:
        return terms[0]
    return "(" + " OR ".join(terms) + ")"


def build_clause(clause, criteria: Mapping[str, Any]) -> str | None:
    """Render one clause spec against the criteria, or None if it doesn't apply."""
    if isinstance(clause, DateRange):
        return build_date_range(
            clause.field,
            criteria.get(clause.from_arg),
            criteria.get(clause.to_arg),
        )

    value = criteria.get(clause.arg)

    if isinstance(clause, Flag):
        # false and absent are the same thing here
        return clause.literal if value is True else None

    if not _present(value):
        return None

    if isinstance(clause, Phrase):
        return f'{clause.field}:"{value}"'

    if isinstance(clause, AnyOf):
        exact = bool(clause.exact_arg and criteria.get(clause.exact_arg) is True)
        suffix = ".exact" if exact else ""
        return _or_group([f'{field}{suffix}:"{value}"' for field in clause.fields])

    if isinstance(clause, Identifier):
        candidates = normalize_ndc(str(value))
        return _or_group([f'{clause.field}:"{candidate}"' for candidate in candidates])

    return None


def build_query(entity: Entity, criteria: Mapping[str, Any]) -> str:
    """Build the openFDA `search` string for `entity` from caller arguments.

    Unrecognized argument names are ignored.  The result is never empty:
    with nothing to filter on it is WILDCARD.
    """
    identifier_parts: list[str] = []
    parts: list[str] = []

    for clause in entity.clauses:
        rendered = build_clause(clause, criteria)
        if not rendered:
            continue
        if isinstance(clause, Identifier):
            identifier_parts.append(rendered)
        else:
            parts.append(rendered)

    if identifier_parts and not parts and len(identifier_parts) == 1:
        return identifier_parts[0]

    all_parts = identifier_parts + parts
    if not all_parts:
        return WILDCARD
    return " AND ".join(all_parts)


def recognized_args(entity: Entity) -> list[str]:
    """Argument names the entity's clause table knows about, in table order."""
    names: list[str] = []
    for clause in entity.clauses:
        if isinstance(clause, DateRange):
            names.extend([clause.from_arg, clause.to_arg])
        else:
            names.append(clause.arg)
            if isinstance(clause, AnyOf) and clause.exact_arg:
                names.append(clause.exact_arg)
    return list(dict.fromkeys(names))
