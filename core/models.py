# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses describe the SHAPE of the per-entity configuration that
# drives the query builder and the result formatter.  They carry no behavior:
# core/query_builder.py and core/formatters.py interpret them.
#
# THREE FAMILIES:
#   1. Clause specs  -  how one search argument becomes one query clause
#   2. Field specs   -  how one output field is read from an upstream record
#   3. Entity        -  an openFDA endpoint plus its clause and field tables
#
# Adding a new searchable record kind means writing one Entity in
# core/entities.py.  No new builder or formatter functions.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Callable


# -----------------------------------------------------------------------------
# Clause specs  -  search argument -> query clause
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Phrase:
    """`field:"value"`  -  quoted so openFDA matches the whole phrase."""

    arg: str                           # Caller argument name, e.g. "recalling_firm"
    field: str                         # openFDA field, e.g. "recalling_firm"


@dataclass(frozen=True)
class AnyOf:
    """`(f1:"v" OR f2:"v")`  -  one value searched across synonym fields."""

    arg: str
    fields: tuple[str, ...]
    exact_arg: str | None = None       # Boolean argument that switches on ".exact"


@dataclass(frozen=True)
class Flag:
    """Fixed literal clause emitted only when the argument is True."""

    arg: str
    literal: str                       # e.g. "serious:1"


@dataclass(frozen=True)
class DateRange:
    """`field:[from TO to]` with either end optionally open."""

    from_arg: str
    to_arg: str
    field: str                         # e.g. "receivedate"


@dataclass(frozen=True)
class Identifier:
    """NDC-style identifier, expanded to alternate spellings and OR-joined."""

    arg: str
    field: str


Clause = Phrase | AnyOf | Flag | DateRange | Identifier


# -----------------------------------------------------------------------------
# Field specs  -  upstream record -> formatted output field
# -----------------------------------------------------------------------------
# Missing data policy:
#   Value / First / Truncated  -> key omitted
#   Capped / Each              -> []
#   FirstOf / Group            -> {}
#   Mapped                     -> transform(None); key omitted if that is None
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Value:
    """Copy a value as-is."""

    name: str
    path: str


@dataclass(frozen=True)
class First:
    """First element of an openFDA "open" array (brand_name, manufacturer_name...)."""

    name: str
    path: str


@dataclass(frozen=True)
class Truncated:
    """Narrative text: first array element, cut to `limit` chars + "..."."""

    name: str
    path: str
    limit: int = 200


@dataclass(frozen=True)
class Capped:
    """List prefix of at most `size` items, items copied unchanged."""

    name: str
    path: str
    size: int


@dataclass(frozen=True)
class Each:
    """List prefix of at most `size` items, each formatted with `fields`."""

    name: str
    path: str
    fields: tuple["FieldSpec", ...]
    size: int | None = None


@dataclass(frozen=True)
class FirstOf:
    """Only the first item of a list, formatted with `fields`."""

    name: str
    path: str
    fields: tuple["FieldSpec", ...]


@dataclass(frozen=True)
class Group:
    """Nested output object built from the same record."""

    name: str
    fields: tuple["FieldSpec", ...]


@dataclass(frozen=True)
class Mapped:
    """Value passed through `transform` (which must accept None and may return None)."""

    name: str
    path: str
    transform: Callable[[Any], Any]


FieldSpec = Value | First | Truncated | Capped | Each | FirstOf | Group | Mapped


# -----------------------------------------------------------------------------
# Entity  -  one searchable openFDA record kind
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Entity:
    """An openFDA endpoint with its search and output tables."""

    name: str                          # "drug_recall"
    label: str                         # "Drug recalls" (used in error messages)
    endpoint: str                      # "/drug/enforcement.json"
    result_key: str                    # "drug_recalls" (envelope list key)
    clauses: tuple[Clause, ...]
    fields: tuple[FieldSpec, ...]


# -----------------------------------------------------------------------------
# LabelSection  -  one drug-label section served by a "getter" tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LabelSection:
    """A single drug-label section (dosage, storage, warnings, ...)."""

    name: str                          # "dosage"
    field: str                         # "dosage_and_administration"
    empty_message: str                 # Returned when nothing matched


# -----------------------------------------------------------------------------
# API usage  -  reported, never enforced
# -----------------------------------------------------------------------------
@dataclass
class RateLimits:
    requests_per_minute: int
    requests_per_day: int


@dataclass
class UsageInfo:
    """What the caller should know about the upstream quota."""

    has_api_key: bool
    rate_limits: RateLimits
    recommendations: str
