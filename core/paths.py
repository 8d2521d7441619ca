# =============================================================================
# core/paths.py  -  Safe navigation through sparse openFDA JSON
# =============================================================================
#
# openFDA records are deeply nested and only partially populated: a drug
# adverse event may have no "patient", a patient may have no "drug" list,
# a drug may have no "openfda" block.  Every formatter reads through these
# structures, so the "what if this level is missing?" question is answered
# once, here.
#
# PATH SYNTAX:
#   Dotted segments.  A segment that is all digits indexes into a list.
#     "patient.drug"                   -> record["patient"]["drug"]
#     "openfda.brand_name.0"           -> record["openfda"]["brand_name"][0]
#     "mdr_text.0.text"                -> record["mdr_text"][0]["text"]
#
#   Any missing key, out-of-range index, or wrong container type along the
#   way yields the default instead of raising.
# =============================================================================

from typing import Any


def get_path(data: Any, path: str, default: Any = None) -> Any:
    """Read a dotted path from nested dicts/lists, returning default on any miss."""
    current = data
    for segment in path.split("."):
        if isinstance(current, dict):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return default if current is None else current


def first(value: Any) -> Any:
    """Reduce an openFDA "open" array to its first element.

    openFDA returns fields like openfda.brand_name as arrays even when only
    one value makes sense.  Scalars pass through unchanged.
    """
    if isinstance(value, list):
        return value[0] if value else None
    return value


def as_list(value: Any) -> list:
    """Coerce a field that should be a list into one (missing -> [])."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
