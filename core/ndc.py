# =============================================================================
# core/ndc.py  -  National Drug Code normalization
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Users type NDCs in whatever shape they have on hand: "0002-3227-30",
#   "00023227", "12345678901".  openFDA indexes the segmented (hyphenated)
#   form, so an exact phrase search on the raw input often misses.
#
#   normalize_ndc() expands one input into a short list of candidate
#   spellings that the query builder OR-joins into a single clause.
#
# RULES:
#   1. The trimmed input itself is always the first candidate.
#   2. Hyphenated input  -> also try the digits-only form (if >= 9 digits).
#   3. Unhyphenated input with exactly 10 or 11 digits -> also try the
#      5-4-rest segmentation ("12345-6789-01").
#   4. Anything else adds nothing; only the raw form is searched.
#
#   Segmentations other than 5-4-x (4-4-2, 5-3-2) are not guessed.
# =============================================================================

import re

MAX_CANDIDATES = 3

_NON_DIGITS = re.compile(r"\D")


def normalize_ndc(raw: str | None) -> list[str]:
    """Expand an NDC into up to 3 distinct candidate spellings, input first.

    Examples:
        >>> normalize_ndc("12345678901")
        ['12345678901', '12345-6789-01']
        >>> normalize_ndc("12345-6789-01")
        ['12345-6789-01', '12345678901']
    """
    if not raw:
        return []

    value = str(raw).strip()
    if not value:
        return []

    candidates = [value]
    digits = _NON_DIGITS.sub("", value)

    if "-" in value:
        if len(digits) >= 9:
            candidates.append(digits)
    elif len(digits) in (10, 11):
        candidates.append(f"{digits[:5]}-{digits[5:9]}-{digits[9:]}")

    # dict.fromkeys keeps first-seen order while dropping duplicates
    return list(dict.fromkeys(candidates))[:MAX_CANDIDATES]
