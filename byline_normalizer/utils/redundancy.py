"""Detect bylines that merely repeat a credit already in the site name."""

import re

from .text_normalizer import normalize_whitespace

# Separators allowed between "by" and the name ("BY: Joe Wee", "Joe Wee | by").
_LEADING_SEPARATORS = re.compile(r"^[\s:\-–—|•]+")
_TRAILING_SEPARATORS = re.compile(r"[\s:\-–—|•]+$")


def is_byline_redundant_with_site_name(byline: str, site_name: str) -> bool:
    """
    Return True when the site name already credits the byline with "by".

    A bare substring match is not enough: "Code" does not make
    "Nicolas Perriault" redundant, but "SIMPLYFOUND.COM | BY: Joe Wee" does
    make "Joe Wee" redundant. Bylines shorter than three characters are
    never considered redundant.
    """
    normalized_byline = normalize_whitespace(byline).lower()
    if len(normalized_byline) < 3:
        return False

    normalized_site = normalize_whitespace(site_name).lower()
    pos = normalized_site.find(normalized_byline)
    if pos == -1:
        return False

    prefix = _TRAILING_SEPARATORS.sub("", normalized_site[:pos])
    if prefix.endswith("by"):
        return True

    suffix = _LEADING_SEPARATORS.sub(
        "", normalized_site[pos + len(normalized_byline):]
    )
    return suffix.startswith("by")
