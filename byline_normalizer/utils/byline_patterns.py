"""
Pattern classifiers for byline text fragments.

Every classifier is a pure predicate over a ``str`` and favors false
negatives: the cleaning pipeline keeps ambiguous text, so a classifier only
answers ``True`` on a confident match. Vocabularies are module-level frozen
sets built once at import time.
"""

import re

from .segments import split_candidate_segments
from .text_normalizer import (
    has_alphabetic,
    has_ascii_digit,
    normalize_whitespace,
    trim_soft_space,
)

# "By", "BY:", "par -" ... followed by at least one separator character.
BY_PREFIX_PATTERN = re.compile(r"^(by|par)[\s:,\-–—]+", re.IGNORECASE)

# Tokens that rule out a personal name (roles, desks, publishers).
AUTHOR_DISQUALIFIERS = frozenset(
    {
        "reporter",
        "editor",
        "writer",
        "staff",
        "senior",
        "team",
        "desk",
        "anchor",
        "producer",
        "analyst",
        "correspondent",
        "contributor",
        "technologist",
        "developer",
        "developers",
        "news",
        "press",
        "service",
        "bureau",
        "foreign",
        "android",
        "buzzfeed",
        "telegraph",
        "view",
    }
)

# Wire agencies that are credited by name alone.
WIRE_AGENCIES = frozenset(
    {
        "afp",
        "ap",
        "associated press",
        "reuters",
        "bloomberg",
        "press association",
        "kyodo",
        "ansa",
        "dpa",
        "upi",
    }
)

# Role/agency words; two or more in one credit mark an organization.
ORG_CREDIT_KEYWORDS = frozenset(
    {
        "staff",
        "news",
        "newsroom",
        "desk",
        "team",
        "press",
        "service",
        "bureau",
        "foreign",
        "reporter",
        "reporters",
        "developers",
        "android",
        "buzzfeed",
        "wire",
        "agency",
        "agencies",
        "telegraph",
        "our",
        "editors",
        "view",
    }
)

# English month names and abbreviations, matched as substrings.
MONTH_NAMES = (
    "jan",
    "feb",
    "mar",
    "apr",
    "may",
    "jun",
    "jul",
    "aug",
    "sep",
    "sept",
    "oct",
    "nov",
    "dec",
    "january",
    "february",
    "march",
    "april",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

RELATIVE_TIME_MARKERS = ("ago", "updated", "yesterday", "today")
LIVE_TIME_MARKERS = ("ago", "updated", "update", "yesterday", "today")

TIME_ZONE_MARKERS = ("am", "pm", "utc", "gmt", "est", "pst", "cet")
LIVE_TIME_ZONE_MARKERS = (
    "am",
    "pm",
    "a.m",
    "p.m",
    "utc",
    "gmt",
    "est",
    "pst",
    "cet",
)

DASH_CHARS = "-–—"

_DATELINE_SPLIT_PATTERN = re.compile(r"[\s,—\-]")


def _mentions_month(lower: str) -> bool:
    return any(month in lower for month in MONTH_NAMES)


def _strip_non_alnum(word: str) -> str:
    start, end = 0, len(word)
    while start < end and not word[start].isalnum():
        start += 1
    while end > start and not word[end - 1].isalnum():
        end -= 1
    return word[start:end]


def looks_like_byline(text: str) -> bool:
    """Return True for text shaped like ``"By <Name> ..."``.

    The first character after the prefix must be uppercase, which keeps
    prose such as ``By clicking "Submit"`` out.
    """
    trimmed = text.strip()
    if not trimmed:
        return False

    match = BY_PREFIX_PATTERN.match(trimmed)
    if not match:
        return False

    remainder = trimmed[match.end():].lstrip()
    return bool(remainder) and remainder[0].isupper()


def looks_like_author_name(text: str) -> bool:
    """Heuristic check for text that looks like a personal name."""
    trimmed = trim_soft_space(text.strip())
    if not trimmed or len(trimmed) > 80:
        return False

    if not any(ch.isspace() for ch in trimmed):
        return False

    if has_ascii_digit(trimmed):
        return False

    lower = trimmed.lower()
    if lower.startswith("follow ") or "@" in lower:
        return False

    if sum(1 for ch in trimmed if ch.isalpha()) < 3:
        return False

    return not any(token in AUTHOR_DISQUALIFIERS for token in lower.split())


def contains_author_like_segment(text: str) -> bool:
    """True when the whole text or any candidate segment looks like a name."""
    if looks_like_author_name(text):
        return True
    return any(
        looks_like_author_name(segment)
        for segment in split_candidate_segments(text)
    )


def looks_like_org_credit(text: str) -> bool:
    """Detect credits naming a wire agency, desk or newsroom instead of a person.

    Always False when any part of the text already looks like a person,
    so "Jane Doe | Staff" keeps its author.
    """
    if contains_author_like_segment(text):
        return False

    normalized = normalize_whitespace(text).strip().lower()
    if not normalized:
        return False

    if normalized in WIRE_AGENCIES:
        return True

    hits = sum(1 for token in normalized.split() if token in ORG_CREDIT_KEYWORDS)
    return hits >= 2


def looks_like_social_handle(text: str) -> bool:
    normalized = text.strip().lower()
    if not normalized:
        return False

    if normalized.startswith("@") or " @" in normalized:
        return True

    if "twitter.com/" in normalized or "facebook.com/" in normalized:
        return True

    if normalized.startswith("follow ") and "@" in normalized:
        return True

    if " follow @" in normalized:
        return True

    if " follow us" in normalized and "twitter" in normalized:
        return True

    return " follow on" in normalized and "twitter" in normalized


def looks_like_dateline(text: str) -> bool:
    """Short all-caps place prefix such as ``"CAIRO"`` or ``"PARIS —"``."""
    trimmed = text.strip()
    if not trimmed or len(trimmed) > 40:
        return False

    stripped = trimmed.lstrip(DASH_CHARS).rstrip(DASH_CHARS)
    if not stripped:
        return False

    has_letters = False
    for raw_word in _DATELINE_SPLIT_PATTERN.split(stripped):
        word = _strip_non_alnum(raw_word)
        if not word:
            continue
        if any(ch.islower() for ch in word):
            return False
        if has_alphabetic(word):
            has_letters = True

    return has_letters


def looks_like_datetime_segment(segment: str) -> bool:
    """Absolute or relative date/time fragment ("Apr 16, 2015 8:02 pm UTC")."""
    lower = segment.strip().lower()
    if not lower:
        return False

    if any(marker in lower for marker in RELATIVE_TIME_MARKERS):
        return True

    if not has_ascii_digit(lower):
        return False

    if any(marker in lower for marker in TIME_ZONE_MARKERS):
        return True

    return _mentions_month(lower) or ":" in lower


def looks_like_live_timestamp_segment(segment: str) -> bool:
    """Relative or time-only stamp ("1 day ago", "14:30 UTC").

    Lines carrying a month name are absolute dates and are kept, so this
    never fires on them unless a relative marker is also present.
    """
    lower = segment.strip().lower()
    if not lower:
        return False

    if any(marker in lower for marker in LIVE_TIME_MARKERS):
        return True

    if _mentions_month(lower):
        return False

    if not has_ascii_digit(lower):
        return False

    if ":" in lower:
        return True

    return any(marker in lower for marker in LIVE_TIME_ZONE_MARKERS)


def looks_like_navigation_menu(text: str) -> bool:
    """Pipe-separated menus or stacked all-caps location links.

    ``"HOLLYWOOD\\nNEW YORK"`` is a menu; ``"By JANE DOE\\nSTAFF"`` is not.
    """
    if text.count("|") >= 2:
        return True

    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        return False

    return all(_looks_like_location_link(line) for line in lines)


def _looks_like_location_link(line: str) -> bool:
    if len(line) > 30 or len(line) < 3:
        return False

    words = line.split()
    if not words or len(words) > 3:
        return False

    for word in words:
        letters = [ch for ch in word if ch.isalpha()]
        if not letters:
            return False
        if not all(ch.isupper() for ch in letters):
            return False

    lower = line.lower()
    return not ("by" in lower or "staff" in lower or "editor" in lower)


def looks_like_bracket_menu(text: str) -> bool:
    """``"[Edit] [History] Versions 3"`` style link rows."""
    remainder = text.strip()
    if not remainder.startswith("["):
        return False

    matched = 0
    while remainder.startswith("["):
        end = remainder.find("]")
        if end == -1:
            break
        if not remainder[1:end].strip():
            return False
        matched += 1
        remainder = remainder[end + 1:].lstrip()

    if matched < 2:
        return False

    remainder = remainder.strip()
    return (
        not remainder
        or remainder.startswith("Versions")
        or all(("0" <= ch <= "9") or ch.isspace() for ch in remainder)
    )
