"""
Byline cleaning pipeline.

Takes the raw text of a candidate byline node and decides whether it is a
genuine human attribution. Noise embedded in real bylines (trailing
timestamps, social handles, dangling separators) is stripped; credits that
name an organization are reported separately from plain rejections so the
extractor can still use them as a weak publisher signal.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .byline_patterns import (
    contains_author_like_segment,
    looks_like_datetime_segment,
    looks_like_live_timestamp_segment,
    looks_like_navigation_menu,
    looks_like_org_credit,
    looks_like_social_handle,
)
from .text_normalizer import has_alphabetic, normalize_whitespace, trim_soft_space

logger = logging.getLogger(__name__)

# Separators that dangle after author credits ("Jane Doe —", "By X | ").
TRAILING_SEPARATOR_CHARS = "-–—|•:;,."

# Checked in this order; the last occurrence of each is tried.
DATETIME_CLAUSE_SEPARATORS = (" | ", " - ", " – ", " — ", " · ")

ORG_CREDIT_PREFIXES = ("posted by", "promoted by")


class OutcomeKind(Enum):
    """Three-way result of cleaning a byline."""

    ACCEPTED = "accepted"
    DROPPED_ORG_CREDIT = "dropped_org_credit"
    DROPPED = "dropped"


@dataclass(frozen=True)
class Outcome:
    """Result of :func:`clean_byline`.

    ``text`` is only set for accepted bylines. ``reason`` names the stage
    that made the decision and is informational.
    """

    kind: OutcomeKind
    text: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def accepted(cls, text: str) -> "Outcome":
        return cls(OutcomeKind.ACCEPTED, text=text, reason="accepted")

    @classmethod
    def dropped(cls, reason: str) -> "Outcome":
        return cls(OutcomeKind.DROPPED, reason=reason)

    @classmethod
    def dropped_org_credit(cls, reason: str = "org_credit") -> "Outcome":
        return cls(OutcomeKind.DROPPED_ORG_CREDIT, reason=reason)

    @property
    def is_accepted(self) -> bool:
        return self.kind is OutcomeKind.ACCEPTED

    @property
    def is_org_credit(self) -> bool:
        return self.kind is OutcomeKind.DROPPED_ORG_CREDIT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.kind.value,
            "text": self.text,
            "reason": self.reason,
        }


def collapse_blank_lines(text: str) -> str:
    """
    Drop blank lines, carrying the first non-empty blank line's content.

    Whitespace-only lines often hold the indentation of the line that
    follows them in the page source, so that literal run is prepended to the
    next non-blank line. Wholly empty lines contribute nothing.

    Example:
        "By Jane Doe\\n    \\nStaff" -> "By Jane Doe\\n    Staff"
    """
    result: List[str] = []
    pending_indent: Optional[str] = None

    for line in text.split("\n"):
        if not line.strip():
            if pending_indent is None and line:
                pending_indent = line
            continue

        if pending_indent is not None:
            line = pending_indent + line
            pending_indent = None
        result.append(line)

    return "\n".join(result)


def strip_trailing_datetime_clause(text: str) -> str:
    """Cut a trailing ``" - Apr 16, 2015 8:02 pm"`` style clause."""
    for separator in DATETIME_CLAUSE_SEPARATORS:
        idx = text.rfind(separator)
        if idx == -1:
            continue
        if looks_like_datetime_segment(text[idx + len(separator):]):
            return text[:idx].rstrip()
    return text


def _strip_trailing_separators(text: str) -> str:
    end = len(text)
    while end and (text[end - 1].isspace() or text[end - 1] in TRAILING_SEPARATOR_CHARS):
        end -= 1
    return text[:end]


def _remove_lines(text: str, predicate) -> Optional[str]:
    kept = []
    changed = False

    for line in text.split("\n"):
        if predicate(line):
            changed = True
            continue
        kept.append(line)

    if not changed:
        return None
    return "\n".join(kept).rstrip("\n")


def remove_timestamp_lines(text: str) -> Optional[str]:
    """Remove relative/time-only lines; None when nothing was removed."""
    return _remove_lines(text, looks_like_live_timestamp_segment)


def remove_social_handle_lines(text: str) -> Optional[str]:
    """Remove ``@handle`` / "Follow us on Twitter" lines; None when unchanged."""
    return _remove_lines(text, looks_like_social_handle)


def _removed_content(before: str, after: str) -> Optional[str]:
    if after in before:
        return before.replace(after, "", 1).strip() or None

    kept = set(after.split("\n"))
    removed = [
        line.strip() for line in before.split("\n")
        if line.strip() and line not in kept
    ]
    return "\n".join(removed) or None


def _log_step(telemetry, step_name: str, before: str, after: str) -> None:
    if telemetry is None or before == after:
        return
    telemetry.log_transformation_step(
        step_name=step_name,
        input_text=before,
        output_text=after,
        removed_content=_removed_content(before, after),
    )


def _finish(telemetry, raw: str, outcome: Outcome) -> Outcome:
    if not outcome.is_accepted:
        logger.debug("Byline dropped at %s: %r", outcome.reason, raw)
    if telemetry is not None:
        telemetry.finalize_cleaning_session(outcome)
    return outcome


def clean_byline(text: str, telemetry=None) -> Outcome:
    """
    Clean a raw byline string and classify it.

    Stages run in a fixed order and the first terminal decision wins.
    Datetime clauses and timestamp lines are only stripped once a
    person-like segment has been found, so a bare date announcement is
    never shredded. Org-credit detection comes last because it defers to
    any person-like segment.

    Args:
        text: Raw byline text, possibly multi-line.
        telemetry: Optional collector with the ``BylineCleaningTelemetry``
            interface that records each transformation.

    Returns:
        An :class:`Outcome`; accepted text keeps its internal spacing and
        newlines.
    """
    if telemetry is not None:
        telemetry.start_cleaning_session(raw_byline=text)

    trimmed = trim_soft_space(text.strip())
    if not trimmed:
        return _finish(telemetry, text, Outcome.dropped("empty_input"))

    cleaned = _strip_trailing_separators(trimmed).strip()
    _log_step(telemetry, "trailing_separator_removal", trimmed, cleaned)
    if not cleaned:
        return _finish(telemetry, text, Outcome.dropped("separator_only"))

    canonical = cleaned.replace("\r\n", "\n").replace("\r", "\n")
    collapsed = collapse_blank_lines(canonical)
    _log_step(telemetry, "blank_line_collapse", canonical, collapsed)
    canonical = collapsed

    has_author_segment = contains_author_like_segment(canonical)

    if has_author_segment:
        stripped = strip_trailing_datetime_clause(canonical)
        _log_step(telemetry, "datetime_clause_removal", canonical, stripped)
        canonical = stripped

        filtered = remove_timestamp_lines(canonical)
        if filtered is not None:
            _log_step(telemetry, "timestamp_line_removal", canonical, filtered)
            if not filtered.strip():
                return _finish(telemetry, text, Outcome.dropped("timestamp_only"))
            canonical = filtered

    filtered = remove_social_handle_lines(canonical)
    if filtered is not None:
        _log_step(telemetry, "social_handle_line_removal", canonical, filtered)
        if not filtered.strip():
            return _finish(telemetry, text, Outcome.dropped("social_handle_only"))
        canonical = filtered

    if canonical.lstrip().lower().startswith(ORG_CREDIT_PREFIXES):
        return _finish(
            telemetry, text, Outcome.dropped_org_credit("posted_by_credit")
        )

    if looks_like_navigation_menu(canonical):
        return _finish(telemetry, text, Outcome.dropped("navigation_menu"))

    # Checks only; the accepted text keeps its original spacing.
    normalized = normalize_whitespace(canonical)
    if not normalized.strip():
        return _finish(telemetry, text, Outcome.dropped("empty_normalized"))

    if looks_like_social_handle(normalized):
        return _finish(telemetry, text, Outcome.dropped("social_handle"))

    if not has_alphabetic(normalized):
        return _finish(telemetry, text, Outcome.dropped("no_letters"))

    if looks_like_org_credit(canonical):
        return _finish(telemetry, text, Outcome.dropped_org_credit("org_credit"))

    return _finish(telemetry, text, Outcome.accepted(canonical))


def clean_byline_simple(text: str) -> Optional[str]:
    """Return the cleaned byline, or None for any kind of rejection."""
    outcome = clean_byline(text)
    return outcome.text if outcome.is_accepted else None


# Name used by older extractor call sites.
clean_byline_text = clean_byline_simple


def clean_bylines(texts: Iterable[str], telemetry=None) -> List[Outcome]:
    """Clean several bylines, one outcome per input in order."""
    return [clean_byline(text, telemetry=telemetry) for text in texts]


class BylineCleaner:
    """Byline cleaner bound to an optional telemetry collector."""

    def __init__(self, enable_telemetry: bool = False, telemetry=None):
        if telemetry is None and enable_telemetry:
            from .byline_telemetry import BylineCleaningTelemetry

            telemetry = BylineCleaningTelemetry(enable_telemetry=True)
        self.telemetry = telemetry

    def clean(self, text: str) -> Outcome:
        return clean_byline(text, telemetry=self.telemetry)

    def clean_text(self, text: str) -> Optional[str]:
        outcome = self.clean(text)
        return outcome.text if outcome.is_accepted else None

    def clean_bulk_bylines(self, bylines: Iterable[str]) -> List[Outcome]:
        """Clean multiple bylines in batch."""
        return clean_bylines(bylines, telemetry=self.telemetry)
