"""Byline and metadata normalization for HTML article extraction."""

from byline_normalizer.utils.byline_cleaner import (
    BylineCleaner,
    Outcome,
    OutcomeKind,
    clean_byline,
    clean_byline_simple,
    clean_byline_text,
    clean_bylines,
)
from byline_normalizer.utils.byline_patterns import (
    looks_like_author_name,
    looks_like_bracket_menu,
    looks_like_byline,
    looks_like_dateline,
    looks_like_datetime_segment,
    looks_like_live_timestamp_segment,
    looks_like_navigation_menu,
    looks_like_org_credit,
    looks_like_social_handle,
)
from byline_normalizer.utils.redundancy import is_byline_redundant_with_site_name
from byline_normalizer.utils.text_normalizer import (
    normalize_whitespace,
    trim_soft_space,
    unescape_entities,
)
from byline_normalizer.utils.url_utils import is_probable_url

__version__ = "0.1.0"

__all__ = [
    "BylineCleaner",
    "Outcome",
    "OutcomeKind",
    "clean_byline",
    "clean_byline_simple",
    "clean_byline_text",
    "clean_bylines",
    "is_byline_redundant_with_site_name",
    "is_probable_url",
    "looks_like_author_name",
    "looks_like_bracket_menu",
    "looks_like_byline",
    "looks_like_dateline",
    "looks_like_datetime_segment",
    "looks_like_live_timestamp_segment",
    "looks_like_navigation_menu",
    "looks_like_org_credit",
    "looks_like_social_handle",
    "normalize_whitespace",
    "trim_soft_space",
    "unescape_entities",
]
