"""URL syntax helpers used by the document-level extractor."""

import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# RFC 3986 scheme grammar.
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# Schemes whose URLs must name a host.
HIERARCHICAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def is_probable_url(text: str) -> bool:
    """
    Check whether a string is syntactically an absolute URL.

    Stricter than a WHATWG-style parser: http, https, ftp, ws and wss URLs
    must carry a host, so "http:example.com" is rejected, and any other
    scheme needs something after the colon, so "foo:" is rejected too.

    Examples:
        is_probable_url("https://example.com/story") -> True
        is_probable_url("mailto:desk@example.com") -> True
        is_probable_url("https://") -> False
        is_probable_url("Jane Doe") -> False
    """
    candidate = text.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False

    try:
        parsed = urlparse(candidate)
        # Raises ValueError for out-of-range ports.
        parsed.port
    except ValueError as e:
        logger.debug(f"Rejected URL candidate '{candidate}': {e}")
        return False

    scheme = parsed.scheme.lower()
    if not scheme or not _SCHEME_PATTERN.match(parsed.scheme):
        return False

    if scheme in HIERARCHICAL_SCHEMES:
        return bool(parsed.hostname)

    if scheme == "file":
        return candidate.lower().startswith("file:")

    return bool(candidate[len(scheme) + 1:])
