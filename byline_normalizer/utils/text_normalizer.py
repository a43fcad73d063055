"""
String normalization helpers shared by the byline classifiers.

All functions here are total: they accept any ``str`` and never raise for
malformed content. Lengths and indices are Python code points, so
multi-byte characters are never split.
"""

import re

# Invisible characters that frequently wrap metadata text.
SOFT_SPACE_CHARS = "\u00a0\u200b\ufeff"

_NAMED_ENTITIES = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
}

_ENTITY_PATTERN = re.compile(r"&(#[xX][0-9A-Fa-f]+|#[0-9]+|[A-Za-z]+);")
_WHITESPACE_PATTERN = re.compile(r"\s+")

_MAX_CODE_POINT = 0x10FFFF


def _decode_entity(match: re.Match) -> str:
    body = match.group(1)

    if body.startswith(("#x", "#X")):
        code_point = int(body[2:], 16)
    elif body.startswith("#"):
        code_point = int(body[1:])
    else:
        return _NAMED_ENTITIES.get(body, match.group(0))

    # Surrogates and values past the Unicode range are not scalar values.
    if code_point > _MAX_CODE_POINT or 0xD800 <= code_point <= 0xDFFF:
        return match.group(0)

    return chr(code_point)


def unescape_entities(text: str) -> str:
    """Decode basic named and numeric HTML entities.

    Only ``&lt;``, ``&gt;``, ``&amp;``, ``&quot;`` and ``&apos;`` are known
    by name; decimal (``&#39;``) and hex (``&#x27;``) references are decoded
    when they name a valid code point. Anything else passes through as-is.

    Examples:
        unescape_entities("&lt;div&gt;") -> "<div>"
        unescape_entities("A &amp; B") -> "A & B"
        unescape_entities("&bogus; &#xZZ;") -> "&bogus; &#xZZ;"
    """
    if "&" not in text:
        return text
    return _ENTITY_PATTERN.sub(_decode_entity, text)


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace into a single ASCII space."""
    return _WHITESPACE_PATTERN.sub(" ", text)


def trim_soft_space(text: str) -> str:
    """Strip non-breaking, zero-width and BOM characters from both ends."""
    return text.strip(SOFT_SPACE_CHARS)


def has_alphabetic(text: str) -> bool:
    return any(ch.isalpha() for ch in text)


def has_ascii_digit(text: str) -> bool:
    return any("0" <= ch <= "9" for ch in text)
