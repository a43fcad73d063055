import pytest

from byline_normalizer.utils.text_normalizer import (
    normalize_whitespace,
    trim_soft_space,
    unescape_entities,
)


def test_unescape_entities_decodes_named_entities():
    assert unescape_entities("&lt;div&gt;") == "<div>"
    assert unescape_entities("A &amp; B") == "A & B"
    assert unescape_entities("&quot;Hi&quot; &apos;there&apos;") == "\"Hi\" 'there'"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("&#39;", "'"),
        ("&#x27;", "'"),
        ("&#X41;", "A"),
        ("Caf&#233;", "Café"),
        ("&#x1F600;", "\U0001F600"),
    ],
)
def test_unescape_entities_decodes_numeric_references(raw, expected):
    assert unescape_entities(raw) == expected


def test_unescape_entities_decodes_astral_code_point_as_one_character():
    assert len(unescape_entities("&#128512;")) == 1


@pytest.mark.parametrize(
    "raw",
    [
        "&bogus;",
        "&#xZZ;",
        "&#;",
        "&#x;",
        "&#1114112;",
        "&#xD800;",
        "AT&T",
        "Tom &amp Jerry",
        "& nbsp;",
    ],
)
def test_unescape_entities_leaves_malformed_sequences(raw):
    assert unescape_entities(raw) == raw


def test_unescape_entities_does_not_decode_twice():
    assert unescape_entities("&amp;lt;") == "&lt;"


def test_unescape_entities_recovers_after_unterminated_entity():
    assert unescape_entities("&lt&gt;") == "&lt>"


def test_normalize_whitespace_collapses_runs():
    assert normalize_whitespace("hello   world") == "hello world"
    assert normalize_whitespace("a  b  c") == "a b c"
    assert normalize_whitespace("Jane\n\t Doe") == "Jane Doe"


def test_normalize_whitespace_keeps_single_edge_space():
    assert normalize_whitespace("  Jane  ") == " Jane "


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "By  Jane\n\nDoe", "\tA\u00a0\u00a0B\r\n", "plain"],
)
def test_normalize_whitespace_is_idempotent(raw):
    once = normalize_whitespace(raw)
    assert normalize_whitespace(once) == once


def test_trim_soft_space_strips_invisible_characters():
    assert trim_soft_space("\u00a0\u200bJane Doe\ufeff") == "Jane Doe"


def test_trim_soft_space_keeps_interior_and_regular_spaces():
    assert trim_soft_space("Jane\u00a0Doe") == "Jane\u00a0Doe"
    assert trim_soft_space(" Jane ") == " Jane "
