"""Tests for the document words provider."""

from types import SimpleNamespace

from lsprotocol.types import Position

from codehints.hints.options import HintsOptions
from codehints.hints.providers import SyncProvider
from codehints.providers.words import WordsProvider


def editor(text, line, character):
    return SimpleNamespace(
        lines=text.splitlines(keepends=True),
        position=Position(line=line, character=character),
    )


def test_completes_prefix_in_document_order():
    """Test that matching words come back in first-appearance order."""
    ed = editor("format foo\nfoo_bar fob\nfo", 2, 2)

    results = WordsProvider()(ed, HintsOptions())

    assert results.results == ["format", "foo", "foo_bar", "fob"]
    assert results.from_ == Position(line=2, character=0)
    assert results.to == Position(line=2, character=2)


def test_prefix_starts_after_non_word_character():
    """Test that the prefix stops at the last non-word character."""
    ed = editor("value = self.val", 0, 16)

    results = WordsProvider()(ed, HintsOptions())

    assert results.results == ["value"]
    assert results.from_ == Position(line=0, character=13)


def test_no_matches_returns_none():
    """Test that no matching words gives None."""
    ed = editor("alpha beta\nzz", 1, 2)

    assert WordsProvider()(ed, HintsOptions()) is None


def test_min_prefix_from_options():
    """Test that the minPrefix option overrides the constructor value."""
    ed = editor("foo fab\nf", 1, 1)

    assert WordsProvider()(ed, HintsOptions({"minPrefix": 2})) is None
    assert WordsProvider(min_prefix=2)(ed, HintsOptions()) is None
    assert WordsProvider(min_prefix=2)(ed, HintsOptions({"minPrefix": 1})).results == [
        "foo",
        "fab",
    ]


def test_cursor_past_last_line():
    """Test that a cursor beyond the document gives None."""
    ed = editor("foo", 3, 0)

    assert WordsProvider()(ed, HintsOptions()) is None


def test_as_provider():
    """Test that as_provider wraps the instance in a SyncProvider."""
    words = WordsProvider()
    provider = words.as_provider()

    assert isinstance(provider, SyncProvider)
    assert provider.fn is words
