"""Tests for option resolution."""

from codehints.hints.options import (
    DEFAULT_OPTIONS,
    HintsOptions,
    bool_option,
    raw_option,
    resolve_options,
)


def test_bool_option_absent_uses_default():
    """Test that a missing boolean option falls back to the default."""
    assert bool_option({}, "completeSingle", True) is True
    assert bool_option({}, "completeSingle", False) is False


def test_bool_option_none_uses_default():
    """Test that a None boolean option falls back to the default."""
    assert bool_option({"completeSingle": None}, "completeSingle", True) is True


def test_bool_option_returns_stored_bool():
    """Test that a stored boolean is returned as is."""
    assert bool_option({"completeSingle": False}, "completeSingle", True) is False


def test_bool_option_does_not_coerce():
    """Test that non-bool values are returned uncoerced."""
    assert bool_option({"completeSingle": "no"}, "completeSingle", True) == "no"
    assert bool_option({"completeSingle": 0}, "completeSingle", True) == 0


def test_bool_option_without_bag():
    """Test that a missing bag gives the default."""
    assert bool_option(None, "alignWithWord", True) is True


def test_raw_option_is_verbatim():
    """Test that raw options come back exactly as stored."""
    marker = object()
    assert raw_option({"custom": marker}, "custom") is marker
    assert raw_option({}, "custom") is None
    assert raw_option(None, "custom") is None


def test_hints_options_defaults():
    """Test the default values of the HintsOptions properties."""
    options = HintsOptions({})

    assert options.complete_single is True
    assert options.align_with_word is True
    assert options.close_on_unfocus is True


def test_hints_options_reads_bag():
    """Test that HintsOptions reads properties and mapping keys from its bag."""
    options = HintsOptions(
        {"completeSingle": False, "closeOnUnfocus": False, "words": ["a"]}
    )

    assert options.complete_single is False
    assert options.close_on_unfocus is False
    assert options.align_with_word is True
    assert options.get_option("words") == ["a"]
    assert options["words"] == ["a"]
    assert set(options) == {"completeSingle", "closeOnUnfocus", "words"}
    assert len(options) == 3


def test_hints_options_is_a_copy():
    """Test that HintsOptions does not see later changes to its source bag."""
    bag = {"completeSingle": False}
    options = HintsOptions(bag)
    bag["completeSingle"] = True

    assert options.complete_single is False


def test_resolve_options_priority():
    """Test that call-site options beat provider defaults, which beat built-ins."""
    options = resolve_options(
        {"completeSingle": False, "alignWithWord": False},
        {"alignWithWord": True, "extra": 1},
    )

    assert options.complete_single is False
    assert options.align_with_word is True
    assert options.close_on_unfocus is True
    assert options.get_option("extra") == 1


def test_resolve_options_without_overrides():
    """Test that resolve_options alone gives the built-in defaults."""
    assert dict(resolve_options()) == DEFAULT_OPTIONS
