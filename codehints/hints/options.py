"""
Hint options.

The options bag is a flat mapping shared between the host and the hint
providers. Only three boolean keys are understood here; every other key is
passed through untouched for providers (or the host) to interpret.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


# Built-in defaults, lowest priority in the merge.
DEFAULT_OPTIONS: dict[str, Any] = {
    "completeSingle": True,
    "alignWithWord": True,
    "closeOnUnfocus": True,
}


def bool_option(bag: Mapping[str, Any] | None, name: str, default: bool) -> Any:
    """
    Return ``bag[name]`` unless it is absent or None.

    The stored value is returned as-is, even when it is not a bool.
    """
    if bag is None:
        return default
    value = bag.get(name)
    return default if value is None else value


def raw_option(bag: Mapping[str, Any] | None, name: str) -> Any:
    """Return the stored value verbatim (None when absent)."""
    if bag is None:
        return None
    return bag.get(name)


def resolve_options(
    provider_defaults: Mapping[str, Any] | None = None,
    call_site: Mapping[str, Any] | None = None,
) -> HintsOptions:
    """
    Merge options for one trigger.

    Priority, lowest first: built-in defaults, provider defaults, call-site
    options supplied by the host for this trigger.
    """
    merged: dict[str, Any] = dict(DEFAULT_OPTIONS)
    if provider_defaults:
        merged.update(provider_defaults)
    if call_site:
        merged.update(call_site)
    return HintsOptions(merged)


class HintsOptions(Mapping[str, Any]):
    """Read-only view over an options bag."""

    def __init__(self, bag: Mapping[str, Any] | None = None) -> None:
        self._bag: dict[str, Any] = dict(bag or {})

    @property
    def complete_single(self) -> Any:
        """Complete a single candidate without showing the popup."""
        return bool_option(self._bag, "completeSingle", True)

    @property
    def align_with_word(self) -> Any:
        """Align the popup with the start of the word rather than the cursor."""
        return bool_option(self._bag, "alignWithWord", True)

    @property
    def close_on_unfocus(self) -> Any:
        """Close the popup when the editor loses focus."""
        return bool_option(self._bag, "closeOnUnfocus", True)

    def get_option(self, name: str) -> Any:
        return raw_option(self._bag, name)

    def __getitem__(self, key: str) -> Any:
        return self._bag[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bag)

    def __len__(self) -> int:
        return len(self._bag)
