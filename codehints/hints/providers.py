"""
Hint providers.

A provider is either synchronous (returns results directly) or asynchronous
(returns an awaitable). The dispatcher branches on the provider class, never
on attributes set on the callable.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from codehints.hints.options import HintsOptions
    from codehints.hints.results import HintResults


HintsHelper = Callable[[Any, "HintsOptions"], "HintResults | None"]
HintsHelperAsync = Callable[[Any, "HintsOptions"], Awaitable["HintResults | None"]]


@dataclass(frozen=True)
class SyncProvider:
    """Provider that returns its results on the triggering call."""

    fn: HintsHelper
    defaults: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AsyncProvider:
    """Provider whose results are delivered when its awaitable settles."""

    fn: HintsHelperAsync
    defaults: Mapping[str, Any] = field(default_factory=dict)


Provider = Union[SyncProvider, AsyncProvider]


class InvalidProviderError(TypeError):
    """Raised when something other than a Sync/AsyncProvider is used."""


def is_provider(value: object) -> bool:
    return isinstance(value, (SyncProvider, AsyncProvider))
