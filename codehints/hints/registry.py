"""
Provider registry and the hints context.

``Hints`` is created once per host at application start. It owns the
registry and the dispatcher and wires the dispatcher into the host the
first time a provider is registered.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from codehints.hints.dispatcher import CompletionDispatcher
from codehints.hints.events import HintsEvents
from codehints.hints.host import HINT_HELPER, HintsHost
from codehints.hints.providers import (
    AsyncProvider,
    HintsHelper,
    HintsHelperAsync,
    InvalidProviderError,
    Provider,
    SyncProvider,
    is_provider,
)


# Host commands the dispatcher is installed under.
AUTOCOMPLETE_COMMAND = "autocomplete"
SHOW_HINT_COMMAND = "showHint"


class ProviderRegistry:
    """Mode-keyed table of providers. Last registration for a mode wins."""

    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}

    def register(self, mode: str, provider: Provider) -> None:
        if not is_provider(provider):
            raise InvalidProviderError(
                f"Expected SyncProvider or AsyncProvider, got {type(provider).__name__}"
            )
        self._providers[mode] = provider

    def resolve(self, mode: str) -> Provider | None:
        return self._providers.get(mode)

    def modes(self) -> list[str]:
        return list(self._providers)


class Hints:
    """
    Entry point for application code.

    Usage:
        hints = Hints(host)
        hints.register_provider("javascript", complete_js)
        hints.register_provider_async("python", complete_python_async)

        # Tie the host's completion key to the "autocomplete" command.

    Async providers run on ``loop`` when given; otherwise the host must
    trigger completion from inside a running event loop.
    """

    def __init__(
        self,
        host: HintsHost,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.host = host
        self.registry = ProviderRegistry()
        self.dispatcher = CompletionDispatcher(host, loop)
        self.events = HintsEvents(host)
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> None:
        """Install the dispatcher as the host's autocomplete command (once)."""
        if self._installed:
            return
        self._installed = True

        self.host.register_command(AUTOCOMPLETE_COMMAND, self.dispatcher.trigger)
        self.host.register_command(SHOW_HINT_COMMAND, self.dispatcher.trigger)

    def register(self, mode: str, provider: Provider) -> None:
        self.registry.register(mode, provider)
        self.install()
        self.host.register_helper(HINT_HELPER, mode, provider)

    def register_provider(
        self,
        mode: str,
        fn: HintsHelper,
        defaults: Mapping[str, Any] | None = None,
    ) -> SyncProvider:
        """Register a helper that returns HintResults (or None) directly."""
        provider = SyncProvider(fn, dict(defaults or {}))
        self.register(mode, provider)
        return provider

    def register_provider_async(
        self,
        mode: str,
        fn: HintsHelperAsync,
        defaults: Mapping[str, Any] | None = None,
    ) -> AsyncProvider:
        """Register a helper returning an awaitable of HintResults (or None)."""
        provider = AsyncProvider(fn, dict(defaults or {}))
        self.register(mode, provider)
        return provider

    def resolve(self, mode: str) -> Provider | None:
        return self.registry.resolve(mode)
