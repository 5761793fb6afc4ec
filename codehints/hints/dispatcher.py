"""
Completion dispatcher.

Sync providers run inline and their faults propagate. Async providers run
on ``loop`` (else the running loop); a failed or unmarshallable result is
delivered as ``None``. Pending providers are never cancelled.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from codehints.hints.host import HINT_HELPER, HintsHost
from codehints.hints.options import HintsOptions, resolve_options
from codehints.hints.providers import (
    AsyncProvider,
    InvalidProviderError,
    Provider,
    SyncProvider,
)
from codehints.hints.results import HintResults

if TYPE_CHECKING:
    from codehints.hints.marshal import HintsBag


Deliver = Callable[["HintsBag | None"], None]


def _marshal(results: HintResults | None) -> HintsBag | None:
    return None if results is None else results.to_bag()


class CompletionDispatcher:
    """Bridges sync and async providers to the host's calling convention."""

    def __init__(
        self,
        host: HintsHost,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.host = host
        self.loop = loop

    def trigger(
        self,
        editor: Any,
        options: Mapping[str, Any] | None = None,
        deliver: Deliver | None = None,
    ) -> HintsBag | None:
        """
        Handle an explicit completion trigger.

        Args:
            editor: The host's editor object, passed through to the provider
            options: Call-site options for this trigger
            deliver: Receives the marshalled results; defaults to the host's
                ``show_completion_popup``

        Returns:
            The marshalled results of a synchronous provider. None for an
            asynchronous provider (its results arrive through ``deliver``)
            and when there are no completions.
        """
        if deliver is None:
            deliver = partial(self.host.show_completion_popup, editor)

        pos = self.host.get_cursor_position(editor)
        provider = self.host.get_helper_for_position(editor, pos, HINT_HELPER)
        if provider is None:
            provider = self.host.get_automatic_provider()

        if provider is None:
            deliver(None)
            return None

        resolved = resolve_options(provider.defaults, options)
        return self.complete(provider, editor, resolved, deliver)

    def complete(
        self,
        provider: Provider,
        editor: Any,
        options: HintsOptions,
        deliver: Deliver,
    ) -> HintsBag | None:
        """Run ``provider`` with already resolved options."""
        if isinstance(provider, SyncProvider):
            bag = _marshal(provider.fn(editor, options))
            deliver(bag)
            return bag

        if isinstance(provider, AsyncProvider):
            pending = provider.fn(editor, options)
            if not inspect.isawaitable(pending):
                # Helper answered without deferring.
                deliver(_marshal(pending))
                return None

            future = asyncio.ensure_future(pending, loop=self.loop)
            future.add_done_callback(partial(self._settled, deliver))
            return None

        raise InvalidProviderError(
            f"Expected SyncProvider or AsyncProvider, got {type(provider).__name__}"
        )

    def _settled(self, deliver: Deliver, future: asyncio.Future) -> None:
        if future.cancelled() or future.exception() is not None:
            deliver(None)
            return

        try:
            bag = _marshal(future.result())
        except Exception:
            deliver(None)
            return
        deliver(bag)
