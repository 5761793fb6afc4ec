"""
Popup lifecycle events.

Subscriptions are attached to the marshalled bag of a HintResults, which is
the object the host raises events against. ``to_bag()`` is memoized, so
subscribing before or after the popup is first shown reaches the same bag.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from codehints.hints.host import HintsHost
from codehints.hints.marshal import decode_hint
from codehints.hints.results import HintResult, HintResults


SHOWN = "shown"
CLOSE = "close"
PICK = "pick"
UPDATE = "update"
SELECT = "select"


class HintsEvents:
    """Typed subscriptions over the host's raw popup events."""

    def __init__(self, host: HintsHost) -> None:
        self.host = host

    def on_shown(self, results: HintResults, handler: Callable[[], None]) -> Any:
        return self.host.on(results.to_bag(), SHOWN, handler)

    def on_close(self, results: HintResults, handler: Callable[[], None]) -> Any:
        return self.host.on(results.to_bag(), CLOSE, handler)

    def on_update(self, results: HintResults, handler: Callable[[], None]) -> Any:
        return self.host.on(results.to_bag(), UPDATE, handler)

    def on_pick(
        self, results: HintResults, handler: Callable[[HintResult], None]
    ) -> Any:
        def on_pick(completion: Any) -> None:
            handler(decode_hint(completion))

        return self.host.on(results.to_bag(), PICK, on_pick)

    def on_select(
        self, results: HintResults, handler: Callable[[HintResult, Any], None]
    ) -> Any:
        """``handler`` receives the highlighted hint and its row element."""

        def on_select(completion: Any, element: Any) -> None:
            handler(decode_hint(completion), element)

        return self.host.on(results.to_bag(), SELECT, on_select)
