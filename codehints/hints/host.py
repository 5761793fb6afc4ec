"""
Host editor interface.

The hints core never touches a text buffer or draws a popup. Everything it
needs from the editor widget goes through ``HintsHost``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from lsprotocol.types import Position

if TYPE_CHECKING:
    from codehints.hints.marshal import HintsBag
    from codehints.hints.providers import Provider


EventHandler = Callable[..., None]

# Helper kind hint providers are registered under.
HINT_HELPER = "hint"


class HintsHost(ABC):
    """Capabilities consumed from the host editor widget."""

    @abstractmethod
    def get_cursor_position(self, editor: Any) -> Position:
        pass

    @abstractmethod
    def get_helper_for_position(
        self, editor: Any, pos: Position, kind: str
    ) -> Provider | None:
        """Return the helper of ``kind`` bound to the mode at ``pos``."""
        pass

    @abstractmethod
    def register_helper(self, kind: str, mode: str, provider: Provider) -> None:
        pass

    @abstractmethod
    def get_automatic_provider(self) -> Provider | None:
        """The host's own fallback when no helper is bound to a mode."""
        pass

    @abstractmethod
    def show_completion_popup(self, editor: Any, bag: HintsBag | None) -> None:
        """
        Display a marshalled result set. ``None`` means show nothing.

        The host invokes ``hint``/``render`` trampolines and emits
        lifecycle events against ``bag``.
        """
        pass

    @abstractmethod
    def on(self, target: Any, event: str, handler: EventHandler) -> Any:
        """Subscribe ``handler`` to ``event`` raised against ``target``."""
        pass

    @abstractmethod
    def register_command(self, name: str, handler: Callable[..., Any]) -> None:
        pass


class Subscription:
    """Handle returned by ``InMemoryHost.on``."""

    def __init__(self, host: InMemoryHost, target: Any, event: str, handler: EventHandler):
        self.host = host
        self.target = target
        self.event = event
        self.handler = handler

    def remove(self) -> None:
        handlers = self.host._events.get(id(self.target), {}).get(self.event, [])
        if self.handler in handlers:
            handlers.remove(self.handler)


class InMemoryHost(HintsHost):
    """
    Host base keeping helpers, commands and event handlers in dictionaries.

    Subclasses supply the cursor, the mode lookup and the popup.
    """

    def __init__(self, automatic_provider: Provider | None = None) -> None:
        self.automatic_provider = automatic_provider
        self.commands: dict[str, Callable[..., Any]] = {}

        # kind -> mode -> provider
        self._helpers: dict[str, dict[str, Provider]] = {}

        # id(target) -> event -> handlers; _targets keeps targets alive so
        # ids stay unique while handlers are attached
        self._events: dict[int, dict[str, list[EventHandler]]] = {}
        self._targets: dict[int, Any] = {}

    @abstractmethod
    def get_mode_at(self, editor: Any, pos: Position) -> str | None:
        pass

    def get_helper_for_position(
        self, editor: Any, pos: Position, kind: str
    ) -> Provider | None:
        mode = self.get_mode_at(editor, pos)
        if mode is None:
            return None
        return self._helpers.get(kind, {}).get(mode)

    def register_helper(self, kind: str, mode: str, provider: Provider) -> None:
        self._helpers.setdefault(kind, {})[mode] = provider

    def get_automatic_provider(self) -> Provider | None:
        return self.automatic_provider

    def register_command(self, name: str, handler: Callable[..., Any]) -> None:
        self.commands[name] = handler

    def execute_command(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return self.commands[name](*args, **kwargs)

    def on(self, target: Any, event: str, handler: EventHandler) -> Subscription:
        self._targets[id(target)] = target
        self._events.setdefault(id(target), {}).setdefault(event, []).append(handler)
        return Subscription(self, target, event, handler)

    def emit(self, target: Any, event: str, *args: Any) -> None:
        """Run the handlers of ``event`` for ``target`` in subscription order."""
        for handler in list(self._events.get(id(target), {}).get(event, [])):
            handler(*args)

    def forget(self, target: Any) -> None:
        """Drop every handler attached to ``target``."""
        self._events.pop(id(target), None)
        self._targets.pop(id(target), None)
