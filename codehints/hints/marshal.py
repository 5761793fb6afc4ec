"""
Marshalling between hint results and the host's property-bag form.

Callbacks are installed as ``hint``/``render`` trampolines. Decoding finds
the originating HintResult through an identity side-table.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union
from weakref import WeakKeyDictionary

from lsprotocol.types import Position

from codehints.hints.results import (
    HintApplier,
    HintRenderer,
    HintResult,
    HintResults,
)


BoundaryPosition = dict[str, int]


def position_to_bag(pos: Position) -> BoundaryPosition:
    return {"line": pos.line, "ch": pos.character}


def position_from_bag(value: Any) -> Position | None:
    if value is None:
        return None
    if isinstance(value, Position):
        return value
    return Position(line=value["line"], character=value["ch"])


@dataclass(eq=False)
class HintBag:
    """Host-facing form of a single HintResult."""

    text: str
    display_text: str | None = None
    class_name: str | None = None
    from_: BoundaryPosition | None = None
    to: BoundaryPosition | None = None
    hint: Callable[..., None] | None = None
    render: Callable[..., None] | None = None
    # Keys the host or a provider set that this layer does not interpret.
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        bag: dict[str, Any] = dict(self.extra)
        bag["text"] = self.text
        if self.display_text is not None:
            bag["displayText"] = self.display_text
        if self.class_name is not None:
            bag["className"] = self.class_name
        if self.from_ is not None:
            bag["from"] = self.from_
        if self.to is not None:
            bag["to"] = self.to
        if self.hint is not None:
            bag["hint"] = self.hint
        if self.render is not None:
            bag["render"] = self.render
        return bag


@dataclass(eq=False)
class HintsBag:
    """Host-facing form of a HintResults."""

    results: list[Union[str, HintBag]]
    from_: BoundaryPosition
    to: BoundaryPosition
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        bag: dict[str, Any] = dict(self.extra)
        bag["list"] = [
            r if isinstance(r, str) else r.to_dict() for r in self.results
        ]
        bag["from"] = self.from_
        bag["to"] = self.to
        return bag


# bag -> the HintResult it was marshalled from
_ORIGINS: WeakKeyDictionary[HintBag, HintResult] = WeakKeyDictionary()


def _bag_range(bag: Any) -> tuple[Any, Any]:
    if isinstance(bag, (HintBag, HintsBag)):
        return bag.from_, bag.to
    if isinstance(bag, Mapping):
        return bag.get("from"), bag.get("to")
    return None, None


def _apply_trampoline(hint: HintResult, applier: HintApplier) -> Callable[..., None]:
    def trampoline(editor: Any, data: Any, completion: Any = None) -> None:
        set_from, set_to = _bag_range(data)
        item_from, item_to = _bag_range(completion)
        applier(
            editor,
            hint,
            position_from_bag(item_from if item_from is not None else set_from),
            position_from_bag(item_to if item_to is not None else set_to),
        )

    return trampoline


def _render_trampoline(hint: HintResult, renderer: HintRenderer) -> Callable[..., None]:
    def trampoline(target: Any, data: Any = None, completion: Any = None) -> None:
        renderer(target, hint)

    return trampoline


def marshal_hint(hint: HintResult) -> HintBag:
    """Marshal one HintResult, leaving unset fields out of the bag."""
    bag = HintBag(
        text=hint.text,
        display_text=hint.display_text,
        class_name=hint.class_name,
        from_=position_to_bag(hint.from_) if hint.from_ is not None else None,
        to=position_to_bag(hint.to) if hint.to is not None else None,
    )
    if hint.applier is not None:
        bag.hint = _apply_trampoline(hint, hint.applier)
    if hint.renderer is not None:
        bag.render = _render_trampoline(hint, hint.renderer)

    _ORIGINS[bag] = hint
    return bag


def marshal_results(results: HintResults) -> HintsBag:
    """Build a new bag; ``HintResults.to_bag()`` is the cached entry point."""
    entries: list[Union[str, HintBag]] = []
    for r in results.results:
        if isinstance(r, str):
            entries.append(r)
        elif isinstance(r, HintResult):
            entries.append(marshal_hint(r))
        else:
            raise TypeError(
                f"Hint candidates must be str or HintResult, got {type(r).__name__}"
            )

    return HintsBag(
        results=entries,
        from_=position_to_bag(results.from_),
        to=position_to_bag(results.to),
    )


def decode_hint(bag: Any) -> HintResult:
    """
    Rebuild a HintResult from a bag reported back by the host.

    Bags marshalled in this process resolve to their original HintResult,
    callbacks included. Anything else is rebuilt from its data fields only.
    """
    if isinstance(bag, str):
        return HintResult(text=bag)

    if isinstance(bag, HintBag):
        origin = _ORIGINS.get(bag)
        if origin is not None:
            return origin
        return HintResult(
            text=bag.text,
            display_text=bag.display_text,
            class_name=bag.class_name,
            from_=position_from_bag(bag.from_),
            to=position_from_bag(bag.to),
        )

    if isinstance(bag, Mapping):
        return HintResult(
            text=bag["text"],
            display_text=bag.get("displayText"),
            class_name=bag.get("className"),
            from_=position_from_bag(bag.get("from")),
            to=position_from_bag(bag.get("to")),
        )

    raise TypeError(f"Cannot decode a hint from {type(bag).__name__}")
