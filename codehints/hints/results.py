"""
Hint results.

``HintResults`` is the full answer to one completion request: an ordered
list of candidates plus the range they replace. Candidates are plain strings
or ``HintResult`` instances, and the two forms may be mixed.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from lsprotocol.types import Position

if TYPE_CHECKING:
    from codehints.hints.marshal import HintsBag


HintRenderer = Callable[[Any, "HintResult"], None]
HintApplier = Callable[[Any, "HintResult", "Position | None", "Position | None"], None]


@dataclass
class HintResult:
    """A single completion candidate."""

    # The completion text. This is the only required field.
    text: str

    # Text shown in the menu instead of ``text``.
    display_text: str | None = None

    # Class name applied to the candidate's row in the menu.
    class_name: str | None = None

    # Replacement range for this candidate only; overrides the range of
    # the enclosing HintResults when picked.
    from_: Position | None = None
    to: Position | None = None

    # Builds the menu row by appending to its first argument. Replaces the
    # host's default rendering.
    renderer: HintRenderer | None = None

    # Applies the completion instead of the host's default insertion.
    applier: HintApplier | None = None

    def __str__(self) -> str:
        return f"[{self.text}]"


Candidate = Union[str, HintResult]


class HintResults:
    """The return value of a hints (code completion) operation."""

    def __init__(
        self, results: Sequence[Candidate], from_: Position, to: Position
    ) -> None:
        self._results: list[Candidate] = list(results)
        self.from_ = from_
        self.to = to
        self._bag: HintsBag | None = None

    @classmethod
    def from_strings(
        cls, results: Sequence[str], from_: Position, to: Position
    ) -> HintResults:
        return cls(results, from_, to)

    @classmethod
    def from_hints(
        cls, results: Sequence[HintResult], from_: Position, to: Position
    ) -> HintResults:
        return cls(results, from_, to)

    @property
    def results(self) -> list[Candidate]:
        """The candidates, each either a string or a HintResult."""
        return self._results

    def to_bag(self) -> HintsBag:
        # Cached: host event subscriptions are keyed on the bag object.
        if self._bag is None:
            from codehints.hints.marshal import marshal_results

            self._bag = marshal_results(self)
        return self._bag
