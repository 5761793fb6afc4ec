"""
Words provider.

The server's automatic fallback: used for any mode without a registered
provider. Completes the word before the cursor with other words of the same
document, in order of first appearance.
"""

from __future__ import annotations

import re
from typing import Any

from lsprotocol.types import Position

from codehints.hints.options import HintsOptions
from codehints.hints.providers import SyncProvider
from codehints.hints.results import HintResults


WORD_PATTERN = re.compile(r"\w+")


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


class WordsProvider:
    """
    Expects an editor exposing ``lines`` (the document's lines) and
    ``position`` (the cursor).

    ``minPrefix`` in the options overrides ``min_prefix``.
    """

    def __init__(self, min_prefix: int = 1) -> None:
        self.min_prefix = min_prefix

    def __call__(self, editor: Any, options: HintsOptions) -> HintResults | None:
        lines: list[str] = editor.lines
        pos: Position = editor.position

        line = lines[pos.line] if pos.line < len(lines) else ""
        start = min(pos.character, len(line))
        while start > 0 and _is_word_char(line[start - 1]):
            start -= 1
        prefix = line[start:pos.character]

        min_prefix = options.get_option("minPrefix")
        if min_prefix is None:
            min_prefix = self.min_prefix
        if len(prefix) < min_prefix:
            return None

        words: dict[str, None] = {}
        for text in lines:
            for match in WORD_PATTERN.finditer(text):
                word = match.group()
                if word != prefix and word.startswith(prefix):
                    words.setdefault(word, None)

        if not words:
            return None

        return HintResults.from_strings(
            list(words), Position(line=pos.line, character=start), pos
        )

    def as_provider(self) -> SyncProvider:
        return SyncProvider(self)
