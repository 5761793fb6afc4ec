from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from lsprotocol.types import Position

from codehints.hints.host import InMemoryHost
from codehints.hints.registry import Hints


class FakeHost(InMemoryHost):
    """Host whose editors are namespaces with a mode and a cursor."""

    def __init__(self, automatic_provider=None):
        super().__init__(automatic_provider)
        self.shown = []
        self.default_insert = Mock()

    def get_cursor_position(self, editor):
        return editor.cursor

    def get_mode_at(self, editor, pos):
        return editor.mode

    def show_completion_popup(self, editor, bag):
        self.shown.append(bag)

    def pick(self, editor, bag, entry):
        """Pick the way a popup does: trampoline if present, else insert."""
        if not isinstance(entry, str) and entry.hint is not None:
            entry.hint(editor, bag, entry)
        else:
            self.default_insert(editor, entry)
        self.emit(bag, "pick", entry)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def hints(host):
    return Hints(host)


@pytest.fixture
def make_editor():
    def make(mode="javascript", line=0, character=3):
        return SimpleNamespace(mode=mode, cursor=Position(line=line, character=character))

    return make
