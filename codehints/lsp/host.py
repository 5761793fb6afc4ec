"""
LSP host for completion hints.

Serves the hints registry to LSP clients. Each completion request gets an
``LspEditor``; providers see it as their editor. The marshalled results are
turned into a ``CompletionList`` whose items each carry a ``codehints.pick``
command, so the client reports picks back and custom appliers can run.

Design Principles:
1. Mode = the document's language id, else the configured suffix table
2. Order of candidates is kept (sort_text follows the provider's order)
3. Only the most recently shown set can be picked
4. A request answered after a newer one was shown gets its items, but no
   pick commands, and leaves the shown set alone
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from lsprotocol.types import (
    ApplyWorkspaceEditParams,
    Command,
    CompletionItem,
    CompletionList,
    CompletionParams,
    LogMessageParams,
    MessageType,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
)
from pygls.workspace.text_document import TextDocument

from codehints.hints.events import CLOSE, PICK, SHOWN
from codehints.hints.host import InMemoryHost
from codehints.hints.marshal import HintBag, HintsBag, position_from_bag
from codehints.hints.providers import Provider
from codehints.hints.registry import AUTOCOMPLETE_COMMAND

if TYPE_CHECKING:
    from codehints.lsp.hints_language_server import HintsLanguageServer


PICK_COMMAND = "codehints.pick"


class LspEditor:
    """The editor handed to providers for one completion request."""

    def __init__(
        self,
        server: HintsLanguageServer,
        document: TextDocument,
        position: Position,
        delivered: asyncio.Future | None = None,
        request_id: int = 0,
    ) -> None:
        self.server = server
        self.document = document
        self.position = position
        self.request_id = request_id

        # Resolved with the CompletionList once the results are shown.
        self.delivered = delivered

    @property
    def lines(self) -> list[str]:
        return self.document.lines

    @property
    def uri(self) -> str:
        return self.document.uri

    def apply_edit(self, from_: Position, to: Position, text: str) -> Any:
        """Ask the client to replace ``from_``..``to`` with ``text``."""
        edit = WorkspaceEdit(
            changes={
                self.document.uri: [
                    TextEdit(range=Range(start=from_, end=to), new_text=text)
                ]
            }
        )
        return self.server.workspace_apply_edit(
            ApplyWorkspaceEditParams(edit=edit, label="Apply completion")
        )


@dataclass
class ShownSet:
    token: str
    editor: LspEditor
    bag: HintsBag


class LspHintsHost(InMemoryHost):
    """HintsHost backed by a pygls language server."""

    def __init__(
        self,
        server: HintsLanguageServer,
        automatic_provider: Provider | None = None,
    ) -> None:
        super().__init__(automatic_provider)
        self.server = server
        self.current: ShownSet | None = None

        # Requests are numbered in arrival order; _shown_request is the
        # newest one whose results reached the client.
        self._request_seq = 0
        self._shown_request = 0

    # ===== HintsHost =====

    def get_cursor_position(self, editor: LspEditor) -> Position:
        return editor.position

    def get_mode_at(self, editor: LspEditor, pos: Position) -> str | None:
        if editor.document.language_id:
            return editor.document.language_id
        return self.server.hints_config.mode_for(editor.document.uri)

    def show_completion_popup(self, editor: LspEditor, bag: HintsBag | None) -> None:
        if editor.delivered is not None and editor.delivered.done():
            # Cancelled by the client, or already answered.
            self.log(MessageType.Log, f"Dropping completion results for request {editor.request_id}")
            return

        token = None
        if editor.request_id < self._shown_request:
            self.log(MessageType.Log, f"Request {editor.request_id} superseded, not pickable")
        else:
            self._shown_request = editor.request_id
            self._close_current()
            if bag is not None and bag.results:
                token = uuid4().hex
                self.current = ShownSet(token, editor, bag)
                self.emit(bag, SHOWN)

        if editor.delivered is not None:
            editor.delivered.set_result(self.to_completion_list(bag, token))

    # ===== Requests =====

    async def complete(
        self,
        document: TextDocument,
        params: CompletionParams,
        options: Mapping[str, Any] | None = None,
    ) -> CompletionList:
        """Run the autocomplete command for a completion request."""
        loop = asyncio.get_running_loop()
        self._request_seq += 1
        editor = LspEditor(
            self.server,
            document,
            params.position,
            loop.create_future(),
            self._request_seq,
        )

        call_site: dict[str, Any] = dict(self.server.hints_config.options)
        if params.context is not None and params.context.trigger_character:
            call_site["triggerCharacter"] = params.context.trigger_character
        if options:
            call_site.update(options)

        try:
            self.execute_command(AUTOCOMPLETE_COMMAND, editor, call_site)
        except Exception as e:
            self.log(MessageType.Error, f"Completion failed for {document.uri}: {e}")
            return CompletionList(is_incomplete=False, items=[])

        return await editor.delivered

    def pick(self, token: str, index: int) -> None:
        """Handle the pick command sent by the client for a chosen item."""
        shown = self.current
        if shown is None or shown.token != token:
            self.log(MessageType.Log, f"Ignoring pick from stale completion set {token}")
            return

        if not 0 <= index < len(shown.bag.results):
            self.log(MessageType.Warning, f"Pick index {index} out of range")
            return

        entry = shown.bag.results[index]
        if isinstance(entry, HintBag) and entry.hint is not None:
            try:
                entry.hint(shown.editor, shown.bag, entry)
            except Exception as e:
                self.log(MessageType.Error, f"Applying completion {entry.text!r} failed: {e}")

        self.emit(shown.bag, PICK, entry)
        self._close_current()

    # ===== Conversion =====

    def to_completion_list(
        self, bag: HintsBag | None, token: str | None
    ) -> CompletionList:
        if bag is None:
            return CompletionList(is_incomplete=False, items=[])

        return CompletionList(
            is_incomplete=False,
            items=[
                self._to_completion_item(bag, entry, index, token)
                for index, entry in enumerate(bag.results)
            ],
        )

    def _to_completion_item(
        self,
        bag: HintsBag,
        entry: str | HintBag,
        index: int,
        token: str | None,
    ) -> CompletionItem:
        if isinstance(entry, str):
            entry = HintBag(text=entry)

        from_ = position_from_bag(entry.from_ if entry.from_ is not None else bag.from_)
        to = position_from_bag(entry.to if entry.to is not None else bag.to)

        if entry.hint is not None:
            # The applier does the insertion once the pick command arrives.
            text_edit = TextEdit(range=Range(start=to, end=to), new_text="")
        else:
            text_edit = TextEdit(range=Range(start=from_, end=to), new_text=entry.text)

        command = None
        if token is not None:
            command = Command(
                title="Pick completion",
                command=PICK_COMMAND,
                arguments=[token, index],
            )

        return CompletionItem(
            label=entry.display_text or entry.text,
            filter_text=entry.text,
            sort_text=f"{index:05d}",
            text_edit=text_edit,
            command=command,
            data={"className": entry.class_name} if entry.class_name else None,
        )

    # ===== Helpers =====

    def _close_current(self) -> None:
        shown = self.current
        if shown is None:
            return
        self.current = None
        self.emit(shown.bag, CLOSE)
        self.forget(shown.bag)

    def log(self, message_type: MessageType, message: str) -> None:
        if message_type == MessageType.Log and not self.server.hints_config.debug:
            return
        self.server.window_log_message(LogMessageParams(type=message_type, message=message))
