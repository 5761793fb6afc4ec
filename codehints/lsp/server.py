from pathlib import Path

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    CompletionOptions,
    CompletionParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
)

from codehints.config import ConfigError, HintsConfig
from codehints.lsp.hints_language_server import HintsLanguageServer
from codehints.lsp.host import PICK_COMMAND


def create_server(config: HintsConfig | None = None) -> HintsLanguageServer:
    """
    Creates and returns a configured hints Language Server.

    Register providers on ``server.hints`` before starting it:

        server = create_server()
        server.hints.register_provider("python", complete_python)
        server.start_io()
    """
    server = HintsLanguageServer("codehints", "0.1.0", config)

    @server.feature(INITIALIZE)
    async def initialize(ls: HintsLanguageServer, params: InitializeParams):
        """Load the workspace config, if any."""
        if not params.root_uri:
            return

        workspace_root = Path(params.root_uri.replace("file://", ""))
        try:
            ls.hints_config = HintsConfig.from_workspace(workspace_root)
        except ConfigError as e:
            ls.window_log_message(LogMessageParams(MessageType.Error, str(e)))
            return

        modes = ", ".join(ls.hints.registry.modes()) or "none"
        ls.window_log_message(
            LogMessageParams(MessageType.Info, f"Hint providers registered for: {modes}")
        )

    @server.feature(
        TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["."])
    )
    async def completion(ls: HintsLanguageServer, params: CompletionParams):
        document = ls.workspace.get_text_document(params.text_document.uri)
        return await ls.hints_host.complete(document, params)

    @server.command(PICK_COMMAND)
    def pick(ls: HintsLanguageServer, token: str, index: int):
        ls.hints_host.pick(token, index)

    return server
