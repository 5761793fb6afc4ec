from pygls.lsp.server import LanguageServer

from codehints.config import HintsConfig
from codehints.hints.registry import Hints
from codehints.lsp.host import LspHintsHost
from codehints.providers.words import WordsProvider


class HintsLanguageServer(LanguageServer):
    """
    Language server serving registered hint providers.

    Attributes:
        hints_config: Options and mode table, reloaded from the workspace on initialize
        hints_host: The LSP-backed host the providers run against
        hints: Registry entry point; application code registers providers here
    """

    def __init__(self, name: str, version: str, config: HintsConfig | None = None):
        super().__init__(name, version)

        self.hints_config: HintsConfig = config or HintsConfig()
        self.hints_host = LspHintsHost(self, WordsProvider().as_provider())
        self.hints = Hints(self.hints_host)

        # No registration is needed for the words fallback to answer.
        self.hints.install()
