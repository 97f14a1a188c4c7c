from pygls.lsp.server import LanguageServer

from tokenls.engine import TokenEngine
from tokenls.lsp.capabilities.capabilities import CapabilityManager


class TokenLanguageServer(LanguageServer):
    """
    Custom Language Server with design-token attributes.

    Attributes:
        engine: Catalog, ranker and hover locator built during initialize
        capability_manager: Completion and hover handlers
    """

    def __init__(self, name: str, version: str):
        super().__init__(name, version)

        self.engine: TokenEngine | None = None
        self.capability_manager: CapabilityManager | None = None
