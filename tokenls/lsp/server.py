from pathlib import Path

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_HOVER,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    HoverParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
)
from pygls import uris

from tokenls import __version__
from tokenls.config import ServerConfig
from tokenls.engine import build_engine
from tokenls.errors import TokenlsError
from tokenls.lsp.capabilities.capabilities import CapabilityManager
from tokenls.lsp.token_language_server import TokenLanguageServer

# "-" is the only character clients can trigger on; the ranker checks for "--"
TRIGGER_CHARACTERS = ["-"]


def workspace_root_from(params: InitializeParams) -> Path | None:
    """Get the workspace root from the first folder or the root URI."""
    root_uri = None
    if params.workspace_folders:
        root_uri = params.workspace_folders[0].uri
    elif params.root_uri:
        root_uri = params.root_uri

    if root_uri is None:
        return Path(params.root_path) if params.root_path else None

    fs_path = uris.to_fs_path(root_uri)
    return Path(fs_path) if fs_path else None


def create_server() -> TokenLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Document synchronization
    """
    server = TokenLanguageServer("tokenls", __version__)

    @server.feature(INITIALIZE)
    async def initialize(ls: TokenLanguageServer, params: InitializeParams):
        """
        Load the token catalog and set up the capabilities.

        A catalog that fails to load aborts initialization; the server never
        answers from a partial catalog.
        """
        try:
            config = ServerConfig.from_options(params.initialization_options)
            ls.engine = build_engine(config, workspace_root_from(params))
        except TokenlsError as e:
            ls.window_log_message(
                LogMessageParams(MessageType.Error, f"Token catalog not loaded: {e}")
            )
            raise

        ls.window_log_message(
            LogMessageParams(
                MessageType.Info,
                f"Loaded {len(ls.engine.catalog)} tokens from {ls.engine.source}",
            )
        )

        ls.capability_manager = CapabilityManager(ls)

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=TRIGGER_CHARACTERS),
    )
    async def completion(ls: TokenLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return CompletionList(is_incomplete=False, items=[])

    @server.feature(TEXT_DOCUMENT_HOVER)
    async def hover(ls: TokenLanguageServer, params: HoverParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_hover(params)
        return None

    return server
