"""
Main entry point for the design-token language server.

This file is executed when running: python -m tokenls

The server communicates with editors via stdin/stdout using JSON-RPC, so
all process logging goes to stderr.
"""
import logging
import os
import sys

from tokenls.lsp.server import create_server

logger = logging.getLogger("tokenls")


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[tokenls] %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def main():
    """Start the language server on stdin/stdout."""

    # Check if we're in debug mode
    debug = bool(os.getenv("DEBUG"))
    configure_logging(debug)

    if debug:
        logger.info("Server starting in DEBUG mode")
        logger.info("Waiting for debugger to attach on port 5678...")
        # Enable debugpy if in debug mode
        try:
            import debugpy  # type: ignore
            debugpy.listen(("127.0.0.1", 5678))
            debugpy.wait_for_client()
            logger.info("Debugger attached! Continuing...")
        except ImportError:
            logger.warning("debugpy not available - install with: pip install tokenls[dev]")

    server = create_server()

    # Start the server - it will listen on stdin/stdout for LSP messages
    # from the editor client
    server.start_io()

if __name__ == "__main__":
    main()
