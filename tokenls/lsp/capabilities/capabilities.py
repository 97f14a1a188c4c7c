"""
LSP Capabilities Manager

This module manages LSP feature handlers (completion, hover) using a
plugin architecture.

Design Principles:
1. Plugin-based (add capabilities without modifying core)
2. Type-safe (abstract base class)
3. Composable (multiple handlers for same feature)
4. Testable (isolated capability handlers)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionList,
    CompletionParams,
    Hover,
    HoverParams,
    LogMessageParams,
    MessageType,
)


if TYPE_CHECKING:
    from tokenls.lsp.token_language_server import TokenLanguageServer


class Capability(ABC):
    """
    Base class for all LSP capability handlers.

    Each capability can handle one or more LSP features (completion, hover)
    and decides whether it can handle a specific request based on context.
    """

    def __init__(self, server: TokenLanguageServer) -> None:
        self.server = server

    @property
    def engine(self):
        return self.server.engine

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability."""
        pass

    @abstractmethod
    async def can_handle(self, params) -> bool:
        """Check if the capability can handle the request."""
        pass


class CompletionCapability(Capability):
    """Base class for completion capabilities."""

    @abstractmethod
    async def can_handle(self, params: CompletionParams) -> bool:
        """
        Check if this capability can handle the completion request.

        Returns True if this capability should provide completions
        for the current context.
        """
        pass

    @abstractmethod
    async def complete(self, params: CompletionParams) -> CompletionList:
        """
        Provide completion items.

        Only called if can_handle() returns True.
        """
        pass


class HoverCapability(Capability):
    """Base class for hover capabilities."""

    @abstractmethod
    async def can_handle(self, params: HoverParams) -> bool:
        """Check if this capability can handle the hover request."""
        pass

    @abstractmethod
    async def hover(self, params: HoverParams) -> Hover | None:
        """Provide hover information."""
        pass


class CapabilityManager:
    """
    Central manager for all LSP capabilities.

    Usage:
        # In server initialization
        manager = CapabilityManager(server)

        # Feature handlers delegate to it
        await manager.handle_completion(params)
    """

    def __init__(
        self,
        server: TokenLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server

        # Default capabilities
        if capabilities is None:
            from tokenls.lsp.capabilities.token_capabilities import (
                TokenCompletionCapability,
                TokenHoverCapability,
            )

            capabilities = {
                "token_completion": TokenCompletionCapability(server),
                "token_hover": TokenHoverCapability(server),
            }

        self.capabilities = capabilities

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        """Get all capabilities of a specific type (e.g., all CompletionCapability)."""
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    async def handle_completion(self, params: CompletionParams) -> CompletionList:
        """
        Handle completion requests by delegating to capable handlers.

        This aggregates results from all completion capabilities that
        can handle the request.
        """
        all_items = []
        is_incomplete = False

        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                if await capability.can_handle(params):
                    result = await capability.complete(params)  # pyright: ignore
                    all_items.extend(result.items)
                    is_incomplete = is_incomplete or result.is_incomplete
            except Exception as e:
                self._log_failure(capability, "Completion", e)

        return CompletionList(is_incomplete=is_incomplete, items=all_items)

    async def handle_hover(self, params: HoverParams) -> Hover | None:
        """
        Handle hover requests by delegating to capable handlers.

        Returns the first non-None hover result
        """
        for capability in self.get_capabilities_by_type(HoverCapability):
            try:
                if await capability.can_handle(params):
                    result = await capability.hover(params)  # pyright: ignore
                    if result:
                        return result
            except Exception as e:
                self._log_failure(capability, "Hover", e)

        return None

    def _log_failure(self, capability: Capability, feature: str, error: Exception):
        self.server.window_log_message(
            LogMessageParams(
                type=MessageType.Error,
                message=f"{feature} error in {capability.name}: {error}",
            )
        )
