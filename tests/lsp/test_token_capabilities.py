"""
Tests for the design-token LSP capabilities.

Tests:
- TokenCompletionCapability: custom-property completion after --
- TokenHoverCapability: resolved values for var(--token) references
- CapabilityManager: aggregation and error isolation
"""

from unittest.mock import AsyncMock, Mock

import pytest
from lsprotocol.types import (
    CompletionItemKind,
    CompletionParams,
    HoverParams,
    MarkupKind,
    Position,
    TextDocumentIdentifier,
)
from pygls.workspace.text_document import TextDocument

from tokenls.catalog.catalog import Catalog
from tokenls.config import InsertStyle, ServerConfig
from tokenls.engine import TokenEngine
from tokenls.lsp.capabilities.capabilities import CapabilityManager, HoverCapability
from tokenls.lsp.capabilities.token_capabilities import (
    TokenCompletionCapability,
    TokenHoverCapability,
)


URI = "file:///project/styles.css"


# ============================================================================
# Test Fixtures
# ============================================================================


def make_server(catalog: Catalog, source: str, config: ServerConfig | None = None):
    """Mock server whose workspace serves a single document."""
    server = Mock()
    server.engine = TokenEngine.from_catalog(catalog, config or ServerConfig())
    server.workspace.get_text_document.return_value = TextDocument(URI, source)
    return server


def completion_params(line: int, character: int) -> CompletionParams:
    return CompletionParams(
        text_document=TextDocumentIdentifier(uri=URI),
        position=Position(line=line, character=character),
    )


def hover_params(line: int, character: int) -> HoverParams:
    return HoverParams(
        text_document=TextDocumentIdentifier(uri=URI),
        position=Position(line=line, character=character),
    )


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


# ============================================================================
# TokenCompletionCapability Tests
# ============================================================================


@pytest.mark.asyncio
async def test_completion_can_handle_marker(catalog: Catalog):
    server = make_server(catalog, ".card {\n  padding: --\n}\n")
    capability = TokenCompletionCapability(server)

    assert await capability.can_handle(completion_params(1, 13)) is True
    assert await capability.can_handle(completion_params(0, 5)) is False


@pytest.mark.asyncio
async def test_completion_without_engine(catalog: Catalog):
    server = make_server(catalog, "padding: --\n")
    server.engine = None
    capability = TokenCompletionCapability(server)

    assert await capability.can_handle(completion_params(0, 11)) is False
    result = await capability.complete(completion_params(0, 11))
    assert result.items == []


@pytest.mark.asyncio
async def test_completion_items(catalog: Catalog):
    server = make_server(catalog, ".card {\n  padding: --card\n}\n")
    capability = TokenCompletionCapability(server)

    result = await capability.complete(completion_params(1, 17))

    assert [item.label for item in result.items] == [
        "--space-card-padding",
        "--space-card-gap",
    ]

    item = result.items[0]
    assert item.kind == CompletionItemKind.Variable
    assert item.detail == "var(--space-100) → 0.25rem (4px)"
    assert item.sort_text < result.items[1].sort_text
    assert item.filter_text == "--space-card-padding"
    assert item.text_edit.new_text == "--space-card-padding"
    assert item.text_edit.range.start == Position(line=1, character=11)
    assert item.text_edit.range.end == Position(line=1, character=17)


@pytest.mark.asyncio
async def test_color_tokens_use_color_kind(catalog: Catalog):
    server = make_server(catalog, "color: --color-text\n")
    capability = TokenCompletionCapability(server)

    result = await capability.complete(completion_params(0, 19))

    assert result.items[0].kind == CompletionItemKind.Color
    assert result.items[0].documentation is None


@pytest.mark.asyncio
async def test_completion_wrapped_insert_style(catalog: Catalog):
    config = ServerConfig(insert_style=InsertStyle.WRAPPED)
    server = make_server(catalog, "margin: --space-100\n", config)
    capability = TokenCompletionCapability(server)

    result = await capability.complete(completion_params(0, 19))

    edit = result.items[0].text_edit
    assert edit.new_text == "var(--space-100)"
    assert edit.range.start == Position(line=0, character=8)


@pytest.mark.asyncio
async def test_completion_positions_use_utf16_units(catalog: Catalog):
    prefix = "/* 😀 */ margin: --sp"
    server = make_server(catalog, prefix + "\n")
    capability = TokenCompletionCapability(server)
    cursor = utf16_length(prefix)

    result = await capability.complete(completion_params(0, cursor))

    assert result.items
    assert result.items[0].text_edit.range.start.character == cursor - 4
    assert result.items[0].text_edit.range.end.character == cursor


@pytest.mark.asyncio
async def test_completion_keeps_whitespace_after_fragment(catalog: Catalog):
    server = make_server(catalog, "margin: --sp \n")
    capability = TokenCompletionCapability(server)

    result = await capability.complete(completion_params(0, 13))

    edit = result.items[0].text_edit
    assert edit.range.start == Position(line=0, character=8)
    assert edit.range.end == Position(line=0, character=13)
    assert edit.new_text == result.items[0].label + " "
    assert result.items[0].filter_text == result.items[0].label + " "


@pytest.mark.asyncio
async def test_extended_ranking_marks_list_incomplete(catalog: Catalog):
    server = make_server(catalog, "padding: --bg\n")
    capability = TokenCompletionCapability(server)

    result = await capability.complete(completion_params(0, 13))

    assert result.is_incomplete is True


@pytest.mark.asyncio
async def test_basic_ranking_marks_list_complete(catalog: Catalog):
    config = ServerConfig(extended_ranking=False)
    server = make_server(catalog, "padding: --\n", config)
    capability = TokenCompletionCapability(server)

    result = await capability.complete(completion_params(0, 11))

    assert result.items
    assert result.is_incomplete is False


# ============================================================================
# TokenHoverCapability Tests
# ============================================================================


@pytest.mark.asyncio
async def test_hover_on_reference(catalog: Catalog):
    server = make_server(catalog, ".card {\n  margin: var(--space-100);\n}\n")
    capability = TokenHoverCapability(server)
    params = hover_params(1, 16)

    assert await capability.can_handle(params) is True
    result = await capability.hover(params)

    assert result is not None
    assert result.contents.kind == MarkupKind.Markdown
    assert result.contents.value == (
        "**--space-100**\n\nSmallest spacing step.\n\n`0.25rem (4px)`"
    )
    assert result.range.start == Position(line=1, character=10)
    assert result.range.end == Position(line=1, character=26)


@pytest.mark.asyncio
async def test_hover_outside_reference(catalog: Catalog):
    server = make_server(catalog, "margin: var(--space-100);\n")
    capability = TokenHoverCapability(server)

    assert await capability.hover(hover_params(0, 2)) is None


@pytest.mark.asyncio
async def test_hover_not_handled_without_reference(catalog: Catalog):
    server = make_server(catalog, "margin: 4px;\n")
    capability = TokenHoverCapability(server)

    assert await capability.can_handle(hover_params(0, 3)) is False


@pytest.mark.asyncio
async def test_hover_past_last_line(catalog: Catalog):
    server = make_server(catalog, "margin: var(--space-100);")
    capability = TokenHoverCapability(server)

    assert await capability.can_handle(hover_params(5, 0)) is False


# ============================================================================
# CapabilityManager Tests
# ============================================================================


@pytest.mark.asyncio
async def test_manager_aggregates_completion(catalog: Catalog):
    server = make_server(catalog, "z-index: --\n")
    manager = CapabilityManager(server)

    result = await manager.handle_completion(completion_params(0, 11))

    assert result.is_incomplete is True
    assert [item.label for item in result.items] == ["--z-index-1"]


@pytest.mark.asyncio
async def test_manager_hover(catalog: Catalog):
    server = make_server(catalog, "z-index: var(--z-index-1);\n")
    manager = CapabilityManager(server)

    result = await manager.handle_hover(hover_params(0, 15))

    assert result is not None
    assert "`100`" in result.contents.value


@pytest.mark.asyncio
async def test_manager_isolates_failing_capability(catalog: Catalog):
    server = make_server(catalog, "margin: var(--space-100);\n")

    broken = Mock(spec=HoverCapability)
    broken.name = "broken_hover"
    broken.can_handle = AsyncMock(side_effect=RuntimeError("boom"))

    manager = CapabilityManager(
        server,
        {"broken": broken, "token_hover": TokenHoverCapability(server)},
    )

    result = await manager.handle_hover(hover_params(0, 15))

    assert result is not None
    server.window_log_message.assert_called_once()
    logged = server.window_log_message.call_args[0][0]
    assert "broken_hover" in logged.message
    assert "boom" in logged.message


def test_manager_default_capabilities(catalog: Catalog):
    server = make_server(catalog, "")
    manager = CapabilityManager(server)

    assert isinstance(manager.capabilities["token_hover"], TokenHoverCapability)
    assert len(manager.get_capabilities_by_type(HoverCapability)) == 1
