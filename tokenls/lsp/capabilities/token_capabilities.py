"""
Design-token LSP capabilities.

Provides completion and hover for CSS custom properties backed by the
token catalog.
"""

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    TextEdit,
)
from pygls.workspace.text_document import TextDocument

from tokenls.context.types import TokenGroup
from tokenls.features.completion.ranker import CompletionCandidate, extract_fragment
from tokenls.lsp.capabilities.capabilities import CompletionCapability, HoverCapability


def _cursor_line(doc: TextDocument, position: Position) -> tuple[str, Position]:
    """
    Get the cursor line and the cursor position in Python string units.

    Clients count characters in UTF-16 code units; the engine works on str
    offsets.
    """
    if position.line >= len(doc.lines):
        return "", position

    server_position = doc.position_codec.position_from_client_units(
        doc.lines, position
    )
    line = doc.lines[server_position.line].rstrip("\r\n")

    return line, server_position


def _to_client_range(doc: TextDocument, line: int, start: int, end: int) -> Range:
    return doc.position_codec.range_to_client_units(
        doc.lines,
        Range(
            start=Position(line=line, character=start),
            end=Position(line=line, character=end),
        ),
    )


class TokenCompletionCapability(CompletionCapability):
    """Provides completion for design-token custom properties."""

    @property
    def name(self) -> str:
        return "token_completion"

    async def can_handle(self, params: CompletionParams) -> bool:
        """Check if the cursor is right after a -- marker."""
        if not self.engine:
            return False

        doc = self.server.workspace.get_text_document(params.text_document.uri)
        line, position = _cursor_line(doc, params.position)

        return extract_fragment(line[: position.character]) is not None

    async def complete(self, params: CompletionParams) -> CompletionList:
        """Provide ranked token completions."""
        if not self.engine:
            return CompletionList(is_incomplete=False, items=[])

        doc = self.server.workspace.get_text_document(params.text_document.uri)
        line, position = _cursor_line(doc, params.position)
        line_prefix = line[: position.character]

        ranker = self.engine.ranker
        candidates = ranker.rank(line_prefix, line)

        # The edit range must contain the cursor, so whitespace typed after
        # the fragment is replaced by itself
        start, end = ranker.replace_span(line_prefix)
        trailing = line_prefix[end:]
        edit_range = _to_client_range(doc, position.line, start, position.character)

        items = [
            self._to_item(candidate, edit_range, trailing) for candidate in candidates
        ]

        # Fragment filtering and the catalog fallback run on the server, so
        # the client has to ask again as the fragment grows
        return CompletionList(
            is_incomplete=self.engine.config.extended_ranking, items=items
        )

    def _to_item(
        self, candidate: CompletionCandidate, edit_range: Range, trailing: str = ""
    ) -> CompletionItem:
        kind = (
            CompletionItemKind.Color
            if candidate.group is TokenGroup.COLOR
            else CompletionItemKind.Variable
        )

        return CompletionItem(
            label=candidate.label,
            kind=kind,
            detail=candidate.detail,
            documentation=candidate.documentation,
            sort_text=candidate.sort_key,
            filter_text=candidate.label + trailing,
            text_edit=TextEdit(
                range=edit_range, new_text=candidate.insert_text + trailing
            ),
        )


class TokenHoverCapability(HoverCapability):
    """Provides hover information for var(--token) references."""

    @property
    def name(self) -> str:
        return "token_hover"

    async def can_handle(self, params: HoverParams) -> bool:
        if not self.engine:
            return False

        doc = self.server.workspace.get_text_document(params.text_document.uri)
        line, _ = _cursor_line(doc, params.position)

        return "var(" in line

    async def hover(self, params: HoverParams) -> Hover | None:
        """Provide hover information for the reference under the cursor."""
        if not self.engine:
            return None

        doc = self.server.workspace.get_text_document(params.text_document.uri)
        line, position = _cursor_line(doc, params.position)

        payload = self.engine.hover_locator.locate(line, position.character)
        if payload is None:
            return None

        return Hover(
            contents=MarkupContent(kind=MarkupKind.Markdown, value=payload.to_markdown()),
            range=_to_client_range(doc, position.line, payload.start, payload.end),
        )
