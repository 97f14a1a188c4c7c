"""
Hover support for ``var(--token)`` references.

Finds the reference under the cursor and describes the token it points at:

    **--space-100**

    Spacing unit.

    `0.25rem (4px)`
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tokenls.catalog.catalog import Catalog
from tokenls.catalog.resolver import ValueResolver, referenced_name

VAR_REFERENCE_PATTERN = re.compile(r"var\(([^)]+)\)")


@dataclass(frozen=True)
class HoverPayload:
    token_name: str
    description: str | None
    detail: str
    start: int
    end: int

    def to_markdown(self) -> str:
        sections = [f"**{self.token_name}**", self.description or "", f"`{self.detail}`"]
        return "\n\n".join(section for section in sections if section)


class HoverLocator:
    def __init__(self, catalog: Catalog, resolver: ValueResolver) -> None:
        self.catalog = catalog
        self.resolver = resolver

    def locate(self, line_text: str, offset: int) -> HoverPayload | None:
        """
        Describe the token referenced at ``offset`` within ``line_text``.

        The first ``var(...)`` whose span (both ends inclusive) contains the
        offset and names a known token is used. Returns None when the cursor
        is on no such reference.
        """
        for match in VAR_REFERENCE_PATTERN.finditer(line_text):
            start, end = match.start(), match.end()
            if not start <= offset <= end:
                continue

            token = self.catalog.find_by_rendered_name(referenced_name(match.group(1)))
            if token is None:
                continue

            return HoverPayload(
                token_name=token.rendered_name,
                description=token.description,
                detail=self.resolver.resolve(token.raw_value).detail,
                start=start,
                end=end,
            )

        return None
