"""
Classifies the CSS property being written into token groups.

The whole line is matched, not just the property name, because the line is
usually still being typed. Patterns overlap on purpose: a line mentioning
``border`` is relevant to both the border and the color groups.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tokenls.context.types import TokenGroup

if TYPE_CHECKING:
    from tokenls.catalog.catalog import Catalog


# Mapping of token groups to the CSS property vocabulary they serve
GROUP_PATTERNS: dict[TokenGroup, re.Pattern[str]] = {
    TokenGroup.BORDER: re.compile(r"border"),
    TokenGroup.BREAKPOINTS: re.compile(r"width"),
    TokenGroup.COLOR: re.compile(
        r"color|background|shadow|border|column-rule|filter|opacity|outline|text-decoration"
    ),
    TokenGroup.TEXT: re.compile(r"font|letter-spacing|line-height"),
    TokenGroup.FONT: re.compile(r"font|letter-spacing|line-height"),
    TokenGroup.HEIGHT: re.compile(r"height|min-height|max-height"),
    TokenGroup.MOTION: re.compile(r"animation"),
    TokenGroup.SHADOW: re.compile(r"shadow"),
    TokenGroup.SPACE: re.compile(r"margin|padding|gap|top|left|right|bottom"),
    TokenGroup.WIDTH: re.compile(r"width|min-width|max-width"),
    TokenGroup.Z_INDEX: re.compile(r"z-index"),
}


def classify(
    line_text: str, groups: Iterable[TokenGroup] | None = None
) -> frozenset[TokenGroup]:
    """
    Return every group whose pattern matches somewhere in ``line_text``.

    Args:
        line_text: The full text of the current line.
        groups: Restrict the result to these groups (e.g. the groups a
            catalog actually contains). Defaults to all groups.

    Returns:
        The matching groups. Empty means no contextual narrowing is
        available, not that nothing should be completed.
    """
    candidates = GROUP_PATTERNS.keys() if groups is None else groups

    return frozenset(
        group
        for group in candidates
        if group in GROUP_PATTERNS and GROUP_PATTERNS[group].search(line_text)
    )


class ContextClassifier:
    """Classifies lines against the groups present in one catalog."""

    def __init__(self, catalog: Catalog) -> None:
        self._groups = catalog.groups()

    def classify(self, line_text: str) -> frozenset[TokenGroup]:
        return classify(line_text, self._groups)
