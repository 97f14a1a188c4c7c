"""
Completion ranking for design-token custom properties.

Given the line being edited, decides which tokens to offer and in which
order:

1. Only lines where the cursor sits right after ``--`` (plus any token
   characters typed so far) get completions.
2. The full line is classified into token groups; those groups form the
   candidate pool, or the whole catalog when nothing matched.
3. Candidates are filtered by the typed fragment, scored against the CSS
   property name and sorted by score, then by catalog order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tokenls.catalog.catalog import Catalog, TokenDefinition
from tokenls.catalog.resolver import ValueResolver
from tokenls.config import InsertStyle
from tokenls.context.group_classifier import ContextClassifier
from tokenls.context.types import TokenGroup

TOKEN_MARKER = "--"
FRAGMENT_PATTERN = re.compile(r"^[A-Za-z0-9-]*$")

FULL_PROPERTY_SCORE = 100
PROPERTY_PART_SCORE = 50
SCORE_CEILING = 999_999


@dataclass(frozen=True)
class CompletionCandidate:
    label: str
    insert_text: str
    detail: str
    documentation: str | None
    sort_key: str
    score: int
    group: TokenGroup


def extract_fragment(line_up_to_cursor: str) -> str | None:
    """
    Return the token name typed after the last ``--`` before the cursor.

    Returns None when the cursor is not inside a custom-property name.
    """
    start = _marker_start(line_up_to_cursor)
    if start is None:
        return None

    return line_up_to_cursor.rstrip()[start + len(TOKEN_MARKER):]


def property_name(full_line: str) -> str:
    """The CSS property written on the line (text before the first colon)."""
    if ":" not in full_line:
        return ""
    return full_line.split(":", 1)[0].strip().lower()


def score_candidate(full_line: str, label: str) -> int:
    """
    Score how well ``label`` fits the property being written on the line.

    +100 when the label contains the whole property name (hyphens ignored),
    +50 for every hyphen-separated part of the property found in the label.
    """
    prop = property_name(full_line)
    if not prop:
        return 0

    label = label.lower()
    score = 0

    if prop.replace("-", "") in label.replace("-", ""):
        score += FULL_PROPERTY_SCORE

    for part in prop.split("-"):
        if part and part in label:
            score += PROPERTY_PART_SCORE

    return score


def make_sort_key(score: int, ordinal: int) -> str:
    """Sort key whose lexical order is (higher score, earlier token)."""
    return f"{max(SCORE_CEILING - score, 0):06d}{ordinal:06d}"


class CompletionRanker:
    """
    Builds ordered completion candidates for one line.

    Usage:
        ranker = CompletionRanker(catalog, ValueResolver(catalog))
        ranker.rank("  background-color: --bg", "  background-color: --bg;")
    """

    def __init__(
        self,
        catalog: Catalog,
        resolver: ValueResolver,
        classifier: ContextClassifier | None = None,
        insert_style: InsertStyle = InsertStyle.BARE,
        extended_ranking: bool = True,
    ) -> None:
        self.catalog = catalog
        self.resolver = resolver
        self.classifier = classifier or ContextClassifier(catalog)
        self.insert_style = insert_style
        self.extended_ranking = extended_ranking

    def rank(
        self,
        line_up_to_cursor: str,
        full_line: str,
        fragment: str | None = None,
    ) -> list[CompletionCandidate]:
        """
        Return the completion candidates for the cursor position.

        Args:
            line_up_to_cursor: Line text from column 0 to the cursor.
            full_line: The complete line text.
            fragment: Partially typed token name. Extracted from
                ``line_up_to_cursor`` when not given.
        """
        typed = extract_fragment(line_up_to_cursor)
        if typed is None:
            return []

        # Inside an existing var( only the bare name is inserted
        wrap = self.insert_style is InsertStyle.WRAPPED and not _inside_var(
            line_up_to_cursor
        )

        pool = self._contextual_pool(full_line)

        if not self.extended_ranking:
            return [self._candidate(token, 0, wrap) for token in pool]

        fragment = typed if fragment is None else fragment

        matches = _filter_by_fragment(pool, fragment)
        if not matches and fragment:
            matches = _filter_by_fragment(self.catalog.all_tokens(), fragment)

        candidates = [
            self._candidate(
                token, score_candidate(full_line, token.rendered_name), wrap
            )
            for token in matches
        ]
        candidates.sort(key=lambda candidate: candidate.sort_key)

        return candidates

    def replace_span(self, line_up_to_cursor: str) -> tuple[int, int]:
        """
        Start and end offsets of the ``--fragment`` a completion replaces.

        Whitespace typed after the fragment is left in place. Without a
        marker the span is empty at the cursor.
        """
        start = _marker_start(line_up_to_cursor)
        if start is None:
            return len(line_up_to_cursor), len(line_up_to_cursor)
        return start, len(line_up_to_cursor.rstrip())

    def _contextual_pool(self, full_line: str) -> tuple[TokenDefinition, ...]:
        groups = self.classifier.classify(full_line)
        if not groups:
            return self.catalog.all_tokens()

        # Catalog order keeps the pool free of duplicates across groups
        return tuple(token for token in self.catalog if token.group in groups)

    def _candidate(
        self, token: TokenDefinition, score: int, wrap: bool
    ) -> CompletionCandidate:
        label = token.rendered_name
        insert_text = f"var({label})" if wrap else label

        return CompletionCandidate(
            label=label,
            insert_text=insert_text,
            detail=self.resolver.resolve(token.raw_value).detail,
            documentation=token.description,
            sort_key=make_sort_key(score, token.ordinal),
            score=score,
            group=token.group,
        )


def _filter_by_fragment(
    tokens: tuple[TokenDefinition, ...], fragment: str
) -> tuple[TokenDefinition, ...]:
    if not fragment:
        return tokens

    needle = fragment.lower()
    return tuple(token for token in tokens if needle in token.rendered_name.lower())


def _marker_start(line_up_to_cursor: str) -> int | None:
    """Index of the last ``--`` if only token characters follow it."""
    text = line_up_to_cursor.rstrip()
    start = text.rfind(TOKEN_MARKER)
    if start < 0:
        return None

    if not FRAGMENT_PATTERN.match(text[start + len(TOKEN_MARKER):]):
        return None

    return start


def _inside_var(line_up_to_cursor: str) -> bool:
    start = _marker_start(line_up_to_cursor)
    return start is not None and line_up_to_cursor[:start].rstrip().endswith("var(")
