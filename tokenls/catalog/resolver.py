"""
Resolves raw token values into display values and detail strings.

A value may reference another token (``var(--space-100)``). References are
followed exactly one hop: if the referenced token is itself a reference,
that inner reference is shown verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tokenls.catalog.catalog import Catalog

# 1rem == 16px unless configured otherwise
DEFAULT_PX_PER_REM = 16.0

# A whole-value var() call; the fallback may hold one level of parentheses
REFERENCE_PATTERN = re.compile(r"^var\(([^()]*(?:\([^()]*\)[^()]*)*)\)$")
REM_PATTERN = re.compile(r"(-?\d*\.?\d+)rem\b")
ZERO_REM = "0rem"


@dataclass(frozen=True)
class Resolution:
    display_value: str
    detail: str


def referenced_name(argument: str) -> str:
    """Custom-property name of a ``var()`` argument, ignoring any fallback."""
    return argument.split(",", 1)[0].strip()


def parse_reference(value: str) -> str | None:
    """
    Name referenced by a value that is a single ``var()`` call.

    ``var(--space-100, 4px)`` references ``--space-100``; ``4px`` and
    ``calc(var(--x) * 2)`` reference nothing.
    """
    match = REFERENCE_PATTERN.match(value.strip())
    if not match:
        return None
    return referenced_name(match.group(1)) or None


def _format_number(number: float) -> str:
    text = f"{number:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def to_px(value: str, px_per_rem: float = DEFAULT_PX_PER_REM) -> str:
    """Replace every ``<n>rem`` in ``value`` with its pixel equivalent."""
    return REM_PATTERN.sub(
        lambda match: f"{_format_number(float(match.group(1)) * px_per_rem)}px",
        value,
    )


def has_rem(value: str) -> bool:
    """True for values with a convertible rem amount (``0rem`` excluded)."""
    return value.strip() != ZERO_REM and REM_PATTERN.search(value) is not None


class ValueResolver:
    """Turns raw token values into what completion and hover display."""

    def __init__(self, catalog: Catalog, px_per_rem: float = DEFAULT_PX_PER_REM):
        self.catalog = catalog
        self.px_per_rem = px_per_rem

    def resolve_value(self, raw_value: str) -> str:
        """Follow a single reference; unknown references are returned as-is."""
        name = parse_reference(raw_value)
        if name is None:
            return raw_value

        token = self.catalog.find_by_rendered_name(name)
        if token is None:
            return raw_value

        return token.raw_value

    def resolve(self, raw_value: str) -> Resolution:
        resolved = self.resolve_value(raw_value)

        detail = resolved
        if has_rem(resolved):
            detail = f"{resolved} ({to_px(resolved, self.px_per_rem)})"
        if parse_reference(raw_value) is not None:
            detail = f"{raw_value} → {detail}"

        return Resolution(display_value=resolved, detail=detail)
