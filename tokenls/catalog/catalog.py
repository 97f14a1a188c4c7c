"""
Token Catalog for tokenls

This module turns the raw design-token dataset into an immutable in-memory
index. The catalog is built once when the server initializes and is only
read afterwards, so it can be shared by every request.

Design Principles:
1. Fail fast (an invalid dataset never produces a partial catalog)
2. Stable order (group declaration order, then token declaration order)
3. O(1) lookups by rendered custom-property name
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from tokenls.context.types import TokenGroup
from tokenls.errors import CatalogError

logger = logging.getLogger(__name__)

TOKEN_NAME_PATTERN = re.compile(r"^[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*$")


def is_token_name(name: object) -> bool:
    """Check that ``name`` follows the token naming convention."""
    return isinstance(name, str) and TOKEN_NAME_PATTERN.match(name) is not None


@dataclass(frozen=True)
class TokenNameRenderer:
    """
    Converts catalog names to custom-property names and back.

    With no namespace, ``space-100`` renders as ``--space-100``.
    With namespace ``p`` it renders as ``--p-space-100``.
    """

    namespace: str = ""

    def __post_init__(self) -> None:
        if self.namespace and not is_token_name(self.namespace):
            raise CatalogError(f"Invalid token namespace: {self.namespace!r}")

    @property
    def prefix(self) -> str:
        return f"--{self.namespace}-" if self.namespace else "--"

    def render(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def parse(self, rendered_name: str) -> str | None:
        """Return the catalog name for ``rendered_name``, or None."""
        if not rendered_name.startswith(self.prefix):
            return None

        name = rendered_name[len(self.prefix):]
        return name if is_token_name(name) else None


@dataclass(frozen=True)
class TokenDefinition:
    """A single design token as declared in the dataset."""

    name: str
    group: TokenGroup
    raw_value: str
    description: str | None = None
    ordinal: int = 0
    rendered_name: str = field(default="", compare=False)


class Catalog:
    """
    Read-only index of all known tokens.

    Usage:
        catalog = load({"space": {"space-100": {"value": "0.25rem"}}})

        catalog.find_by_rendered_name("--space-100")
        catalog.tokens_by_group(TokenGroup.SPACE)
    """

    def __init__(
        self,
        tokens: list[TokenDefinition],
        renderer: TokenNameRenderer,
    ) -> None:
        self.renderer = renderer
        self._tokens: tuple[TokenDefinition, ...] = tuple(tokens)

        self._by_rendered_name: dict[str, TokenDefinition] = {}
        by_group: dict[TokenGroup, list[TokenDefinition]] = {}

        for token in self._tokens:
            if token.rendered_name in self._by_rendered_name:
                existing = self._by_rendered_name[token.rendered_name]
                raise CatalogError(
                    f"Duplicate token {token.rendered_name} in groups "
                    f"'{existing.group.value}' and '{token.group.value}'"
                )
            self._by_rendered_name[token.rendered_name] = token
            by_group.setdefault(token.group, []).append(token)

        self._by_group: dict[TokenGroup, tuple[TokenDefinition, ...]] = {
            group: tuple(group_tokens) for group, group_tokens in by_group.items()
        }

    def all_tokens(self) -> tuple[TokenDefinition, ...]:
        """All tokens in group declaration order, then token order."""
        return self._tokens

    def find_by_rendered_name(self, rendered_name: str) -> TokenDefinition | None:
        """Get a token by its custom-property name (e.g. ``--space-100``)."""
        return self._by_rendered_name.get(rendered_name.strip())

    def tokens_by_group(self, group: TokenGroup) -> tuple[TokenDefinition, ...]:
        return self._by_group.get(group, ())

    def groups(self) -> tuple[TokenGroup, ...]:
        """Groups that have at least one token, in declaration order."""
        return tuple(self._by_group)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[TokenDefinition]:
        return iter(self._tokens)

    def __contains__(self, rendered_name: object) -> bool:
        return isinstance(rendered_name, str) and rendered_name in self._by_rendered_name


def load(
    raw_groups: Mapping[str, Mapping[str, Mapping[str, object]]],
    renderer: TokenNameRenderer | None = None,
) -> Catalog:
    """
    Build a catalog from a nested group -> token -> properties mapping.

    Args:
        raw_groups: ``{"space": {"space-100": {"value": "0.25rem",
            "description": "..."}}}``
        renderer: Rendered-name transform. Defaults to a plain ``--`` prefix.

    Raises:
        CatalogError: An unknown group, an invalid token name, a token
            without a string value, or two tokens rendering to the same name.
    """
    renderer = renderer or TokenNameRenderer()

    if not isinstance(raw_groups, Mapping):
        raise CatalogError("Token dataset must be a mapping of groups")

    tokens: list[TokenDefinition] = []

    for group_name, group_tokens in raw_groups.items():
        group = TokenGroup.from_name(group_name)
        if group is None:
            raise CatalogError(f"Unknown token group: {group_name!r}")

        if not isinstance(group_tokens, Mapping):
            raise CatalogError(f"Token group '{group_name}' must be a mapping")

        for token_name, properties in group_tokens.items():
            if not is_token_name(token_name):
                raise CatalogError(f"Invalid token name: {token_name!r}")

            if not isinstance(properties, Mapping):
                raise CatalogError(f"Token '{token_name}' must be a mapping")

            value = properties.get("value")
            if not isinstance(value, str):
                raise CatalogError(f"Token '{token_name}' has no string value")

            description = properties.get("description")
            if description is not None and not isinstance(description, str):
                raise CatalogError(f"Token '{token_name}' has a non-string description")

            tokens.append(
                TokenDefinition(
                    name=token_name,
                    group=group,
                    raw_value=value,
                    description=description or None,
                    ordinal=len(tokens),
                    rendered_name=renderer.render(token_name),
                )
            )

    catalog = Catalog(tokens, renderer)
    logger.debug("Loaded %d tokens in %d groups", len(catalog), len(catalog.groups()))

    return catalog
