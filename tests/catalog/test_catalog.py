"""
Tests for tokenls/catalog/catalog.py

Covers loading, naming-convention checks, duplicate detection, stable
ordering and rendered-name lookups.
"""
from __future__ import annotations

import pytest

from tokenls.catalog.catalog import (
    Catalog,
    TokenNameRenderer,
    is_token_name,
    load,
)
from tokenls.context.types import TokenGroup
from tokenls.errors import CatalogError


# ============================================================================
# Naming convention
# ============================================================================


@pytest.mark.parametrize(
    "name",
    ["space-100", "color-bg-fill", "zIndex1", "breakpoints-xs", "a"],
)
def test_valid_token_names(name):
    assert is_token_name(name)


@pytest.mark.parametrize(
    "name",
    ["", "--space-100", "space--100", "space-100-", "-space", "space 100", "space_100", 42],
)
def test_invalid_token_names(name):
    assert not is_token_name(name)


# ============================================================================
# TokenNameRenderer
# ============================================================================


def test_renderer_default_prefix():
    renderer = TokenNameRenderer()

    assert renderer.render("space-100") == "--space-100"
    assert renderer.parse("--space-100") == "space-100"


def test_renderer_with_namespace():
    renderer = TokenNameRenderer("p")

    assert renderer.render("space-100") == "--p-space-100"
    assert renderer.parse("--p-space-100") == "space-100"
    assert renderer.parse("--space-100") is None


def test_renderer_rejects_invalid_namespace():
    with pytest.raises(CatalogError):
        TokenNameRenderer("p_")


# ============================================================================
# load()
# ============================================================================


def test_load_builds_catalog(catalog: Catalog):
    assert len(catalog) == 15
    assert catalog.groups() == (
        TokenGroup.COLOR,
        TokenGroup.BORDER,
        TokenGroup.FONT,
        TokenGroup.SPACE,
        TokenGroup.Z_INDEX,
    )


def test_all_tokens_in_declaration_order(catalog: Catalog):
    names = [token.name for token in catalog.all_tokens()]

    assert names[:5] == [
        "color-bg",
        "color-bg-fill",
        "color-text",
        "color-border",
        "border-radius-100",
    ]
    assert [token.ordinal for token in catalog.all_tokens()] == list(range(len(catalog)))


def test_every_token_round_trips_through_rendered_name(catalog: Catalog):
    for token in catalog.all_tokens():
        assert catalog.find_by_rendered_name(catalog.renderer.render(token.name)) == token


def test_find_by_rendered_name_miss(catalog: Catalog):
    assert catalog.find_by_rendered_name("--does-not-exist") is None
    assert catalog.find_by_rendered_name("space-100") is None


def test_tokens_by_group(catalog: Catalog):
    space = catalog.tokens_by_group(TokenGroup.SPACE)

    assert [token.name for token in space] == [
        "space-0",
        "space-100",
        "space-card-padding",
        "space-card-gap",
        "space-broken",
    ]
    assert catalog.tokens_by_group(TokenGroup.MOTION) == ()


def test_description_is_optional(catalog: Catalog):
    assert catalog.find_by_rendered_name("--color-text").description is None
    assert (
        catalog.find_by_rendered_name("--space-100").description
        == "Smallest spacing step."
    )


def test_contains_uses_rendered_names(catalog: Catalog):
    assert "--space-100" in catalog
    assert "space-100" not in catalog


def test_load_with_namespace(raw_groups):
    catalog = load(raw_groups, TokenNameRenderer("p"))

    token = catalog.find_by_rendered_name("--p-space-100")
    assert token is not None
    assert token.name == "space-100"


def test_load_rejects_invalid_token_name():
    with pytest.raises(CatalogError, match="Invalid token name"):
        load({"space": {"--space-100": {"value": "0.25rem"}}})


def test_load_rejects_duplicate_rendered_names():
    with pytest.raises(CatalogError, match="Duplicate token --shared"):
        load(
            {
                "width": {"shared": {"value": "1rem"}},
                "height": {"shared": {"value": "1rem"}},
            }
        )


def test_load_rejects_unknown_group():
    with pytest.raises(CatalogError, match="Unknown token group"):
        load({"colour": {"colour-bg": {"value": "#fff"}}})


@pytest.mark.parametrize(
    "properties",
    [{"description": "no value"}, {"value": 4}, "0.25rem"],
)
def test_load_rejects_malformed_token(properties):
    with pytest.raises(CatalogError):
        load({"space": {"space-100": properties}})


def test_load_rejects_non_mapping_dataset():
    with pytest.raises(CatalogError):
        load(["space"])  # type: ignore[arg-type]
