"""Shared fixtures: a small catalog covering every group used in tests."""
from __future__ import annotations

import pytest

from tokenls.catalog.catalog import Catalog, load
from tokenls.catalog.resolver import ValueResolver


SAMPLE_GROUPS = {
    "color": {
        "color-bg": {"value": "#f1f1f1", "description": "Default background."},
        "color-bg-fill": {
            "value": "#ffffff",
            "description": "Background of contained elements.",
        },
        "color-text": {"value": "#303030"},
        "color-border": {"value": "#e3e3e3", "description": "Default border color."},
    },
    "border": {
        "border-radius-100": {"value": "0.25rem"},
        "border-width-025": {"value": "0.0625rem"},
    },
    "font": {
        "font-size-100": {"value": "1rem", "description": "Base font size."},
        "font-size-heading": {"value": "var(--font-size-100)"},
        "font-weight-bold": {"value": "700"},
    },
    "space": {
        "space-0": {"value": "0rem"},
        "space-100": {"value": "0.25rem", "description": "Smallest spacing step."},
        "space-card-padding": {"value": "var(--space-100)"},
        "space-card-gap": {"value": "var(--space-card-padding)"},
        "space-broken": {"value": "var(--does-not-exist)"},
    },
    "zIndex": {
        "z-index-1": {"value": "100"},
    },
}


@pytest.fixture
def catalog() -> Catalog:
    return load(SAMPLE_GROUPS)


@pytest.fixture
def resolver(catalog: Catalog) -> ValueResolver:
    return ValueResolver(catalog)


@pytest.fixture
def raw_groups() -> dict:
    return SAMPLE_GROUPS
