"""Reads token datasets from YAML or JSON files."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path

import yaml

from tokenls.catalog.catalog import Catalog, TokenNameRenderer, load
from tokenls.errors import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_RESOURCE = "tokens.yml"


def load_catalog_file(path: Path, namespace: str | None = None) -> Catalog:
    """
    Load a catalog from a ``.yml``/``.yaml`` or ``.json`` file.

    The file holds either the group mapping itself or a document with a
    ``tokens`` key and an optional ``namespace`` key. An explicit
    ``namespace`` argument wins over the one stored in the file.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise CatalogError(f"Cannot read token catalog {path}: {e}") from e

    try:
        return _load_document(_parse(text, path.suffix), namespace)
    except CatalogError as e:
        raise CatalogError(f"{path}: {e}") from e


def load_default_catalog(namespace: str | None = None) -> Catalog:
    """Load the token dataset shipped with the package."""
    data_file = resources.files("tokenls.catalog").joinpath(
        "data", DEFAULT_CATALOG_RESOURCE
    )
    text = data_file.read_text(encoding="utf-8")

    return _load_document(_parse(text, ".yml"), namespace)


def _parse(text: str, suffix: str) -> object:
    try:
        if suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Malformed token catalog: {e}") from e


def _load_document(data: object, namespace: str | None) -> Catalog:
    if not isinstance(data, dict):
        raise CatalogError("Token catalog must be a mapping")

    groups = data
    if "tokens" in data:
        groups = data["tokens"]
        if namespace is None:
            namespace = data.get("namespace")

    if namespace is not None and not isinstance(namespace, str):
        raise CatalogError(f"Token namespace must be a string, got {namespace!r}")

    return load(groups, TokenNameRenderer(namespace or ""))
