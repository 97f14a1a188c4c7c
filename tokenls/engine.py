"""
Token engine: the catalog plus everything that answers requests from it.

Built once during ``initialize`` and shared, read-only, by all requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tokenls.catalog.catalog import Catalog
from tokenls.catalog.loader import load_catalog_file, load_default_catalog
from tokenls.catalog.resolver import ValueResolver
from tokenls.config import ServerConfig
from tokenls.context.group_classifier import ContextClassifier
from tokenls.features.completion.ranker import CompletionRanker
from tokenls.features.hover.locator import HoverLocator
from tokenls.utils.find_files import find_catalog_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenEngine:
    config: ServerConfig
    catalog: Catalog
    resolver: ValueResolver
    classifier: ContextClassifier
    ranker: CompletionRanker
    hover_locator: HoverLocator
    source: str

    @classmethod
    def from_catalog(
        cls, catalog: Catalog, config: ServerConfig, source: str = "<memory>"
    ) -> TokenEngine:
        resolver = ValueResolver(catalog, px_per_rem=config.px_per_rem)
        classifier = ContextClassifier(catalog)

        return cls(
            config=config,
            catalog=catalog,
            resolver=resolver,
            classifier=classifier,
            ranker=CompletionRanker(
                catalog,
                resolver,
                classifier,
                insert_style=config.insert_style,
                extended_ranking=config.extended_ranking,
            ),
            hover_locator=HoverLocator(catalog, resolver),
            source=source,
        )


def build_engine(
    config: ServerConfig, workspace_root: Path | None = None
) -> TokenEngine:
    """
    Load the catalog and assemble the engine.

    The catalog comes from, in order: the configured ``catalog_path``, a
    catalog file found in the workspace, the dataset shipped with tokenls.

    Raises:
        CatalogError: The selected dataset is invalid. No engine is built.
    """
    catalog_path = config.catalog_path
    if workspace_root is not None:
        if catalog_path is None:
            catalog_path = find_catalog_file(workspace_root)
        elif not catalog_path.is_absolute():
            catalog_path = workspace_root / catalog_path

    if catalog_path is not None:
        catalog = load_catalog_file(catalog_path, namespace=config.namespace)
        source = str(catalog_path)
    else:
        catalog = load_default_catalog(namespace=config.namespace)
        source = "built-in"

    logger.info("Loaded %d tokens from %s", len(catalog), source)

    return TokenEngine.from_catalog(catalog, config, source)
