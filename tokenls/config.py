"""
Server configuration.

Values come from the client's ``initializationOptions`` and fall back to
environment variables, then to defaults:

    insertStyle       TOKENLS_INSERT_STYLE       "bare" | "wrapped"
    extendedRanking   TOKENLS_EXTENDED_RANKING   true | false
    pxPerRem          TOKENLS_PX_PER_REM         number (default 16)
    catalogPath       TOKENLS_CATALOG            path to a YAML/JSON dataset
    namespace         TOKENLS_NAMESPACE          rendered-name prefix
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from tokenls.catalog.resolver import DEFAULT_PX_PER_REM
from tokenls.errors import ConfigError


class InsertStyle(Enum):
    """What a completion inserts."""

    BARE = "bare"         # --space-100
    WRAPPED = "wrapped"   # var(--space-100)


@dataclass(frozen=True)
class ServerConfig:
    insert_style: InsertStyle = InsertStyle.BARE
    extended_ranking: bool = True
    px_per_rem: float = DEFAULT_PX_PER_REM
    catalog_path: Path | None = None
    namespace: str | None = None

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, object] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ServerConfig:
        """
        Build a configuration from LSP initialization options.

        Raises:
            ConfigError: A value is present but cannot be interpreted.
        """
        options = options if isinstance(options, Mapping) else {}
        environ = os.environ if environ is None else environ

        def lookup(key: str, env_key: str) -> object | None:
            if options.get(key) is not None:
                return options[key]
            return environ.get(env_key)

        config = cls()

        insert_style = lookup("insertStyle", "TOKENLS_INSERT_STYLE")
        extended_ranking = lookup("extendedRanking", "TOKENLS_EXTENDED_RANKING")
        px_per_rem = lookup("pxPerRem", "TOKENLS_PX_PER_REM")
        catalog_path = lookup("catalogPath", "TOKENLS_CATALOG")
        namespace = lookup("namespace", "TOKENLS_NAMESPACE")

        return cls(
            insert_style=(
                _parse_insert_style(insert_style)
                if insert_style is not None
                else config.insert_style
            ),
            extended_ranking=(
                _parse_bool("extendedRanking", extended_ranking)
                if extended_ranking is not None
                else config.extended_ranking
            ),
            px_per_rem=(
                _parse_ratio(px_per_rem) if px_per_rem is not None else config.px_per_rem
            ),
            catalog_path=Path(str(catalog_path)).expanduser() if catalog_path else None,
            namespace=str(namespace) if namespace is not None else None,
        )


def _parse_insert_style(value: object) -> InsertStyle:
    try:
        return InsertStyle(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(style.value for style in InsertStyle)
        raise ConfigError(f"insertStyle must be one of: {choices} (got {value!r})")


def _parse_bool(name: str, value: object) -> bool:
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False

    raise ConfigError(f"{name} must be a boolean (got {value!r})")


def _parse_ratio(value: object) -> float:
    try:
        ratio = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigError(f"pxPerRem must be a number (got {value!r})")

    if ratio <= 0:
        raise ConfigError(f"pxPerRem must be positive (got {value!r})")

    return ratio
