"""Token catalog and value resolution for tokenls."""
from .catalog import Catalog, TokenDefinition, TokenNameRenderer, load
from .resolver import DEFAULT_PX_PER_REM, Resolution, ValueResolver

__all__ = [
    'Catalog',
    'TokenDefinition',
    'TokenNameRenderer',
    'load',
    'DEFAULT_PX_PER_REM',
    'Resolution',
    'ValueResolver',
]
