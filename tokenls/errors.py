"""
Exceptions raised by tokenls.

Only startup problems raise. Lookups that find nothing return None or an
empty list instead.
"""


class TokenlsError(Exception):
    """Base class for all tokenls errors."""


class CatalogError(TokenlsError, ValueError):
    """The token dataset cannot be turned into a catalog."""


class ConfigError(TokenlsError, ValueError):
    """A configuration value is missing or has the wrong shape."""
