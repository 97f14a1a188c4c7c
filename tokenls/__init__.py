"""Design-token completion and hover for CSS custom properties."""

__version__ = "0.1.0"
