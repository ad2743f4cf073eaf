"""Generate Go name-to-value maps for typed constants."""

__version__ = "0.3.0"
