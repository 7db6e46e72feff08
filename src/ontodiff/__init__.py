"""ontodiff: structural XML diff with source line attribution."""

__version__ = "0.1.0"
