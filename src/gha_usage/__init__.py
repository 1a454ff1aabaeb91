"""GitHub Actions usage and organization roster reporting."""

__version__ = "0.1.0"
