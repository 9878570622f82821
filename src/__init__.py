# src/__init__.py — v1
"""docship: multi-version documentation build and publish pipeline."""

from docship.version import __version__

__all__ = ["__version__"]
