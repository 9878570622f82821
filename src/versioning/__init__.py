# src/versioning/__init__.py — v1
