# src/site/__init__.py — v1
