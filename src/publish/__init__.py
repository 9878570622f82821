# src/publish/__init__.py — v1
