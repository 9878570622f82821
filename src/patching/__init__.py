# src/patching/__init__.py — v1
