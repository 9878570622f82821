# src/workspace/__init__.py — v1
