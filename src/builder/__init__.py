# src/builder/__init__.py — v1
