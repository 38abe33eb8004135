# src/stats/__init__.py — v1
