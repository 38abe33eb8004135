# src/transforms/__init__.py — v1
