# src/aggregation/__init__.py — v1
