# src/__init__.py — v1
"""cnchar-data: build-time data preparation for the cnchar dataset."""

from cnchar_data.version import __version__

__all__ = ["__version__"]
