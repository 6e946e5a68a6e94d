"""Notion progress bars and visit counters over HTTP."""

__version__ = "1.0.0"
