"""Offline-aware news article fetching, caching and bookmarking."""

__version__ = "0.1.0"
