"""Aggregate open pull requests awaiting or following up on your review."""

__version__ = "0.1.0"
