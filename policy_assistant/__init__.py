"""Policy assistant API: conversation titles and tag suggestions."""

__version__ = "0.2.0"
