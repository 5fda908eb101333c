"""Persistent binding libraries for spatial anchors and scenes."""

__version__ = "1.0.0"
