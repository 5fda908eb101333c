"""CLI commands module."""

from . import library

__all__ = ["library"]
