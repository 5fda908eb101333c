"""Command-line interface for inspecting binding libraries."""

from .main import cli

__all__ = ["cli"]
