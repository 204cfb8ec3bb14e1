"""CLI package for bet performance analytics."""

from truesharp_analytics.cli.main import cli

__all__ = ["cli"]
