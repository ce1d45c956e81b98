"""Command line interface for skulls."""

from skulls.cli.main import app

__all__ = ["app"]
