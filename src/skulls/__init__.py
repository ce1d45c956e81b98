"""skulls: install agent skill bundles from git repositories."""

__version__ = "0.1.0"
