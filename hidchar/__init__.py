"""Hidden character helper: find, explain and compare invisible Unicode characters."""

__version__ = "0.1.0"
