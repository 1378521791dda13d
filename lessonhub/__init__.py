"""Markdown lesson catalog with live filesystem reload."""

__version__ = "1.0.0"
