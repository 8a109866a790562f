"""Instruks - versioned procedural documents with PDF export."""

__version__ = "0.1.0"
