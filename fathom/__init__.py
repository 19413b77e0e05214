"""Fathom: maritime unit converter with a conversion history."""

__version__ = "1.0.0"
