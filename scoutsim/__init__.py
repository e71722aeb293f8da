"""Scoutsim - weekly tick simulation kernel for a football talent-scout career."""

__version__ = "0.1.0"
