"""Synthetic entity emulator -- geospatially constrained placement and motion."""

__version__ = "0.1.0"
