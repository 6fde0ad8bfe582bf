"""Athey - space and STEM chat backend grounded in live space data."""

__version__ = "0.1.0"
