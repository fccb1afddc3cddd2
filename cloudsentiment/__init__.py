"""Collect and compare sentence sentiment from four cloud NLP providers."""

__version__ = "0.1.0"
