"""Resmo: AI-assisted recruiting workflow dashboard."""

__version__ = "0.1.0"
