"""Veille - Royal Moroccan Navy news watch."""

__version__ = "0.1.0"
