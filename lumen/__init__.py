"""Lumen daily impulse generator."""

__version__ = "1.0.0"
