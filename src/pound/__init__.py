# src/pound/__init__.py
"""Pound: the editing core of a small terminal text editor."""

__version__ = "0.1.0"
