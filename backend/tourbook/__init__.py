"""Tourbook booking backend: listings, stay pricing and checkout."""

__version__ = "0.1.0"
