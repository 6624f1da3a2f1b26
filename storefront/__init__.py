"""Relojes Angel storefront backend"""

__version__ = "1.0.0"
