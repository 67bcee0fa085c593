"""Jupii UI translation catalogs.

Loads Qt Linguist ``.ts`` catalogs into immutable, indexed catalogs and serves
context-scoped lookups with plural-form selection.
"""

__version__ = "0.1.0"
