"""Inventory API.

A small FastAPI service managing a catalogue of products: creation,
paginated listing, locked quantity updates and deletion.
"""

__version__ = "0.1.0"
