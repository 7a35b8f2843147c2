"""Command-line interface (``python -m pricesync.cli``)."""

from .__main__ import main

__all__ = ["main"]
