"""Labeled console logging and the JSON Lines row error log."""
