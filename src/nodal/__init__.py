"""Nodal - rule and condition checking for node-and-line graph puzzles."""

__version__ = "0.1.0"
