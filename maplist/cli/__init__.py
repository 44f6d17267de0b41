"""Command line interface for maplist."""
