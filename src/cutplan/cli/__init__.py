"""Command-line interface for the cutting optimizer."""
