"""Command-line interface for texmaps."""
