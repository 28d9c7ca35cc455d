"""Typer apps grouped by command."""
