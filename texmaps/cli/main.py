#!/usr/bin/env python3
"""texmaps Command-Line Interface"""
import logging
import sys

import typer

from texmaps import __version__
from texmaps.cli.apps.config_app import create_config_app
from texmaps.cli.apps.maps_app import create_maps_app
from texmaps.cli.core.config import get_config_value
from texmaps.cli.core.ui import console

# Create main app
app = typer.Typer(
    help="texmaps - Generate normal, specular, displacement and ambient occlusion maps from textures",
    add_completion=False
)

app.add_typer(create_maps_app(), name="maps", help="Generate maps from images")
app.add_typer(create_config_app(), name="config", help="Configuration management")


@app.command(name="version", help="Show texmaps version")
def version_command():
    console.print(f"texmaps {__version__}")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
):
    """
    texmaps Command-Line Tools

    Turn a texture into the auxiliary maps used in real-time rendering.
    """
    debug = verbose or bool(get_config_value("debug_mode", False))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

def main():
    """Run the texmaps CLI application."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)

if __name__ == "__main__":
    sys.exit(main())
