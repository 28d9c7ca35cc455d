#!/usr/bin/env python3
"""
Configuration app for texmaps CLI.
"""

import json

import typer
from rich.panel import Panel

from texmaps.config import ProcessorSettings
from texmaps.cli.core.ui import console, print_error, print_success
from texmaps.cli.core.config import (
    get_config_path,
    load_config,
    parse_value,
    reset_config,
    set_config_value,
)

def create_config_app():
    """Create the configuration app with all commands."""
    config_app = typer.Typer(help="Manage texmaps configuration")

    config_app.command(name="show")(config_show)
    config_app.command(name="set")(config_set)
    config_app.command(name="reset")(config_reset)

    return config_app

def config_show():
    """Display current configuration settings."""
    config = load_config()

    console.print(Panel.fit(f"[bold]texmaps Configuration[/bold] ({get_config_path()})"))
    for key, value in sorted(config.items()):
        if isinstance(value, dict):
            console.print(f"[key]{key}[/key]:")
            for sub_key, sub_value in sorted(value.items()):
                console.print(f"  {sub_key}: [value]{json.dumps(sub_value)}[/value]")
        else:
            console.print(f"[key]{key}[/key]: [value]{json.dumps(value)}[/value]")

def config_set(
    key: str = typer.Argument(..., help="Configuration key, e.g. normal.strength"),
    value: str = typer.Argument(..., help="Configuration value")
):
    """Set a configuration value."""
    typed_value = parse_value(value)

    # Reject values the map settings would not accept
    candidate = load_config()
    node = candidate
    parts = key.split('.')
    for part in parts[:-1]:
        node = node.setdefault(part, {})
    node[parts[-1]] = typed_value
    try:
        ProcessorSettings.from_dict(candidate)
    except (TypeError, ValueError) as e:
        print_error(f"Invalid value for {key}: {e}")
        raise typer.Exit(1)

    set_config_value(key, typed_value)
    print_success(f"Configuration updated: {key} = {typed_value}")

def config_reset():
    """Reset configuration to default values."""
    reset_config()
    print_success("Configuration reset to default values")
