#!/usr/bin/env python3
"""
Core functionality for texmaps CLI tools.

This module provides shared functionality used across the CLI apps, such as
configuration management and console output.
"""

from texmaps.cli.core.ui import (
    console,
    print_warning,
    print_error,
    print_success,
    print_info,
    print_rich_table,
    display_written_maps
)

from texmaps.cli.core.config import (
    load_config,
    save_config,
    get_config_value,
    set_config_value,
    reset_config,
    load_settings,
    parse_value
)
