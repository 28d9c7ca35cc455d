#!/usr/bin/env python3
"""texmaps Command-Line Interface"""
import sys

from texmaps.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
