#!/usr/bin/env python3
"""
run.py - Main entry point for the grid games
"""

import sys

from gridgames.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
