#!/usr/bin/env python3
"""
run.py - Main entry point for ConnectX

Usage:
    python run.py play --depth 6
    python run.py analyze --moves 3,3,4 --depth 5
    python run.py benchmark --games 2 --depth 4
"""

import sys

from connectx.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
