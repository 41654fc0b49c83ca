#!/usr/bin/env python3
"""
TLS Checker - Application Entry Point

Usage: main.py --domain www.example.com
"""
import sys

from tlschecker.cli import main


if __name__ == "__main__":
    sys.exit(main())
