#!/usr/bin/env python3
"""
Main entry point for the minirc chat client
"""

from minirc.main import run

if __name__ == "__main__":
    run()
