"""
Entry point for running the goupgrade CLI as a module.

Usage: python -m goupgrade.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
