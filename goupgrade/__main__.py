"""
Entry point for running goupgrade as a module.

Usage: python -m goupgrade [command] [options]
"""

from goupgrade.cli.parser import main

if __name__ == "__main__":
    main()
