"""
Entry point for running the compilerpaths CLI as a module.

Usage: python -m compilerpaths.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
