"""
Entry point for running toolenv as a module.

Usage: python -m toolenv [command] [options]
"""

from toolenv.cli.parser import main

if __name__ == "__main__":
    main()
