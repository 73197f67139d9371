"""
Entry point for running tacobuild as a module.

Usage: python -m tacobuild [command] [options]
"""

from tacobuild.cli.parser import main

if __name__ == "__main__":
    main()
