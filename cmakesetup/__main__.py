"""
Entry point for running cmake-setup as a module.

Usage: python -m cmakesetup [command] [options]
"""

from cmakesetup.cli.parser import main

if __name__ == "__main__":
    main()
