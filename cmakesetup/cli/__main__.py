"""
Entry point for running the cmake-setup CLI as a module.

Usage: python -m cmakesetup.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
