"""
Command implementations for the cmake-setup CLI.

Each module exposes run(args) -> int.
"""
