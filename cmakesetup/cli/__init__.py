"""
cmake-setup CLI module.

This module provides the command-line interface for cmake-setup.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
