"""
cmake-setup: install CMake release binaries on CI runners.

Picks the right archive of a CMake release for the running platform,
caches it in the runner's tool cache and puts its bin directory on PATH.
"""

__version__ = "0.1.0"
