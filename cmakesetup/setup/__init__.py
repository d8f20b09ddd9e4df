"""
CMake setup logic: asset selection, layout lookup and orchestration.
"""

from .selector import select_asset_url
from .layout import locate_bin_directory
from .installer import CMakeInstaller, PACKAGE_NAME

__all__ = [
    "select_asset_url",
    "locate_bin_directory",
    "CMakeInstaller",
    "PACKAGE_NAME",
]
