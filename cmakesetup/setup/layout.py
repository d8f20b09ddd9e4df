"""
Binary directory lookup inside an installed CMake tree.

CMake archives unpack to a single top-level directory. On most platforms
executables sit in its bin/ directory; macOS archives wrap them in an
application bundle instead:

    cmake-3.28.1-linux-x86_64/bin/cmake
    cmake-3.28.1-macos-universal/CMake.app/Contents/bin/cmake
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from cmakesetup.core.exceptions import LayoutError
from cmakesetup.core.platform import OSPlatform, detect_os_platform

logger = logging.getLogger(__name__)

BUNDLE_BIN_SUFFIX = ("Contents", "bin")
BIN_SUFFIX = ("bin",)


def _list_dir(path: Path) -> List[str]:
    entries = sorted(os.listdir(path))
    logger.debug(f"Contents of {path}: {entries}")
    return entries


def locate_bin_directory(
    tool_path: Union[str, Path], platform: Optional[OSPlatform] = None
) -> Path:
    """
    Get the directory holding the CMake executables.

    The bin directory itself is not checked for existence; a broken tree
    surfaces when cmake is first run.

    Args:
        tool_path: Root of an extracted or cached CMake archive
        platform: Operating system the archive is for (default: host OS)

    Returns:
        Path to the bin directory

    Raises:
        LayoutError: If tool_path does not contain exactly one entry, or
            the bundle directory is empty

    Example:
        >>> locate_bin_directory(Path("/cache/cmake/3.28.1/x86_64"), OSPlatform.LINUX)
        PosixPath('/cache/cmake/3.28.1/x86_64/cmake-3.28.1-linux-x86_64/bin')
    """
    tool_path = Path(tool_path)
    platform = platform or detect_os_platform()

    root_entries = _list_dir(tool_path)
    if len(root_entries) != 1:
        raise LayoutError("Archive does not have expected layout.")

    base = tool_path / root_entries[0]

    if platform.uses_bundle_layout:
        bundle_entries = _list_dir(base)
        if not bundle_entries:
            raise LayoutError(f"Archive does not have expected layout: {base} is empty.")
        bin_directory = base.joinpath(bundle_entries[0], *BUNDLE_BIN_SUFFIX)
    else:
        bin_directory = base.joinpath(*BIN_SUFFIX)

    logger.debug(f"Bin directory: {bin_directory}")
    return bin_directory


__all__ = ["locate_bin_directory"]
