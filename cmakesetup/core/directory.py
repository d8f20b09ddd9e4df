"""
Directory locations for cmake-setup.

The tool cache and scratch directories follow the conventions of the CI
runner when its environment variables are present:

    RUNNER_TOOL_CACHE : persistent tool cache shared by jobs on the runner
    RUNNER_TEMP       : scratch directory emptied after each job

Outside a runner both fall back to locations under the user's home and
the system temp directory.
"""

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional


def get_global_cache_dir() -> Path:
    """
    Get the per-user cmake-setup directory.

    Returns:
        Path: ~/.cmakesetup (or %USERPROFILE%\\.cmakesetup on Windows)
    """
    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if user_profile:
            return Path(user_profile) / ".cmakesetup"
    return Path.home() / ".cmakesetup"


def get_tool_cache_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the root of the tool cache.

    Args:
        env: Environment to read (default: os.environ)

    Returns:
        Path: $RUNNER_TOOL_CACHE, or ~/.cmakesetup/tool-cache

    Example:
        >>> get_tool_cache_dir({"RUNNER_TOOL_CACHE": "/opt/hostedtoolcache"})
        PosixPath('/opt/hostedtoolcache')
    """
    env = os.environ if env is None else env
    runner_cache = env.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)
    return get_global_cache_dir() / "tool-cache"


def get_temp_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the scratch directory for downloads and extraction.

    Args:
        env: Environment to read (default: os.environ)

    Returns:
        Path: $RUNNER_TEMP, or the system temp directory
    """
    env = os.environ if env is None else env
    runner_temp = env.get("RUNNER_TEMP")
    if runner_temp:
        return Path(runner_temp)
    return Path(tempfile.gettempdir())
