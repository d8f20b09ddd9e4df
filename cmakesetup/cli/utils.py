"""
Shared utilities for CLI commands.
"""

import logging
from typing import Any, Dict, Optional

from cmakesetup.config import SetupConfig, load_config
from cmakesetup.core.interfaces import VersionIndex
from cmakesetup.releases.github import GitHubReleaseIndex
from cmakesetup.releases.matching import get_latest_matching
from cmakesetup.releases.models import VersionInfo

logger = logging.getLogger(__name__)


def config_from_args(args) -> SetupConfig:
    """
    Load configuration with command-line values layered on top.

    Args:
        args: Parsed command-line arguments

    Returns:
        Resolved SetupConfig
    """
    overrides: Dict[str, Any] = {
        "cmake_version": getattr(args, "cmake_version", None),
        "github_api_token": getattr(args, "github_api_token", None),
        "use_32bit": getattr(args, "use_32bit", None),
        "arch_candidates": getattr(args, "arch", None),
        "tool_cache_dir": getattr(args, "tool_cache_dir", None),
    }
    return load_config(getattr(args, "config", None), overrides=overrides)


def resolve_version(
    config: SetupConfig, index: Optional[VersionIndex] = None
) -> VersionInfo:
    """
    Find the release a configuration asks for.

    Args:
        config: Resolved configuration
        index: Release index (default: GitHub releases of Kitware/CMake)

    Returns:
        The newest release matching config.cmake_version
    """
    index = index or GitHubReleaseIndex(token=config.github_api_token)
    version = get_latest_matching(config.cmake_version, index.all_versions())
    logger.info(f"Resolved CMake version '{config.cmake_version}' to {version.name}")
    return version
