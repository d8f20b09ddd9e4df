"""
Release index for cmake-setup.

Models released versions and their assets, lists them from GitHub, and
resolves version requests against them.
"""

from .models import AssetInfo, FileType, VersionInfo
from .matching import get_latest_matching, matching_versions
from .github import GitHubReleaseIndex

__all__ = [
    "AssetInfo",
    "FileType",
    "VersionInfo",
    "get_latest_matching",
    "matching_versions",
    "GitHubReleaseIndex",
]
