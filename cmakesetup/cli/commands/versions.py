"""
Versions command implementation.

Lists released CMake versions matching a request, newest first.
"""

import logging

from cmakesetup.cli.utils import config_from_args
from cmakesetup.core.exceptions import VersionNotFoundError
from cmakesetup.releases.github import GitHubReleaseIndex
from cmakesetup.releases.matching import matching_versions

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the versions command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    index = GitHubReleaseIndex(token=config.github_api_token)

    versions = matching_versions(config.cmake_version, index.all_versions())
    if not versions:
        raise VersionNotFoundError(config.cmake_version)

    if args.limit > 0:
        versions = versions[: args.limit]

    for version in versions:
        print(version.name)
    return 0
