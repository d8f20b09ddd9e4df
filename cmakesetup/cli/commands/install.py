"""
Install command implementation.

Installs CMake into the tool cache if needed and adds its bin directory
to PATH (and to $GITHUB_PATH on GitHub Actions runners).
"""

import logging

from cmakesetup.cli.utils import config_from_args, resolve_version
from cmakesetup.core.download import ArchiveFetcher
from cmakesetup.core.environment import EnvironmentPathPublisher
from cmakesetup.core.tool_cache import LocalToolCache
from cmakesetup.setup.installer import CMakeInstaller

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    version = resolve_version(config)

    installer = CMakeInstaller(
        tool_cache=LocalToolCache(config.tool_cache_dir),
        fetcher=ArchiveFetcher(),
        path_publisher=EnvironmentPathPublisher(),
    )
    bin_dir = installer.ensure_on_path(version, config.effective_arch_candidates())

    print(bin_dir)
    return 0
