"""
Resolve command implementation.

Prints the download URL that `install` would fetch, without downloading.
"""

import logging

from cmakesetup.cli.utils import config_from_args, resolve_version
from cmakesetup.setup.selector import select_asset_url

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    version = resolve_version(config)

    print(select_asset_url(version, config.effective_arch_candidates()))
    return 0
