"""
Version request matching.

Turns a user-supplied version request into the newest matching release.
Accepted request forms:

    ""  or "latest"          newest stable release
    "3", "3.x", "3.28.x"     newest stable release with that prefix
    "3.28.1", "3.29.0-rc1"   exactly that release (prereleases allowed)
    ">=3.20,<4"              PEP 440 specifier set over stable releases
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from cmakesetup.core.exceptions import VersionNotFoundError
from cmakesetup.releases.models import VersionInfo

logger = logging.getLogger(__name__)

_PREFIX_PATTERN = re.compile(r"^\d+(\.\d+)?(\.[xX*])?$")
_EXACT_PATTERN = re.compile(r"^\d+\.\d+\.\d+")


def parse_version(name: str) -> Optional[Version]:
    """Parse a release name, returning None if it is not a version."""
    try:
        return Version(name)
    except InvalidVersion:
        return None


def _to_specifier(requested: str) -> Tuple[SpecifierSet, bool]:
    """
    Convert a version request into a specifier set.

    Returns:
        (specifier, allow_prereleases)

    Raises:
        VersionNotFoundError: If the request cannot be interpreted
    """
    if requested in ("", "latest"):
        return SpecifierSet(), False

    if _PREFIX_PATTERN.match(requested):
        prefix = re.sub(r"\.[xX*]$", "", requested)
        return SpecifierSet(f"=={prefix}.*"), False

    try:
        if _EXACT_PATTERN.match(requested):
            exact = parse_version(requested)
            if exact is None:
                raise VersionNotFoundError(requested)
            return SpecifierSet(f"=={exact}"), True
        if requested[0] in "<>=!~":
            return SpecifierSet(requested), False
    except InvalidSpecifier as e:
        raise VersionNotFoundError(requested) from e

    raise VersionNotFoundError(requested)


def matching_versions(requested: str, versions: Iterable[VersionInfo]) -> List[VersionInfo]:
    """
    Get all releases satisfying a request, newest first.

    Drafts and releases whose names are not versions are always skipped;
    prereleases only match an exact request.

    Args:
        requested: Version request (see module docstring)
        versions: Releases to choose from

    Returns:
        Matching releases sorted from newest to oldest

    Raises:
        VersionNotFoundError: If the request cannot be interpreted
    """
    requested = requested.strip()
    specifier, allow_prereleases = _to_specifier(requested)

    candidates = []
    for info in versions:
        if info.draft:
            continue
        if info.prerelease and not allow_prereleases:
            continue
        parsed = parse_version(info.name)
        if parsed is None:
            logger.debug(f"Skipping release with non-version name: {info.name}")
            continue
        if specifier.contains(parsed, prereleases=allow_prereleases):
            candidates.append((parsed, info))

    candidates.sort(key=lambda pair: pair[0], reverse=True)
    return [info for _, info in candidates]


def get_latest_matching(requested: str, versions: Iterable[VersionInfo]) -> VersionInfo:
    """
    Get the newest release satisfying a request.

    Example:
        >>> get_latest_matching("3.28.x", index.all_versions()).name
        '3.28.6'

    Raises:
        VersionNotFoundError: If no release matches
    """
    matches = matching_versions(requested, versions)
    if not matches:
        raise VersionNotFoundError(requested)

    logger.debug(f"Version request '{requested}' resolved to {matches[0].name}")
    return matches[0]


__all__ = [
    "parse_version",
    "matching_versions",
    "get_latest_matching",
]
