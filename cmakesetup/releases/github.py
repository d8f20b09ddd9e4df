"""
GitHub releases index.

Lists every CMake release through the GitHub REST API, following
pagination links until the last page.
"""

import logging
from typing import List, Optional

import requests
from requests.exceptions import RequestException

from cmakesetup.core.exceptions import ReleaseIndexError
from cmakesetup.core.interfaces import VersionIndex
from cmakesetup.releases.models import VersionInfo

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
CMAKE_REPOSITORY = "Kitware/CMake"


class GitHubReleaseIndex(VersionIndex):
    """
    Version index backed by a repository's GitHub releases.

    Example:
        >>> index = GitHubReleaseIndex(token=os.environ.get("GITHUB_TOKEN"))
        >>> [v.name for v in index.all_versions()][:2]
        ['3.29.0', '3.28.4']
    """

    def __init__(
        self,
        token: Optional[str] = None,
        repository: str = CMAKE_REPOSITORY,
        api_url: str = GITHUB_API_URL,
        per_page: int = 100,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize release index.

        Args:
            token: GitHub API token (raises the rate limit; optional)
            repository: owner/name of the repository to list
            api_url: Base URL of the GitHub API
            per_page: Releases requested per page (max 100)
            timeout: Request timeout in seconds
            session: requests session to use (default: a new session)
        """
        self.token = token
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        self.per_page = per_page
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def all_versions(self) -> List[VersionInfo]:
        """
        Fetch every release of the repository.

        Returns:
            List of VersionInfo, in the order the API returns them

        Raises:
            ReleaseIndexError: If a request fails or returns malformed data
        """
        url = f"{self.api_url}/repos/{self.repository}/releases"
        params = {"per_page": self.per_page}
        versions = []

        while url:
            logger.debug(f"Fetching releases page: {url}")
            try:
                response = self.session.get(
                    url, headers=self._headers(), params=params, timeout=self.timeout
                )
                response.raise_for_status()
                releases = response.json()
            except (RequestException, ValueError) as e:
                raise ReleaseIndexError(
                    f"Failed to list releases of {self.repository}: {e}"
                ) from e

            if not isinstance(releases, list):
                raise ReleaseIndexError(
                    f"Unexpected response listing releases of {self.repository}"
                )

            try:
                versions.extend(VersionInfo.from_github_release(r) for r in releases)
            except (KeyError, TypeError, AttributeError) as e:
                raise ReleaseIndexError(f"Malformed release entry: {e}") from e

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        logger.info(f"Found {len(versions)} releases of {self.repository}")
        return versions


__all__ = ["GitHubReleaseIndex", "CMAKE_REPOSITORY"]
