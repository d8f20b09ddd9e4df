"""
Archive download and unpacking.

This module provides the fetch collaborator used by the installer:
- Streaming HTTP/HTTPS downloads with TLS verification
- Retry logic with exponential backoff for transient failures
- Extraction of downloaded archives into fresh scratch directories
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

import requests
from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout

from cmakesetup.core.directory import get_temp_dir
from cmakesetup.core.exceptions import CMakeSetupError
from cmakesetup.core.filesystem import (
    FilesystemError,
    extract_tar,
    extract_zip,
    make_unique_directory,
    safe_rmtree,
)
from cmakesetup.core.interfaces import Fetcher

logger = logging.getLogger(__name__)

# Client errors worth retrying: request timeout and rate limiting
RETRYABLE_CLIENT_STATUS = (408, 429)


class DownloadError(CMakeSetupError):
    """Exception raised when download fails."""

    pass


def _is_retryable(error: RequestException) -> bool:
    """Check whether a failed request may succeed on a later attempt."""
    if isinstance(error, HTTPError) and error.response is not None:
        status = error.response.status_code
        return status >= 500 or status in RETRYABLE_CLIENT_STATUS
    return isinstance(error, (Timeout, ConnectionError))


def download_file(
    url: str,
    destination: Path,
    timeout: int = 30,
    max_retries: int = 3,
) -> Path:
    """
    Download file from URL to destination with retry logic.

    Args:
        url: URL to download from
        destination: Local path to save file
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If download fails after retries
        ValueError: If URL or destination is invalid

    Example:
        >>> download_file(
        ...     "https://github.com/Kitware/CMake/releases/download/v3.28.1/cmake-3.28.1-linux-x86_64.tar.gz",
        ...     Path("/tmp/cmake.tar.gz"),
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    for attempt in range(max_retries):
        try:
            return _download_stream(url, destination, timeout)
        except RequestException as e:
            if attempt == max_retries - 1 or not _is_retryable(e):
                destination.unlink(missing_ok=True)
                raise DownloadError(
                    f"Download of {url} failed after {attempt + 1} attempt(s): {e}"
                ) from e

            # Exponential backoff
            backoff_seconds = 2**attempt
            logger.warning(
                f"Download attempt {attempt + 1} failed: {e}. "
                f"Retrying in {backoff_seconds}s..."
            )
            time.sleep(backoff_seconds)

    raise DownloadError(f"Download of {url} was not attempted (max_retries={max_retries})")


def _download_stream(url: str, destination: Path, timeout: int) -> Path:
    """
    Perform a single streaming download attempt.

    Raises:
        RequestException: If HTTP request fails
    """
    logger.info(f"Downloading from {url}")

    with requests.get(url, stream=True, timeout=timeout, allow_redirects=True) as response:
        response.raise_for_status()

        downloaded = 0
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)
                    downloaded += len(chunk)

    logger.debug(f"Downloaded {downloaded} bytes to {destination}")
    return destination


class ArchiveFetcher(Fetcher):
    """
    Download archives and extract them under a scratch directory.

    Each download and each extraction gets its own uniquely named
    directory, so repeated runs never collide. cleanup() removes every
    directory this fetcher has created.
    """

    def __init__(
        self,
        temp_dir: Optional[Path] = None,
        timeout: int = 30,
        max_retries: int = 3,
    ):
        """
        Initialize fetcher.

        Args:
            temp_dir: Scratch directory (default: $RUNNER_TEMP or system temp)
            timeout: Request timeout in seconds
            max_retries: Maximum number of download attempts
        """
        self.temp_dir = Path(temp_dir) if temp_dir else get_temp_dir()
        self.timeout = timeout
        self.max_retries = max_retries
        self._scratch_dirs: List[Path] = []

    def _new_scratch_dir(self) -> Path:
        path = make_unique_directory(self.temp_dir)
        self._scratch_dirs.append(path)
        return path

    def download(self, url: str) -> Path:
        archive_name = url.rstrip("/").split("/")[-1] or "download"
        destination = self._new_scratch_dir() / archive_name
        return download_file(
            url, destination, timeout=self.timeout, max_retries=self.max_retries
        )

    def extract_zip(self, archive_path: Path) -> Path:
        destination = self._new_scratch_dir()
        logger.debug(f"Extracting {archive_path} to {destination}")
        return extract_zip(archive_path, destination)

    def extract_tar(self, archive_path: Path) -> Path:
        destination = self._new_scratch_dir()
        logger.debug(f"Extracting {archive_path} to {destination}")
        return extract_tar(archive_path, destination)

    def cleanup(self) -> None:
        while self._scratch_dirs:
            path = self._scratch_dirs.pop()
            try:
                safe_rmtree(path)
                logger.debug(f"Removed scratch directory {path}")
            except FilesystemError as e:
                logger.warning(f"Failed to remove scratch directory {path}: {e}")


__all__ = [
    "DownloadError",
    "download_file",
    "ArchiveFetcher",
]
