"""
File system utilities for cmake-setup.

This module provides the file operations the fetcher and tool cache need:
- Archive extraction (zip, tar.gz) with directory traversal protection
- Safe deletion and recursive copy of directory trees
- Fresh scratch directories
"""

import os
import shutil
import sys
import tarfile
import uuid
import zipfile
from pathlib import Path
from typing import Union

from cmakesetup.core.exceptions import CMakeSetupError

IS_WINDOWS = os.name == "nt"


# ============================================================================
# Error Handling
# ============================================================================


class FilesystemError(CMakeSetupError):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Example:
        >>> is_relative_to(Path("/home/user/project/file.txt"), Path("/home/user"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def make_unique_directory(parent: Union[str, Path]) -> Path:
    """
    Create a new, empty directory with a random name under parent.

    Args:
        parent: Directory to create the new directory in

    Returns:
        Path to the created directory
    """
    path = Path(parent) / str(uuid.uuid4())
    path.mkdir(parents=True)
    return path


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Args:
        path: Member path from archive
        destination: Extraction destination

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_zip(archive_path: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Extract a ZIP archive into destination.

    Unix permission bits stored in the archive are restored so that
    extracted executables stay executable.

    Args:
        archive_path: Path to the .zip file
        destination: Directory to extract to (created if missing)

    Returns:
        The destination directory

    Raises:
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.infolist()

            # Validate all paths first
            for member in members:
                _validate_archive_path(member.filename, destination)

            for member in members:
                extracted = zf.extract(member, destination)
                mode = (member.external_attr >> 16) & 0o777
                if mode and not IS_WINDOWS:
                    os.chmod(extracted, mode)
    except InsecureArchiveError:
        raise
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


def extract_tar(
    archive_path: Union[str, Path], destination: Union[str, Path], mode: str = "r:gz"
) -> Path:
    """
    Extract a tar archive into destination.

    Args:
        archive_path: Path to the tar file
        destination: Directory to extract to (created if missing)
        mode: tarfile open mode (default: gzip compressed)

    Returns:
        The destination directory

    Raises:
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(archive_path, mode) as tar:
            # Validate all paths first
            for member in tar.getmembers():
                _validate_archive_path(member.name, destination)

            # For older Python, we've already validated paths above
            if sys.version_info >= (3, 12):
                tar.extractall(destination, filter="data")
            else:
                tar.extractall(destination)
    except InsecureArchiveError:
        raise
    except (OSError, tarfile.TarError) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


# ============================================================================
# Safe File Operations
# ============================================================================


def safe_rmtree(path: Union[str, Path]) -> None:
    """
    Remove a directory tree if it exists.

    Args:
        path: Directory to remove

    Raises:
        FilesystemError: If path is not a directory or deletion fails
    """
    path = Path(path)

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, path, exc):
                """Error handler for Windows read-only files."""
                if not os.access(path, os.W_OK):
                    os.chmod(path, 0o777)
                    func(path)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


def recursive_copy(source: Union[str, Path], destination: Union[str, Path]) -> None:
    """
    Copy the contents of source into destination, preserving symlinks.

    Args:
        source: Source directory
        destination: Destination directory (created if missing)

    Raises:
        FilesystemError: If source is missing or not a directory
    """
    source = Path(source)
    destination = Path(destination)

    if not source.exists():
        raise FilesystemError(f"Source does not exist: {source}")

    if not source.is_dir():
        raise FilesystemError(f"Source is not a directory: {source}")

    try:
        shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise FilesystemError(f"Failed to copy '{source}' to '{destination}': {e}") from e


__all__ = [
    "FilesystemError",
    "ArchiveExtractionError",
    "InsecureArchiveError",
    "is_relative_to",
    "make_unique_directory",
    "extract_zip",
    "extract_tar",
    "safe_rmtree",
    "recursive_copy",
]
