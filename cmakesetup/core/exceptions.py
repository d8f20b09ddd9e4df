"""
Centralized exception hierarchy for cmake-setup.

Every error raised by the package derives from CMakeSetupError so callers
(and the CLI) can fail the run with a single except clause.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class CMakeSetupError(Exception):
    """Base exception for all cmake-setup errors."""

    pass


# ============================================================================
# Selection Exceptions
# ============================================================================


class NotFoundError(CMakeSetupError):
    """Raised when no asset matches the current platform and architectures."""

    pass


class VersionNotFoundError(NotFoundError):
    """Raised when no release matches the requested version."""

    def __init__(self, requested: str):
        self.requested = requested
        super().__init__(f"Unable to find version matching {requested}")


class UnsupportedFormatError(CMakeSetupError):
    """Raised when the archive type of a download URL is not recognized."""

    pass


class LayoutError(CMakeSetupError):
    """Raised when an extracted archive does not have the expected layout."""

    pass


class UnsupportedPlatformError(CMakeSetupError):
    """Raised when the host operating system or architecture is unknown."""

    pass


# ============================================================================
# Collaborator Exceptions
# ============================================================================


class ReleaseIndexError(CMakeSetupError):
    """Raised when the release index cannot be queried."""

    pass


class ToolCacheError(CMakeSetupError):
    """Raised when a directory cannot be stored in the tool cache."""

    pass


class ConfigurationError(CMakeSetupError):
    """Raised when configuration inputs are invalid."""

    pass
