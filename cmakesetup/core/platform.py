"""
Platform detection for cmake-setup.

This module maps the running host and free-form asset identifiers onto two
closed enumerations, OSPlatform and Arch, so that asset selection compares
enum members rather than raw strings.

Usage:
    from cmakesetup.core.platform import Arch, detect_os_platform

    platform = detect_os_platform()
    candidates = default_arch_candidates(use_32bit=False)
"""

import functools
import platform
from enum import Enum
from typing import List

from cmakesetup.core.exceptions import UnsupportedPlatformError


class OSPlatform(str, Enum):
    """Operating systems CMake publishes binary archives for."""

    LINUX = "linux"
    DARWIN = "darwin"
    WIN32 = "win32"

    @property
    def uses_bundle_layout(self) -> bool:
        """True when binaries ship inside a macOS application bundle."""
        return self is OSPlatform.DARWIN

    def __str__(self) -> str:
        return self.value


class Arch(str, Enum):
    """
    CPU architectures CMake publishes binary archives for.

    Aliases used by other tools are accepted by value lookup:

        >>> Arch("x64")
        <Arch.X86_64: 'x86_64'>
        >>> Arch("aarch64")
        <Arch.ARM64: 'arm64'>
    """

    X86_64 = "x86_64"
    X86 = "x86"
    ARM64 = "arm64"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _ARCH_ALIASES.get(value.lower())
        return None

    def __str__(self) -> str:
        return self.value


_ARCH_ALIASES = {
    "x86_64": Arch.X86_64,
    "x64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "x86": Arch.X86,
    "i386": Arch.X86,
    "i686": Arch.X86,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
}


@functools.lru_cache(maxsize=1)
def detect_os_platform() -> OSPlatform:
    """
    Detect the operating system of the running process.

    This function is cached - it only runs detection once per process.

    Returns:
        OSPlatform of the host

    Raises:
        UnsupportedPlatformError: If the OS has no CMake binary releases
    """
    system = platform.system().lower()

    if system == "linux":
        return OSPlatform.LINUX
    elif system == "darwin":
        return OSPlatform.DARWIN
    elif system == "windows":
        return OSPlatform.WIN32
    else:
        raise UnsupportedPlatformError(f"Unsupported operating system: {system}")


@functools.lru_cache(maxsize=1)
def detect_arch() -> Arch:
    """
    Detect the CPU architecture of the running process.

    Returns:
        Arch of the host

    Raises:
        UnsupportedPlatformError: If the architecture is not recognized
    """
    machine = platform.machine()
    try:
        return Arch(machine)
    except ValueError:
        raise UnsupportedPlatformError(f"Unsupported architecture: {machine}")


def default_arch_candidates(use_32bit: bool = False) -> List[Arch]:
    """
    Get the architecture candidates to try, in priority order.

    Native builds are preferred; arm64 hosts fall back to x86_64 builds
    (run under emulation), and x86_64 hosts fall back to 32-bit builds
    for old releases that shipped no 64-bit archive.

    Args:
        use_32bit: Only accept 32-bit x86 builds

    Returns:
        Ordered list of acceptable architectures
    """
    if use_32bit:
        return [Arch.X86]

    if detect_arch() is Arch.ARM64:
        return [Arch.ARM64, Arch.X86_64]

    return [Arch.X86_64, Arch.X86]


def parse_arch_candidates(values: List[str]) -> List[Arch]:
    """
    Map user-supplied architecture strings onto Arch members.

    Args:
        values: Architecture identifiers (aliases allowed)

    Returns:
        List of Arch, in the given order

    Raises:
        ValueError: If any identifier is unknown
    """
    candidates = []
    for value in values:
        try:
            candidates.append(Arch(value.strip()))
        except ValueError:
            choices = ", ".join(a.value for a in Arch)
            raise ValueError(
                f"Unknown architecture '{value}' (expected one of: {choices})"
            )
    return candidates


def clear_platform_cache():
    """
    Clear the platform detection cache.

    Useful for testing or when platform information changes.
    """
    detect_os_platform.cache_clear()
    detect_arch.cache_clear()


__all__ = [
    "OSPlatform",
    "Arch",
    "detect_os_platform",
    "detect_arch",
    "default_arch_candidates",
    "parse_arch_candidates",
    "clear_platform_cache",
]
