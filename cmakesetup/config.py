"""
Configuration for cmake-setup.

Settings are merged from four sources, later ones winning:

    1. defaults
    2. YAML configuration file (cmake-setup.yaml)
    3. environment (GitHub Actions inputs, GITHUB_TOKEN)
    4. command-line overrides

Example cmake-setup.yaml:

    cmake_version: "3.28.x"
    use_32bit: false
    arch_candidates: [arm64, x86_64]
    tool_cache_dir: /opt/hostedtoolcache
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from cmakesetup.core.exceptions import ConfigurationError
from cmakesetup.core.platform import Arch, default_arch_candidates, parse_arch_candidates

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "cmake-setup.yaml"

# GitHub Actions exposes `with:` inputs as INPUT_<NAME>, upper-cased
INPUT_ENV_KEYS = {
    "cmake_version": "INPUT_CMAKE-VERSION",
    "github_api_token": "INPUT_GITHUB-API-TOKEN",
    "use_32bit": "INPUT_USE-32BIT",
}

KNOWN_KEYS = {
    "cmake_version",
    "github_api_token",
    "use_32bit",
    "arch_candidates",
    "tool_cache_dir",
}


@dataclass
class SetupConfig:
    """
    Resolved settings for one setup run.

    Attributes:
        cmake_version: Version request ('latest', '3.28.x', '3.28.1', ...)
        github_api_token: Token for the GitHub API, if any
        use_32bit: Only accept 32-bit x86 builds
        arch_candidates: Explicit architecture priority list (empty: default)
        tool_cache_dir: Tool cache root (None: runner/user default)
    """

    cmake_version: str = "latest"
    github_api_token: Optional[str] = None
    use_32bit: bool = False
    arch_candidates: List[Arch] = field(default_factory=list)
    tool_cache_dir: Optional[Path] = None

    def effective_arch_candidates(self) -> List[Arch]:
        """Get the architectures to try, in priority order."""
        if self.arch_candidates:
            return list(self.arch_candidates)
        return default_arch_candidates(self.use_32bit)


def parse_bool(value: Any) -> bool:
    """
    Interpret a configuration value as a boolean.

    Raises:
        ConfigurationError: If value is not a recognised boolean
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "on"):
        return True
    if text in ("false", "0", "no", "off", ""):
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r}")


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, or invalid
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Expected a mapping at top level of {config_file}")

    unknown = set(config) - KNOWN_KEYS
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")

    return {key: value for key, value in config.items() if key in KNOWN_KEYS}


def _read_environment(env: Mapping[str, str]) -> Dict[str, Any]:
    """Collect settings provided through the environment."""
    values: Dict[str, Any] = {}

    for key, env_key in INPUT_ENV_KEYS.items():
        value = env.get(env_key, "").strip()
        if value:
            values[key] = value

    if "github_api_token" not in values and env.get("GITHUB_TOKEN"):
        values["github_api_token"] = env["GITHUB_TOKEN"]

    return values


def _apply(config: SetupConfig, values: Dict[str, Any]) -> None:
    """Apply raw settings onto config, validating each one."""
    for key, value in values.items():
        if value is None:
            continue

        if key == "cmake_version":
            config.cmake_version = str(value).strip() or "latest"
        elif key == "github_api_token":
            config.github_api_token = str(value) or None
        elif key == "use_32bit":
            config.use_32bit = parse_bool(value)
        elif key == "arch_candidates":
            if isinstance(value, str):
                value = [v for v in value.split(",") if v.strip()]
            try:
                config.arch_candidates = parse_arch_candidates([str(v) for v in value])
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid arch_candidates: {e}") from e
        elif key == "tool_cache_dir":
            config.tool_cache_dir = Path(value).expanduser()


def load_config(
    config_file: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SetupConfig:
    """
    Build the configuration of a run.

    Args:
        config_file: YAML file to read; when None, ./cmake-setup.yaml is
            read if it exists
        env: Environment to read (default: os.environ)
        overrides: Command-line values; None entries are ignored

    Returns:
        Resolved SetupConfig

    Raises:
        ConfigurationError: If any source holds an invalid value
    """
    env = os.environ if env is None else env

    if config_file is not None:
        file_values = load_yaml_config(Path(config_file), required=True)
    else:
        file_values = load_yaml_config(Path.cwd() / DEFAULT_CONFIG_FILE)

    config = SetupConfig()
    _apply(config, file_values)
    _apply(config, _read_environment(env))
    _apply(config, overrides or {})

    logger.debug(
        f"Configuration: version={config.cmake_version} use_32bit={config.use_32bit} "
        f"arch_candidates={[str(a) for a in config.arch_candidates]} "
        f"tool_cache_dir={config.tool_cache_dir}"
    )
    return config


__all__ = [
    "SetupConfig",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "load_yaml_config",
    "parse_bool",
]
