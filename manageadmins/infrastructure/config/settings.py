"""Provides functions for loading configuration and building the DashboardConfig.

Supports loading from a YAML configuration file (~/.manageadmins/config.yaml),
.env files and environment variables. Settings are returned as plain values
and turned into an immutable DashboardConfig once per invocation.
"""

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from manageadmins.domain.models.errors import ConfigurationError

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".manageadmins"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "MANAGEADMINS_"
API_KEY_ENV_VAR = "MERAKI_DASHBOARD_API_KEY"

API_BASE_URL = "https://api.meraki.com/api/v1"
API_MAX_RETRIES = 3
API_CONNECT_TIMEOUT_S = 60.0
API_TRANSMIT_TIMEOUT_S = 60.0
API_STATUS_RATE_LIMIT = 429
API_MAX_RETRY_AFTER_S = 300.0


@dataclass(frozen=True)
class DashboardConfig:
    """Immutable settings shared by the transport and the retry executor."""
    api_key: str
    base_url: str = API_BASE_URL
    max_retries: int = API_MAX_RETRIES
    connect_timeout_s: float = API_CONNECT_TIMEOUT_S
    transmit_timeout_s: float = API_TRANSMIT_TIMEOUT_S
    rate_limit_status: int = API_STATUS_RATE_LIMIT
    max_retry_after_s: float = API_MAX_RETRY_AFTER_S

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return (
            f"DashboardConfig(base_url={self.base_url!r}, max_retries={self.max_retries}, "
            f"connect_timeout_s={self.connect_timeout_s}, transmit_timeout_s={self.transmit_timeout_s})"
        )


def _flatten(mapping: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML sections into dotted keys, e.g. {'api': {'base_url': x}} -> {'api.base_url': x}."""
    flat: Dict[str, Any] = {}
    for key, value in mapping.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def load_environment(env_file: Optional[Path] = None) -> None:
    """Loads a .env file into os.environ without overriding real environment variables."""
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path and load_dotenv(dotenv_path=dotenv_path, override=False):
        logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug(".env file not found at or above current directory.")


def load_settings(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> Dict[str, Any]:
    """Loads settings from the YAML file and the .env file.

    Priority order (highest to lowest):
    1. Environment Variables (resolved later by get_setting)
    2. .env file
    3. YAML configuration file

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).

    Returns:
        A flat dictionary of dotted keys to values from the YAML file.

    Raises:
        ConfigurationError: If the YAML file exists but cannot be parsed.
    """
    settings: Dict[str, Any] = {}

    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load or parse YAML config {config_file}: {e}") from e
        if isinstance(yaml_config, dict):
            settings.update(_flatten(yaml_config))
            logger.info(f"Loaded configuration from YAML: {config_file}")
        elif yaml_config is not None:
            logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    load_environment(env_file)
    return settings


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value


def get_setting(settings: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Gets a setting by dotted key.

    Priority:
    1. Environment variable MANAGEADMINS_<KEY> (dots become underscores)
    2. Loaded settings
    3. Default value
    """
    env_key = ENV_PREFIX + key.upper().replace('.', '_')
    if env_key in os.environ:
        return _coerce(os.environ[env_key])
    if key in settings:
        return settings[key]
    return default


def _positive_number(settings: Mapping[str, Any], key: str, default: float) -> float:
    value = get_setting(settings, key, default)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Setting '{key}' must be a number, got {value!r}") from e
    if not math.isfinite(number) or number <= 0:
        raise ConfigurationError(f"Setting '{key}' must be a positive number, got {value!r}")
    return number


def build_dashboard_config(api_key: Optional[str], settings: Mapping[str, Any]) -> DashboardConfig:
    """Builds the immutable DashboardConfig for one invocation.

    Raises:
        ConfigurationError: If the API key is missing or a setting is invalid.
    """
    if not api_key or not api_key.strip():
        raise ConfigurationError("A dashboard API key is required")

    base_url = str(get_setting(settings, 'api.base_url', API_BASE_URL)).rstrip('/')
    if not base_url.startswith(("https://", "http://")):
        raise ConfigurationError(f"Setting 'api.base_url' must be an http(s) URL, got {base_url!r}")

    max_retries = get_setting(settings, 'api.max_retries', API_MAX_RETRIES)
    if isinstance(max_retries, bool) or not isinstance(max_retries, int) or max_retries < 0:
        raise ConfigurationError(f"Setting 'api.max_retries' must be a non-negative integer, got {max_retries!r}")

    config = DashboardConfig(
        api_key=api_key.strip(),
        base_url=base_url,
        max_retries=max_retries,
        connect_timeout_s=_positive_number(settings, 'api.connect_timeout_s', API_CONNECT_TIMEOUT_S),
        transmit_timeout_s=_positive_number(settings, 'api.transmit_timeout_s', API_TRANSMIT_TIMEOUT_S),
        max_retry_after_s=_positive_number(settings, 'api.max_retry_after_s', API_MAX_RETRY_AFTER_S),
    )
    logger.debug(f"Built {config!r}")
    return config
