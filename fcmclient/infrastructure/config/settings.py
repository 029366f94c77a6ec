"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
YAML configuration file (~/.fcmclient/config.yaml). The client itself takes
plain constructor arguments; these helpers exist for host applications that
want to build a client from configuration.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".fcmclient"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"

DEFAULT_SERVER_URL = "https://fcm.googleapis.com/fcm/send"
DEFAULT_CONNECTION_TIMEOUT = 5.0
DEFAULT_LOG_LEVEL = "INFO"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys ('fcm.api_key')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def _env_key(key: str) -> str:
    return key.upper().replace(".", "_")


def load_configuration(
    config_file: Path = DEFAULT_CONFIG_FILE,
    env_file: Optional[Path] = None,
    force: bool = False,
) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values passed to ``get_config``

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
        force: Reload even if configuration was already loaded.
    """
    global _config, _loaded
    if _loaded and not force:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. YAML file (lowest priority)
    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file; override=False keeps real environment variables on top
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
        else:
            logger.debug(f"No variables loaded from {dotenv_path}")

    # 3. Environment variables are read in get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")


def get_config(key: str, default: Any = None, raw: bool = False) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (``fcm.api_key`` is read from ``FCM_API_KEY``)
    3. YAML config
    4. Default value

    Args:
        key: The configuration key
        default: Default value if the key is not found
        raw: Return environment values as strings, without type conversion

    Returns:
        The configuration value
    """
    if not _loaded:
        load_configuration()

    if key in _test_config:
        return _test_config[key]

    env_key = _env_key(key)
    if env_key in os.environ:
        value = os.environ[env_key]
        if raw:
            return value
        # Try to convert common types
        if value.lower() == "true":
            return True
        elif value.lower() == "false":
            return False
        try:
            if "." in value:
                return float(value)
            else:
                return int(value)
        except (ValueError, TypeError):
            return value

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def get_fcm_api_key() -> Optional[str]:
    """FCM server key from FCM_API_KEY or fcm.api_key."""
    key = get_config("fcm.api_key", raw=True)
    return str(key) if key is not None else None


def get_server_url() -> str:
    return str(get_config("fcm.server_url", DEFAULT_SERVER_URL))


def get_connection_timeout() -> float:
    """Connect/TLS/pool timeout in seconds, falling back to the default on bad values."""
    value = get_config("fcm.connection_timeout", DEFAULT_CONNECTION_TIMEOUT)
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid fcm.connection_timeout '{value}'. Using {DEFAULT_CONNECTION_TIMEOUT}s.")
        return DEFAULT_CONNECTION_TIMEOUT
    if timeout <= 0:
        logger.warning(f"Non-positive fcm.connection_timeout '{value}'. Using {DEFAULT_CONNECTION_TIMEOUT}s.")
        return DEFAULT_CONNECTION_TIMEOUT
    return timeout


def get_log_level() -> str:
    return str(get_config("logging.level", DEFAULT_LOG_LEVEL)).upper()


def set_config(key: str, value: Any) -> None:
    """Sets a configuration value for the current process.

    Environment variables and test overrides still take precedence.

    Args:
        key: Configuration key (e.g., 'logging.level')
        value: Value to set
    """
    if not _loaded:
        load_configuration()
    logger.debug(f"Setting config: {key}, type: {type(value).__name__}")
    _config[key] = value


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration keys: {sorted(config_dict)}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
