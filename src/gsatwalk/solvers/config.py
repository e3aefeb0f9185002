"""
Configuration management for gsatwalk runs.
Uses OmegaConf for defaults, YAML files and dotted-key overrides.
"""

import copy
import logging
import os
from typing import Any

import omegaconf
from omegaconf import DictConfig, OmegaConf

from gsatwalk.utils.exceptions import ConfigurationError

# Set up logging
logger = logging.getLogger(__name__)


def _select(config: DictConfig, key: str, default: Any = None) -> Any:
    try:
        value = OmegaConf.select(config, key)
    except (omegaconf.errors.OmegaConfBaseException, KeyError):
        return default
    return default if value is None else value


class SolverConfig:
    """
    Configuration manager for the local-search solver.
    Handles loading, merging, validating and accessing parameters.
    """

    DEFAULT_CONFIG = {
        "solver": {
            "name": "walksat",
            "noise_level": 10,
            "noise_start": None,
            "anneal_flips": 0,
            "max_flips": 100000,
            "max_tries": 1,
            "timeout": 30.0,
            "progress_interval": 1000,
            "check_consistency": False,
        },
        "problem": {
            "format": "lines",
            "seed": None,
        },
        "logging": {
            "level": "INFO",
            "file": None,
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "trace_dir": None,
            "trace_format": "json",
        },
    }

    def __init__(self, config_path: str | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a YAML configuration file

        Raises:
            ConfigurationError: If the file is missing or invalid
        """
        self.config: DictConfig = OmegaConf.create(self.DEFAULT_CONFIG)

        if config_path:
            self._load_config_file(config_path)

    def _load_config_file(self, config_path: str) -> None:
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            file_config = OmegaConf.load(config_path)
            merged = OmegaConf.merge(self.config, file_config)
        except (omegaconf.errors.OmegaConfBaseException, OSError, ValueError) as e:
            raise ConfigurationError(f"Error loading configuration file {config_path}: {e}")

        self._commit(merged)
        logger.debug(f"Loaded configuration from {config_path}")

    def _commit(self, candidate: DictConfig) -> None:
        # Only a validated candidate replaces the current configuration
        self.validate(candidate)
        self.config = candidate

    def update(self, config_dict: dict[str, Any]) -> None:
        """
        Update the configuration with the given (possibly nested) dictionary.

        Raises:
            ConfigurationError: If the result is invalid; nothing is changed
        """
        try:
            merged = OmegaConf.merge(self.config, config_dict)
        except omegaconf.errors.OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid configuration update: {e}")
        self._commit(merged)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.
        Supports dot notation for nested keys (e.g., "solver.timeout").

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return _select(self.config, key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key.
        Supports dot notation for nested keys (e.g., "solver.timeout").

        Raises:
            ConfigurationError: If the result is invalid; nothing is changed
        """
        candidate = copy.deepcopy(self.config)
        try:
            OmegaConf.update(candidate, key, value, merge=True)
        except omegaconf.errors.OmegaConfBaseException as e:
            raise ConfigurationError(f"Cannot set {key}: {e}")
        self._commit(candidate)

    @staticmethod
    def validate(config: DictConfig) -> None:
        """
        Check solver parameters for sensible values.

        Raises:
            ConfigurationError: On the first invalid parameter
        """
        for key in ("solver.noise_level", "solver.noise_start"):
            value = _select(config, key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
                raise ConfigurationError(f"{key} must be an integer in [0, 100], got {value!r}")

        for key in ("solver.max_flips", "solver.max_tries"):
            value = _select(config, key)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{key} must be a positive integer, got {value!r}")

        timeout = _select(config, "solver.timeout")
        if timeout is not None and (
            isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
        ):
            raise ConfigurationError(f"solver.timeout must be positive, got {timeout!r}")

        for key in ("solver.anneal_flips", "solver.progress_interval"):
            value = _select(config, key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"{key} must be a non-negative integer, got {value!r}")

        level = _select(config, "logging.level")
        if isinstance(level, str):
            known_level = isinstance(logging.getLevelName(level.upper()), int)
        else:
            known_level = isinstance(level, int) and not isinstance(level, bool)
        if not known_level:
            raise ConfigurationError(f"logging.level must be a logging level name, got {level!r}")

        trace_format = _select(config, "logging.trace_format")
        if trace_format not in ("json", "csv"):
            raise ConfigurationError(
                f"logging.trace_format must be 'json' or 'csv', got {trace_format!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the configuration to a dictionary.
        """
        return OmegaConf.to_container(self.config, resolve=True)

    def save(self, file_path: str) -> None:
        """
        Save the configuration to a YAML file.
        """
        os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
        OmegaConf.save(self.config, file_path)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


# Create a global configuration instance
config = SolverConfig()


def load_config(config_path: str | None = None) -> SolverConfig:
    """
    Load configuration from a file and make it the global configuration.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration instance
    """
    global config
    if config_path:
        config = SolverConfig(config_path)
    return config


def get_config() -> SolverConfig:
    """
    Get the global configuration instance.
    """
    return config
