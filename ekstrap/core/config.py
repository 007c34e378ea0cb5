import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError

from ekstrap.constants import (
    DEFAULT_OUTPUT_PATH,
    ENI_TABLE_URL,
    METADATA_TIMEOUT_SECONDS,
    METADATA_URL,
    PRICING_URL,
    REQUEST_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load YAML configuration and merge it over built-in defaults."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS = {
            "eni_table_url": ENI_TABLE_URL,
            "pricing_url": PRICING_URL,
            "output_path": DEFAULT_OUTPUT_PATH,
            "request_timeout": REQUEST_TIMEOUT_SECONDS,
            "metadata_url": METADATA_URL,
            "metadata_timeout": METADATA_TIMEOUT_SECONDS,
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks EKSTRAP_CONFIG env var,
            then falls back to ekstrap.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with all variable interpolations resolved,
            or an empty dict if the file does not exist

        Raises
        ------
        ValueError
            If the file is not valid YAML or variables cannot be resolved
        RuntimeError
            If the file exists but cannot be read
        """
        if config_path is None:
            config_path = os.environ.get("EKSTRAP_CONFIG", "ekstrap.yaml")

        config_file = Path(config_path)

        if not config_file.exists():
            return {}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {}

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except InterpolationResolutionError as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ValueError(f"Configuration in {config_file} must be a mapping")

        return config

    def get_settings(self, config: dict[str, Any] | None = None) -> dict[str, Any]:
        """Merge configuration over the built-in defaults.

        Parameters
        ----------
        config : dict[str, Any] | None
            Configuration from YAML

        Returns
        -------
        dict[str, Any]
            Built-in defaults overridden by configured values
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        for key, value in (config or {}).items():
            merged[key] = value

        return merged

    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate configuration value types.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ValueError
            If configuration is invalid
        """
        string_fields = ("eni_table_url", "pricing_url", "output_path", "metadata_url")

        for field in string_fields:
            if field in config and (not isinstance(config[field], str) or not config[field]):
                raise ValueError(f"{field} must be a non-empty string")

        for field in ("request_timeout", "metadata_timeout"):
            if field not in config:
                continue

            value = config[field]

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{field} must be a number")

            if value <= 0:
                raise ValueError(f"{field} must be positive")

        unknown = set(config) - set(self.BUILT_IN_DEFAULTS)

        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", sorted(unknown))
