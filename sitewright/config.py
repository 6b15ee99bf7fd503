# sitewright/config.py
"""
Configuration management for sitewright.
Uses TOML format for configuration files, overridden by environment variables.
"""
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from sitewright import constants
from sitewright.constants import CONFIG_FILE
from sitewright.utils.logging import get_logger

logger = get_logger(__name__)


# --- Configuration Models ---

class OutputConfig(BaseModel):
    """Where generated projects and download archives are placed."""
    root: Path = Field(constants.DEFAULT_OUTPUT_ROOT, description="Base directory for output directories")
    download_dir: Path = Field(constants.DEFAULT_DOWNLOAD_DIR, description="Directory for zip archives")


class BuildConfig(BaseModel):
    """Framework project build settings."""
    install_command: List[str] = Field(default_factory=lambda: list(constants.INSTALL_COMMAND))
    build_command: List[str] = Field(default_factory=lambda: list(constants.BUILD_COMMAND))
    install_timeout: float = Field(constants.INSTALL_TIMEOUT, gt=0, description="Seconds before install is killed")
    build_timeout: float = Field(constants.BUILD_TIMEOUT, gt=0, description="Seconds before build is killed")
    manifest_file: str = Field(constants.MANIFEST_FILE)
    dependency_dir: str = Field(constants.DEPENDENCY_DIR)
    artifact_dir: str = Field(constants.ARTIFACT_DIR)


class AppConfig(BaseModel):
    """Application configuration settings."""
    output: OutputConfig = Field(default_factory=OutputConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    debug: bool = Field(False, description="Enable debug mode")


# --- Configuration Manager ---

class ConfigManager:
    """Loads configuration from defaults, the TOML file and the environment, in that order."""

    def __init__(self, config_file: Path = CONFIG_FILE):
        self._config: AppConfig = AppConfig()
        self.config_file = Path(config_file)

    def load_config(self) -> AppConfig:
        """Load the TOML file (if present) and then apply environment overrides."""
        self._config = AppConfig()

        if self.config_file.exists():
            self._load_file()
        else:
            logger.debug(f"Configuration file not found at '{self.config_file}'. Using defaults.")

        self._load_environment()
        return self._config

    def _load_file(self) -> None:
        try:
            logger.debug(f"Loading configuration from: {self.config_file}")
            with open(self.config_file, "rb") as f:  # TOML requires binary read mode
                config_data = tomllib.load(f)
            self._config = AppConfig(**config_data)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error decoding TOML configuration file ({self.config_file}): {e}")
            logger.error("Using default configuration and environment variables.")
            self._config = AppConfig()
        except PydanticValidationError as e:
            logger.error(f"Invalid values in configuration file ({self.config_file}): {e}")
            logger.error("Using default configuration and environment variables.")
            self._config = AppConfig()
        except OSError as e:
            logger.error(f"I/O error accessing configuration file: {e}")
            self._config = AppConfig()

    def _load_environment(self) -> None:
        """Apply SITEWRIGHT_* environment variables (and a .env file if present)."""
        load_dotenv()

        output_root = os.getenv(constants.ENV_OUTPUT_ROOT)
        if output_root:
            self._config.output.root = Path(output_root)

        download_dir = os.getenv(constants.ENV_DOWNLOAD_DIR)
        if download_dir:
            self._config.output.download_dir = Path(download_dir)

        for env_name, attr in (
            (constants.ENV_INSTALL_TIMEOUT, "install_timeout"),
            (constants.ENV_BUILD_TIMEOUT, "build_timeout"),
        ):
            raw = os.getenv(env_name)
            if not raw:
                continue
            try:
                value = float(raw)
            except ValueError:
                logger.warning(f"Ignoring {env_name}={raw!r}: not a number")
                continue
            if value <= 0:
                logger.warning(f"Ignoring {env_name}={raw!r}: must be positive")
                continue
            setattr(self._config.build, attr, value)

        debug = os.getenv(constants.ENV_DEBUG)
        if debug:
            self._config.debug = debug.strip().lower() in ("1", "true", "yes", "on")

    def save_config(self) -> Path:
        """Save the current configuration to the config file (as TOML)."""
        config_dict: Dict[str, Any] = self._config.model_dump(mode="json")
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "wb") as f:
            tomli_w.dump(config_dict, f)
        logger.info(f"Configuration saved to {self.config_file}")
        return self.config_file

    @property
    def config(self) -> AppConfig:
        """Provides access to the current application configuration."""
        return self._config


# --- Global Instance ---

config_manager = ConfigManager()
config_manager.load_config()


def get_config() -> AppConfig:
    """Return the process-wide configuration."""
    return config_manager.config


def output_root(override: Optional[Path] = None) -> Path:
    """Absolute output root, preferring an explicit override."""
    root = Path(override) if override is not None else config_manager.config.output.root
    return root.expanduser().resolve()
