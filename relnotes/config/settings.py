"""Configuration management for relnotes."""

import json
import logging
import os
from pathlib import Path
from typing import Optional, List
from pydantic import validator
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationError
from ..git.client import DEFAULT_BOT_NAMES


ENV_PREFIX = "RELNOTES_"


class Config(BaseSettings):
    """Configuration settings for relnotes."""

    repository_path: Optional[str] = None
    git_executable: str = "git"
    gh_executable: str = "gh"
    bot_names: List[str] = list(DEFAULT_BOT_NAMES)
    command_timeout: float = 300
    workers: int = 1
    skip_failed_prs: bool = False

    @validator('command_timeout')
    def timeout_must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("command_timeout must be positive")
        return v

    @validator('workers')
    def workers_at_least_one(cls, v):
        if v < 1:
            raise ValueError("workers must be at least 1")
        return v

    def working_directory(self, repository: Optional[str] = None) -> str:
        """Resolve the repository directory commands run in.

        Args:
            repository: Path given on the command line, may be empty

        Returns:
            The given path, else the configured path, else the current directory
        """
        return repository or self.repository_path or os.getcwd()

    class Config:
        env_prefix = ENV_PREFIX
        case_sensitive = False


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading config file {config_path}: {e}")
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
    return data


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "relnotes.json",
        ".relnotes.json",
        "~/.relnotes.json",
        "~/.config/relnotes/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from a JSON file and environment variables.

    Environment variables take precedence over values from the file.

    Args:
        config_file: Optional path to JSON config file

    Returns:
        Configuration object

    Raises:
        ConfigurationError: If the explicit config file cannot be loaded or
            the resulting settings are invalid
    """
    config_data = {}

    if config_file:
        config_data.update(load_json_config(config_file))
    else:
        found = find_config_file()
        if found:
            try:
                config_data.update(load_json_config(found))
            except ConfigurationError as e:
                logging.getLogger(__name__).warning(f"Ignoring config file: {e}")

    # Init arguments beat the environment in pydantic-settings, so drop
    # file values that an environment variable overrides
    config_data = {
        key: value for key, value in config_data.items()
        if f"{ENV_PREFIX}{key}".upper() not in os.environ
    }

    try:
        return Config(**config_data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
