# ghbackup Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from ghbackup.config.defaults import DEFAULT_CONFIG, generate_default_config
from ghbackup.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from ghbackup.config.schema import (
    BackupConfig,
    FilesConfig,
    GitHubConfig,
    OutputConfig,
    RepositoryConfig,
    ScheduleConfig,
)

__all__ = [
    # Schema
    "BackupConfig",
    "GitHubConfig",
    "RepositoryConfig",
    "FilesConfig",
    "ScheduleConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
