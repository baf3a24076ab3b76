# Dotfiler Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from dotfiler.config.defaults import APPLICATIONS, DEFAULT_CONFIG, generate_default_config
from dotfiler.config.loader import (
    add_custom_package,
    add_packages,
    create_config,
    get_config_path,
    load_config,
    remove_packages,
    save_config,
    validate_config_file,
)
from dotfiler.config.schema import (
    DotfilerConfig,
    FileSyncConfig,
    OutputConfig,
    PackageConfig,
    SyncOptions,
)

__all__ = [
    # Schema
    "DotfilerConfig",
    "PackageConfig",
    "FileSyncConfig",
    "SyncOptions",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "create_config",
    "validate_config_file",
    "add_packages",
    "remove_packages",
    "add_custom_package",
    # Defaults
    "APPLICATIONS",
    "DEFAULT_CONFIG",
    "generate_default_config",
]
