# Dotfiler Configuration Loader
# Load, save, and edit the YAML configuration of a backup directory

import copy
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from dotfiler.config.defaults import DEFAULT_CONFIG, generate_default_config, get_package_template
from dotfiler.config.schema import DotfilerConfig, PackageConfig
from dotfiler.exceptions import ConfigError

CONFIG_FILE_NAME = "dotfiler.yaml"


def get_config_path(backup_dir: Optional[Path] = None) -> Path:
    """
    Get the path to the configuration file.

    Args:
        backup_dir: Backup directory. Defaults to the current directory.

    Returns:
        Path to the configuration file.
    """
    # Allow override via environment variable
    env_path = os.environ.get("DOTFILER_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return (backup_dir or Path.cwd()) / CONFIG_FILE_NAME


def load_config(config_path: Path) -> DotfilerConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file.

    Returns:
        DotfilerConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config file is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}\nRun 'dotfiler init' to create one.")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    # Merge with defaults for missing values
    merged = _merge_with_defaults(data)

    return DotfilerConfig.model_validate(merged)


def save_config(config: DotfilerConfig, config_path: Path) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Path to config file.

    Returns:
        Path: Path where config was saved.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_none=True, mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def create_config(backup_dir: Path, *, force: bool = False) -> tuple[Path, bool]:
    """
    Create a backup directory with a default configuration file.

    The directory must be empty unless force is set.

    Args:
        backup_dir: Directory to initialize.
        force: Write the configuration even if the directory has content.

    Returns:
        Tuple of (config_path, was_created).
    """
    config_path = get_config_path(backup_dir)

    if backup_dir.exists() and any(backup_dir.iterdir()) and not force:
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Path) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without loading it into the system.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    errors: list[str] = []

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        data = {}

    try:
        config = DotfilerConfig.model_validate(_merge_with_defaults(data))
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(l) for l in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    # Additional validation
    for key in config.packages:
        if config.get_package(key) is None:
            errors.append(f"packages: unknown package '{key}'")

    return len(errors) == 0, errors


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = copy.deepcopy(DEFAULT_CONFIG)

    if "packages" in data:
        result["packages"] = data["packages"]

    if "custom_packages" in data:
        result["custom_packages"] = data["custom_packages"]

    if "options" in data:
        result["options"] = {**result["options"], **data["options"]}

    if "output" in data:
        result["output"] = {**result["output"], **data["output"]}

    return result


def add_packages(config: DotfilerConfig, keys: list[str]) -> list[str]:
    """
    Enable packages, keeping the order they are given in.

    Already enabled packages are left where they are.

    Args:
        config: Configuration to edit in place.
        keys: Package keys to enable.

    Returns:
        Keys that do not name any known package and were not added.
    """
    unknown: list[str] = []
    for key in keys:
        if config.get_package(key) is None:
            unknown.append(key)
        elif key not in config.packages:
            config.packages.append(key)
    return unknown


def remove_packages(config: DotfilerConfig, keys: list[str]) -> list[str]:
    """
    Disable packages.

    Args:
        config: Configuration to edit in place.
        keys: Package keys to disable.

    Returns:
        Keys that were not enabled.
    """
    missing: list[str] = []
    for key in keys:
        if key in config.packages:
            config.packages = [k for k in config.packages if k != key]
        else:
            missing.append(key)
    return missing


def add_custom_package(config: DotfilerConfig, key: str, *, force: bool = False) -> PackageConfig:
    """
    Define a new empty custom package and enable it.

    Args:
        config: Configuration to edit in place.
        key: Key of the new package.
        force: Replace an existing custom package with the same key.

    Returns:
        The new package definition.

    Raises:
        ConfigError: If the key is already defined and force is not set.
    """
    if key in config.custom_packages and not force:
        raise ConfigError(f"Package '{key}' already exists")

    package = PackageConfig.model_validate(get_package_template(key))
    config.custom_packages[key] = package
    if key not in config.packages:
        config.packages.append(key)
    return package
