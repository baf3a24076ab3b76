# Dotfiler Configuration Schema
# Pydantic models for YAML configuration validation

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from dotfiler.config.defaults import APPLICATIONS
from dotfiler.utils.platform import PLATFORMS, get_platform_value, is_platform_match


def _check_platforms(value: Optional[list[str]]) -> Optional[list[str]]:
    if value is None:
        return None
    unknown = [p for p in value if p not in PLATFORMS]
    if unknown:
        raise ValueError(f"Unknown platforms {unknown}; expected any of {list(PLATFORMS)}")
    return value


def _check_platform_keys(value):
    if isinstance(value, dict):
        _check_platforms(list(value.keys()))
    return value


class FileSyncConfig(BaseModel):
    """A single file or directory of a package."""

    path: str = Field(description="Path relative to the package's restore directory")
    save_as: Union[str, dict[str, str], None] = Field(
        default=None,
        description="Alternative name inside the backup, optionally per platform",
    )
    use_copy: bool = Field(default=False, description="Copy instead of link")
    platforms: Optional[list[str]] = Field(
        default=None,
        description="Platform filter: macos, linux, windows. None = all platforms.",
    )

    @field_validator("path")
    @classmethod
    def check_path(cls, v: str) -> str:
        """Reject empty paths."""
        if not v.strip():
            raise ValueError("File path must not be empty")
        return v

    @field_validator("platforms")
    @classmethod
    def check_platforms(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Only accept known platform tags."""
        return _check_platforms(v)

    @field_validator("save_as")
    @classmethod
    def check_save_as(cls, v):
        """Only accept known platform tags as keys."""
        return _check_platform_keys(v)

    def resolved_save_as(self) -> Optional[str]:
        """The backup name for the current platform."""
        return get_platform_value(self.save_as)


class PackageConfig(BaseModel):
    """Declarative definition of a package."""

    name: str = Field(description="Display name, also the package's backup subdirectory")
    description: str = Field(default="", description="Human-readable description")
    platforms: Optional[list[str]] = Field(
        default=None,
        description="Platform filter: macos, linux, windows. None = all platforms.",
    )
    restore_dir: Union[str, dict[str, str], None] = Field(
        default=None,
        description="Restore directory, optionally per platform. Defaults to the restore root.",
    )
    files: list[Union[str, FileSyncConfig]] = Field(default_factory=list, description="Files to sync")

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        """Package names become directory names."""
        if not v.strip() or "/" in v or "\\" in v:
            raise ValueError("Package name must be a non-empty single path segment")
        return v

    @field_validator("platforms")
    @classmethod
    def check_platforms(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Only accept known platform tags."""
        return _check_platforms(v)

    @field_validator("restore_dir")
    @classmethod
    def check_restore_dir(cls, v):
        """Only accept known platform tags as keys."""
        return _check_platform_keys(v)

    def get_files(self) -> list[FileSyncConfig]:
        """All file entries as FileSyncConfig objects."""
        return [FileSyncConfig(path=f) if isinstance(f, str) else f for f in self.files]

    def get_platform_files(self) -> list[FileSyncConfig]:
        """File entries that apply to the current platform."""
        return [f for f in self.get_files() if is_platform_match(f.platforms)]


class SyncOptions(BaseModel):
    """Options applied to every package."""

    use_copy: bool = Field(default=False, description="Copy files instead of linking them")
    backup_prefix: str = Field(default="setup-backup", description="Prefix of copies saved before overwriting")
    restore_root: str = Field(default="~", description="Directory packages restore to")

    @field_validator("backup_prefix")
    @classmethod
    def check_prefix(cls, v: str) -> str:
        """The prefix is part of a file name."""
        if not v or "/" in v or "\\" in v:
            raise ValueError("backup_prefix must be a non-empty file name prefix")
        return v


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class DotfilerConfig(BaseModel):
    """Root configuration model for a backup directory."""

    packages: list[str] = Field(default_factory=list, description="Enabled package keys, in sync order")
    custom_packages: dict[str, PackageConfig] = Field(
        default_factory=dict, description="User-defined package definitions"
    )
    options: SyncOptions = Field(default_factory=SyncOptions, description="Sync options")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    def get_package(self, key: str) -> Optional[PackageConfig]:
        """Get a package definition by key. Custom packages take priority over built-ins."""
        if key in self.custom_packages:
            return self.custom_packages[key]
        if key in APPLICATIONS:
            return PackageConfig.model_validate(APPLICATIONS[key])
        return None

    def get_available_packages(self) -> dict[str, PackageConfig]:
        """All known package definitions by key."""
        available = {key: PackageConfig.model_validate(data) for key, data in APPLICATIONS.items()}
        available.update(self.custom_packages)
        return available

    def get_enabled_packages(self) -> dict[str, Optional[PackageConfig]]:
        """Enabled package keys mapped to their definitions, None when unknown."""
        return {key: self.get_package(key) for key in self.packages}
