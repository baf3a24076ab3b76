# Dotfiler Config Tests
# Tests for configuration loading, validation and editing

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

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
from dotfiler.config.schema import DotfilerConfig, FileSyncConfig, PackageConfig, SyncOptions
from dotfiler.exceptions import ConfigError


class TestDotfilerConfig:
    """Tests for DotfilerConfig schema."""

    def test_minimal_config(self):
        """Test empty configuration gets defaults."""
        config = DotfilerConfig()
        assert config.packages == []
        assert config.custom_packages == {}
        assert config.options.backup_prefix == "setup-backup"
        assert config.options.restore_root == "~"
        assert config.options.use_copy is False

    def test_get_package_built_in(self):
        config = DotfilerConfig()
        package = config.get_package("vim")
        assert package is not None
        assert package.name == "Vim"

    def test_custom_package_overrides_built_in(self):
        config = DotfilerConfig.model_validate({"custom_packages": {"vim": {"name": "MyVim", "files": [".vimrc"]}}})
        assert config.get_package("vim").name == "MyVim"

    def test_get_unknown_package(self):
        assert DotfilerConfig().get_package("nope") is None

    def test_get_enabled_packages(self):
        config = DotfilerConfig.model_validate({"packages": ["bash", "nope"]})
        enabled = config.get_enabled_packages()
        assert list(enabled) == ["bash", "nope"]
        assert enabled["bash"].name == "Bash"
        assert enabled["nope"] is None

    def test_available_packages(self):
        config = DotfilerConfig.model_validate({"custom_packages": {"tools": {"name": "Tools"}}})
        available = config.get_available_packages()
        assert set(APPLICATIONS) <= set(available)
        assert "tools" in available


class TestPackageConfig:
    """Tests for PackageConfig schema."""

    def test_file_entries(self):
        """Plain strings and mappings are both accepted."""
        package = PackageConfig.model_validate(
            {"name": "Git", "files": [".gitignore", {"path": ".gitconfig", "save_as": "_gitconfig(x)"}]}
        )
        files = package.get_files()
        assert [f.path for f in files] == [".gitignore", ".gitconfig"]
        assert files[1].save_as == "_gitconfig(x)"

    @patch("dotfiler.utils.platform.platform.system", return_value="Darwin")
    def test_platform_files(self, mock_system):
        package = PackageConfig.model_validate(
            {
                "name": "Editor",
                "files": [
                    {"path": "keys.mac", "platforms": ["macos"]},
                    {"path": "keys.win", "platforms": ["windows"]},
                    "settings",
                ],
            }
        )
        assert [f.path for f in package.get_platform_files()] == ["keys.mac", "settings"]

    @pytest.mark.parametrize("name", ["", "a/b", "a\\b"])
    def test_invalid_name(self, name: str):
        with pytest.raises(ValidationError):
            PackageConfig(name=name)

    def test_unknown_platform(self):
        with pytest.raises(ValidationError):
            PackageConfig(name="X", platforms=["beos"])

    def test_unknown_restore_dir_platform(self):
        with pytest.raises(ValidationError):
            PackageConfig(name="X", restore_dir={"beos": "dir"})

    def test_restore_dir_per_platform(self):
        package = PackageConfig(name="X", restore_dir={"macos": "a", "windows": "b"})
        assert package.restore_dir == {"macos": "a", "windows": "b"}


class TestFileSyncConfig:
    """Tests for FileSyncConfig schema."""

    def test_empty_path(self):
        with pytest.raises(ValidationError):
            FileSyncConfig(path="  ")

    def test_unknown_save_as_platform(self):
        with pytest.raises(ValidationError):
            FileSyncConfig(path=".gitconfig", save_as={"amiga": "x"})

    @patch("dotfiler.utils.platform.platform.system", return_value="Windows")
    def test_resolved_save_as(self, mock_system):
        entry = FileSyncConfig(path=".gitconfig", save_as={"windows": "_gitconfig(windows)"})
        assert entry.resolved_save_as() == "_gitconfig(windows)"
        assert FileSyncConfig(path=".gitconfig", save_as="plain").resolved_save_as() == "plain"
        assert FileSyncConfig(path=".gitconfig").resolved_save_as() is None


class TestSyncOptions:
    """Tests for SyncOptions schema."""

    @pytest.mark.parametrize("prefix", ["", "a/b"])
    def test_invalid_prefix(self, prefix: str):
        with pytest.raises(ValidationError):
            SyncOptions(backup_prefix=prefix)


class TestApplications:
    """Tests for the built-in package registry."""

    def test_all_valid(self):
        """Every built-in package passes validation."""
        for key, data in APPLICATIONS.items():
            package = PackageConfig.model_validate(data)
            assert package.files, key

    def test_known_packages(self):
        for key in ("bash", "git", "vim", "vscode", "powershell"):
            assert key in APPLICATIONS


class TestConfigLoader:
    """Tests for configuration loading and saving."""

    def test_load_config(self, config_file: Path, restore_dir: Path):
        """Test loading configuration from file."""
        config = load_config(config_file)
        assert config.packages == ["tools"]
        assert config.custom_packages["tools"].name == "Tools"
        assert config.options.restore_root == str(restore_dir)
        # Defaults merged in
        assert config.options.backup_prefix == "setup-backup"

    def test_load_missing_config(self, temp_dir: Path):
        """Test loading non-existent config raises error."""
        with pytest.raises(FileNotFoundError, match="dotfiler init"):
            load_config(temp_dir / "nonexistent.yaml")

    def test_load_empty_config(self, temp_dir: Path):
        path = temp_dir / "dotfiler.yaml"
        path.write_text("")
        assert load_config(path).packages == []

    def test_load_invalid_config(self, temp_dir: Path):
        path = temp_dir / "dotfiler.yaml"
        path.write_text("options:\n  backup_prefix: ''\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_save_config(self, temp_dir: Path):
        """Test saving configuration to file."""
        config = DotfilerConfig.model_validate(
            {"packages": ["tools"], "custom_packages": {"tools": {"name": "Tools", "files": [".toolrc"]}}}
        )
        path = save_config(config, temp_dir / "sub" / "dotfiler.yaml")

        with open(path) as f:
            data = yaml.safe_load(f)
        assert data["packages"] == ["tools"]
        assert data["custom_packages"]["tools"]["files"] == [".toolrc"]
        # None values are left out
        assert "platforms" not in data["custom_packages"]["tools"]

        assert load_config(path).custom_packages["tools"].name == "Tools"

    def test_config_path_default(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DOTFILER_CONFIG", raising=False)
        assert get_config_path(temp_dir) == temp_dir / "dotfiler.yaml"

    def test_config_path_from_environment(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DOTFILER_CONFIG", str(temp_dir / "other.yaml"))
        assert get_config_path(temp_dir / "backup") == temp_dir / "other.yaml"

    def test_validate_valid_config(self, config_file: Path):
        """Test validation of valid config."""
        is_valid, errors = validate_config_file(config_file)
        assert is_valid is True
        assert errors == []

    def test_validate_invalid_yaml(self, temp_dir: Path):
        """Test validation of invalid YAML."""
        path = temp_dir / "dotfiler.yaml"
        path.write_text("packages: [unclosed")
        is_valid, errors = validate_config_file(path)
        assert is_valid is False
        assert "Invalid YAML" in errors[0]

    def test_validate_unknown_package(self, temp_dir: Path):
        path = temp_dir / "dotfiler.yaml"
        path.write_text("packages:\n  - nope\n")
        is_valid, errors = validate_config_file(path)
        assert is_valid is False
        assert "unknown package 'nope'" in errors[0]

    def test_validate_schema_error(self, temp_dir: Path):
        path = temp_dir / "dotfiler.yaml"
        path.write_text("custom_packages:\n  x:\n    name: ''\n")
        is_valid, errors = validate_config_file(path)
        assert is_valid is False
        assert errors[0].startswith("custom_packages -> x -> name")


class TestCreateConfig:
    """Tests for create_config()."""

    def test_creates_in_new_directory(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DOTFILER_CONFIG", raising=False)
        path, created = create_config(temp_dir / "dotfiles")
        assert created is True
        assert path == temp_dir / "dotfiles" / "dotfiler.yaml"
        assert load_config(path).packages == []

    def test_refuses_non_empty_directory(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DOTFILER_CONFIG", raising=False)
        (temp_dir / "file").write_text("x")
        path, created = create_config(temp_dir)
        assert created is False
        assert not path.exists()

    def test_force(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DOTFILER_CONFIG", raising=False)
        (temp_dir / "file").write_text("x")
        path, created = create_config(temp_dir, force=True)
        assert created is True
        assert path.exists()


class TestConfigEdits:
    """Tests for package list edits."""

    def test_add_packages(self):
        config = DotfilerConfig.model_validate({"packages": ["vim"]})
        unknown = add_packages(config, ["bash", "vim", "nope"])
        assert unknown == ["nope"]
        assert config.packages == ["vim", "bash"]

    def test_remove_packages(self):
        config = DotfilerConfig.model_validate({"packages": ["vim", "bash"]})
        missing = remove_packages(config, ["vim", "git"])
        assert missing == ["git"]
        assert config.packages == ["bash"]

    def test_add_custom_package(self):
        config = DotfilerConfig()
        package = add_custom_package(config, "tools")
        assert package.name == "tools"
        assert package.files == []
        assert config.packages == ["tools"]
        assert config.custom_packages["tools"] is package

    def test_add_existing_custom_package(self):
        config = DotfilerConfig()
        add_custom_package(config, "tools")
        with pytest.raises(ConfigError, match="already exists"):
            add_custom_package(config, "tools")

    def test_force_replaces_custom_package(self):
        config = DotfilerConfig()
        add_custom_package(config, "tools").files.append(".toolrc")
        package = add_custom_package(config, "tools", force=True)
        assert package.files == []
        assert config.packages == ["tools"]

    def test_invalid_custom_package_name(self):
        with pytest.raises(ValidationError):
            add_custom_package(DotfilerConfig(), "a/b")


class TestDefaults:
    """Tests for default configuration."""

    def test_default_config_structure(self):
        """Test default config has required keys."""
        assert "packages" in DEFAULT_CONFIG
        assert "custom_packages" in DEFAULT_CONFIG
        assert "options" in DEFAULT_CONFIG
        assert "output" in DEFAULT_CONFIG

    def test_generate_default_config(self):
        """Test generating default config YAML."""
        yaml_str = generate_default_config()
        assert yaml_str.startswith("# Dotfiler")
        data = yaml.safe_load(yaml_str)
        assert DotfilerConfig.model_validate(data).options.backup_prefix == "setup-backup"
