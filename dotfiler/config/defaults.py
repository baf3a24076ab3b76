# Dotfiler Default Configuration
# Built-in application packages, default configuration dict and YAML generator

from typing import Any

import yaml

# Built-in packages, keyed by the name used in the `packages` list.
# Each entry follows the PackageConfig schema.
APPLICATIONS: dict[str, dict[str, Any]] = {
    "atom": {
        "name": "Atom",
        "description": "Atom editor settings",
        "restore_dir": "~/.atom",
        "files": ["config.cson", "init.coffee", "keymap.cson", "snippets.cson", "styles.less"],
    },
    "bash": {
        "name": "Bash",
        "description": "Bash shell startup files",
        "files": [
            ".bashrc",
            ".bash_profile",
            ".bash_functions",
            ".bash_aliases",
            {
                "path": ".bash_local",
                "save_as": {
                    "macos": "_bash_local(osx)",
                    "linux": "_bash_local(linux)",
                    "windows": "_bash_local(windows)",
                },
            },
        ],
    },
    "byobu": {
        "name": "Byobu",
        "description": "Byobu terminal multiplexer profile",
        "platforms": ["macos", "linux"],
        "restore_dir": ".byobu",
        "files": ["profile.tmux"],
    },
    "fish": {
        "name": "Fish",
        "description": "Fish shell configuration and functions",
        "platforms": ["macos", "linux"],
        "restore_dir": ".config/fish",
        "files": ["config.fish", "functions"],
    },
    "git": {
        "name": "Git",
        "description": "Git global ignore and per-platform config",
        "files": [
            ".gitignore",
            {
                "path": ".gitconfig",
                "save_as": {
                    "windows": "_gitconfig(windows)",
                    "macos": "_gitconfig(osx)",
                    "linux": "_gitconfig(linux)",
                },
            },
        ],
    },
    "intellij": {
        "name": "IntelliJ IDEA",
        "description": "IntelliJ IDEA configuration directory",
        "files": [".IntelliJIdea15/config"],
    },
    "mysql": {
        "name": "MySQL",
        "description": "MySQL server configuration",
        "platforms": ["macos", "linux"],
        "restore_dir": "/usr/local/etc",
        "files": ["my.cnf", "my.cnf.d"],
    },
    "nginx": {
        "name": "Nginx",
        "description": "Nginx server configuration",
        "platforms": ["macos", "linux"],
        "restore_dir": "/usr/local/etc",
        "files": ["nginx"],
    },
    "powershell": {
        "name": "PowerShell",
        "description": "PowerShell profile",
        "platforms": ["windows"],
        "restore_dir": "~/Documents/WindowsPowerShell",
        "files": ["Microsoft.PowerShell_profile.ps1"],
    },
    "slate": {
        "name": "Slate",
        "description": "Slate window manager configuration",
        "platforms": ["macos", "linux"],
        "files": [".slate"],
    },
    "sublime_text": {
        "name": "Sublime Text 3",
        "description": "Sublime Text 3 user settings and keymap",
        "platforms": ["macos", "windows"],
        "restore_dir": {
            "macos": "~/Library/Application Support/Sublime Text 3",
            "windows": "~/AppData/Roaming/Sublime Text 3",
        },
        "files": [
            {"path": "Packages/User/Default (OSX).sublime-keymap", "platforms": ["macos"]},
            {"path": "Packages/User/Default (Windows).sublime-keymap", "platforms": ["windows"]},
            "Packages/User/Preferences.sublime-settings",
            "Packages/User/Package Control.sublime-settings",
        ],
    },
    "tmuxinator": {
        "name": "Tmuxinator",
        "description": "Tmuxinator project definitions",
        "platforms": ["macos", "linux"],
        "files": [".tmuxinator"],
    },
    "vim": {
        "name": "Vim",
        "description": "Vim and gVim configuration",
        "files": [
            ".gvimrc",
            ".vimrc",
            ".vim/autoload",
            ".vim/settings",
            ".vim/syntax",
            ".vim/vimrc",
            ".vim/vundles",
        ],
    },
    "vscode": {
        "name": "VsCode",
        "description": "Visual Studio Code user settings and snippets",
        "restore_dir": {
            "windows": "~/AppData/Roaming/Code/User",
            "macos": "~/Library/Application Support/Code/User",
        },
        "files": ["settings.json", "snippets"],
    },
}

DEFAULT_CONFIG: dict[str, Any] = {
    "packages": [],
    "custom_packages": {},
    "options": {
        "use_copy": False,
        "backup_prefix": "setup-backup",
        "restore_root": "~",
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# Dotfiler - Backup Configuration
#
# This file lives in the backup directory and lists the packages to sync.
#
# packages:        Built-in or custom package keys, synced in this order.
#                  Use `dotfiler package add <name>` to enable one.
# custom_packages: Your own packages. Each has a name, optional platforms
#                  (macos, linux, windows), an optional restore_dir and a
#                  list of files relative to it.
# options:
#   use_copy:      Copy files instead of linking them.
#   backup_prefix: Prefix for copies saved before overwriting a file.
#   restore_root:  Directory packages restore to (default: home).

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)


def get_package_template(name: str) -> dict[str, Any]:
    """Get an empty custom package definition."""
    return {
        "name": name,
        "description": "",
        "files": [],
    }
