"""Click-based CLI for dotfiler - dotfiles backup and restore."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.prompt import Confirm

from dotfiler import __version__
from dotfiler.config import (
    DotfilerConfig,
    add_custom_package,
    add_packages,
    create_config,
    get_config_path,
    load_config,
    remove_packages,
    save_config,
)
from dotfiler.exceptions import ConfigError
from dotfiler.logger import SyncLogger
from dotfiler.output.console import Console, create_console
from dotfiler.sync.context import SyncContext, delete_without_asking
from dotfiler.sync.engine import SyncEngine
from dotfiler.sync.file_sync import OverwriteChoice
from dotfiler.utils.paths import expand_path


class CliState:
    """Objects shared by all commands of one invocation."""

    def __init__(self, backup_dir: Path, verbose: bool):
        self.backup_dir = backup_dir
        self.console: Console = create_console(verbose=verbose)
        self.logger = SyncLogger(self.console.rich, verbose=verbose)

    @property
    def config_path(self) -> Path:
        return get_config_path(self.backup_dir)

    def load_config(self) -> DotfilerConfig:
        """Load the backup configuration or exit with an error."""
        try:
            config = load_config(self.config_path)
        except FileNotFoundError as e:
            self.console.print_error(str(e))
            sys.exit(1)
        except yaml.YAMLError as e:
            self.console.print_error(f"Invalid YAML syntax in {self.config_path}: {e}")
            sys.exit(1)
        except ValidationError as e:
            self.console.print_error(f"Invalid configuration {self.config_path}:\n{e}")
            sys.exit(1)

        if config.output.verbose:
            self.logger.verbose = True
            self.console.verbose = True
        if not config.output.colored:
            self.console.rich.no_color = True
        return config

    def create_engine(self, config: DotfilerConfig, **options) -> SyncEngine:
        ctx = SyncContext.create(self.backup_dir, logger=self.logger, **options)
        return SyncEngine(config, ctx)

    def exit_on_errors(self) -> None:
        if self.logger.has_errors:
            sys.exit(1)


pass_state = click.make_pass_decorator(CliState)


@click.group()
@click.version_option(version=__version__, prog_name="dotfiler")
@click.option(
    "--dir",
    "backup_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Backup directory (default: current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, backup_dir: Optional[Path], verbose: bool) -> None:
    """Dotfiler - back up and restore application settings.

    Files are moved into a backup directory and linked back to where
    applications expect them, so edits on either side stay in sync.

    \b
    Restore: ~/.bashrc  <-> Backup: <dir>/Bash/_bashrc
    """
    ctx.obj = CliState(expand_path(backup_dir or Path.cwd()), verbose)


@cli.command()
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option("--force", "-f", is_flag=True, help="Initialize even if the directory is not empty")
@pass_state
def init(state: CliState, path: Optional[Path], force: bool) -> None:
    """Initialize a backup directory.

    Creates a dotfiler.yaml configuration in PATH, relative to the
    backup directory.
    """
    backup_dir = expand_path(state.backup_dir / path) if path else state.backup_dir
    state.logger.info(f'Creating a backup at "{backup_dir}"')

    config_path, created = create_config(backup_dir, force=force)
    if not created:
        state.logger.warning(
            f"Cannot create backup. The folder {backup_dir} already exists and is not empty. Use --force to override."
        )
        return

    state.logger.success(f"Created configuration: {config_path}")
    state.logger.info("Use 'dotfiler package discover' to find packages to back up.")


def _ask_overwrite(logger: SyncLogger):
    def ask(backup_path: Path, restore_path: Path) -> OverwriteChoice:
        logger.warning("Needs to overwrite a file")
        logger.warning(f'Backup: "{backup_path}"')
        logger.warning(f'Restore: "{restore_path}"')
        choice = click.prompt(
            "Keep back up or restore?",
            type=click.Choice(["b", "r"]),
            default="b",
        )
        return OverwriteChoice.RESTORE if choice == "r" else OverwriteChoice.BACKUP

    return ask


def _ask_delete(logger: SyncLogger):
    def ask(path: Path) -> bool:
        logger.raw(f'Deleting "{path}"')
        return Confirm.ask("Do you want to remove this file?", console=logger.console, default=False)

    return ask


@cli.command()
@click.option("--dry", "-n", is_flag=True, help="Print operations without executing them")
@click.option("--copy", is_flag=True, help="Copy files instead of linking them")
@pass_state
def sync(state: CliState, dry: bool, copy: bool) -> None:
    """Synchronize your settings.

    Files only on this machine are moved into the backup, files only in
    the backup are restored, and files that differ are resolved
    interactively. The replaced side is kept as a timestamped copy.
    """
    config = state.load_config()
    engine = state.create_engine(
        config,
        dry=dry,
        copy=copy,
        on_overwrite=_ask_overwrite(state.logger),
    )

    if not config.packages:
        state.logger.warning("No packages enabled.")
        state.logger.warning("Use 'dotfiler package add' to enable packages.")
        return

    state.logger.raw("Syncing:")
    result = engine.sync()

    if result.nothing_to_sync:
        state.logger.success("Nothing to sync")
    else:
        state.console.print_sync_result(result, dry_run=dry)

    state.exit_on_errors()


@cli.command()
@click.option("--plain", is_flag=True, help="Print unstyled text")
@pass_state
def status(state: CliState, plain: bool) -> None:
    """Show the sync status of every enabled package."""
    config = state.load_config()
    engine = state.create_engine(config, dry=True)

    result = engine.get_status()
    if not result.name and not result.items:
        state.logger.warning("No packages enabled.")
        state.logger.warning("Use 'dotfiler package add' to enable packages.")
        return

    state.console.print_status(result, plain=plain)


@cli.command()
@click.option("--confirm/--no-confirm", default=True, help="Ask before deleting each file")
@click.option("--dry", "-n", is_flag=True, help="Print operations without executing them")
@click.option("--untracked", is_flag=True, help="Also delete files in package folders that are not synced")
@pass_state
def cleanup(state: CliState, confirm: bool, dry: bool, untracked: bool) -> None:
    """Clean up copies saved before overwriting files."""
    config = state.load_config()
    engine = state.create_engine(
        config,
        dry=dry,
        untracked=untracked,
        on_delete=_ask_delete(state.logger) if confirm else delete_without_asking,
    )

    result = engine.cleanup()
    if result.nothing_to_clean:
        state.logger.success("Nothing to clean.")
    else:
        state.console.print_cleanup_result(result, dry_run=dry)

    state.exit_on_errors()


@cli.group()
def package() -> None:
    """Add, remove and list packages."""


@package.command("add")
@click.argument("names", nargs=-1, required=True)
@pass_state
def package_add(state: CliState, names: tuple[str, ...]) -> None:
    """Enable packages by key."""
    config = state.load_config()
    for name in add_packages(config, list(names)):
        state.logger.error(f"Package {name} not found")
    save_config(config, state.config_path)
    state.exit_on_errors()


@package.command("remove")
@click.argument("names", nargs=-1, required=True)
@pass_state
def package_remove(state: CliState, names: tuple[str, ...]) -> None:
    """Disable packages by key."""
    config = state.load_config()
    for name in remove_packages(config, list(names)):
        state.logger.error(f"Package {name} not found")
    save_config(config, state.config_path)
    state.exit_on_errors()


@package.command("list")
@click.option("--all", "-a", "show_all", is_flag=True, help="Show all known packages")
@pass_state
def package_list(state: CliState, show_all: bool) -> None:
    """List enabled packages and their files."""
    config = state.load_config()
    engine = state.create_engine(config, dry=True)

    if show_all:
        state.console.print_available_packages(engine.get_available_packages(), config.packages)
        return

    packages = engine.get_enabled_packages()
    if not packages:
        state.logger.warning("No packages enabled.")
        return
    state.console.print_packages(packages)


@package.command("discover")
@pass_state
def package_discover(state: CliState) -> None:
    """Find packages with settings on this machine that are not enabled."""
    config = state.load_config()
    engine = state.create_engine(config, dry=True)

    discovered = engine.discover_packages()
    if not discovered:
        state.logger.info("No new packages discovered")
        return

    available = engine.get_available_packages()
    state.console.print_packages({key: available[key] for key in discovered}, title="Discovered packages")


@package.command("new")
@click.argument("name")
@click.option("--force", "-f", is_flag=True, help="Replace an existing package definition")
@pass_state
def package_new(state: CliState, name: str, force: bool) -> None:
    """Create an empty custom package and enable it."""
    config = state.load_config()
    try:
        add_custom_package(config, name, force=force)
    except ConfigError as e:
        state.logger.warning(str(e))
        return
    except ValidationError as e:
        state.console.print_error(str(e))
        sys.exit(1)

    save_config(config, state.config_path)
    state.logger.success(f"Created package {name} in {state.config_path}")


if __name__ == "__main__":
    cli()
