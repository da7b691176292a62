#!/usr/bin/env python3
"""
Compack CLI
-----------

Command-line interface for exporting and importing component packages.

Command Groups:
    - Database: init, list
    - Packages: export, import

Usage:
    # Create the database
    compack init

    # Export a module to a zip archive
    compack export crm.zip --module crm

    # Mirror every component into a directory tree
    compack export data/export --format dir

    # Re-import a package, replacing the module's components
    compack import crm.zip --delete-existing

    # Inspect the store
    compack list
"""
from __future__ import annotations

import click
from pathlib import Path

from compack.core.paths import DB_PATH, LOG_DIR
from compack.core.cli import setup_logger


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    envvar="COMPACK_LOG_DIR",
    help="Directory for log files",
)
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    envvar="COMPACK_DB_PATH",
    help="SQLite database file",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, log_dir: str, db_path: str, verbose: bool) -> None:
    """Compack Component Packaging"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "pipeline")


# Import and register commands from submodules
from .database import init, list_components
from .packages import export, import_package

# Register commands
cli.add_command(init)
cli.add_command(list_components)
cli.add_command(export)
cli.add_command(import_package)


if __name__ == "__main__":
    cli(obj={})
