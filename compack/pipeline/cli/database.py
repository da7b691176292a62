"""
Database Commands
-----------------

Commands for creating and inspecting the component store.

Commands:
    - init: Create the database and stamp the migration head
    - list: Show component counts per type and module
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from compack.core.logging_manager import PackLogger, handle_cli_error
from compack.database.manager import ComponentDB


def open_database(ctx: click.Context) -> ComponentDB:
    """Open the database named on the command line."""
    return ComponentDB(db_path=ctx.obj["db_path"], log_dir=ctx.obj["log_dir"])


@click.command("init")
@click.pass_context
def init(ctx: click.Context) -> None:
    """
    Create the component database.

    A new database gets every table and is stamped at the latest
    migration; an existing one is upgraded to it.
    """
    logger: PackLogger = ctx.obj["logger"]
    db_path: Path = ctx.obj["db_path"]
    existed = db_path.exists()

    try:
        db = open_database(ctx)
        if existed:
            db.upgrade_database()

        history = db.get_migration_history()
        logger.log_operation("init", {"db_path": str(db_path), **history})

        click.echo("✅ Database ready:")
        click.echo(f"  Location: {db.db_path}")
        click.echo(f"  Revision: {history.get('current_revision') or 'unversioned'}")

    except Exception as e:
        handle_cli_error(ctx, e, "init", additional_context={"db_path": str(db_path)})


@click.command("list")
@click.option("-m", "--module", default=None, help="Only count components of this module")
@click.pass_context
def list_components(ctx: click.Context, module: Optional[str]) -> None:
    """Show how many components of each type the store holds."""
    try:
        db = open_database(ctx)
        with db.session_scope():
            modules = db.ownership.list_modules()
            counts = {
                name: (
                    len(manager.find_by_module(module)) if module else manager.count()
                )
                for name, manager in db.component_managers().items()
            }

        click.echo("\n📦 Component Store")
        click.echo("=" * 40)
        for name, total in counts.items():
            click.echo(f"  {name.replace('_', ' '):<20} {total:>6}")
        click.echo("-" * 40)
        click.echo(f"  {'total':<20} {sum(counts.values()):>6}")
        click.echo(f"\nModules: {', '.join(modules) if modules else 'none'}")

    except Exception as e:
        handle_cli_error(ctx, e, "list", additional_context={"module": module})
