"""
Package Commands
----------------

Commands moving components between the database and packages.

Commands:
    - export: Write components to a zip archive or a directory tree
    - import: Restore components from a zip archive or a directory tree

A package path ending in ``.zip`` is treated as an archive unless
``--format`` says otherwise.
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional, Tuple

from compack.core.cli import ExportStats
from compack.core.logging_manager import PackLogger, handle_cli_error
from compack.pipeline.component_exporter import EXPORTABLE_KINDS, ComponentExporter
from compack.pipeline.component_importer import ComponentImporter

from .database import open_database


def _is_zip(path: Path, package_format: Optional[str]) -> bool:
    if package_format:
        return package_format == "zip"
    return path.suffix.lower() == ".zip"


@click.command("export")
@click.argument("target", type=click.Path())
@click.option(
    "--format",
    "package_format",
    type=click.Choice(["zip", "dir"]),
    default=None,
    help="Package format (default: from the target's extension)",
)
@click.option("-m", "--module", default=None, help="Only export components of this module")
@click.option(
    "-k",
    "--kind",
    "kinds",
    multiple=True,
    type=click.Choice(list(EXPORTABLE_KINDS)),
    help="Component types to export (repeatable, default: all)",
)
@click.pass_context
def export(
    ctx: click.Context,
    target: str,
    package_format: Optional[str],
    module: Optional[str],
    kinds: Tuple[str, ...],
) -> None:
    """
    Export components to a package.

    UI resources carry their endpoints; forms carry the dynamic
    privileges they reference.
    """
    logger: PackLogger = ctx.obj["logger"]
    target_path = Path(target)

    click.echo(f"📤 Exporting components to {target_path}...")

    try:
        db = open_database(ctx)
        exporter = ComponentExporter(db, export_dir=target_path, logger=logger)

        with db.session_scope():
            entities = exporter.select_components(kinds=kinds, module=module)
            if _is_zip(target_path, package_format):
                stats = ExportStats()
                data = exporter.export_to_zip(entities, stats)
                target_path.parent.mkdir(parents=True, exist_ok=True)
                target_path.write_bytes(data)
            else:
                stats = exporter.export_to_directory(entities, target_path)

        click.echo("\n✅ Export complete:")
        click.echo(f"  Components: {stats.components_exported}")
        click.echo(f"  Files written: {stats.files_written}")
        click.echo(f"  Duplicates skipped: {stats.files_deduplicated}")
        click.echo(f"  Duration: {stats.duration():.2f}s")

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "export",
            additional_context={"target": target, "module": module, "kinds": list(kinds)},
        )


@click.command("import")
@click.argument("source", type=click.Path(exists=True))
@click.option(
    "--format",
    "package_format",
    type=click.Choice(["zip", "dir"]),
    default=None,
    help="Package format (default: from the source's extension)",
)
@click.option(
    "--delete-existing",
    is_flag=True,
    help="Delete the package modules' components before importing",
)
@click.option("--fail-fast", is_flag=True, help="Abort on the first failing component")
@click.pass_context
def import_package(
    ctx: click.Context,
    source: str,
    package_format: Optional[str],
    delete_existing: bool,
    fail_fast: bool,
) -> None:
    """
    Import components from a package.

    Existing components are matched by natural key and overwritten;
    missing ones are created. Failing components are reported and
    skipped unless --fail-fast is given.
    """
    logger: PackLogger = ctx.obj["logger"]
    source_path = Path(source)

    click.echo(f"📥 Importing components from {source_path}...")

    try:
        db = open_database(ctx)
        importer = ComponentImporter(
            db, components_dir=source_path, fail_fast=fail_fast, logger=logger
        )

        with db.session_scope():
            if _is_zip(source_path, package_format):
                report = importer.import_zip(source_path, delete_existing=delete_existing)
            else:
                report = importer.import_directory(
                    source_path, delete_existing=delete_existing
                )

        stats = report.stats
        click.echo("\n✅ Import complete:" if report.ok else "\n⚠️  Import finished with errors:")
        click.echo(f"  Documents processed: {stats.documents_processed}")
        click.echo(f"  Components imported: {stats.components_imported}")
        if delete_existing:
            click.echo(f"  Components deleted: {stats.components_deleted}")
        click.echo(f"  Errors: {stats.errors}")
        click.echo(f"  Duration: {stats.duration():.2f}s")

        for failure in report.failures:
            click.echo(f"  ❌ {failure.path}: {failure.error}", err=True)

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "import",
            additional_context={"source": source, "delete_existing": delete_existing},
        )

    if not report.ok:
        ctx.exit(1)
