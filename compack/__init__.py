"""
Compack Component Packaging
===========================

Export and import of runtime-configurable application components.

An administrator selects a subset of the components stored in the
application database (UI resources with their HTTP endpoints, dynamic
forms, event listeners, schedulers, privileges and server-side scripts)
and packages them as a directory tree or a zip archive of YAML metadata
documents plus raw content files. The same package can later be imported
into another environment, where every component is looked up by its
natural key and updated in place or created.

Main Components:
    - core: Logging, exceptions, paths, validation, CLI statistics
    - database: SQLAlchemy models, config-driven managers, privilege lookup,
      dynamic table service
    - dataclasses: Descriptor data structures written to the package
    - pipeline: Path codec, package writers/readers, converters, services, CLI

Primary Interfaces:
    - compack.pipeline.cli: Command line interface (``compack``)
    - compack.pipeline.component_exporter.ComponentExporter
    - compack.pipeline.component_importer.ComponentImporter
    - compack.database.manager.ComponentDB

Example Usage:
    >>> from compack.database import ComponentDB
    >>> from compack.pipeline.component_exporter import ComponentExporter
    >>> db = ComponentDB(db_path="components.db")
    >>> exporter = ComponentExporter(db)
    >>> with db.session_scope() as session:
    ...     archive = exporter.export_to_zip(db.resources.list_all())
"""

__version__ = "1.0.0"
