#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the component store.

Provides the ComponentDB class for interacting with the SQLite database.
Handles:
    - Initialization of the database engine and sessionmaker
    - Transactional session scopes binding per-session component managers
    - Privilege lookup and dynamic table creation for the active session
    - Schema creation and migration management via Alembic

Usage:
    db = ComponentDB(DB_PATH, ALEMBIC_DIR, log_dir=LOG_DIR)
    with db.session_scope() as session:
        home = db.resources.find(
            name="home", access_scope=AccessScope.PUBLIC, organization_id=None
        )

Notes
==============
- Component managers only exist inside session_scope; accessing them
  outside a scope raises DatabaseError
- All datetime fields are UTC-aware
- Retry logic handles SQLite lock contention
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.orm import Session, sessionmaker

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

# --- Local imports ---
from compack.core.exceptions import DatabaseError
from compack.core.logging_manager import PackLogger
from compack.core.paths import ALEMBIC_DIR, ALEMBIC_INI

from .decorators import handle_db_errors, log_database_operation
from .dynamic_tables import DynamicTableService
from .managers import ComponentManager, OwnershipManager
from .models import Base
from .privileges import PrivilegeLookup


# ----- SQLite transactions -----
def _enable_savepoints(engine: Engine) -> None:
    """
    Let SQLAlchemy emit BEGIN itself on SQLite connections.

    The sqlite3 driver otherwise defers BEGIN to the first DML statement,
    which breaks SAVEPOINT (one savepoint per imported component).
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(connection):
        connection.exec_driver_sql("BEGIN")


# ----- Main Database Manager -----
class ComponentDB:
    """
    Main database manager for the component store.

    Attributes:
        - db_path (Path): Filesystem path to the SQLite database file.
        - alembic_dir (Path): Filesystem path to the Alembic directory.
        - engine (Engine): SQLAlchemy engine instance.
        - SessionLocal (sessionmaker): SQLAlchemy session factory.
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        alembic_dir: Union[str, Path] = ALEMBIC_DIR,
        log_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path (str | Path): Path to the SQLite file.
            alembic_dir (str | Path): Path to the Alembic directory.
            log_dir (str | Path): Directory for log files (optional)
        """
        self.db_path = Path(db_path).expanduser().resolve()
        self.alembic_dir = Path(alembic_dir).expanduser().resolve()

        # --- Logging ---
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve() / "system"
            self.logger: Optional[PackLogger] = PackLogger(
                self.log_dir, component_name="database"
            )
        else:
            self.logger = None

        # Per-session state (bound in session_scope)
        self._session: Optional[Session] = None
        self._managers: Dict[str, ComponentManager] = {}
        self._ownership: Optional[OwnershipManager] = None
        self._privilege_lookup: Optional[PrivilegeLookup] = None
        self._dynamic_tables: Optional[DynamicTableService] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start",
                    {
                        "db_path": str(self.db_path),
                        "alembic_dir": str(self.alembic_dir),
                    },
                )

            is_new = not self.db_path.exists()
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                pool_pre_ping=True,
            )

            _enable_savepoints(self.engine)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            self.alembic_cfg: Config = self._setup_alembic()

            if is_new:
                self.initialize_schema()

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Binds the component managers, the privilege lookup and the dynamic
        table service to the new session for the duration of the scope.

        Usage:
            with db.session_scope() as session:
                form = db.forms.find(name="orders")
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self._bind(session)

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(
                    e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            self._unbind()
            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    def _bind(self, session: Session) -> None:
        self._session = session
        self._managers = {
            "resources": ComponentManager.for_resources(session, self.logger),
            "endpoints": ComponentManager.for_endpoints(session, self.logger),
            "forms": ComponentManager.for_forms(session, self.logger),
            "event_listeners": ComponentManager.for_event_listeners(session, self.logger),
            "schedulers": ComponentManager.for_schedulers(session, self.logger),
            "privileges": ComponentManager.for_privileges(session, self.logger),
            "server_scripts": ComponentManager.for_server_scripts(session, self.logger),
        }
        self._ownership = OwnershipManager(session, self.logger)
        self._privilege_lookup = PrivilegeLookup(session)
        self._dynamic_tables = DynamicTableService(session, self.logger)

    def _unbind(self) -> None:
        self._session = None
        self._managers = {}
        self._ownership = None
        self._privilege_lookup = None
        self._dynamic_tables = None

    # -------------------------------------------------------------------------
    # Session-bound accessors
    # -------------------------------------------------------------------------

    def _require(self, name: str):
        if self._session is None:
            raise DatabaseError(
                f"'{name}' requires an active session. "
                "Use within session_scope: "
                f"with db.session_scope() as session: db.{name}..."
            )
        if name in self._managers:
            return self._managers[name]
        return getattr(self, f"_{name}")

    @property
    def session(self) -> Session:
        """The session of the active scope."""
        return self._require("session")

    @property
    def resources(self) -> ComponentManager:
        """Manager for UIResource components."""
        return self._require("resources")

    @property
    def endpoints(self) -> ComponentManager:
        """Manager for Endpoint components."""
        return self._require("endpoints")

    @property
    def forms(self) -> ComponentManager:
        """Manager for Form components."""
        return self._require("forms")

    @property
    def event_listeners(self) -> ComponentManager:
        """Manager for EventListener components."""
        return self._require("event_listeners")

    @property
    def schedulers(self) -> ComponentManager:
        """Manager for Scheduler components."""
        return self._require("schedulers")

    @property
    def privileges(self) -> ComponentManager:
        """Manager for DynamicPrivilege components."""
        return self._require("privileges")

    @property
    def server_scripts(self) -> ComponentManager:
        """Manager for ServerScript components."""
        return self._require("server_scripts")

    @property
    def ownership(self) -> OwnershipManager:
        """Manager creating missing organizations and modules."""
        return self._require("ownership")

    @property
    def privilege_lookup(self) -> PrivilegeLookup:
        """Privilege name resolution for the active session."""
        return self._require("privilege_lookup")

    @property
    def dynamic_tables(self) -> DynamicTableService:
        """Form record table creation for the active session."""
        return self._require("dynamic_tables")

    def component_managers(self) -> Dict[str, ComponentManager]:
        """All component managers of the active session, by name."""
        self._require("session")
        return dict(self._managers)

    # ---- Alembic setup ----
    def _setup_alembic(self) -> Config:
        """Setup Alembic configuration."""
        try:
            if self.logger:
                self.logger.log_debug("Setting up Alembic configuration...")

            alembic_cfg: Config = Config(str(ALEMBIC_INI))
            alembic_cfg.set_main_option("script_location", str(self.alembic_dir))
            alembic_cfg.set_main_option("sqlalchemy.url", f"sqlite:///{self.db_path}")

            if self.logger:
                self.logger.log_debug("Alembic configuration setup complete")
            return alembic_cfg
        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "setup_alembic"})
            raise DatabaseError(f"Alembic configuration failed: {e}") from e

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Initialize database - create tables if needed and run migrations.

        Actions:
            Checks if the database is fresh (no tables)
            If fresh,
                creates all tables from the ORM models
                stamps the Alembic revision to head
            If not,
                runs pending migrations to update schema
        """
        try:
            table_names = inspect(self.engine).get_table_names()
            is_fresh_db: bool = len(table_names) == 0

            if is_fresh_db:
                Base.metadata.create_all(bind=self.engine)
                try:
                    command.stamp(self.alembic_cfg, "head")
                    if self.logger:
                        self.logger.log_operation(
                            "fresh_database_created",
                            {"tables_created": len(Base.metadata.tables)},
                        )
                except Exception as e:
                    if self.logger:
                        self.logger.log_error(e, {"operation": "stamp_database"})
            else:
                self.upgrade_database()
                if self.logger:
                    self.logger.log_operation(
                        "existing_database_migrated",
                        {"table_count": len(table_names)},
                    )

        except Exception as e:
            raise DatabaseError(f"Could not initialize database: {e}") from e

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the database schema to the specified Alembic revision.

        Args:
            revision (str, optional):
                The target revision to upgrade to.
                Defaults to 'head' (latest revision).
        """
        try:
            command.upgrade(self.alembic_cfg, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}") from e

    def get_migration_history(self) -> Dict[str, Optional[str]]:
        """
        Get the current migration status of the database.

        Returns:
            Dictionary with keys:
                - 'current_revision' (str | None):
                  Current Alembic revision of the database.
                - 'status' (str):
                  Either 'up_to_date' or 'needs_migration'.
                - 'error' (str, optional):
                  Present if an exception occurred.
        """
        try:
            with self.engine.connect() as conn:
                context = MigrationContext.configure(conn)
                current_rev = context.get_current_revision()

            return {
                "current_revision": current_rev,
                "status": "up_to_date" if current_rev else "needs_migration",
            }
        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "get_migration_history"})
            return {"error": str(e)}
