#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the Compack project.

Default locations are relative to the project root and can be
overridden with environment variables (also honoured by the CLI
options, which declare the same names through click's ``envvar``):

    COMPACK_DATA_DIR    data/          database and working files
    COMPACK_DB_PATH     data/components.db
    COMPACK_EXPORT_DIR  data/export/   target of filesystem sync exports
    COMPACK_LOG_DIR     logs/

The project structure:
    ROOT/
    ├── compack/       # Source package
    │   └── migrations # Alembic environment
    ├── data/          # Database and exported packages
    └── logs/          # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/compack/core/paths.py.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> compack/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


def _env_path(name: str, default: Path) -> Path:
    value = os.environ.get(name)
    return Path(value).expanduser() if value else default


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "compack"

# ---- Data ----
DATA_DIR = _env_path("COMPACK_DATA_DIR", ROOT / "data")
DB_PATH = _env_path("COMPACK_DB_PATH", DATA_DIR / "components.db")
EXPORT_DIR = _env_path("COMPACK_EXPORT_DIR", DATA_DIR / "export")

# ---- Database migrations ----
ALEMBIC_DIR = PACKAGE_DIR / "migrations"
ALEMBIC_INI = ROOT / "alembic.ini"

# ---- Logs ----
LOG_DIR = _env_path("COMPACK_LOG_DIR", ROOT / "logs")
