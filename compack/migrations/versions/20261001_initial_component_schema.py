"""initial_component_schema

Revision ID: 20261001_initial
Revises:
Create Date: 2026-10-01 09:00:00.000000

Creates the component store:
- organizations, component_modules: ownership rows
- ui_resources, endpoints: frontend resources and their HTTP endpoints
- forms: form definitions
- event_listeners, schedulers, server_scripts: automation components
- dynamic_privileges: runtime-defined privileges
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261001_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _ownership() -> list:
    return [
        sa.Column("module_name", sa.String(length=255), nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="CASCADE"
        ),
    ]


def _ownership_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_module_name", table, ["module_name"])
    op.create_index(f"ix_{table}_organization_id", table, ["organization_id"])


def upgrade() -> None:
    """Create every component table."""
    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "component_modules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name="ck_component_module_non_empty_name"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "ui_resources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "access_scope",
            sa.Enum("public", "global", "organization", "internal", name="accessscope"),
            nullable=False,
        ),
        sa.Column("required_privilege", sa.String(length=255), nullable=True),
        sa.Column(
            "resource_kind",
            sa.Enum("html", "js", "css", "json", "csv", "text", "xml", name="resourcekind"),
            nullable=False,
        ),
        sa.Column(
            "category",
            sa.Enum("page", "ui_component", "dashboard", name="resourcecategory"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("embeddable", sa.Boolean(), nullable=False),
        sa.Column("include_in_sitemap", sa.Boolean(), nullable=False),
        *_ownership(),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name="ck_ui_resource_non_empty_name"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ui_resources_name", "ui_resources", ["name"])
    _ownership_indexes("ui_resources")

    op.create_table(
        "endpoints",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("resource_id", sa.Integer(), nullable=False),
        sa.Column("sub_path", sa.String(length=255), nullable=False),
        sa.Column("http_method", sa.Enum("GET", "POST", name="httpmethod"), nullable=False),
        sa.Column(
            "response_kind",
            sa.Enum("HTML", "MODEL_AS_JSON", "FILE", "STREAM", name="responsekind"),
            nullable=False,
        ),
        sa.Column("http_headers", sa.JSON(), nullable=True),
        sa.Column("model_attributes", sa.JSON(), nullable=True),
        sa.Column("code", sa.Text(), nullable=True),
        *_ownership(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["resource_id"], ["ui_resources.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_endpoints_resource_id", "endpoints", ["resource_id"])
    _ownership_indexes("endpoints")

    op.create_table(
        "forms",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("read_privilege", sa.String(length=255), nullable=True),
        sa.Column("write_privilege", sa.String(length=255), nullable=True),
        sa.Column("table_name", sa.String(length=255), nullable=True),
        sa.Column("table_columns", sa.JSON(), nullable=True),
        sa.Column("filter_columns", sa.JSON(), nullable=True),
        sa.Column("table_view", sa.Text(), nullable=True),
        sa.Column("register_api_crud_controller", sa.Boolean(), nullable=False),
        sa.Column("register_html_crud_controller", sa.Boolean(), nullable=False),
        sa.Column("show_on_organization_dashboard", sa.Boolean(), nullable=False),
        sa.Column("code", sa.Text(), nullable=True),
        *_ownership(),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name="ck_form_non_empty_name"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    _ownership_indexes("forms")

    op.create_table(
        "event_listeners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("event_name", sa.String(length=255), nullable=False),
        sa.Column("event_class_name", sa.String(length=255), nullable=True),
        sa.Column("event_object_type", sa.String(length=255), nullable=True),
        sa.Column("consumer_class_name", sa.String(length=255), nullable=True),
        sa.Column("consumer_method_name", sa.String(length=255), nullable=True),
        sa.Column("consumer_parameter_class_name", sa.String(length=255), nullable=True),
        sa.Column("static_data_1", sa.Text(), nullable=True),
        sa.Column("static_data_2", sa.Text(), nullable=True),
        sa.Column("static_data_3", sa.Text(), nullable=True),
        sa.Column("static_data_4", sa.Text(), nullable=True),
        sa.Column("index_string", sa.Text(), nullable=True),
        *_ownership(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_event_listeners_event_name", "event_listeners", ["event_name"])
    _ownership_indexes("event_listeners")

    op.create_table(
        "schedulers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cron_expression", sa.String(length=255), nullable=False),
        sa.Column("event_data", sa.String(length=255), nullable=False),
        sa.Column("on_master_only", sa.Boolean(), nullable=False),
        *_ownership(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_schedulers_event_data", "schedulers", ["event_data"])
    _ownership_indexes("schedulers")

    op.create_table(
        "server_scripts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("arguments", sa.String(length=255), nullable=True),
        sa.Column("model", sa.Text(), nullable=True),
        sa.Column("code", sa.Text(), nullable=True),
        *_ownership(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_server_scripts_name", "server_scripts", ["name"])
    _ownership_indexes("server_scripts")

    op.create_table(
        "dynamic_privileges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=255), nullable=True),
        sa.Column(
            "privilege_group",
            sa.Enum(
                "ADMIN", "ORGANIZATION", "USER", "ROLE", "SETTINGS", "DYNAMIC",
                name="privilegegroup",
            ),
            nullable=False,
        ),
        sa.Column("label", sa.String(length=255), nullable=True),
        sa.Column("index_string", sa.Text(), nullable=True),
        sa.Column("removable", sa.Boolean(), nullable=False),
        sa.Column("module_name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name="ck_dynamic_privilege_non_empty_name"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_dynamic_privileges_module_name", "dynamic_privileges", ["module_name"])


def downgrade() -> None:
    """Drop every component table."""
    op.drop_table("dynamic_privileges")
    op.drop_table("server_scripts")
    op.drop_table("schedulers")
    op.drop_table("event_listeners")
    op.drop_table("forms")
    op.drop_table("endpoints")
    op.drop_table("ui_resources")
    op.drop_table("component_modules")
    op.drop_table("organizations")
