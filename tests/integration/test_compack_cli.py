#!/usr/bin/env python3
"""
Integration tests for the compack CLI.

Tests init, list, export and import against temporary databases.
"""
import zipfile

import pytest
from click.testing import CliRunner

from compack.database.manager import ComponentDB
from compack.database.models import (
    AccessScope,
    ComponentModule,
    Endpoint,
    HttpMethod,
    Scheduler,
    UIResource,
)
from compack.pipeline.cli import cli


class TestCompackCLI:
    """Test CLI commands with temporary databases."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        """Create temporary directories for testing."""
        dirs = {
            "source_db": tmp_path / "source.db",
            "target_db": tmp_path / "target.db",
            "log_dir": tmp_path / "logs",
            "package": tmp_path / "crm.zip",
        }
        dirs["log_dir"].mkdir()
        return dirs

    def invoke_cli(self, runner, test_dirs, db_key, args, **kwargs):
        """Helper to invoke CLI against one of the test databases."""
        base_args = [
            "--db-path", str(test_dirs[db_key]),
            "--log-dir", str(test_dirs["log_dir"]),
        ]
        return runner.invoke(cli, base_args + args, **kwargs)

    @pytest.fixture
    def populated_source(self, runner, test_dirs):
        """Source database holding a page with an endpoint and a scheduler."""
        self.invoke_cli(runner, test_dirs, "source_db", ["init"])

        db = ComponentDB(db_path=test_dirs["source_db"])
        with db.session_scope() as session:
            page = UIResource(
                name="landing",
                access_scope=AccessScope.GLOBAL,
                content="<p>hi</p>",
                module_name="crm",
            )
            page.endpoints.append(
                Endpoint(sub_path="/ping", http_method=HttpMethod.GET, code="ok", module_name="crm")
            )
            session.add(ComponentModule(name="crm"))
            session.add(page)
            session.add(
                Scheduler(cron_expression="0 0 * * * *", event_data="hourly", module_name="crm")
            )
        db.engine.dispose()
        return test_dirs["source_db"]

    def test_cli_help(self, runner):
        """Test that CLI help message works."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Compack Component Packaging" in result.output
        for command in ("init", "list", "export", "import"):
            assert command in result.output

    def test_init_command(self, runner, test_dirs):
        """Test 'init' creates and stamps the database."""
        result = self.invoke_cli(runner, test_dirs, "source_db", ["init"])

        assert result.exit_code == 0, result.output
        assert "Database ready" in result.output
        assert "20261001_initial" in result.output
        assert test_dirs["source_db"].exists()

    def test_init_existing_database(self, runner, test_dirs):
        """Running init twice keeps the database at the latest revision."""
        self.invoke_cli(runner, test_dirs, "source_db", ["init"])
        result = self.invoke_cli(runner, test_dirs, "source_db", ["init"])

        assert result.exit_code == 0, result.output
        assert "20261001_initial" in result.output

    def test_list_command(self, runner, test_dirs, populated_source):
        result = self.invoke_cli(runner, test_dirs, "source_db", ["list"])

        assert result.exit_code == 0, result.output
        assert "Component Store" in result.output
        assert "Modules:" in result.output
        assert "crm" in result.output

    def test_export_import_flow(self, runner, test_dirs, populated_source):
        """Components exported from one store are imported into another."""
        result = self.invoke_cli(
            runner, test_dirs, "source_db", ["export", str(test_dirs["package"]), "-m", "crm"]
        )
        assert result.exit_code == 0, result.output
        assert "Export complete" in result.output
        with zipfile.ZipFile(test_dirs["package"]) as archive:
            assert "config/resource/global/landing.yaml" in archive.namelist()
            assert "code/endpoint/global/landing-GET-/ping.js" in archive.namelist()

        result = self.invoke_cli(
            runner, test_dirs, "target_db", ["import", str(test_dirs["package"])]
        )
        assert result.exit_code == 0, result.output
        assert "Import complete" in result.output
        assert "Components imported: 2" in result.output

        db = ComponentDB(db_path=test_dirs["target_db"])
        with db.session_scope():
            landing = db.resources.find(
                name="landing", access_scope=AccessScope.GLOBAL, organization_id=None
            )
            assert landing.content == "<p>hi</p>"
            assert [e.sub_path for e in landing.endpoints] == ["/ping"]
            assert db.schedulers.count() == 1
        db.engine.dispose()

    def test_export_directory_by_kind(self, runner, test_dirs, populated_source, tmp_path):
        target = tmp_path / "tree"
        result = self.invoke_cli(
            runner,
            test_dirs,
            "source_db",
            ["export", str(target), "--format", "dir", "-k", "schedulers"],
        )

        assert result.exit_code == 0, result.output
        assert (target / "config/scheduler/hourly.yaml").is_file()
        assert not (target / "config/resource").exists()

    def test_export_unknown_kind(self, runner, test_dirs):
        """An unknown --kind is rejected by option parsing."""
        result = self.invoke_cli(
            runner, test_dirs, "source_db", ["export", "out.zip", "-k", "widgets"]
        )
        assert result.exit_code == 2

    def test_import_with_failures(self, runner, test_dirs, tmp_path):
        """A package with a broken component exits with status 1."""
        package = tmp_path / "broken"
        (package / "config/form").mkdir(parents=True)
        (package / "config/form/audits.yaml").write_text(
            "kind: form\nname: audits\nread_privilege: canDoEverything\n"
        )

        result = self.invoke_cli(runner, test_dirs, "target_db", ["import", str(package)])

        assert result.exit_code == 1
        assert "Import finished with errors" in result.output
        assert "UnknownPrivilegeError" in result.output

    def test_import_missing_source(self, runner, test_dirs, tmp_path):
        result = self.invoke_cli(
            runner, test_dirs, "target_db", ["import", str(tmp_path / "nope.zip")]
        )
        assert result.exit_code == 2
