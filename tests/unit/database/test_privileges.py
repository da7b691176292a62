"""Tests for PrivilegeLookup and DynamicTableService."""
import pytest

from compack.core.exceptions import UnknownPrivilegeError, ValidationError
from compack.database.models import DynamicPrivilege, Privilege, PrivilegeGroup


class TestPrivilegeLookup:
    """Tests for name to token resolution."""

    def test_built_in_privilege(self, test_db, db_session):
        token = test_db.privilege_lookup.token("readOrgData")
        assert token is Privilege.READ_ORG_DATA
        assert token.group is PrivilegeGroup.ORGANIZATION
        assert not test_db.privilege_lookup.is_dynamic(token)

    def test_dynamic_privilege(self, test_db, sample_components):
        token = test_db.privilege_lookup.token("canSeeReports")
        assert isinstance(token, DynamicPrivilege)
        assert test_db.privilege_lookup.is_dynamic(token)

    def test_unknown_privilege_fails(self, test_db, db_session):
        with pytest.raises(UnknownPrivilegeError, match="canDoEverything"):
            test_db.privilege_lookup.token("canDoEverything")

    def test_resolve_name(self, test_db, db_session):
        assert test_db.privilege_lookup.resolve_name(None) is None
        assert test_db.privilege_lookup.resolve_name("canReadBackend") == "canReadBackend"


class TestDynamicTables:
    """Tests for DynamicTableService.ensure_table_exists()."""

    def test_creates_table_once(self, test_db, db_session):
        """The first call should create the table, later calls do nothing."""
        assert test_db.dynamic_tables.ensure_table_exists("orders_records") is True
        assert test_db.dynamic_tables.table_exists("orders_records")
        assert test_db.dynamic_tables.ensure_table_exists("orders_records") is False

    def test_empty_name_is_ignored(self, test_db, db_session):
        assert test_db.dynamic_tables.ensure_table_exists(None) is False

    @pytest.mark.parametrize("name", ["orders; DROP TABLE forms", "1orders", "a-b"])
    def test_invalid_name_fails(self, test_db, db_session, name):
        with pytest.raises(ValidationError):
            test_db.dynamic_tables.ensure_table_exists(name)
