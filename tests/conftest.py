"""
conftest.py
-----------
Shared pytest fixtures for Compack tests.

Provides fixtures for:
- Temporary directories and database files
- Database setup and teardown (source and target stores)
- A populated component store covering every exportable kind
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def export_dir(tmp_dir):
    """Directory receiving exported packages."""
    return tmp_dir / "export"


# ----- Test Database Fixtures -----

def _create_db(db_path):
    from compack.database.manager import ComponentDB
    from compack.database.models import Base
    from sqlalchemy import create_engine

    # Create engine and initialize schema
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()

    return ComponentDB(db_path=db_path)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns a ComponentDB instance with every table created.
    Database is torn down after the test.
    """
    db = _create_db(test_db_path)

    yield db

    db.engine.dispose()


@pytest.fixture
def target_db(tmp_dir):
    """Second, empty database used as the destination of imports."""
    db = _create_db(tmp_dir / "target.db")

    yield db

    db.engine.dispose()


@pytest.fixture
def db_session(test_db):
    """
    Open a session scope on the test database.

    Component managers (test_db.forms, test_db.resources, ...) are
    available for the duration of the test.
    """
    with test_db.session_scope() as session:
        yield session


# ----- Sample Components -----

@pytest.fixture
def sample_components(db_session):
    """
    Populate the test database with one component of every kind.

    Layout (module 'crm'):
    - dynamic privilege 'canSeeReports'
    - public page 'home' with a POST '/submit' endpoint
    - form 'orders' of organization 7, readable with 'canSeeReports'
    - event listener 'ORDER_CREATED' of organization 7
    - global scheduler 'nightly-report'
    - server script 'totals' of organization 7
    """
    from compack.database.models import (
        AccessScope,
        DynamicPrivilege,
        Endpoint,
        EventListener,
        Form,
        HttpMethod,
        Organization,
        ResourceCategory,
        ResourceKind,
        ResponseKind,
        Scheduler,
        ServerScript,
        UIResource,
    )

    organization = Organization(id=7, name="Acme")
    privilege = DynamicPrivilege(
        name="canSeeReports",
        category="reports",
        label="See reports",
        module_name="crm",
    )
    home = UIResource(
        name="home",
        access_scope=AccessScope.PUBLIC,
        resource_kind=ResourceKind.HTML,
        category=ResourceCategory.PAGE,
        content="<h1>Home</h1>",
        include_in_sitemap=True,
        embeddable=True,
        required_privilege="canReadBackend",
        module_name="crm",
    )
    submit = Endpoint(
        sub_path="/submit",
        http_method=HttpMethod.POST,
        response_kind=ResponseKind.MODEL_AS_JSON,
        http_headers={"Cache-Control": "no-cache"},
        model_attributes=["order"],
        code="return save(form);",
        module_name="crm",
    )
    home.endpoints.append(submit)
    form = Form(
        name="orders",
        read_privilege="canSeeReports",
        write_privilege="manageOrgData",
        table_name="orders_records",
        table_columns=["id", "total"],
        filter_columns=["total"],
        register_api_crud_controller=True,
        register_html_crud_controller=True,
        show_on_organization_dashboard=True,
        table_view="id,total",
        code="a.text('total')",
        module_name="crm",
        organization_id=7,
    )
    listener = EventListener(
        event_name="ORDER_CREATED",
        event_class_name="OrderEvent",
        consumer_class_name="Notifier",
        consumer_method_name="send",
        event_object_type="Order",
        consumer_parameter_class_name="OrderDto",
        static_data_1="ops@example.com",
        static_data_2="high",
        index_string="orders",
        module_name="crm",
        organization_id=7,
    )
    scheduler = Scheduler(
        cron_expression="0 0 2 * * *",
        event_data="nightly-report",
        on_master_only=False,
        module_name="crm",
    )
    script = ServerScript(
        name="totals",
        arguments="order",
        model="Order",
        code="return order.total;",
        module_name="crm",
        organization_id=7,
    )

    db_session.add(organization)
    db_session.add_all([privilege, home, form, listener, scheduler, script])
    db_session.flush()

    return {
        "organization": organization,
        "privilege": privilege,
        "resource": home,
        "endpoint": submit,
        "form": form,
        "listener": listener,
        "scheduler": scheduler,
        "script": script,
    }
