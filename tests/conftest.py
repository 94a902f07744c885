"""
Shared pytest fixtures for the Moneyboard Finance test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  After each test, clean_db wipes all
rows so tests are fully independent.

Route tests use ``web_app``/``client`` instead: a fresh application per
test, so that each request gets its own app context (and its own
Flask-Login state) rather than sharing the session-wide one.
"""
import pytest
from app import create_app
from extensions import db as _db
from services.record_store import MemoryRecordStore


TEST_PASSWORD = 'TestPass1!'


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Wipe every table after each test so tests never share state."""
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def user(app):
    from models.users import User
    u = User(
        email='owner@example.com',
        name='Test Owner',
    )
    u.set_password(TEST_PASSWORD)
    _db.session.add(u)
    _db.session.commit()
    return u


@pytest.fixture
def store():
    """Empty in-memory record store."""
    return MemoryRecordStore()


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest.fixture
def web_app(app):
    """Fresh application (own in-memory database) for request tests."""
    return create_app('testing')


@pytest.fixture
def anon_client(web_app):
    return web_app.test_client()


@pytest.fixture
def client(web_app):
    """Test client signed in as a newly registered user."""
    test_client = web_app.test_client()
    response = test_client.post('/auth/signup', data={
        'name': 'Web User',
        'email': 'web@example.com',
        'password': TEST_PASSWORD,
        'confirm_password': TEST_PASSWORD,
    })
    assert response.status_code == 302, 'signup should redirect to the dashboard'
    return test_client
