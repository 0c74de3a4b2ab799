"""
Shared pytest fixtures for the EASi persistence layer test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - fixed_now / store: fixed clock instant and a Store bound to db.session using it
    - intake: Pre-created SystemIntake
"""

from datetime import datetime, timezone

import pytest

from easi import create_app
from easi.models import db as _db
from easi.storage import Store
from easi.testhelpers import new_system_intake

# Every timestamp the test store writes comes from this instant.
FIXED_NOW = datetime(2021, 3, 1, 12, 30, tzinfo=timezone.utc)


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing", clock=lambda: FIXED_NOW)
    return application


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Convenience fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def fixed_now():
    """The instant the test store's clock reports."""
    return FIXED_NOW


@pytest.fixture()
def store():
    """Store on the test session whose clock always reads FIXED_NOW."""
    return Store(_db.session, clock=lambda: FIXED_NOW)


@pytest.fixture()
def intake(store):
    """Create and return a saved SystemIntake."""
    return store.create_system_intake(new_system_intake())
