"""
Tests for the accessibility request accessors on Store.

Covers:
  - create: generated id, clock-defaulted timestamps, caller-supplied values kept
  - create: unknown intake id → ConstraintError, nothing stored
  - fetch by id: golden path, NotFoundError for unknown id
  - fetch all: empty table → [], ordering, first=n cap, negative first rejected
  - database failures other than misses → QueryError with operation context
"""

import logging
import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy import text

from easi.core.exceptions import (
    ConstraintError,
    NotFoundError,
    QueryError,
    QueryOperation,
    ValidationError,
)
from easi.models import db
from easi.models.accessibility_request import AccessibilityRequest
from easi.storage import Store, get_store


def _naive(value):
    return value.replace(tzinfo=None)


class TestCreateAccessibilityRequest:
    def test_create_generates_id_and_timestamps(self, store, intake, fixed_now):
        """No id or timestamps supplied → fresh UUID, both timestamps = clock reading."""
        created = store.create_accessibility_request(
            AccessibilityRequest(name="My Request", intake_id=intake.id)
        )

        assert created.id
        assert str(uuid.UUID(created.id)) == created.id
        assert created.name == "My Request"
        assert created.intake_id == intake.id
        assert created.created_at == created.updated_at
        assert _naive(created.created_at) == _naive(fixed_now)

    def test_create_generates_unique_ids(self, store, intake):
        first = store.create_accessibility_request(AccessibilityRequest(name="One", intake_id=intake.id))
        second = store.create_accessibility_request(AccessibilityRequest(name="Two", intake_id=intake.id))
        assert first.id != second.id

    def test_create_keeps_supplied_id_and_timestamps(self, store, intake):
        request_id = str(uuid.uuid4())
        created_at = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        updated_at = datetime(2020, 6, 7, 8, 9, 10, tzinfo=timezone.utc)

        created = store.create_accessibility_request(
            AccessibilityRequest(
                id=request_id,
                name="Supplied",
                intake_id=intake.id,
                created_at=created_at,
                updated_at=updated_at,
            )
        )

        assert created.id == request_id
        assert _naive(created.created_at) == _naive(created_at)
        assert _naive(created.updated_at) == _naive(updated_at)

    def test_create_with_unknown_intake_raises_constraint_error(self, store):
        with pytest.raises(ConstraintError):
            store.create_accessibility_request(
                AccessibilityRequest(name="Orphan", intake_id=str(uuid.uuid4()))
            )
        assert store.fetch_accessibility_requests() == []

    def test_create_with_duplicate_id_raises_constraint_error(self, store, intake):
        created = store.create_accessibility_request(AccessibilityRequest(name="One", intake_id=intake.id))
        with pytest.raises(ConstraintError):
            store.create_accessibility_request(
                AccessibilityRequest(id=created.id, name="Again", intake_id=intake.id)
            )
        assert len(store.fetch_accessibility_requests()) == 1


class TestFetchAccessibilityRequestByID:
    def test_fetch_returns_stored_request(self, store, intake):
        created = store.create_accessibility_request(AccessibilityRequest(name="Fetch me", intake_id=intake.id))

        fetched = store.fetch_accessibility_request_by_id(created.id)

        assert fetched.id == created.id
        assert fetched.name == "Fetch me"
        assert fetched.intake_id == intake.id

    def test_fetch_unknown_id_raises_not_found(self, store):
        missing = str(uuid.uuid4())
        with pytest.raises(NotFoundError) as exc_info:
            store.fetch_accessibility_request_by_id(missing)
        assert exc_info.value.resource == "AccessibilityRequest"
        assert exc_info.value.resource_id == missing

    def test_fetch_database_failure_raises_query_error(self, store, caplog):
        db.session.execute(text("DROP TABLE accessibility_request"))
        db.session.commit()

        with caplog.at_level(logging.ERROR, logger="easi.storage._base"):
            with pytest.raises(QueryError) as exc_info:
                store.fetch_accessibility_request_by_id("abc")

        assert exc_info.value.operation == QueryOperation.FETCH
        assert exc_info.value.resource_id == "abc"
        assert exc_info.value.cause is not None
        record = next(r for r in caplog.records if r.name == "easi.storage._base")
        assert record.operation == QueryOperation.FETCH
        assert record.resource_id == "abc"


class TestFetchAccessibilityRequests:
    def test_empty_table_returns_empty_list(self, store):
        assert store.fetch_accessibility_requests() == []

    def test_returns_all_requests_oldest_first(self, intake):
        ticks = iter([
            datetime(2021, 1, 1, tzinfo=timezone.utc),
            datetime(2021, 1, 2, tzinfo=timezone.utc),
            datetime(2021, 1, 3, tzinfo=timezone.utc),
        ])
        ticking_store = Store(db.session, clock=lambda: next(ticks))
        names = ["first", "second", "third"]
        for name in names:
            ticking_store.create_accessibility_request(AccessibilityRequest(name=name, intake_id=intake.id))

        fetched = ticking_store.fetch_accessibility_requests()

        assert [r.name for r in fetched] == names

    def test_first_caps_result_size(self, store, intake):
        for i in range(3):
            store.create_accessibility_request(AccessibilityRequest(name=f"r{i}", intake_id=intake.id))

        assert len(store.fetch_accessibility_requests(first=2)) == 2
        assert len(store.fetch_accessibility_requests()) == 3

    def test_first_zero_returns_empty_list(self, store, intake):
        store.create_accessibility_request(AccessibilityRequest(name="only", intake_id=intake.id))
        assert store.fetch_accessibility_requests(first=0) == []

    def test_negative_first_is_rejected(self, store, intake):
        store.create_accessibility_request(AccessibilityRequest(name="only", intake_id=intake.id))

        with pytest.raises(ValidationError) as exc_info:
            store.fetch_accessibility_requests(first=-1)

        assert exc_info.value.details == {"first": -1}

    def test_database_failure_raises_query_error(self, store):
        db.session.execute(text("DROP TABLE accessibility_request"))
        db.session.commit()

        with pytest.raises(QueryError) as exc_info:
            store.fetch_accessibility_requests()
        assert exc_info.value.operation == QueryOperation.FETCH
        assert exc_info.value.resource == "AccessibilityRequest"


def test_create_on_missing_table_raises_query_error(store, intake):
    db.session.execute(text("DROP TABLE accessibility_request"))
    db.session.commit()

    with pytest.raises(QueryError) as exc_info:
        store.create_accessibility_request(AccessibilityRequest(name="x", intake_id=intake.id))
    assert exc_info.value.operation == QueryOperation.CREATE


def test_app_registers_a_store(app):
    assert isinstance(get_store(), Store)
    assert get_store() is app.extensions["easi_store"]
