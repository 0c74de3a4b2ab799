"""
Tests for the HTTP surface the app factory sets up: storage error mapping
and health probes.

The error-mapping tests build their own app so they can register throwaway
routes that raise each error kind before the first request.
"""

import uuid

import pytest
from flask import request
from sqlalchemy.exc import OperationalError

from easi import create_app
from easi.core.exceptions import (
    BusinessCaseNotFoundError,
    ConstraintError,
    NotFoundError,
    QueryError,
    QueryOperation,
)
from easi.storage import get_store


@pytest.fixture()
def error_app():
    application = create_app("testing")

    @application.route("/raise/not-found")
    def _not_found():
        raise NotFoundError(resource="AccessibilityRequest", resource_id="abc")

    @application.route("/raise/update-not-found")
    def _update_not_found():
        raise BusinessCaseNotFoundError("abc")

    @application.route("/raise/constraint")
    def _constraint():
        raise ConstraintError("FOREIGN KEY constraint failed")

    @application.route("/raise/query")
    def _query():
        cause = OperationalError("SELECT 1", {}, Exception("connection reset"))
        raise QueryError(QueryOperation.FETCH, "BusinessCase", "abc", cause=cause)

    @application.route("/raise/requests")
    def _list_requests():
        first = request.args.get("first", type=int)
        return {"count": len(get_store().fetch_accessibility_requests(first=first))}

    @application.route("/raise/store/<case_id>")
    def _store_lookup(case_id):
        return get_store().fetch_business_case_by_id(case_id).to_dict()

    return application


@pytest.fixture()
def error_client(error_app):
    return error_app.test_client()


class TestErrorMapping:
    def test_not_found_maps_to_404(self, error_client):
        res = error_client.get("/raise/not-found")
        assert res.status_code == 404
        body = res.get_json()
        assert body["code"] == "ERR_NOT_FOUND"
        assert body["error"] == "AccessibilityRequest id=abc not found"

    def test_business_case_not_found_maps_to_404(self, error_client):
        res = error_client.get("/raise/update-not-found")
        assert res.status_code == 404
        assert res.get_json()["error"] == "business case not found"

    def test_constraint_maps_to_422_with_engine_message(self, error_client):
        res = error_client.get("/raise/constraint")
        assert res.status_code == 422
        body = res.get_json()
        assert body["code"] == "ERR_VALIDATION_CONSTRAINT"
        assert body["error"] == "FOREIGN KEY constraint failed"

    def test_negative_first_maps_to_422(self, error_client):
        res = error_client.get("/raise/requests?first=-1")
        assert res.status_code == 422
        body = res.get_json()
        assert body["code"] == "ERR_VALIDATION_INVALID"
        assert body["details"] == {"first": -1}

    def test_query_error_maps_to_500_without_leaking_cause(self, error_client):
        res = error_client.get("/raise/query")
        assert res.status_code == 500
        body = res.get_json()
        assert body["code"] == "ERR_DATABASE"
        assert body["details"] == {"operation": "Fetch", "resource": "BusinessCase"}
        assert "connection reset" not in body["error"]

    def test_store_miss_surfaces_as_404(self, error_client):
        res = error_client.get(f"/raise/store/{uuid.uuid4()}")
        assert res.status_code == 404

    def test_unknown_route_returns_json_404(self, error_client):
        res = error_client.get("/api/v1/nothing-here")
        assert res.status_code == 404
        assert res.get_json()["path"] == "/api/v1/nothing-here"


class TestHealth:
    def test_ready(self, client):
        res = client.get("/api/v1/health/ready")
        assert res.status_code == 200
        assert res.get_json() == {"status": "ok"}

    def test_live_reports_database(self, client):
        res = client.get("/api/v1/health/live")
        assert res.status_code == 200
        body = res.get_json()
        assert body["status"] == "ok"
        assert body["checks"]["database"]["status"] == "ok"
