"""Standardised API error responses.

Usage
-----
    from easi.utils.errors import api_error, E

    return api_error(E.NOT_FOUND, "Business case not found")

register_error_handlers(app) maps the storage error kinds onto these
responses so callers of the Store never translate them by hand:

    NotFoundError / BusinessCaseNotFoundError → 404
    ConstraintError / ValidationError         → 422
    QueryError                                → 500
"""

from __future__ import annotations

import logging

from flask import jsonify

from easi.core.exceptions import ConstraintError, NotFoundError, QueryError, ValidationError

logger = logging.getLogger(__name__)


# ── Error code constants ──────────────────────────────────────────────
class E:
    """Machine-readable error code constants."""

    # Not-found – HTTP 404
    NOT_FOUND = "ERR_NOT_FOUND"

    # Validation – HTTP 422
    VALIDATION_CONSTRAINT = "ERR_VALIDATION_CONSTRAINT"
    VALIDATION_INVALID = "ERR_VALIDATION_INVALID"

    # Server – HTTP 500
    DATABASE = "ERR_DATABASE"


# ── Default HTTP status mapping ───────────────────────────────────────
_DEFAULT_STATUS: dict[str, int] = {
    E.NOT_FOUND: 404,
    E.VALIDATION_CONSTRAINT: 422,
    E.VALIDATION_INVALID: 422,
    E.DATABASE: 500,
}


def api_error(
    code: str,
    message: str,
    *,
    status: int | None = None,
    details: dict | None = None,
):
    """Return a standard JSON error response.

    Parameters
    ----------
    code : str
        Machine-readable error code (use ``E.*`` constants).
    message : str
        Human-readable explanation for developers / UI.
    status : int, optional
        HTTP status override.  Falls back to ``_DEFAULT_STATUS[code]``,
        then to ``400``.
    details : dict, optional
        Extra structured payload.

    Returns
    -------
    tuple[Response, int]
        ``(jsonify(body), http_status)`` – drop-in for Flask views.
    """

    http_status = status or _DEFAULT_STATUS.get(code, 400)

    body: dict = {
        "error": message,
        "code": code,
    }
    if details:
        body["details"] = details

    return jsonify(body), http_status


def register_error_handlers(app):
    """Attach handlers for the storage error kinds to the Flask app."""

    @app.errorhandler(NotFoundError)
    def _not_found(exc):
        return api_error(E.NOT_FOUND, str(exc))

    @app.errorhandler(ConstraintError)
    def _constraint(exc):
        return api_error(E.VALIDATION_CONSTRAINT, str(exc))

    @app.errorhandler(ValidationError)
    def _validation(exc):
        return api_error(E.VALIDATION_INVALID, str(exc), details=exc.details)

    @app.errorhandler(QueryError)
    def _query(exc):
        # Detail stays in the log; the client only learns which operation failed
        logger.error("Query error surfaced to client: %s", exc, extra={"operation": exc.operation})
        return api_error(
            E.DATABASE,
            "Database error",
            details={"operation": exc.operation, "resource": exc.resource},
        )
