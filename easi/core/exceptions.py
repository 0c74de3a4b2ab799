"""
Storage-layer exception hierarchy.

Every Store method raises one of these instead of leaking SQLAlchemy
exceptions. The web layer maps them onto HTTP responses once, in
easi.utils.errors.register_error_handlers.

Usage:
    from easi.core.exceptions import NotFoundError, QueryError

    raise NotFoundError(resource="BusinessCase", resource_id=case_id)
    raise QueryError(QueryOperation.FETCH, resource="BusinessCase", cause=exc)
"""


class QueryOperation:
    """Names of the store operations a QueryError can originate from."""

    CREATE = "Create"
    FETCH = "Fetch"
    UPDATE = "Update"


class NotFoundError(Exception):
    """Raised when no row exists for the requested identity.

    Args:
        resource: Model name (e.g. "AccessibilityRequest").
        resource_id: The id that was looked up. Logged, not shown to users.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class BusinessCaseNotFoundError(NotFoundError):
    """Raised when an update targets a business case id with no row.

    Kept distinct from a plain fetch miss: the message is fixed so callers
    can tell a rejected update apart.
    """

    message = "business case not found"

    def __init__(self, resource_id: str | None = None) -> None:
        self.resource = "BusinessCase"
        self.resource_id = resource_id
        Exception.__init__(self, self.message)


class QueryError(Exception):
    """Raised for any database failure that is not a miss or a constraint.

    Args:
        operation: One of the QueryOperation constants.
        resource: Model name the statement targeted.
        resource_id: Optional id the statement was scoped to.
        cause: The underlying SQLAlchemy exception.
    """

    def __init__(
        self,
        operation: str,
        resource: str,
        resource_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.resource = resource
        self.resource_id = resource_id
        self.cause = cause
        msg = f"could not {operation.lower()} {resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class ConstraintError(Exception):
    """Raised when a write violates a foreign-key, NOT NULL or CHECK constraint.

    The message is the database engine's own text, passed through as-is.

    Args:
        message: Engine error message (IntegrityError.orig).
        cause: The IntegrityError itself.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class ValidationError(Exception):
    """Raised when a Store argument is well-formed but not acceptable.

    Maps to HTTP 422.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown, keyed by argument name.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)
