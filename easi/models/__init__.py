"""
EASi persistence layer
Database handle and shared column helpers.

Usage:
    from easi.models import db
"""

import uuid
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def new_uuid():
    """Generate a new UUID4 string for primary keys."""
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    return value.isoformat() if value else None
