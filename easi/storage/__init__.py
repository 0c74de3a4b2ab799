"""
EASi persistence layer
Storage package.

create_app() registers one Store on the application; request code reaches
it through get_store().
"""

from flask import current_app

from easi.storage.store import Store

EXTENSION_KEY = "easi_store"


def init_store(app, session, clock=None):
    """Build the application's Store and register it under app.extensions."""
    store = Store(session, clock=clock)
    app.extensions[EXTENSION_KEY] = store
    return store


def get_store() -> Store:
    """Return the Store registered on the current application."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["Store", "init_store", "get_store"]
