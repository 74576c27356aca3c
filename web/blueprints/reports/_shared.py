"""Shared helpers for the Reports package."""
from flask import current_app

from core.errors import StoreError


def _get_db():
    """Return the report store, raising StoreError if it failed to open."""
    db = current_app.db
    if db is None:
        raise StoreError("Report store is unavailable")
    return db
