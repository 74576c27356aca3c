"""Shared utility functions used across multiple blueprint modules."""
from datetime import datetime, timezone

from flask import jsonify, request


def now_iso():
    """Return current UTC time as ISO-8601 string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def error_response(message, status, **extra):
    """Build the ``{success: false, error}`` JSON body with *status*."""
    body = {"success": False, "error": message}
    body.update(extra)
    return jsonify(body), status


def json_body():
    """Request JSON as a dict; {} when the body is missing or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
