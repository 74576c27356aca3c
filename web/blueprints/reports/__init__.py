"""Reports API: saved STAR reports.

Provides endpoints for:
- Report CRUD (create, list with filters + pagination, get, delete)
- Report export (JSON, Markdown, plain text)
"""
from flask import Blueprint

reports_bp = Blueprint("reports", __name__)

from . import crud    # noqa: E402, F401
from . import export  # noqa: E402, F401
