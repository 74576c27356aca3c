"""Report CRUD: create, list, get, delete."""
from flask import request, jsonify

from web.blueprints._utils import error_response, json_body
from . import reports_bp
from ._shared import _get_db


@reports_bp.route("/api/reports", methods=["POST"])
def create_report():
    """Save a STAR report.

    Body: {name?, situation, task, action, result, competency, storeCategory, originalStory?}

    Returns: 201 {success, message, data: {id}} or 400 with the offending fields.
    """
    report_id = _get_db().create_report(json_body())
    return jsonify({
        "success": True,
        "message": "Report saved",
        "data": {"id": report_id},
    }), 201


@reports_bp.route("/api/reports")
def list_reports():
    """List saved reports, most recent first.

    Query: ?competency=&storeCategory=&page=1&limit=10
    """
    result = _get_db().list_reports(
        competency=request.args.get("competency") or None,
        store_category=request.args.get("storeCategory") or None,
        page=request.args.get("page"),
        page_size=request.args.get("limit"),
    )
    return jsonify({
        "success": True,
        "data": result["items"],
        "pagination": {
            "total": result["total"],
            "page": result["page"],
            "limit": result["page_size"],
            "pages": result["pages"],
        },
    })


@reports_bp.route("/api/reports/<int:report_id>")
def get_report(report_id):
    report = _get_db().get_report(report_id)
    if not report:
        return error_response(f"Report {report_id} not found", 404)
    return jsonify({"success": True, "data": report})


@reports_bp.route("/api/reports/<int:report_id>", methods=["DELETE"])
def delete_report(report_id):
    if not _get_db().delete_report(report_id):
        return error_response(f"Report {report_id} not found", 404)
    return jsonify({
        "success": True,
        "message": "Report deleted",
        "data": {"id": report_id},
    })
