"""Report export: JSON, Markdown and plain-text formats."""
from flask import request, jsonify, Response

from core.competencies import competency_label, store_category_label
from web.blueprints._utils import error_response
from . import reports_bp
from ._shared import _get_db

_SECTIONS = (
    ("situation", "情境 (Situation)"),
    ("task", "任務 (Task)"),
    ("action", "行動 (Action)"),
    ("result", "結果 (Result)"),
)


@reports_bp.route("/api/reports/<int:report_id>/export")
def export_report(report_id):
    """Export a report in the specified format.

    Query: ?format=json|markdown|text  (default: json)

    Returns:
        json: the report object
        markdown: formatted markdown attachment
        text: the plain-text layout used when copying a report
    """
    export_format = request.args.get("format", "json").lower()

    if export_format not in ("json", "markdown", "text"):
        return error_response(
            f"Invalid format: {export_format}. Use json, markdown, or text.", 400
        )

    report = _get_db().get_report(report_id)
    if not report:
        return error_response(f"Report {report_id} not found", 404)

    if export_format == "json":
        return jsonify({"success": True, "data": report})

    if export_format == "markdown":
        return Response(
            _report_to_markdown(report),
            mimetype="text/markdown",
            headers={"Content-Disposition": f'attachment; filename="star_report_{report_id}.md"'},
        )

    return Response(_report_to_text(report), mimetype="text/plain")


def _report_to_markdown(report):
    """Convert a report to Markdown format."""
    lines = [f"# {report['name']}", ""]
    lines.append(f"*Competency: {competency_label(report['competency'])}*")
    lines.append(f"*Store category: {store_category_label(report['storeCategory'])}*")
    lines.append(f"*Created: {report['createdAt']}*")
    lines.append("")
    lines.append("---")
    lines.append("")

    for key, heading in _SECTIONS:
        lines.append(f"## {heading}")
        lines.append("")
        lines.append(report[key])
        lines.append("")

    if report.get("originalStory"):
        lines.append("---")
        lines.append("")
        lines.append("## Original story")
        lines.append("")
        lines.append(report["originalStory"])
        lines.append("")

    lines.append("---")
    lines.append(f"*Report ID: {report['id']}*")
    return "\n".join(lines)


def _report_to_text(report):
    """Plain-text layout for pasting a report into other tools."""
    parts = ["STAR 報告：", ""]
    for key, heading in _SECTIONS:
        parts.append(f"{heading}:")
        parts.append(report[key])
        parts.append("")
    parts.append(f"類別: {store_category_label(report['storeCategory'])}")
    parts.append(f"職能: {competency_label(report['competency'])}")
    parts.append(f"生成時間: {report['createdAt']}")
    return "\n".join(parts)
