"""STAR generation API: turn a story into a structured (unsaved) report."""
from flask import Blueprint, current_app, jsonify
from loguru import logger

from core.competencies import option_list
from web.blueprints._utils import json_body

generate_bp = Blueprint("generate", __name__)


@generate_bp.route("/api/generate", methods=["POST"])
def generate_star_report():
    """Generate a STAR report.

    Body: {story, competency, storeCategory}

    Returns: {success: true, data: GenerationResult}, plus a top-level
    rawResponse when a fallback parse was used.  The result is not saved;
    POST it to /api/reports to persist it.
    """
    data = json_body()
    result = current_app.generator.generate(
        data.get("story"), data.get("competency"), data.get("storeCategory"),
    )

    body = {"success": True, "data": result.to_payload()}
    if result.raw_response is not None:
        body["rawResponse"] = result.raw_response
        if result.degraded:
            logger.warning("Returning degraded STAR report ({} strategy)", result.parse_strategy)
    return jsonify(body)


@generate_bp.route("/api/options")
def list_options():
    """Competency and store category codes with their display labels."""
    return jsonify({"success": True, "data": option_list()})
