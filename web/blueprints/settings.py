"""Settings API: generation settings and prerequisites."""
import logging

from flask import Blueprint, current_app, jsonify

from config import MODEL_CHOICES, load_app_settings, save_app_settings, check_prerequisites
from core.generation import GenerationService
from web.blueprints._utils import error_response, json_body

logger = logging.getLogger(__name__)
settings_bp = Blueprint("settings", __name__)


def _is_model_name(v):
    return isinstance(v, str) and 0 < len(v.strip()) < 200


_SETTINGS_VALIDATORS = {
    "default_model": _is_model_name,
    "backup_model": lambda v: v is None or v == "" or _is_model_name(v),
    "temperature": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool) and 0 <= v <= 1,
    "max_tokens": lambda v: isinstance(v, int) and not isinstance(v, bool) and 1 <= v <= 8192,
}


@settings_bp.route("/api/app-settings", methods=["GET"])
def get_app_settings():
    settings = load_app_settings()
    settings["model_choices"] = MODEL_CHOICES
    return jsonify(settings)


@settings_bp.route("/api/app-settings", methods=["POST"])
def update_app_settings():
    data = json_body()
    updates = {key: data[key] for key in _SETTINGS_VALIDATORS if key in data}
    for key, value in updates.items():
        if not _SETTINGS_VALIDATORS[key](value):
            return error_response(f"Invalid value for {key}", 400, fields=[key])

    settings = load_app_settings()
    settings.update(updates)
    save_app_settings(settings)

    # Rebuild so new models/params apply to the next generation
    current_app.generator = GenerationService.from_config(
        provider=current_app.generator.provider
    )
    logger.info("Updated generation settings: %s", sorted(updates))
    return jsonify({"success": True, "settings": settings})


# --- Prerequisites Check ---

@settings_bp.route("/api/prerequisites")
def get_prerequisites():
    return jsonify(check_prerequisites())
